# src/utils/seeds.py

"""
Helpers to pin the random number generators so that the split,
the forest and the permutation importance are reproducible.
"""

import os
import random
import numpy as np

DEFAULT_SEED = int(os.getenv("SEED", 123))


def set_global_seed(seed: int = DEFAULT_SEED) -> int:
    """
    Seed the process-wide random generators used in the project.

    Parameters
    ----------
    seed : int
        Seed value.

    Returns
    -------
    int
        The seed actually used (handy for logging it in MLflow).
    """
    random.seed(seed)
    np.random.seed(seed)
    return seed
