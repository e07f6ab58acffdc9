import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

# Ensure project root is on sys.path for imports like `src.*`
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def make_raw_boston(n_rows: int = 506, seed: int = 0) -> pd.DataFrame:
    """Boston-shaped synthetic frame: raw column names, home value driven by RM and LSTAT."""
    rng = np.random.default_rng(seed)
    rm = rng.normal(6.28, 0.7, n_rows)
    lstat = rng.uniform(1.7, 38.0, n_rows)
    df = pd.DataFrame(
        {
            "CRIM": rng.exponential(3.6, n_rows),
            "ZN": rng.choice([0.0, 12.5, 25.0, 80.0], n_rows),
            "INDUS": rng.uniform(0.5, 27.7, n_rows),
            "CHAS": rng.binomial(1, 0.07, n_rows).astype(float),
            "NOX": rng.uniform(0.38, 0.87, n_rows),
            "RM": rm,
            "AGE": rng.uniform(2.9, 100.0, n_rows),
            "DIS": rng.uniform(1.1, 12.1, n_rows),
            "RAD": rng.choice([1.0, 2.0, 4.0, 5.0, 8.0, 24.0], n_rows),
            "TAX": rng.uniform(187.0, 711.0, n_rows),
            "PTRATIO": rng.uniform(12.6, 22.0, n_rows),
            "B": rng.uniform(0.3, 396.9, n_rows),
            "LSTAT": lstat,
        }
    )
    medv = 22.5 + 8.0 * (rm - 6.28) - 0.45 * (lstat - 12.6) + rng.normal(0, 1.5, n_rows)
    df["MEDV"] = np.clip(medv, 5.0, 50.0)
    return df


@pytest.fixture
def raw_boston():
    return make_raw_boston()


@pytest.fixture
def housing_df(raw_boston):
    from src.data.data_loader import DataLoader

    return DataLoader("unused.csv").preprocess(raw_boston)
