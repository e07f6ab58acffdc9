"""Out-of-bag permutation importance for a fitted random forest."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestRegressor


def oob_permutation_importance(
    forest: RandomForestRegressor,
    X,
    y,
    *,
    random_state: int | None = None,
    scale: bool = False,
    feature_names: Sequence[str] | None = None,
) -> pd.Series:
    """
    Mean increase in MSE when a feature is permuted inside each tree's
    out-of-bag rows (the ``%IncMSE`` measure).

    For every tree the OOB rows are those not drawn into its bootstrap
    sample. The tree's OOB error is measured once as is, then once per
    feature with that column shuffled; the difference is averaged over
    all trees that have OOB rows. With ``scale=True`` the mean is divided
    by its standard error across trees.
    """
    if not getattr(forest, "bootstrap", False):
        raise ValueError("[ERROR] OOB importance needs a forest trained with bootstrap=True.")

    X_arr = np.asarray(X, dtype=np.float64)
    y_arr = np.asarray(y, dtype=np.float64).ravel()
    n_samples, n_features = X_arr.shape
    if feature_names is None:
        feature_names = list(X.columns) if hasattr(X, "columns") else [f"x{i}" for i in range(n_features)]

    rng = np.random.default_rng(random_state)
    deltas = []

    for tree, in_bag in zip(forest.estimators_, forest.estimators_samples_):
        oob_mask = np.ones(n_samples, dtype=bool)
        oob_mask[in_bag] = False
        if not oob_mask.any():
            continue

        X_oob = X_arr[oob_mask]
        y_oob = y_arr[oob_mask]
        baseline = np.mean((y_oob - tree.predict(X_oob)) ** 2)

        tree_delta = np.empty(n_features)
        for j in range(n_features):
            X_perm = X_oob.copy()
            X_perm[:, j] = rng.permutation(X_perm[:, j])
            tree_delta[j] = np.mean((y_oob - tree.predict(X_perm)) ** 2) - baseline
        deltas.append(tree_delta)

    if not deltas:
        raise ValueError("[ERROR] No tree has out-of-bag rows; cannot compute importance.")

    deltas = np.vstack(deltas)
    importance = deltas.mean(axis=0)

    if scale:
        std_err = deltas.std(axis=0, ddof=1) / np.sqrt(deltas.shape[0]) if deltas.shape[0] > 1 else np.zeros(n_features)
        importance = np.divide(importance, std_err, out=np.zeros_like(importance), where=std_err > 0)

    return pd.Series(importance, index=list(feature_names), name="IncMSE")


def importance_table(forest: RandomForestRegressor, inc_mse: pd.Series) -> pd.DataFrame:
    """Permutation and impurity importance side by side, most important first."""
    table = pd.DataFrame(
        {
            "Feature": inc_mse.index,
            "IncMSE": inc_mse.to_numpy(),
            "IncNodePurity": forest.feature_importances_,
        }
    )
    return table.sort_values("IncMSE", ascending=False, kind="mergesort").reset_index(drop=True)
