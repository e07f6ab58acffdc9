"""
Regression metrics for the held-out split.

The record is computed once from (actual, predicted) pairs and never
changed afterwards; the reporter only reads it.
"""

from dataclasses import asdict, dataclass
from typing import Dict

import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score


@dataclass(frozen=True)
class RegressionMetrics:
    """RMSE, MAE and R² of one evaluation run."""

    rmse: float
    mae: float
    r2: float

    def to_dict(self) -> Dict[str, float]:
        return {k.upper(): v for k, v in asdict(self).items()}


@dataclass(frozen=True)
class EvaluationResult:
    """Everything the reporter needs from the evaluation stage."""

    metrics: RegressionMetrics
    actual: pd.Series
    predicted: np.ndarray
    importance: pd.DataFrame

    @property
    def residuals(self) -> np.ndarray:
        return np.asarray(self.actual, dtype=float) - np.asarray(self.predicted, dtype=float)


def compute_metrics(actual, predicted) -> RegressionMetrics:
    """
    Compute RMSE, MAE and R² between actual and predicted values.

    Args:
        actual: True target values.
        predicted: Model predictions, same length as ``actual``.

    Returns:
        RegressionMetrics with plain float fields.

    Raises:
        ValueError: if there are fewer than 2 rows or the lengths differ.
    """
    y_true = np.asarray(actual, dtype=float).ravel()
    y_pred = np.asarray(predicted, dtype=float).ravel()

    if y_true.size == 0:
        raise ValueError("[ERROR] Cannot evaluate on an empty test set.")
    if y_true.size < 2:
        raise ValueError("[ERROR] Need at least 2 test rows; R² is undefined for a single row.")
    if y_true.shape != y_pred.shape:
        raise ValueError(
            f"[ERROR] Length mismatch: {y_true.size} actual vs {y_pred.size} predicted values."
        )

    return RegressionMetrics(
        rmse=float(np.sqrt(mean_squared_error(y_true, y_pred))),
        mae=float(mean_absolute_error(y_true, y_pred)),
        r2=float(r2_score(y_true, y_pred)),
    )
