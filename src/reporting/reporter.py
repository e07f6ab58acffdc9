"""
Diagnostic charts and console summary for the trained model.
"""

import json
import os
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.ticker import StrMethodFormatter

from src.evaluation.metrics import RegressionMetrics
from src.utils.figures import save_figure

ACTUAL_VS_PREDICTED_FILE = "actual_vs_predicted.png"
RESIDUALS_FILE = "residual_analysis.png"
IMPORTANCE_FILE = "feature_importance.png"

POINT_COLOR = "#2c7fb8"
REFERENCE_COLOR = "#e34a33"
TREND_COLOR = "#2ca25f"

DOLLARS = StrMethodFormatter("${x:,.0f}")


def format_metrics(metrics: RegressionMetrics) -> str:
    return (
        "Model Performance Metrics:\n"
        f"📉 RMSE: {metrics.rmse:.2f}\n"
        f"📊 MAE: {metrics.mae:.2f}\n"
        f"🧠 R²: {metrics.r2:.3f}"
    )


def print_metrics(metrics: RegressionMetrics) -> None:
    print(format_metrics(metrics))


def write_metrics_json(metrics: RegressionMetrics, path) -> str:
    """Persist the metrics for run-to-run comparison."""
    parent = os.path.dirname(str(path))
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w") as f:
        json.dump(metrics.to_dict(), f, indent=2)
    print(f"[INFO] Metrics written to: {path}")
    return str(path)


class Reporter:
    """
    Renders actual-vs-predicted, residual and feature-importance charts.
    """

    def __init__(self, output_dir: str = "images", dpi: int = 300):
        self.output_dir = Path(output_dir)
        self.dpi = dpi

    def plot_actual_vs_predicted(self, actual, predicted):
        actual = np.asarray(actual, dtype=float)
        predicted = np.asarray(predicted, dtype=float)

        fig, ax = plt.subplots(figsize=(10, 8))
        ax.scatter(actual, predicted, alpha=0.6, color=POINT_COLOR)

        lims = [min(actual.min(), predicted.min()), max(actual.max(), predicted.max())]
        ax.plot(lims, lims, color=REFERENCE_COLOR, linewidth=1.5, label="Perfect prediction")

        if np.ptp(actual) > 0:
            slope, intercept = np.polyfit(actual, predicted, deg=1)
            xs = np.linspace(actual.min(), actual.max(), 100)
            ax.plot(xs, slope * xs + intercept, color=TREND_COLOR, linewidth=1.5, label="Linear trend")

        ax.set_title("Actual vs Predicted Home Values\nRandom Forest Regression Performance", fontweight="bold")
        ax.set_xlabel("Actual Values ($1000s)")
        ax.set_ylabel("Predicted Values ($1000s)")
        ax.xaxis.set_major_formatter(DOLLARS)
        ax.yaxis.set_major_formatter(DOLLARS)
        ax.legend(loc="lower right")
        return save_figure(fig, self.output_dir / ACTUAL_VS_PREDICTED_FILE, dpi=self.dpi)

    def plot_residuals(self, actual, predicted):
        actual = np.asarray(actual, dtype=float)
        predicted = np.asarray(predicted, dtype=float)
        residuals = actual - predicted

        fig, ax = plt.subplots(figsize=(10, 8))
        ax.scatter(predicted, residuals, alpha=0.6, color=POINT_COLOR)
        ax.axhline(0, color=REFERENCE_COLOR, linewidth=1.5)
        ax.set_title("Residual Analysis", fontweight="bold")
        ax.set_xlabel("Predicted Values ($1000s)")
        ax.set_ylabel("Residuals")
        ax.xaxis.set_major_formatter(DOLLARS)
        return save_figure(fig, self.output_dir / RESIDUALS_FILE, dpi=self.dpi)

    def plot_feature_importance(self, importance: pd.DataFrame):
        ordered = importance.sort_values("IncMSE", ascending=False)

        fig, ax = plt.subplots(figsize=(10, 6))
        sns.barplot(data=ordered, x="IncMSE", y="Feature", color=POINT_COLOR, alpha=0.8, ax=ax)
        ax.set_title("Feature Importance in Price Prediction", fontweight="bold")
        ax.set_xlabel("% Increase in MSE When Excluded")
        ax.set_ylabel("")
        ax.grid(axis="y", visible=False)
        return save_figure(fig, self.output_dir / IMPORTANCE_FILE, dpi=self.dpi)

    def run(self, result) -> list:
        """
        Write the three diagnostic charts and print the metrics block.
        Returns the paths that were written.
        """
        print("[INFO] Rendering diagnostic charts...")
        paths = [
            self.plot_actual_vs_predicted(result.actual, result.predicted),
            self.plot_feature_importance(result.importance),
            self.plot_residuals(result.actual, result.predicted),
        ]
        print_metrics(result.metrics)
        return [p for p in paths if p is not None]
