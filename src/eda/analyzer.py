"""
Exploratory analysis of the renamed housing dataset: correlation
matrix and target distribution, both written as PNG files.
"""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from src.utils.figures import save_figure

CORRELATION_FILE = "correlation_matrix.png"
DISTRIBUTION_FILE = "home_value_distribution.png"


class ExploratoryAnalyzer:
    """
    Computes the correlation matrix and renders the EDA charts.
    """

    def __init__(self, output_dir: str = "images", target: str = "Home_Value", dpi: int = 300):
        self.output_dir = Path(output_dir)
        self.target = target
        self.dpi = dpi

    def describe(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Print and return summary statistics of every column.
        """
        stats = df.describe().T
        print("\n[INFO] Summary statistics:")
        print(stats)
        return stats

    def correlation_matrix(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Pearson correlation over all numeric columns (pairwise complete obs).
        """
        num_df = df.select_dtypes(include=[np.number])
        return num_df.corr(method="pearson")

    def plot_correlation_matrix(self, corr: pd.DataFrame):
        fig, ax = plt.subplots(figsize=(8, 6))
        # hide the lower triangle, keep the diagonal
        mask = np.tril(np.ones(corr.shape, dtype=bool), k=-1)
        sns.heatmap(
            corr,
            mask=mask,
            cmap="viridis",
            vmin=-1,
            vmax=1,
            annot=True,
            fmt=".2f",
            annot_kws={"size": 6},
            square=True,
            cbar_kws={"shrink": 0.8},
            ax=ax,
        )
        ax.tick_params(axis="both", labelsize=7)
        ax.set_title("Feature Correlation Matrix", fontweight="bold")
        return save_figure(fig, self.output_dir / CORRELATION_FILE, dpi=self.dpi)

    def plot_target_distribution(self, df: pd.DataFrame):
        if self.target not in df.columns:
            raise KeyError(f"[ERROR] Target column '{self.target}' not in dataset.")
        fig, ax = plt.subplots(figsize=(8, 6))
        sns.histplot(df[self.target], bins=30, color="#2c7fb8", alpha=0.8, ax=ax)
        ax.set_title("Distribution of Home Values", fontweight="bold")
        ax.set_xlabel("Median Home Value ($1000s)")
        ax.set_ylabel("Count")
        return save_figure(fig, self.output_dir / DISTRIBUTION_FILE, dpi=self.dpi)

    def run(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Correlation matrix + both EDA charts. Returns the matrix.
        """
        print("[INFO] Running exploratory analysis...")
        corr = self.correlation_matrix(df)
        target_corr = corr[self.target].drop(self.target).sort_values(key=abs, ascending=False)
        print("[INFO] Strongest correlations with target:")
        print(target_corr.head(5).to_string())

        self.plot_correlation_matrix(corr)
        self.plot_target_distribution(df)
        return corr
