import os
import pandas as pd
from sklearn.datasets import fetch_openml

# Raw Boston housing columns and their readable labels, in canonical order.
COLUMN_LABELS = {
    "CRIM": "Crime_Rate",
    "ZN": "Neighborhood",
    "INDUS": "Industry",
    "CHAS": "River_Access",
    "NOX": "NOX_Pollution",
    "RM": "Rooms",
    "AGE": "Age",
    "DIS": "Distance",
    "RAD": "Highways",
    "TAX": "Tax",
    "PTRATIO": "Teacher_Ratio",
    "B": "Black_Pop",
    "LSTAT": "Lower_Status",
    "MEDV": "Home_Value",
}

RAW_TARGET = "MEDV"
TARGET = COLUMN_LABELS[RAW_TARGET]
FEATURES = [label for raw, label in COLUMN_LABELS.items() if raw != RAW_TARGET]


class DataLoader:
    """
    Handles loading, validation and renaming of the Boston housing dataset.
    """

    def __init__(self, input_path: str, output_path: str = None, fetch_if_missing: bool = True):
        """
        Initialize DataLoader with input and optional output paths.
        """
        self.input_path = input_path
        self.output_path = output_path or os.path.join(
            os.path.dirname(input_path), "..", "processed", "boston_renamed.csv"
        )
        self.fetch_if_missing = fetch_if_missing

    def fetch_dataset(self) -> pd.DataFrame:
        """
        Download the dataset from OpenML and cache it at input_path.
        """
        print("[INFO] Fetching Boston housing dataset from OpenML...")
        bunch = fetch_openml(name="boston", version=1, as_frame=True)
        df = bunch.frame.copy()

        # CHAS and RAD come back as categoricals
        for column in df.select_dtypes(exclude="number").columns:
            df[column] = pd.to_numeric(df[column].astype(str))
        df = df.astype(float)

        parent = os.path.dirname(self.input_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        df.to_csv(self.input_path, index=False)
        print(f"[INFO] Cached raw dataset at: {self.input_path}")
        return df

    def load_data(self) -> pd.DataFrame:
        """
        Load dataset from CSV (fetching it first if allowed) and validate columns.
        """
        if os.path.exists(self.input_path):
            df = pd.read_csv(self.input_path)
        elif self.fetch_if_missing:
            df = self.fetch_dataset()
        else:
            raise FileNotFoundError(f"File not found: {self.input_path}")

        print(f"[INFO] Loaded dataset — Rows: {df.shape[0]}, Columns: {df.shape[1]}")

        present = {str(c).strip().upper() for c in df.columns}
        missing_cols = [c for c in COLUMN_LABELS if c not in present]
        if missing_cols:
            raise ValueError(f"Missing expected columns: {missing_cols}")

        print("[INFO] Column validation passed.")
        return df

    def preprocess(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Rename raw columns to readable labels and enforce the dataset invariants:
        - canonical column order, target last
        - every column numeric
        - no missing values
        """
        print("[INFO] Renaming columns...")

        df = df.rename(columns=lambda c: str(c).strip().upper())
        df = df[list(COLUMN_LABELS)].rename(columns=COLUMN_LABELS)
        df = df.apply(pd.to_numeric, errors="coerce").astype(float)

        null_counts = df.isna().sum()
        if null_counts.any():
            bad = null_counts[null_counts > 0].to_dict()
            raise ValueError(f"[ERROR] Dataset contains missing or non-numeric values: {bad}")

        print(f"[INFO] Final dataset shape: {df.shape}")
        return df

    def save_processed(self, df: pd.DataFrame):
        """
        Save renamed dataset to disk.
        """
        parent = os.path.dirname(self.output_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        df.to_csv(self.output_path, index=False)
        print(f"[INFO] Processed dataset saved to: {self.output_path}")

    def run(self) -> pd.DataFrame:
        """
        Execute the full load → rename → save pipeline.
        """
        df = self.load_data()
        df = self.preprocess(df)
        self.save_processed(df)
        return df
