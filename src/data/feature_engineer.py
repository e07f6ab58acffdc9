import math

import pandas as pd
from sklearn.model_selection import train_test_split


class FeatureEngineer:
    """
    Handles feature selection and the stratified train/test split
    for model training.
    """

    def __init__(
        self,
        features: list,
        target: str,
        train_size: float = 0.8,
        random_state: int = 123,
        n_bins: int = 5,
    ):
        if not 0 < train_size < 1:
            raise ValueError("[ERROR] train_size must be between 0 and 1.")
        self.features = list(features)
        self.target = target
        self.train_size = train_size
        self.random_state = random_state
        self.n_bins = n_bins

    def select_features(self, df: pd.DataFrame):
        """
        Select feature and target columns from the renamed dataset.
        """
        print("[INFO] Selecting features and target...")

        missing_cols = [f for f in self.features + [self.target] if f not in df.columns]
        if missing_cols:
            raise ValueError(f"[ERROR] Missing columns in dataset: {missing_cols}")

        X = df[self.features]
        y = df[self.target]

        print(f"[INFO] Feature matrix shape: {X.shape}")
        print(f"[INFO] Target vector shape : {y.shape}")
        return X, y

    def stratify_labels(self, y: pd.Series) -> pd.Series | None:
        """
        Bucket a numeric target into quantile groups so the split keeps
        its distribution in both partitions.

        Each group needs at least 2 rows and one row in each partition;
        small or heavily tied targets get fewer groups, or None (plain
        random split) when fewer than 2 groups remain.
        """
        n_train = math.floor(self.train_size * len(y))
        n_test = len(y) - n_train
        n_bins = min(self.n_bins, y.nunique(), n_train, n_test, len(y) // 2)

        while n_bins >= 2:
            labels = pd.qcut(y, q=n_bins, labels=False, duplicates="drop")
            counts = labels.value_counts()
            if len(counts) >= 2 and counts.min() >= 2:
                return labels
            n_bins -= 1
        return None

    def split_data(self, X: pd.DataFrame, y: pd.Series):
        """
        Split data into train and test sets, stratified on target quantiles.
        """
        print("[INFO] Splitting data into train/test sets...")
        X_train, X_test, y_train, y_test = train_test_split(
            X,
            y,
            train_size=self.train_size,
            random_state=self.random_state,
            stratify=self.stratify_labels(y),
        )

        print(f"[INFO] X_train: {X_train.shape}, X_test: {X_test.shape}")
        print(f"[INFO] y_train: {y_train.shape}, y_test: {y_test.shape}")

        return X_train, X_test, y_train, y_test

    def run(self, df: pd.DataFrame, split: bool = True):
        """
        Full feature pipeline:
        - Selects features
        - Splits data
        """
        X, y = self.select_features(df)

        if split:
            return self.split_data(X, y)
        else:
            return X, y
