import datetime
import os
from contextlib import nullcontext

import joblib
import mlflow
import numpy as np
from sklearn.ensemble import RandomForestRegressor
from sklearn.model_selection import cross_val_score

from src.evaluation.metrics import EvaluationResult, compute_metrics
from .config import MODEL_CONFIG, TRAINING_CONFIG
from .importance import importance_table, oob_permutation_importance


class ModelTrainer:
    """
    Trains and evaluates a Random Forest regression model.
    """

    def __init__(self, model_params=None, training_params=None,
                 use_mlflow: bool = False,
                 mlflow_experiment: str | None = None,
                 mlflow_tracking_uri: str | None = None,
                 tags: dict | None = None):
        self.model_params = {**MODEL_CONFIG, **(model_params or {})}
        self.training_params = {**TRAINING_CONFIG, **(training_params or {})}
        self.model = RandomForestRegressor(**self.model_params)
        self._y_train = None

        # ---- MLflow options (opt-in) ----
        self.use_mlflow = bool(use_mlflow)
        self.mlflow_experiment = (
            mlflow_experiment
            or os.getenv("RF_EXPERIMENT_NAME")
            or os.getenv("EXPERIMENT_NAME", "boston-housing")
        )
        self.mlflow_tracking_uri = mlflow_tracking_uri or os.getenv("MLFLOW_TRACKING_URI")
        self.tags = tags or {"model_type": "random_forest"}
        self.run_id = None

        if self.use_mlflow and self.mlflow_tracking_uri:
            mlflow.set_tracking_uri(self.mlflow_tracking_uri)

    # ---------------------- MLflow helpers ----------------------
    def _mlflow_start(self, run_name: str | None = None):
        if not self.use_mlflow:
            return None
        if mlflow.active_run() is not None:
            return mlflow.active_run()
        mlflow.set_experiment(self.mlflow_experiment)
        return mlflow.start_run(run_name=run_name)

    def _mlflow_log_params(self):
        if not self.use_mlflow:
            return
        mlflow.set_tags(self.tags)
        mlflow.log_params({f"model__{k}": v for k, v in self.model_params.items()})
        mlflow.log_params({f"train__{k}": v for k, v in self.training_params.items()})

    def _mlflow_log_metrics(self, metrics: dict):
        if not self.use_mlflow:
            return
        mlflow.log_metrics({k: float(v) for k, v in metrics.items()})

    def log_artifacts(self, paths):
        """Attach files (figures, metrics json) to the run opened by run()."""
        if not self.use_mlflow or self.run_id is None:
            return
        with mlflow.start_run(run_id=self.run_id):
            for path in paths:
                if path is not None and os.path.exists(path):
                    mlflow.log_artifact(str(path))

    # ---------------------- training ----------------------
    def train(self, X_train, y_train):
        print("[INFO] Training Random Forest model...")
        print(f"[INFO] Trees: {self.model_params['n_estimators']} | "
              f"mtry: {self.model_params['max_features']}")
        self.model.fit(X_train, y_train)
        self._y_train = np.asarray(y_train, dtype=float)
        print("[INFO] Training complete.")
        return self.model

    def oob_summary(self) -> dict:
        """
        Out-of-bag mean squared residuals and % variance explained.
        """
        if self._y_train is None or not hasattr(self.model, "oob_prediction_"):
            raise ValueError("[ERROR] OOB summary needs a model trained with oob_score=True.")
        mse = float(np.mean((self._y_train - self.model.oob_prediction_) ** 2))
        pct_var = float(100 * (1 - mse / np.var(self._y_train)))
        print(f"[INFO] OOB mean of squared residuals: {mse:.4f}")
        print(f"[INFO] OOB % Var explained: {pct_var:.2f}")
        return {"OOB_MSE": mse, "OOB_PCT_VAR": pct_var}

    def predict(self, X):
        return self.model.predict(X)

    def evaluate(self, X_test, y_test):
        print("[INFO] Evaluating model performance...")
        if len(X_test) == 0:
            raise ValueError("[ERROR] Cannot evaluate on an empty test set.")
        y_pred = self.predict(X_test)
        metrics = compute_metrics(y_test, y_pred)
        print("[INFO] Model Evaluation:")
        for k, v in metrics.to_dict().items():
            print(f"   {k}: {v:.4f}")
        return metrics, y_pred

    def feature_importance(self, X_train, y_train):
        print("[INFO] Computing OOB permutation importance...")
        inc_mse = oob_permutation_importance(
            self.model,
            X_train,
            y_train,
            random_state=self.model_params.get("random_state"),
            scale=self.training_params.get("scale_importance", False),
        )
        return importance_table(self.model, inc_mse)

    def cross_validate(self, X, y):
        print("[INFO] Running cross-validation...")
        scores = cross_val_score(self.model, X, y, scoring="r2",
                                 cv=self.training_params.get("cv_folds", 5))
        print(f"[INFO] CV R² mean: {scores.mean():.4f} ± {scores.std():.4f}")
        return scores

    def save_model(self, model_type="random_forest", timestamp=None):
        """
        Save model artifact under a unique versioned filename.
        """
        if timestamp is None:
            timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")

        versioned_dir = f"models/{model_type}/artifacts"
        os.makedirs(versioned_dir, exist_ok=True)
        versioned_model_path = os.path.join(versioned_dir, f"model_{timestamp}.pkl")

        joblib.dump(self.model, versioned_model_path)

        print(f"[INFO] Saved versioned model to: {versioned_model_path}")
        return versioned_model_path

    def run(self, X_train, X_test, y_train, y_test, save_model: bool = False, timestamp=None):
        """
        Full training + evaluation pipeline for Random Forest.
        Returns the metrics, test predictions and importance ranking.
        """
        print("[INFO] Starting Random Forest training pipeline...")

        run_ctx = self._mlflow_start(run_name="random_forest_run") or nullcontext()
        with run_ctx as active:
            if active is not None:
                self.run_id = active.info.run_id
            self._mlflow_log_params()
            if self.use_mlflow:
                mlflow.log_params({"n_train": int(len(X_train)), "n_test": int(len(X_test))})

            self.train(X_train, y_train)
            oob = self.oob_summary() if self.model_params.get("oob_score") else {}

            metrics, y_pred = self.evaluate(X_test, y_test)
            importance = self.feature_importance(X_train, y_train)
            self._mlflow_log_metrics({**metrics.to_dict(), **oob})

            if save_model:
                saved_path = self.save_model(timestamp=timestamp)
                if self.use_mlflow:
                    mlflow.log_artifact(saved_path)

        print("[INFO] Random Forest training pipeline complete.\n")
        return EvaluationResult(
            metrics=metrics,
            actual=y_test,
            predicted=y_pred,
            importance=importance,
        )
