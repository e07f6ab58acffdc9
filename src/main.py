# src/main.py
import argparse
from types import SimpleNamespace

import yaml

from src.data.data_loader import DataLoader
from src.data.feature_engineer import FeatureEngineer
from src.eda.analyzer import ExploratoryAnalyzer
from src.models.random_forest_model import ModelTrainer as RFTrainer
from src.reporting.reporter import Reporter, write_metrics_json
from src.utils.env import load_env
from src.utils.seeds import set_global_seed

MODEL_REGISTRY = {
    "random_forest": RFTrainer,
}

STAGES = ["all", "data_loader", "eda", "train"]


def load_cfg(path="params.yaml"):
    with open(path, "r") as f:
        return yaml.safe_load(f)


def banner(title):
    print("=" * 70); print(f"[INFO] {title}"); print("=" * 70)


def run_data_loader(cfg):
    banner("STEP 1: Loading dataset")
    data_cfg = cfg["data"]
    loader = DataLoader(
        data_cfg["raw_path"],
        data_cfg.get("processed_path"),
        fetch_if_missing=data_cfg.get("fetch_if_missing", True),
    )
    return loader.run()


def run_eda(cfg, df):
    banner("STEP 2: Exploratory analysis")
    out = cfg.get("output", {})
    analyzer = ExploratoryAnalyzer(
        output_dir=out.get("images_dir", "images"),
        target=cfg["features"]["target"],
        dpi=out.get("dpi", 300),
    )
    analyzer.describe(df)
    return analyzer.run(df)


def run_split(cfg, df):
    banner("STEP 3: Train/test split")
    split_cfg = cfg.get("split", {})
    fe = FeatureEngineer(
        cfg["features"]["selected"],
        cfg["features"]["target"],
        train_size=split_cfg.get("train_size", 0.8),
        random_state=split_cfg.get("random_state", 123),
        n_bins=split_cfg.get("n_bins", 5),
    )
    return fe.run(df)


def run_training(cfg, X_train, X_test, y_train, y_test):
    banner("STEP 4: Training and evaluating model")
    train_cfg = cfg["train"]
    model_type = train_cfg.get("model_type", "random_forest")
    if model_type not in MODEL_REGISTRY:
        raise ValueError(f"Unsupported model_type '{model_type}'. "
                         f"Use one of: {list(MODEL_REGISTRY.keys())}")

    trainer = MODEL_REGISTRY[model_type](
        model_params=train_cfg.get(model_type, {}),
        training_params={
            "cv_folds": train_cfg.get("cv_folds", 5),
            "train_size": cfg.get("split", {}).get("train_size", 0.8),
            "scale_importance": train_cfg.get("scale_importance", False),
        },
        use_mlflow=cfg.get("mlflow", {}).get("enabled", False),
    )
    result = trainer.run(X_train, X_test, y_train, y_test,
                         save_model=train_cfg.get("save_model", False))

    if train_cfg.get("cross_validate", False):
        trainer.cross_validate(X_train, y_train)
    return trainer, result


def run_reporting(cfg, trainer, result):
    banner("STEP 5: Reporting")
    out = cfg.get("output", {})
    reporter = Reporter(output_dir=out.get("images_dir", "images"), dpi=out.get("dpi", 300))
    paths = reporter.run(result)

    metrics_path = out.get("metrics_path")
    if metrics_path:
        paths.append(write_metrics_json(result.metrics, metrics_path))
    trainer.log_artifacts(paths)
    return paths


def run_pipeline(cfg, stage="all"):
    env_vars = load_env()
    seed = set_global_seed(cfg.get("split", {}).get("random_state", env_vars["SEED"]))
    print(f"[INFO] Global seed: {seed}")

    df = run_data_loader(cfg)
    if stage == "data_loader":
        return SimpleNamespace(data=df)

    corr = None
    if stage in ("all", "eda"):
        corr = run_eda(cfg, df)
    if stage == "eda":
        return SimpleNamespace(data=df, correlation=corr)

    X_train, X_test, y_train, y_test = run_split(cfg, df)
    trainer, result = run_training(cfg, X_train, X_test, y_train, y_test)
    paths = run_reporting(cfg, trainer, result)

    print("\n[INFO] ✅ Full pipeline executed successfully!")
    return SimpleNamespace(
        data=df,
        correlation=corr,
        split=(X_train, X_test, y_train, y_test),
        trainer=trainer,
        result=result,
        artifacts=paths,
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description="Boston housing random forest pipeline.")
    parser.add_argument("--stage", type=str, default="all", choices=STAGES)
    parser.add_argument("--config", type=str, default="params.yaml")
    args = parser.parse_args(argv)

    cfg = load_cfg(args.config)
    run_pipeline(cfg, stage=args.stage)


if __name__ == "__main__":
    main()
