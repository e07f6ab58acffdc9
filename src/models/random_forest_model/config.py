MODEL_CONFIG = {
    "n_estimators": 500,
    "max_features": 4,   # mtry
    "max_depth": None,
    "min_samples_split": 2,
    "min_samples_leaf": 1,
    "bootstrap": True,
    "oob_score": True,
    "random_state": 123,
    "n_jobs": -1
}

TRAINING_CONFIG = {
    "cv_folds": 5,
    "train_size": 0.8,
    "scale_importance": False,
}
