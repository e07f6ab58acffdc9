from .metrics import EvaluationResult, RegressionMetrics, compute_metrics

__all__ = ["EvaluationResult", "RegressionMetrics", "compute_metrics"]
