from .reporter import Reporter, format_metrics, print_metrics, write_metrics_json

__all__ = ["Reporter", "format_metrics", "print_metrics", "write_metrics_json"]
