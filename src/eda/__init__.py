from .analyzer import ExploratoryAnalyzer

__all__ = ["ExploratoryAnalyzer"]
