"""
Core domain layer: dataset abstraction, format detection, range filtering,
aggregation and multi-dataset coordination.
"""

from .dataset import Dataset
from .format_detection import FormatDescriptor, ScoreKind, detect_format
from .selector import Selector
from .aggregation import ChartKind, chart_series, summary_statistics
from .coordinator import Coordinator, DashboardState

__all__ = [
    "Dataset",
    "FormatDescriptor",
    "ScoreKind",
    "detect_format",
    "Selector",
    "ChartKind",
    "chart_series",
    "summary_statistics",
    "Coordinator",
    "DashboardState",
]
