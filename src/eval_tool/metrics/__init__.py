# metrics/__init__.py
from .config import MetricsConfig
from .errors import MetricError, MetricShapeError, UnknownMetricError
from .base import Metric
from .registry import METRICS, MetricRegistry
from .manager import MetricsManager

from .impl.regression import RMSE, CorrSqr
from .impl.classification import ClassificationError

__all__ = [
    "MetricsConfig",
    "MetricError",
    "MetricShapeError",
    "UnknownMetricError",
    "Metric",
    "METRICS",
    "MetricRegistry",
    "MetricsManager",
    "RMSE",
    "CorrSqr",
    "ClassificationError",
]
