# metrics/errors.py
from __future__ import annotations


class MetricError(Exception):
    """metrics 패키지에서 발생하는 모든 예외의 base."""


class MetricShapeError(MetricError, ValueError):
    """
    update()에 들어온 preds/labels shape이 metric의 전제 조건과 맞지 않을 때.
    state를 건드리기 전에 raise 되므로 누적값은 그대로 남는다.
    """


class UnknownMetricError(MetricError, KeyError):
    """strict 모드 registry에서 모르는 metric 이름을 add 했을 때."""
