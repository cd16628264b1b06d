# metrics/base.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Tuple

import numpy as np

from .errors import MetricShapeError
from .utils import shape_of, to_numpy


class Metric(ABC):
    """
    배치 단위로 running sum을 누적하는 Metric 객체.
    - update(preds, labels): 누적/상태 업데이트 (이전 배치 재스캔 없음)
    - compute(): 현재 누적값으로 스칼라 계산 (side effect 없음)
    - reset(): 상태를 0으로 초기화
    - name: metric 고유 토큰 (registry key, report 출력에 사용)

    preds는 (num_instances, num_outputs) 배열, labels는 길이 num_instances.
    """

    name: str = ""
    # True면 instance당 score 1개만 허용 (rmse/r2)
    single_score: bool = True

    def __init__(self):
        self.reset()

    def check(self, preds: Any, labels: Any) -> Tuple[int, int]:
        """
        state 변경 없이 shape 전제 조건만 검사.
        반환: preds를 바라볼 (N, K) shape
        """
        return check_shape(self, shape_of(preds), shape_of(labels))

    @abstractmethod
    def update(self, preds: Any, labels: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def compute(self) -> float:
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def check_shape(
    metric: Metric, pred_shape: Tuple[int, ...], label_shape: Tuple[int, ...]
) -> Tuple[int, int]:
    """
    preds/labels의 shape만 보고 전제 조건 검사 (tensor/numpy 경로 공통).
      - 1-D preds (N,) 는 (N, 1)
      - single_score metric은 한 줄짜리 (1, N) + label N개도 (N, 1)로 받음
      - 3-D 이상, score 개수/클래스 개수 위반, label 개수 불일치는 MetricShapeError
    """
    n_labels = int(np.prod(label_shape))

    if len(pred_shape) == 1:
        pred_shape = (pred_shape[0], 1)
    if len(pred_shape) != 2:
        raise MetricShapeError(
            f"{metric.name} expects a 2-D prediction batch, got shape {pred_shape}"
        )
    n, k = pred_shape

    if metric.single_score:
        if n == 1 and k == n_labels:
            n, k = k, 1
        if k != 1:
            raise MetricShapeError(
                f"{metric.name} can only accept one score per instance, got shape {pred_shape}"
            )
    elif k == 0:
        raise MetricShapeError(f"{metric.name} needs at least one class score per instance")

    if n != n_labels:
        raise MetricShapeError(f"{metric.name}: {n} predictions but {n_labels} labels")
    return n, k


def as_batch(metric: Metric, preds: Any, labels: Any) -> Tuple[np.ndarray, np.ndarray]:
    """
    shape 검사 후 ndarray로 변환.
    반환: (preds 2-D (N, K), labels 1-D (N,))
    """
    n, k = metric.check(preds, labels)
    return to_numpy(preds).reshape(n, k), to_numpy(labels).reshape(-1)
