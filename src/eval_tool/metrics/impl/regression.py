# metrics/impl/regression.py
from __future__ import annotations
import math
from typing import Any

import numpy as np

from ..base import Metric, as_batch
from ..utils import safe_div


class RMSE(Metric):
    """
    값들을 저장하지 않고 (sum_err, count)만 유지 => 메모리 최소.
    compute() = sqrt(sum((pred - label)^2) / count)
    """
    name = "rmse"

    def update(self, preds: Any, labels: Any) -> None:
        p, y = as_batch(self, preds, labels)
        diff = p[:, 0] - y
        self._sum_err += float(np.dot(diff, diff))
        self._count += int(y.shape[0])

    def compute(self) -> float:
        return math.sqrt(safe_div(self._sum_err, self._count))

    def reset(self) -> None:
        self._sum_err = 0.0
        self._count = 0


class CorrSqr(Metric):
    """
    r^2: pearson 상관계수의 제곱을 streaming으로 계산 (값 저장 없음).

    pred/label 모두 고정 offset 0.5를 빼고 누적한다 (mean centering 아님).
    분산이 0이면 (상수 예측/상수 라벨) 결과는 nan/inf.
    """
    name = "r2"
    OFFSET = 0.5

    def update(self, preds: Any, labels: Any) -> None:
        p, y = as_batch(self, preds, labels)
        x = p[:, 0] - self.OFFSET
        y = y - self.OFFSET
        self._sum_x += float(x.sum())
        self._sum_y += float(y.sum())
        self._sum_xsqr += float(np.dot(x, x))
        self._sum_ysqr += float(np.dot(y, y))
        self._sum_xyprod += float(np.dot(x, y))
        self._count += int(y.shape[0])

    def compute(self) -> float:
        n = self._count
        mean_x = safe_div(self._sum_x, n)
        mean_y = safe_div(self._sum_y, n)
        corr = safe_div(self._sum_xyprod, n) - mean_x * mean_y
        xvar = safe_div(self._sum_xsqr, n) - mean_x * mean_x
        yvar = safe_div(self._sum_ysqr, n) - mean_y * mean_y
        return safe_div(corr * corr, xvar * yvar)

    def reset(self) -> None:
        self._sum_x = 0.0
        self._sum_y = 0.0
        self._sum_xsqr = 0.0
        self._sum_ysqr = 0.0
        self._sum_xyprod = 0.0
        self._count = 0
