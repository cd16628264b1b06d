# metrics/impl/classification.py
from __future__ import annotations
from typing import Any

import numpy as np
import torch

from ..base import Metric, as_batch
from ..utils import safe_div


class ClassificationError(Metric):
    """
    Streaming classification error rate (Tensor optimized)

    preds: (N, num_classes) score, labels: (N,) class index (float 가능, int로 truncate)
    instance마다 argmax != label 이면 1 누적.
    argmax는 왼쪽부터 strictly-greater 비교: 동점이면 앞쪽 index, nan은 절대 선택 안 됨
    (전부 nan이면 index 0).

    지원 입력:
      - torch.Tensor (GPU/CPU)  → 고속 경로
      - numpy / list            → 기존 경로
    """
    name = "error"
    single_score = False

    # -------------------------------------------------
    # 핵심: tensor fast path
    # -------------------------------------------------
    def _update_tensor(self, preds: torch.Tensor, labels: torch.Tensor) -> None:
        n, k = self.check(preds, labels)
        preds = preds.detach().reshape(n, k)
        labels = labels.detach().reshape(-1)
        if n == 0:
            return

        if preds.is_floating_point():
            # nan은 -inf로 밀어서 argmax에서 지도록
            preds = preds.masked_fill(torch.isnan(preds), float("-inf"))
        # torch.argmax는 최댓값이 여러 개면 첫 번째 index 반환
        pred_idx = torch.argmax(preds, dim=1)
        # float label -> int 는 0 방향 truncate
        true_idx = labels.to(pred_idx.device).to(torch.int64)

        self._sum_err += float((pred_idx != true_idx).sum().item())
        self._count += n

    # -------------------------------------------------
    # numpy / list 경로
    # -------------------------------------------------
    def _update_numpy(self, preds: Any, labels: Any) -> None:
        p, y = as_batch(self, preds, labels)
        if p.shape[0] == 0:
            return
        p = np.where(np.isnan(p), -np.inf, p)
        # np.argmax도 첫 번째 최댓값 index
        pred_idx = np.argmax(p, axis=1)
        true_idx = np.trunc(y).astype(np.int64)
        self._sum_err += float(np.count_nonzero(pred_idx != true_idx))
        self._count += int(y.shape[0])

    def update(self, preds: Any, labels: Any) -> None:
        if isinstance(preds, torch.Tensor) and isinstance(labels, torch.Tensor):
            self._update_tensor(preds, labels)
            return
        self._update_numpy(preds, labels)

    def compute(self) -> float:
        return safe_div(self._sum_err, self._count)

    def reset(self) -> None:
        self._sum_err = 0.0
        self._count = 0
