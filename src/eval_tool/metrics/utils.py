# metrics/utils.py
from __future__ import annotations
from typing import Any, Tuple

import numpy as np
import torch


def to_numpy(x: Any) -> np.ndarray:
    """
    PyTorch 텐서 / NumPy 배열 / 중첩 list를 float64 ndarray로 변환.
    GPU 텐서/그래프 참조를 끊어서 메모리 누수 방지.
    """
    if isinstance(x, torch.Tensor):
        # 그래프 끊고 CPU로 이동
        x = x.detach().cpu().to(torch.float64).numpy()
    return np.asarray(x, dtype=np.float64)


def shape_of(x: Any) -> Tuple[int, ...]:
    # 텐서/배열은 변환 없이 .shape만 읽음
    if hasattr(x, "shape"):
        return tuple(int(d) for d in x.shape)
    return tuple(np.shape(x))


def safe_div(a: float, b: float) -> float:
    """
    IEEE 규칙 그대로 나눗셈 (0/0 -> nan, x/0 -> inf).
    파이썬 float 나눗셈과 달리 ZeroDivisionError 없음, numpy warning도 없음.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(a) / np.float64(b))
