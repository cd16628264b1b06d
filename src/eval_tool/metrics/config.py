# metrics/config.py
from __future__ import annotations
from dataclasses import dataclass
import re
from typing import Tuple


@dataclass(frozen=True)
class MetricsConfig:
    """
    MetricsManager 설정:
      - metrics: eval set마다 만들 metric 이름 토큰 ("rmse", "r2", "error")
      - eval_sets: 미리 만들어 둘 eval set 이름 (report 출력 순서)
      - strict: 모르는 metric 이름이면 에러 (False면 조용히 무시)
      - value_format: report 값 포맷 (printf 스타일)
    """
    metrics: Tuple[str, ...] = ("error",)
    eval_sets: Tuple[str, ...] = ("train",)
    strict: bool = False
    value_format: str = "%f"

    @classmethod
    def from_string(cls, metrics: str, **kwargs) -> "MetricsConfig":
        """ "rmse,r2" / "rmse r2" 형태 문자열에서 생성 """
        names = tuple(tok for tok in re.split(r"[,\s]+", metrics) if tok)
        return cls(metrics=names, **kwargs)
