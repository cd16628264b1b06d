# metrics/manager.py
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, TextIO

from .config import MetricsConfig
from .registry import MetricRegistry

logger = logging.getLogger(__name__)


class MetricsManager:
    """
    - eval set(train/val/...)마다 MetricRegistry를 하나씩 가지고 있고
    - 모든 registry는 같은 MetricsConfig.metrics로 구성
    - round 단위 report 한 줄 생성: "[3]\ttrain-error:0.1\tval-error:0.2"
    """
    def __init__(self, cfg: Optional[MetricsConfig] = None):
        self.cfg = cfg or MetricsConfig()
        self._sets: Dict[str, MetricRegistry] = {}
        self._round = 0
        for evname in self.cfg.eval_sets:
            self.add_eval_set(evname)

    def add_eval_set(self, evname: str) -> MetricRegistry:
        if evname in self._sets:
            return self._sets[evname]
        reg = MetricRegistry(strict=self.cfg.strict, value_format=self.cfg.value_format)
        for name in self.cfg.metrics:
            reg.add_metric(name)
        self._sets[evname] = reg
        logger.debug(f"eval set {evname!r} -> {reg.names()}")
        return reg

    def registry(self, evname: str) -> MetricRegistry:
        return self._sets[evname]

    def eval_sets(self) -> List[str]:
        return list(self._sets)

    def reset(self, evname: Optional[str] = None) -> None:
        if evname is not None:
            self._sets[evname].reset_all()
            return
        for reg in self._sets.values():
            reg.reset_all()

    def update(self, evname: str, preds: Any, labels: Any) -> None:
        self._sets[evname].update_all(preds, labels)

    def compute(self) -> Dict[str, Dict[str, float]]:
        return {evname: reg.compute_all() for evname, reg in self._sets.items()}

    def report(self, round_idx: Optional[int] = None, fo: Optional[TextIO] = None) -> str:
        """
        보통 train loop에서 round(epoch)마다 호출:
          line = mm.report()
        round_idx를 안 주면 내부 카운터 사용 (0부터 증가)
        """
        if round_idx is None:
            round_idx = self._round
        self._round = round_idx + 1

        line = f"[{round_idx}]" + "".join(
            reg.report(evname) for evname, reg in self._sets.items()
        )
        logger.info(line)
        if fo is not None:
            fo.write(line + "\n")
        return line
