# metrics/registry.py
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, TextIO, Tuple

from .base import Metric
from .errors import UnknownMetricError
from .impl.classification import ClassificationError
from .impl.regression import RMSE, CorrSqr

logger = logging.getLogger(__name__)

# 이름 토큰 -> metric 생성자 (고정 집합)
METRICS: Dict[str, Callable[[], Metric]] = {
    "rmse": RMSE,
    "error": ClassificationError,
    "r2": CorrSqr,
}


class MetricRegistry:
    """
    name -> Metric 객체 딕셔너리. 순회/출력 순서는 항상 이름 사전순.
    사용 패턴:
      reg.add_metric("rmse")
      reg.reset_all()                 # epoch 시작
      reg.update_all(preds, labels)   # batch 마다
      reg.report("val")               # "\tval-rmse:0.577350"

    같은 이름은 먼저 들어온 것만 남는다 (나중 add는 조용히 무시).
    add는 setup 단계에서만 호출할 것.
    """
    def __init__(self, strict: bool = False, value_format: str = "%f"):
        self.strict = strict
        self.value_format = value_format
        self._m: Dict[str, Metric] = {}

    def add_metric(self, name: str) -> bool:
        """
        모르는 이름이면 no-op (strict=True면 UnknownMetricError).
        반환: 새로 추가됐으면 True
        """
        factory = METRICS.get(name)
        if factory is None:
            if self.strict:
                raise UnknownMetricError(
                    f"Unknown metric '{name}'. Available: {', '.join(sorted(METRICS))}"
                )
            logger.debug(f"ignoring unknown metric name: {name!r}")
            return False
        if name in self._m:
            logger.debug(f"metric already registered: {name}")
            return False
        return self.register(factory())

    def register(self, metric: Metric) -> bool:
        if metric.name in self._m:
            logger.debug(f"dropping duplicate metric instance: {metric!r}")
            return False
        self._m[metric.name] = metric
        logger.debug(f"registered metric: {metric.name}")
        return True

    def get(self, name: str) -> Metric:
        return self._m[name]

    def __getitem__(self, name: str) -> Metric:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._m

    def __len__(self) -> int:
        return len(self._m)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def names(self) -> List[str]:
        return sorted(self._m)

    def items(self) -> List[Tuple[str, Metric]]:
        return [(name, self._m[name]) for name in self.names()]

    def reset_all(self) -> None:
        for _, m in self.items():
            m.reset()

    def update_all(self, preds: Any, labels: Any) -> None:
        # 모든 metric이 같은 batch를 본다.
        # shape 검사를 먼저 전부 통과해야 update (하나라도 실패하면 아무것도 누적 안 됨)
        metrics = [m for _, m in self.items()]
        for m in metrics:
            m.check(preds, labels)
        for m in metrics:
            m.update(preds, labels)

    def compute_all(self) -> Dict[str, float]:
        return {name: m.compute() for name, m in self.items()}

    def report(self, evname: str, fo: Optional[TextIO] = None) -> str:
        out = "".join(
            f"\t{evname}-{name}:{self.value_format % m.compute()}"
            for name, m in self.items()
        )
        if fo is not None:
            fo.write(out)
        return out
