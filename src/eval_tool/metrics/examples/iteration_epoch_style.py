"""
examples/iteration_epoch_style.py

실행:
  PYTHONPATH=src python -m eval_tool.metrics.examples.iteration_epoch_style

목표:
  - epoch/iteration 구조에서 metrics를 어떻게 reset/update/report 하는지 예시 제공
  - torch.Tensor 입력이면 ClassificationError가 on-device argmax 경로를 탄다
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import torch

from eval_tool.metrics.config import MetricsConfig
from eval_tool.metrics.manager import MetricsManager

logger = logging.getLogger(__name__)


# -----------------------------
# Dummy data generator (example)
# -----------------------------
@dataclass
class LoopCfg:
    num_epochs: int = 3
    iters_per_epoch: int = 120
    batch_size: int = 4096
    num_classes: int = 3
    device: str = "cuda" if torch.cuda.is_available() else "cpu"

    log_every_iter: int = 20        # iter 로그 주기
    do_val: bool = True
    val_iters: int = 30
    seed: int = 0


def make_dummy_batch(cfg: LoopCfg, gen: torch.Generator) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    더미 분류 batch 생성:
      scores: (B, C) float32
      labels: (B,) float32 (class index)
    """
    labels = torch.randint(0, cfg.num_classes, (cfg.batch_size,), generator=gen)
    scores = torch.rand((cfg.batch_size, cfg.num_classes), generator=gen)

    # 정답 확률 75% 정도로 정답 class 점수 올림
    hit = torch.nonzero(torch.rand((cfg.batch_size,), generator=gen) >= 0.25).squeeze(1)
    scores[hit, labels[hit]] += 1.0

    return scores.to(cfg.device), labels.to(torch.float32).to(cfg.device)


def build_manager(cfg: LoopCfg) -> MetricsManager:
    eval_sets = ("train", "val") if cfg.do_val else ("train",)
    return MetricsManager(MetricsConfig(metrics=("error",), eval_sets=eval_sets))


# -----------------------------
# Train / Val loop example
# -----------------------------
def train_one_epoch(mm: MetricsManager, cfg: LoopCfg, gen: torch.Generator) -> None:
    """
    train:
      - epoch 시작에 reset
      - iter마다 update
      - log_every_iter마다 중간 누적값 로그
    """
    mm.reset("train")

    for it in range(cfg.iters_per_epoch):
        scores, labels = make_dummy_batch(cfg, gen)
        mm.update("train", scores, labels)

        if (it + 1) % cfg.log_every_iter == 0:
            err = mm.registry("train")["error"].compute()
            logger.debug(f"[train] it={it+1:04d} error={err:.4f}")


@torch.no_grad()
def validate(mm: MetricsManager, cfg: LoopCfg, gen: torch.Generator) -> None:
    mm.reset("val")
    for _ in range(cfg.val_iters):
        scores, labels = make_dummy_batch(cfg, gen)
        mm.update("val", scores, labels)


def main(cfg: Optional[LoopCfg] = None) -> List[str]:
    cfg = cfg or LoopCfg()
    gen = torch.Generator().manual_seed(cfg.seed)
    mm = build_manager(cfg)

    lines = []
    for epoch in range(cfg.num_epochs):
        train_one_epoch(mm, cfg, gen)
        if cfg.do_val:
            validate(mm, cfg, gen)
        lines.append(mm.report(epoch))
    return lines


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    main()
