"""
실행:
  PYTHONPATH=src python -m eval_tool.metrics
"""
from __future__ import annotations

import logging
import sys

import numpy as np

from eval_tool.metrics import MetricsConfig, MetricsManager

NUM_ROUNDS = 5
NUM_BATCHES = 20
BATCH = 32
NUM_CLASSES = 3


def make_regression_batch(rng: np.random.Generator):
    # 정답 + 노이즈, instance당 score 1개
    labels = rng.random(BATCH)
    preds = (labels + rng.normal(0.0, 0.1, BATCH)).reshape(-1, 1)
    return preds, labels


def make_classification_batch(rng: np.random.Generator):
    # 정답 class 점수를 올려서 75% 정도 맞추도록
    labels = rng.integers(0, NUM_CLASSES, BATCH).astype(np.float64)
    scores = rng.random((BATCH, NUM_CLASSES))
    hit = rng.random(BATCH) > 0.25
    scores[np.arange(BATCH)[hit], labels[hit].astype(np.int64)] += 1.0
    return scores, labels


def run(rng: np.random.Generator) -> None:
    print("=== Metrics System Smoke Test Start ===")

    print("\n[A] regression: rmse + r2 (train/val)")
    mm = MetricsManager(MetricsConfig.from_string("rmse,r2", eval_sets=("train", "val")))
    for r in range(NUM_ROUNDS):
        mm.reset()
        for _ in range(NUM_BATCHES):
            mm.update("train", *make_regression_batch(rng))
        mm.update("val", *make_regression_batch(rng))
        mm.report(r, fo=sys.stdout)

    print("\n[B] classification: error (unknown name는 무시됨)")
    mm = MetricsManager(MetricsConfig(metrics=("error", "bogus"), eval_sets=("train",)))
    assert mm.registry("train").names() == ["error"]
    for r in range(NUM_ROUNDS):
        mm.reset()
        for _ in range(NUM_BATCHES):
            mm.update("train", *make_classification_batch(rng))
        mm.report(r, fo=sys.stdout)

    print("\n=== Metrics System Smoke Test Finished ===")


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    run(np.random.default_rng(0))
