"""Tests for MetricsConfig / MetricsManager and the runnable examples."""
from __future__ import annotations

import dataclasses
import io
import logging
import math

import numpy as np
import pytest

from eval_tool.metrics import MetricsConfig, MetricsManager, UnknownMetricError


# ---------------------------------------------------------------------------
# MetricsConfig
# ---------------------------------------------------------------------------

class TestMetricsConfig:

    def test_defaults(self):
        cfg = MetricsConfig()
        assert cfg.metrics == ("error",)
        assert cfg.eval_sets == ("train",)
        assert cfg.strict is False
        assert cfg.value_format == "%f"

    @pytest.mark.parametrize("text", ["rmse,r2", "rmse r2", " rmse , r2 ,"])
    def test_from_string(self, text):
        assert MetricsConfig.from_string(text).metrics == ("rmse", "r2")

    def test_from_string_kwargs(self):
        cfg = MetricsConfig.from_string("error", eval_sets=("train", "val"), strict=True)
        assert cfg.eval_sets == ("train", "val")
        assert cfg.strict is True

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            MetricsConfig().strict = True


# ---------------------------------------------------------------------------
# MetricsManager
# ---------------------------------------------------------------------------

@pytest.fixture
def mm() -> MetricsManager:
    return MetricsManager(MetricsConfig.from_string("rmse,error", eval_sets=("train", "val")))


class TestMetricsManager:

    def test_builds_one_registry_per_eval_set(self, mm):
        assert mm.eval_sets() == ["train", "val"]
        assert mm.registry("train").names() == ["error", "rmse"]
        assert mm.registry("val").names() == ["error", "rmse"]
        assert mm.registry("train") is not mm.registry("val")

    def test_add_eval_set_is_idempotent(self, mm):
        test_reg = mm.add_eval_set("test")
        assert mm.add_eval_set("test") is test_reg
        assert mm.eval_sets() == ["train", "val", "test"]

    def test_unknown_metrics_dropped_unless_strict(self):
        mm = MetricsManager(MetricsConfig(metrics=("bogus", "r2")))
        assert mm.registry("train").names() == ["r2"]
        with pytest.raises(UnknownMetricError):
            MetricsManager(MetricsConfig(metrics=("bogus",), strict=True))

    def test_update_targets_one_set(self, mm):
        mm.update("train", [[1.0], [2.0], [3.0]], [1.0, 2.0, 4.0])
        out = mm.compute()
        assert out["train"]["rmse"] == pytest.approx(math.sqrt(1.0 / 3.0))
        assert math.isnan(out["val"]["rmse"])

    def test_update_unknown_set(self, mm):
        with pytest.raises(KeyError):
            mm.update("test", [[1.0]], [1.0])

    def test_reset_single_and_all(self, mm):
        for evname in ("train", "val"):
            mm.update(evname, [[1.0], [0.0]], [1.0, 0.0])
        mm.reset("train")
        assert math.isnan(mm.compute()["train"]["rmse"])
        assert mm.compute()["val"]["rmse"] == 0.0
        mm.reset()
        assert math.isnan(mm.compute()["val"]["rmse"])

    def test_report_line(self, mm):
        # instance당 score 1개 => error의 argmax는 항상 class 0
        mm.update("train", [[1.0], [2.0], [3.0]], [0.0, 2.0, 4.0])
        mm.update("val", [[1.0], [0.0]], [0.0, 0.0])
        line = mm.report(7)
        assert line == (
            "[7]\ttrain-error:0.666667\ttrain-rmse:0.816497"
            "\tval-error:0.000000\tval-rmse:0.707107"
        )

    def test_report_round_counter(self, mm):
        assert mm.report().startswith("[0]")
        assert mm.report().startswith("[1]")
        assert mm.report(10).startswith("[10]")
        assert mm.report().startswith("[11]")

    def test_report_logs_and_writes(self, mm, caplog):
        fo = io.StringIO()
        with caplog.at_level(logging.INFO, logger="eval_tool.metrics.manager"):
            line = mm.report(0, fo=fo)
        assert fo.getvalue() == line + "\n"
        assert line in caplog.text


# ---------------------------------------------------------------------------
# runnable examples
# ---------------------------------------------------------------------------

def test_smoke_runner(capsys):
    from eval_tool.metrics.__main__ import NUM_ROUNDS, run

    run(np.random.default_rng(0))
    out = capsys.readouterr().out
    assert out.count("train-rmse:") == NUM_ROUNDS
    assert out.count("val-r2:") == NUM_ROUNDS
    assert out.count("train-error:") == NUM_ROUNDS
    assert "bogus" not in out
    assert "Finished" in out


def test_iteration_epoch_example():
    from eval_tool.metrics.examples.iteration_epoch_style import LoopCfg, main

    cfg = LoopCfg(num_epochs=2, iters_per_epoch=3, batch_size=256, val_iters=2, device="cpu")
    lines = main(cfg)
    assert len(lines) == 2
    for epoch, line in enumerate(lines):
        assert line.startswith(f"[{epoch}]\ttrain-error:")
        assert "\tval-error:" in line
        # 약 75% 정답 + 나머지 1/3 => error 약 0.17
        err = float(line.split("\tval-error:")[1])
        assert 0.05 < err < 0.35
