"""Tests for example statistics and the JSONL logger."""

import json

import pytest

from albert_prep.utils import ExampleStats, Logger, format_metrics


class TestExampleStats:
    def test_counts_and_means(self):
        stats = ExampleStats()
        stats.record_example(num_masked=10, length=100, order_label=1)
        stats.record_example(num_masked=20, length=50, order_label=0)
        stats.record_skip("TooShort")

        summary = stats.summary()

        assert summary["examples_built"] == 2
        assert summary["lines_seen"] == 3
        assert summary["skipped_TooShort"] == 1
        assert summary["mean_num_masked"] == 15.0
        assert summary["mean_length"] == 75.0
        assert summary["mean_order_label"] == 0.5

    def test_window(self):
        stats = ExampleStats(window_size=2)
        for value in (1, 2, 3):
            stats.update("x", value)
        assert stats.get_mean("x") == 2.5
        assert stats.get_mean("missing") is None

    def test_reset(self):
        stats = ExampleStats()
        stats.record_example(1, 10, 1)
        stats.record_skip("MaskingFailed")
        stats.reset()
        assert stats.seen == 0
        assert stats.summary() == {"examples_built": 0, "lines_seen": 0}


class TestLogger:
    def test_from_config(self, tmp_path):
        logger = Logger.from_config({
            "project": "albert-examples",
            "log_dir": str(tmp_path / "logs"),
            "log_every_examples": 7,
            "use_wandb": False,
        }, run_name="unit")

        assert logger.log_every_examples == 7
        assert logger.jsonl_path == tmp_path / "logs" / "unit.jsonl"
        assert logger.use_wandb is False

    def test_log_stats_steps_by_lines(self, tmp_path):
        stats = ExampleStats()
        stats.record_example(4, 40, 1)
        stats.record_skip("TooShort")

        logger = Logger(run_name="stats", log_dir=str(tmp_path), use_wandb=False)
        logger.log_stats(stats)

        entry = json.loads((tmp_path / "stats.jsonl").read_text())
        assert entry["step"] == 2
        assert entry["examples_built"] == 1
        assert entry["skipped_TooShort"] == 1
        assert entry["skip_rate"] == 0.5
        assert entry["mean_num_masked"] == 4.0
        assert "elapsed_seconds" in entry

    def test_maybe_log_cadence(self, tmp_path):
        stats = ExampleStats()
        logger = Logger(run_name="cadence", log_dir=str(tmp_path), log_every_examples=3, use_wandb=False)

        logged = []
        for i in range(7):
            stats.record_example(i, 10, 0)
            logged.append(logger.maybe_log(stats))

        assert logged == [False, False, True, False, False, True, False]
        entries = (tmp_path / "cadence.jsonl").read_text().splitlines()
        assert [json.loads(e)["step"] for e in entries] == [3, 6]

    def test_finish_writes_remainder(self, tmp_path):
        stats = ExampleStats()
        logger = Logger(run_name="tail", log_dir=str(tmp_path), log_every_examples=2, use_wandb=False)
        for _ in range(3):
            stats.record_skip("MaskingFailed")
            logger.maybe_log(stats)

        logger.finish(stats)
        logger.finish(stats)

        entries = [json.loads(e) for e in (tmp_path / "tail.jsonl").read_text().splitlines()]
        assert [e["step"] for e in entries] == [2, 3]
        assert entries[-1]["skipped_MaskingFailed"] == 3
        assert entries[-1]["skip_rate"] == 1.0

    def test_invalid_cadence(self, tmp_path):
        with pytest.raises(AssertionError):
            Logger(log_dir=str(tmp_path), log_every_examples=0)

    def test_log_config(self, tmp_path):
        logger = Logger(run_name="cfg", log_dir=str(tmp_path), use_wandb=False)
        logger.log_config({"max_len": 199})

        assert json.loads((tmp_path / "cfg_config.json").read_text()) == {"max_len": 199}


def test_format_metrics():
    text = format_metrics({"examples_built": 3, "mean_num_masked": 21.456789})
    assert text == "examples_built=3 | mean_num_masked=21.4568"
