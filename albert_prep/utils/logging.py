"""
Logging utilities for example preparation.

- ExampleStats: counters for built/skipped lines plus windowed means
- Logger: JSONL file always, Weights & Biases when available and enabled
"""
import json
import time
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional

try:
    import wandb
    WANDB_AVAILABLE = True
except ImportError:
    WANDB_AVAILABLE = False
    wandb = None


class ExampleStats:
    """
    Track how many lines became examples and why the rest were skipped.

    Per-example values (masked count, filled length) are kept over a
    sliding window for running means.
    """

    def __init__(self, window_size: int = 1000):
        self.window_size = window_size
        self.built = 0
        self.skipped: Counter = Counter()
        self._values: Dict[str, list] = {}

    @property
    def seen(self) -> int:
        return self.built + sum(self.skipped.values())

    def record_example(self, num_masked: int, length: int, order_label: int):
        """Record a successfully built example."""
        self.built += 1
        self.update("num_masked", num_masked)
        self.update("length", length)
        self.update("order_label", order_label)

    def record_skip(self, reason: str):
        """Record a skipped line under reason (e.g. "TooShort")."""
        self.skipped[reason] += 1

    def update(self, name: str, value: float):
        """Add a value to tracking."""
        values = self._values.setdefault(name, [])
        values.append(value)
        if len(values) > self.window_size:
            del values[:-self.window_size]

    def get_mean(self, name: str) -> Optional[float]:
        """Get mean of tracked values."""
        values = self._values.get(name)
        if not values:
            return None
        return sum(values) / len(values)

    def summary(self) -> Dict[str, Any]:
        """Counts and running means as one flat dict."""
        metrics: Dict[str, Any] = {
            "examples_built": self.built,
            "lines_seen": self.seen,
        }
        for reason, count in sorted(self.skipped.items()):
            metrics[f"skipped_{reason}"] = count
        for name in self._values:
            mean = self.get_mean(name)
            if mean is not None:
                metrics[f"mean_{name}"] = mean
        return metrics

    def reset(self):
        self.built = 0
        self.skipped.clear()
        self._values.clear()


class Logger:
    """
    Example-preparation logger: JSONL always, W&B when enabled.

    Each entry is an ExampleStats snapshot keyed by lines seen, written
    every log_every_examples lines (see maybe_log) and once more on finish.
    """

    def __init__(
        self,
        project: str = "albert-examples",
        log_dir: str = "./logs",
        log_every_examples: int = 1000,
        use_wandb: bool = False,
        run_name: Optional[str] = None,
    ):
        assert log_every_examples > 0, \
            f"log_every_examples must be positive, got {log_every_examples}"
        self.project = project
        self.log_every_examples = log_every_examples
        self.run_name = run_name or f"examples_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        self.log_dir = Path(log_dir)
        self.use_wandb = use_wandb and WANDB_AVAILABLE

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.jsonl_path = self.log_dir / f"{self.run_name}.jsonl"

        self.wandb_run = None
        if self.use_wandb:
            try:
                self.wandb_run = wandb.init(project=project, name=self.run_name, resume="allow")
                print(f"W&B initialized: {wandb.run.url}")
            except Exception as e:
                print(f"W&B init failed, using JSONL only: {e}")
                self.use_wandb = False

        self._last_logged = 0
        self._start_time = time.time()

    @classmethod
    def from_config(cls, logging_config: Dict[str, Any], run_name: Optional[str] = None) -> "Logger":
        """Create a logger from the "logging" section of load_config()."""
        return cls(
            project=logging_config.get("project", "albert-examples"),
            log_dir=logging_config.get("log_dir", "./logs"),
            log_every_examples=logging_config.get("log_every_examples", 1000),
            use_wandb=logging_config.get("use_wandb", False),
            run_name=run_name or logging_config.get("run_name"),
        )

    def maybe_log(self, stats: ExampleStats) -> bool:
        """Log stats if log_every_examples more lines were seen since the last entry."""
        if stats.seen - self._last_logged < self.log_every_examples:
            return False
        self.log_stats(stats)
        return True

    def log_stats(self, stats: ExampleStats):
        """
        Write one snapshot: built count, skips per reason, running means.

        The step is the number of lines seen, so entries from runs with
        different skip rates line up by input position.
        """
        step = stats.seen
        metrics = stats.summary()
        seen = metrics["lines_seen"]
        metrics["skip_rate"] = (seen - metrics["examples_built"]) / seen if seen else 0.0

        entry = {
            "step": step,
            "elapsed_seconds": time.time() - self._start_time,
            **metrics,
        }
        with open(self.jsonl_path, "a") as f:
            f.write(json.dumps(entry) + "\n")

        if self.use_wandb and self.wandb_run:
            try:
                wandb.log(metrics, step=step)
            except Exception as e:
                print(f"W&B log failed: {e}")

        self._last_logged = step

    def log_config(self, config: Dict[str, Any]):
        """Save the run configuration next to the JSONL file."""
        config_path = self.log_dir / f"{self.run_name}_config.json"
        with open(config_path, "w") as f:
            json.dump(config, f, indent=2, default=str)

        if self.use_wandb and self.wandb_run:
            wandb.config.update(config, allow_val_change=True)

    def finish(self, stats: Optional[ExampleStats] = None):
        """Write a final snapshot for lines not yet logged, then close W&B."""
        if stats is not None and stats.seen > self._last_logged:
            self.log_stats(stats)

        if self.use_wandb and self.wandb_run:
            wandb.finish()

        print(f"Logs saved to: {self.jsonl_path}")


def format_metrics(metrics: Dict[str, Any], precision: int = 4) -> str:
    """Format metrics for printing."""
    parts = []
    for key, value in metrics.items():
        if isinstance(value, float):
            parts.append(f"{key}={value:.{precision}f}")
        else:
            parts.append(f"{key}={value}")
    return " | ".join(parts)
