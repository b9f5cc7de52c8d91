"""
Configuration for ALBERT example construction.

Sequence layout: [CLS] segment SEP segment, padded to max_len + 1.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional, Tuple


@dataclass
class ExampleConfig:
    """
    Sizes and sampling constants for one example builder.

    Every builder owns its own config, so several configurations can
    run side by side (tests, ablations) without touching globals.
    """
    # Content slots; tokens array holds max_len + 1 entries (CLS included)
    max_len: int = 199

    # Mask budget: masked positions per example, targets padded to this size
    max_label: int = 28

    # Start offset drawn uniformly from {0, ..., max_offset}
    max_offset: int = 3

    # Each segment needs at least this many tokens (usable // 3)
    min_third_len: int = 5

    # P(order_label == 1)
    order_prob: float = 0.5

    # Span lengths 1, 2, 3 with relative weights 6:3:2
    span_length_weights: Tuple[float, ...] = (6.0, 3.0, 2.0)

    # Span start candidates every N positions
    candidate_stride: int = 4

    # Start jitter drawn from [0, jitter_width - span_len]
    jitter_width: int = 5

    # Corruption: p <= mask_prob -> MASK, else random (p2 <= random_prob) or keep
    mask_prob: float = 0.8
    random_prob: float = 0.5

    @property
    def seq_len(self) -> int:
        """Length of the emitted token and segment-type arrays."""
        return self.max_len + 1

    @property
    def max_span_len(self) -> int:
        return len(self.span_length_weights)

    def __post_init__(self):
        """Validate configuration."""
        self.span_length_weights = tuple(float(w) for w in self.span_length_weights)
        assert self.max_len > 0, f"max_len must be positive, got {self.max_len}"
        assert self.max_label > 0, f"max_label must be positive, got {self.max_label}"
        assert self.max_offset >= 0, f"max_offset must be >= 0, got {self.max_offset}"
        assert self.span_length_weights and all(w >= 0 for w in self.span_length_weights), \
            f"span_length_weights must be non-negative, got {self.span_length_weights}"
        assert sum(self.span_length_weights) > 0, "span_length_weights must not all be zero"
        assert self.candidate_stride > 0, \
            f"candidate_stride must be positive, got {self.candidate_stride}"
        assert self.jitter_width >= self.max_span_len, \
            f"jitter_width ({self.jitter_width}) must be >= max span length ({self.max_span_len})"
        assert 0.0 <= self.mask_prob <= 1.0, f"mask_prob out of range: {self.mask_prob}"
        assert 0.0 <= self.random_prob <= 1.0, f"random_prob out of range: {self.random_prob}"
        assert 0.0 <= self.order_prob <= 1.0, f"order_prob out of range: {self.order_prob}"

    @classmethod
    def albert_base(cls) -> "ExampleConfig":
        """Default configuration (200-slot sequences, 28 labels)."""
        return cls()

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ExampleConfig":
        """Create config from dictionary."""
        return cls(**{k: v for k, v in config_dict.items() if k in cls.__dataclass_fields__})

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "max_len": self.max_len,
            "max_label": self.max_label,
            "max_offset": self.max_offset,
            "min_third_len": self.min_third_len,
            "order_prob": self.order_prob,
            "span_length_weights": list(self.span_length_weights),
            "candidate_stride": self.candidate_stride,
            "jitter_width": self.jitter_width,
            "mask_prob": self.mask_prob,
            "random_prob": self.random_prob,
        }


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML file or use defaults."""
    default_config = {
        # Subword encoder
        "tokenizer": {
            "spm_model_path": None,
            "name": None,
        },

        # Example construction
        "example": ExampleConfig().to_dict(),

        # Logging
        "logging": {
            "project": "albert-examples",
            "log_dir": "./logs",
            "log_every_examples": 1000,
            "use_wandb": False,
            "run_name": None,
        },

        "seed": 42,
    }

    if config_path and Path(config_path).exists():
        import yaml
        with open(config_path) as f:
            user_config = yaml.safe_load(f) or {}
        # Merge user config over defaults
        for section, values in user_config.items():
            if section in default_config and isinstance(values, dict):
                default_config[section].update(values)
            else:
                default_config[section] = values

    return default_config
