"""
ALBERT pretraining example preparation.

- data: encoder wrapper, span masking, corruption, example assembly
- utils: example statistics and W&B + JSONL logging
"""
from .data import (
    AlbertExample,
    AlbertExampleBuilder,
    ExampleConfig,
    ExampleParser,
    MaskingFailed,
    TooShort,
    to_features,
)

__version__ = "0.1.0"

__all__ = [
    "AlbertExample",
    "AlbertExampleBuilder",
    "ExampleConfig",
    "ExampleParser",
    "MaskingFailed",
    "TooShort",
    "to_features",
]
