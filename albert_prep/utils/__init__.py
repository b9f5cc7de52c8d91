"""
Utilities

- logging: W&B + JSONL logging, example statistics
"""
from .logging import Logger, ExampleStats, format_metrics

__all__ = [
    "Logger",
    "ExampleStats",
    "format_metrics",
]
