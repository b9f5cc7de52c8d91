"""
Tensor materialization for assembled examples.

Output format (all int64, no grad):
- input_ids: [max_len + 1] corrupted tokens, CLS at 0
- masked_lm_positions: [max_label] positions of masked tokens, 0-padded
- token_type_ids: [max_len + 1] segment types 0/1/2
- sentence_order_label: [] 1 if segments are in original order
- masked_lm_ids: [max_label] original ids at masked positions, 0-padded
"""
from typing import Dict

import torch

from .example import AlbertExample


FEATURE_KEYS = (
    "input_ids",
    "masked_lm_positions",
    "token_type_ids",
    "sentence_order_label",
    "masked_lm_ids",
)


def _long(values) -> torch.Tensor:
    return torch.tensor(values, dtype=torch.long, requires_grad=False)


def to_features(example: AlbertExample) -> Dict[str, torch.Tensor]:
    """
    Convert an example to tensors.

    Args:
        example: Assembled example

    Returns:
        Dictionary keyed by FEATURE_KEYS
    """
    return {
        "input_ids": _long(example.tokens),
        "masked_lm_positions": _long(example.target_positions),
        "token_type_ids": _long(example.segment_types),
        "sentence_order_label": _long(example.order_label),
        "masked_lm_ids": _long(example.target_ids),
    }
