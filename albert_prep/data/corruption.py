"""
Corruption policy for masked positions.

With the default probabilities:
- 80%: replace with MASK
- 10%: replace with a random vocabulary id in [1, vocab_size - 1]
- 10%: keep the original token

"Keep" is an explicit decision rather than a replacement id of 0, since 0
can be a real subword id.
"""
import random
from dataclasses import dataclass
from typing import Callable, List, Union

from .span_masking import MaskSet


@dataclass(frozen=True)
class Keep:
    """Leave the original token in place."""


@dataclass(frozen=True)
class Replace:
    """Overwrite the position with token_id."""
    token_id: int


Corruption = Union[Keep, Replace]


def choose_corruption(
    p: float,
    p2: float,
    mask_id: int,
    draw_random_id: Callable[[], int],
    mask_prob: float = 0.8,
    random_prob: float = 0.5,
) -> Corruption:
    """
    Decide what happens to one masked position.

    Args:
        p: First uniform draw, selects MASK vs. the remaining branch
        p2: Second uniform draw, selects random replacement vs. keep
        mask_id: MASK marker id
        draw_random_id: Called only when a random replacement is chosen
        mask_prob: Threshold on p for MASK
        random_prob: Threshold on p2 for random replacement

    Returns:
        Keep() or Replace(token_id)
    """
    if p > mask_prob:
        if p2 <= random_prob:
            return Replace(draw_random_id())
        return Keep()
    return Replace(mask_id)


def apply_corruption(
    rng: random.Random,
    tokens: List[int],
    mask_set: MaskSet,
    mask_id: int,
    vocab_size: int,
    mask_prob: float = 0.8,
    random_prob: float = 0.5,
) -> List[Corruption]:
    """
    Corrupt masked positions of tokens in place, left to right.

    Targets in mask_set already hold the original ids, so only the
    sequence is modified here.

    Returns:
        The decision taken at each masked position, ascending order
    """
    def draw_random_id() -> int:
        return rng.randint(1, vocab_size - 1)

    decisions = []
    for pos in mask_set.masked_positions():
        p = rng.random()
        p2 = rng.random()
        decision = choose_corruption(
            p, p2, mask_id, draw_random_id,
            mask_prob=mask_prob,
            random_prob=random_prob,
        )
        if isinstance(decision, Replace):
            tokens[pos] = decision.token_id
        decisions.append(decision)

    return decisions
