"""
ALBERT example assembly.

One token id sequence becomes one fixed-length record:

    [CLS] first ... SEP second ... 0 0 0

- The usable range starts at a random offset and is cut at a random
  midpoint into segments A and B; the token at the midpoint is dropped
  (its slot goes to SEP).
- order_label = 1 emits A then B, order_label = 0 emits B then A.
  Segment types are positional: the first segment and its SEP are type 1,
  the second segment type 2, CLS and padding type 0.
- Spans are then selected and corrupted (see span_masking, corruption).
"""
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .config import ExampleConfig
from .span_masking import select_spans
from .corruption import apply_corruption


class ExampleError(Exception):
    """A line could not be turned into an example; skip it."""


class TooShort(ExampleError):
    """Usable token range cannot hold two meaningful segments."""

    def __init__(self, num_tokens: int, min_tokens: int):
        self.num_tokens = num_tokens
        self.min_tokens = min_tokens
        super().__init__(
            f"too short to be an example: {num_tokens} usable tokens, need {min_tokens}"
        )


class MaskingFailed(ExampleError):
    """
    Span selection returned an empty span set.

    Every candidate start was skipped by the budget check or rejected
    (CLS, SEP, out of bounds, overlap), so the example would carry no MLM
    targets.
    """

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"mask example error: no valid span in {length} positions")


@dataclass(frozen=True)
class SpecialIds:
    """Marker ids reserved right after the base vocabulary."""
    cls_id: int
    mask_id: int
    sep_id: int

    @classmethod
    def for_vocab(cls, vocab_size: int) -> "SpecialIds":
        return cls(cls_id=vocab_size, mask_id=vocab_size + 1, sep_id=vocab_size + 2)


@dataclass(frozen=True)
class AlbertExample:
    """Container for one assembled example."""
    tokens: Tuple[int, ...]            # [max_len + 1], CLS at 0, 0-padded
    target_ids: Tuple[int, ...]        # [max_label] original ids, 0-padded
    target_positions: Tuple[int, ...]  # [max_label] ascending, 0-padded
    segment_types: Tuple[int, ...]     # [max_len + 1] values 0/1/2
    order_label: int                   # 1 = original order
    length: int                        # filled positions, CLS included
    num_masked: int


class AlbertExampleBuilder:
    """
    Build ALBERT pretraining examples from token ids.

    Owns its random generator: pass a seed for reproducible output, or an
    rng object to share a stream deliberately. A builder is not safe to
    use from several threads at once; run one builder per worker.
    """

    def __init__(
        self,
        config: Optional[ExampleConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or ExampleConfig()
        self.rng = rng if rng is not None else random.Random(seed)

    def split_segments(
        self,
        token_ids: Sequence[int],
    ) -> Tuple[List[int], List[int], int]:
        """
        Draw the order label and cut the usable range into two segments.

        Returns:
            (first, second, order_label) in emission order

        Raises:
            TooShort: fewer than min_third_len tokens per third
        """
        config = self.config
        order_label = 1 if self.rng.random() <= config.order_prob else 0

        total = len(token_ids)
        off = self.rng.randint(0, config.max_offset)
        end = min(total, off + config.max_len - 1)

        third = (end - off) // 3
        if third < config.min_third_len:
            raise TooShort(max(end - off, 0), 3 * config.min_third_len)

        mid = self.rng.randint(off + third, off + 2 * third - 1)

        segment_a = list(token_ids[off:mid])
        segment_b = list(token_ids[mid + 1:end])

        if order_label == 1:
            return segment_a, segment_b, order_label
        return segment_b, segment_a, order_label

    def build(self, token_ids: Sequence[int], vocab_size: int) -> AlbertExample:
        """
        Assemble one example.

        Args:
            token_ids: Encoded line, no special tokens
            vocab_size: Base vocabulary size; marker ids follow it

        Returns:
            AlbertExample

        Raises:
            TooShort, MaskingFailed
        """
        config = self.config
        special = SpecialIds.for_vocab(vocab_size)

        first, second, order_label = self.split_segments(token_ids)

        tokens = [0] * config.seq_len
        types = [0] * config.seq_len
        tokens[0] = special.cls_id

        k = 1
        for token_id in first:
            tokens[k] = token_id
            types[k] = 1
            k += 1
        tokens[k] = special.sep_id
        types[k] = 1
        k += 1
        for token_id in second:
            tokens[k] = token_id
            types[k] = 2
            k += 1

        mask_set = select_spans(self.rng, tokens, k, special.sep_id, config)
        if mask_set.num_masked == 0:
            raise MaskingFailed(k)

        apply_corruption(
            self.rng,
            tokens,
            mask_set,
            mask_id=special.mask_id,
            vocab_size=vocab_size,
            mask_prob=config.mask_prob,
            random_prob=config.random_prob,
        )

        return AlbertExample(
            tokens=tuple(tokens),
            target_ids=tuple(mask_set.target_ids),
            target_positions=tuple(mask_set.target_positions),
            segment_types=tuple(types),
            order_label=order_label,
            length=k,
            num_masked=mask_set.num_masked,
        )

    def get_state(self) -> dict:
        """Get state for checkpointing."""
        return {
            "rng_state": self.rng.getstate(),
            "config": self.config.to_dict(),
        }

    def load_state(self, state: dict):
        """Load state from checkpoint."""
        self.rng.setstate(state["rng_state"])
