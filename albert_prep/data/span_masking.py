"""
Span selection for masked language modeling.

Spans of 1-3 tokens are placed at shuffled, jittered candidate starts.
Placement is greedy and never retries: a candidate whose span would touch
CLS, a SEP marker, the sequence end or an already masked position is
simply skipped.

Masked positions are tracked in a dense boolean list indexed by position,
then collected with a single left-to-right scan.
"""
import random
from dataclasses import dataclass, field
from typing import List

from .config import ExampleConfig


@dataclass(frozen=True)
class Span:
    """A contiguous run of masked positions."""
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length

    def positions(self) -> range:
        return range(self.start, self.end)


@dataclass
class MaskSet:
    """Result of span selection over one sequence."""
    masked: List[bool]                 # [sequence_length], True = masked
    spans: List[Span]                  # acceptance order
    num_masked: int
    target_ids: List[int] = field(default_factory=list)        # [max_label], ascending position
    target_positions: List[int] = field(default_factory=list)  # [max_label], 0-padded

    def masked_positions(self) -> List[int]:
        """Masked positions in ascending order (no padding)."""
        return [i for i, m in enumerate(self.masked) if m]


def draw_span_length(rng: random.Random, weights) -> int:
    """Draw a span length in 1..len(weights), weighted toward short spans."""
    lengths = list(range(1, len(weights) + 1))
    return rng.choices(lengths, weights=list(weights))[0]


def span_fits(
    tokens: List[int],
    masked: List[bool],
    start: int,
    span_len: int,
    length: int,
    sep_id: int,
) -> bool:
    """Check a span against CLS, sequence bounds, prior masks and SEP markers."""
    if start <= 0:
        # Position 0 holds CLS
        return False
    for pos in range(start, start + span_len):
        if pos >= length or masked[pos] or tokens[pos] == sep_id:
            return False
    return True


def select_spans(
    rng: random.Random,
    tokens: List[int],
    length: int,
    sep_id: int,
    config: ExampleConfig,
) -> MaskSet:
    """
    Select disjoint spans to mask in tokens[:length].

    Args:
        rng: Random generator owned by the caller
        tokens: Sequence being built (CLS at 0, markers in place)
        length: Number of filled positions (CLS included)
        sep_id: Separator id, never masked
        config: Budget and sampling constants

    Returns:
        MaskSet with targets and positions padded to config.max_label
    """
    candidates = list(range(0, length, config.candidate_stride))
    rng.shuffle(candidates)

    masked = [False] * length
    spans: List[Span] = []
    num_masked = 0

    for base in candidates:
        if num_masked >= config.max_label:
            break

        span_len = draw_span_length(rng, config.span_length_weights)
        if num_masked + span_len > config.max_label:
            continue

        start = base + rng.randint(0, config.jitter_width - span_len)
        if not span_fits(tokens, masked, start, span_len, length, sep_id):
            continue

        for pos in range(start, start + span_len):
            masked[pos] = True
        spans.append(Span(start, span_len))
        num_masked += span_len

    target_ids = []
    target_positions = []
    for pos in range(length):
        if masked[pos]:
            target_ids.append(tokens[pos])
            target_positions.append(pos)

    assert len(target_positions) <= config.max_label, \
        f"masked {len(target_positions)} positions, budget is {config.max_label}"

    padding = config.max_label - len(target_positions)
    target_ids.extend([0] * padding)
    target_positions.extend([0] * padding)

    return MaskSet(
        masked=masked,
        spans=spans,
        num_masked=num_masked,
        target_ids=target_ids,
        target_positions=target_positions,
    )
