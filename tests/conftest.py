"""Shared fixtures: a synthetic encoder and a random generator with scripted draws."""

import random as _random_module
from typing import List, Optional, Sequence

import pytest

from albert_prep.data import ExampleConfig


class ScriptedRandom:
    """
    Random generator that replays fixed draws.

    Each method pops from its own queue; once a queue is empty the call
    falls through to a seeded random.Random. shuffle() takes the order to
    impose (a permutation of the input).
    """

    def __init__(
        self,
        random: Sequence[float] = (),
        randint: Sequence[int] = (),
        choices: Sequence[int] = (),
        shuffle: Sequence[Sequence[int]] = (),
        seed: int = 0,
    ):
        self._random = list(random)
        self._randint = list(randint)
        self._choices = list(choices)
        self._shuffle = [list(order) for order in shuffle]
        self._fallback = _random_module.Random(seed)
        self.randint_calls = []

    def random(self) -> float:
        if self._random:
            return self._random.pop(0)
        return self._fallback.random()

    def randint(self, a: int, b: int) -> int:
        self.randint_calls.append((a, b))
        if self._randint:
            value = self._randint.pop(0)
            assert a <= value <= b, f"scripted randint {value} outside [{a}, {b}]"
            return value
        return self._fallback.randint(a, b)

    def choices(self, population, weights=None, k=1):
        if self._choices:
            value = self._choices.pop(0)
            assert value in population
            return [value]
        return self._fallback.choices(population, weights=weights, k=k)

    def shuffle(self, x: List[int]):
        if self._shuffle:
            order = self._shuffle.pop(0)
            assert sorted(order) == sorted(x)
            x[:] = order
            return
        self._fallback.shuffle(x)

    def exhausted(self) -> bool:
        return not (self._random or self._randint or self._choices or self._shuffle)


class SyntheticEncoder:
    """Encoder stand-in: word i of the text maps to id i + 1."""

    def __init__(self, vocab_size: int = 100):
        self.vocab_size = vocab_size
        self.last_text: Optional[str] = None

    def encode(self, text: str) -> List[int]:
        self.last_text = text
        return [i % (self.vocab_size - 1) + 1 for i in range(len(text.split()))]


@pytest.fixture
def config():
    return ExampleConfig()


@pytest.fixture
def encoder():
    return SyntheticEncoder(vocab_size=100)


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def words():
    """Text of n distinct words."""
    def make(n: int) -> str:
        return " ".join(f"w{i}" for i in range(n))
    return make
