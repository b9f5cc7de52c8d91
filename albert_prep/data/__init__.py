"""
ALBERT Example Pipeline

- config: Example sizes and sampling constants, YAML loading
- tokenizer: Pre-trained SentencePiece encoder utilities
- span_masking: Span selection under a label budget
- corruption: MASK / random / keep policy
- example: Two-segment assembly with sentence-order label
- features: Tensor materialization
- parser: Raw line -> example, skipping unusable lines
"""
from .config import ExampleConfig, load_config
from .tokenizer import load_tokenizer, normalize_text, SubwordEncoder
from .span_masking import Span, MaskSet, select_spans
from .corruption import Keep, Replace, choose_corruption, apply_corruption
from .example import (
    AlbertExample,
    AlbertExampleBuilder,
    ExampleError,
    MaskingFailed,
    SpecialIds,
    TooShort,
)
from .features import FEATURE_KEYS, to_features
from .parser import ExampleParser

__all__ = [
    "ExampleConfig",
    "load_config",
    "load_tokenizer",
    "normalize_text",
    "SubwordEncoder",
    "Span",
    "MaskSet",
    "select_spans",
    "Keep",
    "Replace",
    "choose_corruption",
    "apply_corruption",
    "AlbertExample",
    "AlbertExampleBuilder",
    "ExampleError",
    "MaskingFailed",
    "SpecialIds",
    "TooShort",
    "FEATURE_KEYS",
    "to_features",
    "ExampleParser",
]
