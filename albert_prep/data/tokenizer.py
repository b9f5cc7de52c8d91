"""
Subword encoder utilities - wrapper for pre-trained SentencePiece tokenizers.

The encoder is a black box: text in, ids out. Marker ids (CLS, MASK, SEP)
are not taken from the tokenizer; they are appended after the base
vocabulary by the example builder.
"""
import re
import string
from pathlib import Path
from typing import List, Optional, Sequence

from transformers import AlbertTokenizer, AutoTokenizer, PreTrainedTokenizer


# Recommended tokenizers
TOKENIZER_PRESETS = {
    "albert-base": "albert/albert-base-v2",
    "albert-large": "albert/albert-large-v2",
    "albert-zh": "voidful/albert_chinese_base",
}

_ASCII_WHITESPACE = re.compile(r"[ \t\n\r\f\v]+")
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def normalize_text(line: str) -> str:
    """Collapse runs of ASCII whitespace, strip the ends and lowercase A-Z only."""
    return _ASCII_WHITESPACE.sub(" ", line).strip().translate(_ASCII_LOWER)


def load_tokenizer(name_or_path: str) -> PreTrainedTokenizer:
    """
    Load a pre-trained tokenizer.

    Args:
        name_or_path: SentencePiece .model file, HuggingFace model name,
                      local directory, or a preset name ("albert-base", ...)

    Returns:
        Configured tokenizer
    """
    if name_or_path in TOKENIZER_PRESETS:
        name_or_path = TOKENIZER_PRESETS[name_or_path]

    if name_or_path.endswith(".model"):
        if not Path(name_or_path).exists():
            raise FileNotFoundError(f"SentencePiece model not found: {name_or_path}")
        return AlbertTokenizer(vocab_file=name_or_path, do_lower_case=False)

    return AutoTokenizer.from_pretrained(name_or_path)


def get_vocab_size(tokenizer) -> int:
    """
    Base vocabulary size (SentencePiece piece count).

    Tokens added on top of the model file are not counted; marker ids are
    allocated from this number upward.
    """
    sp_model = getattr(tokenizer, "sp_model", None)
    if sp_model is not None:
        return sp_model.get_piece_size()
    return tokenizer.vocab_size


class SubwordEncoder:
    """
    Convenience wrapper exposing the two operations examples need:
    encode(text) and vocab_size.
    """

    def __init__(self, tokenizer):
        self.tokenizer = tokenizer
        self._vocab_size = get_vocab_size(tokenizer)

    @classmethod
    def from_pretrained(cls, name_or_path: str) -> "SubwordEncoder":
        return cls(load_tokenizer(name_or_path))

    @property
    def vocab_size(self) -> int:
        return self._vocab_size

    def encode(self, text: str) -> List[int]:
        """Encode text to token IDs, without the tokenizer's own specials."""
        return self.tokenizer.encode(text, add_special_tokens=False)

    def render(self, token_ids: Sequence[int], pad_id: Optional[int] = 0) -> List[str]:
        """
        Map ids to pieces for inspection; marker ids become [CLS]/[MASK]/[SEP].

        Trailing padding is dropped when pad_id is given.
        """
        ids = list(token_ids)
        if pad_id is not None:
            while ids and ids[-1] == pad_id:
                ids.pop()

        markers = {
            self.vocab_size: "[CLS]",
            self.vocab_size + 1: "[MASK]",
            self.vocab_size + 2: "[SEP]",
        }
        pieces = []
        for token_id in ids:
            if token_id in markers:
                pieces.append(markers[token_id])
            else:
                pieces.append(self.tokenizer.convert_ids_to_tokens(token_id))
        return pieces
