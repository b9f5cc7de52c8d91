"""
Line-level entry point: raw text -> AlbertExample.

Lines that cannot form an example are logged and skipped; they never
stop the run.
"""
import random
from typing import Any, Dict, Optional

import torch

from .config import ExampleConfig
from .example import AlbertExample, AlbertExampleBuilder, ExampleError
from .features import to_features
from .tokenizer import SubwordEncoder, normalize_text
from ..utils.logging import ExampleStats, Logger


class ExampleParser:
    """
    Normalize, encode and assemble one line at a time.

    Usage:
        parser = ExampleParser.from_config(load_config("configs/albert_examples.yaml"))
        for line in lines:
            features = parser.parse_features(line)
            if features is not None:
                ...
        parser.finish()
    """

    def __init__(
        self,
        encoder,
        config: Optional[ExampleConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        stats: Optional[ExampleStats] = None,
        logger: Optional[Logger] = None,
    ):
        self.encoder = encoder
        self.builder = AlbertExampleBuilder(config=config, seed=seed, rng=rng)
        self.stats = stats or ExampleStats()
        self.logger = logger

    @classmethod
    def from_config(cls, config: Dict[str, Any], encoder=None) -> "ExampleParser":
        """
        Create a parser from a load_config() dictionary.

        The encoder is loaded from the "tokenizer" section unless one is
        passed in. A Logger is built from the "logging" section and the
        full config is saved alongside its JSONL file.

        Raises:
            ValueError: no encoder given and no spm_model_path or tokenizer name configured
        """
        if encoder is None:
            tok_config = config.get("tokenizer", {})
            name_or_path = tok_config.get("spm_model_path") or tok_config.get("name")
            print(f"got tokenizer: {name_or_path}")
            if not name_or_path:
                raise ValueError("tokenizer.spm_model_path or tokenizer.name must be set")
            encoder = SubwordEncoder.from_pretrained(name_or_path)

        logger = Logger.from_config(config.get("logging", {}))
        logger.log_config(config)

        return cls(
            encoder,
            config=ExampleConfig.from_dict(config.get("example", {})),
            seed=config.get("seed"),
            logger=logger,
        )

    @property
    def config(self) -> ExampleConfig:
        return self.builder.config

    def parse_line(self, line: str) -> Optional[AlbertExample]:
        """
        Build an example from one raw line.

        Returns:
            AlbertExample, or None if the line was skipped
        """
        text = normalize_text(line)
        token_ids = self.encoder.encode(text)
        try:
            example = self.builder.build(token_ids, self.encoder.vocab_size)
        except ExampleError as e:
            print(f"Warning: {e}, text=[{text}]")
            self.stats.record_skip(type(e).__name__)
            example = None
        else:
            self.stats.record_example(example.num_masked, example.length, example.order_label)

        if self.logger is not None:
            self.logger.maybe_log(self.stats)
        return example

    def parse_features(self, line: str) -> Optional[Dict[str, torch.Tensor]]:
        """parse_line() followed by to_features()."""
        example = self.parse_line(line)
        if example is None:
            return None
        return to_features(example)

    def finish(self):
        """Flush the last stats snapshot and close the logger."""
        if self.logger is not None:
            self.logger.finish(self.stats)
