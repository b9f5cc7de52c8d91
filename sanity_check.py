#!/usr/bin/env python3
"""
Sanity checks for ALBERT example preparation.

Verifies:
- Package imports
- Configuration loading
- Tokenizer loading
- Example assembly and invariants
- Determinism under a fixed seed
- Tensor materialization
- JSONL logging

Usage:
    python sanity_check.py [configs/albert_examples.yaml]
"""
import sys
import tempfile
from pathlib import Path

# Add project root
sys.path.insert(0, str(Path(__file__).parent))

SAMPLE_TEXT = (
    "The quick brown fox jumps over the lazy dog while the farmer watches "
    "from the porch, sipping coffee and wondering whether rain will come "
    "before the harvest is finished this year or next."
)

print("=" * 60)
print("ALBERT Example Sanity Checks")
print("=" * 60)

# 1. Imports
print("\n[1/7] Checking imports...")
try:
    from albert_prep.data import (
        AlbertExampleBuilder,
        ExampleConfig,
        ExampleParser,
        SubwordEncoder,
        TooShort,
        load_config,
        to_features,
    )
    from albert_prep.utils import format_metrics
    print("✅ Imports successful")
except Exception as e:
    print(f"❌ Import failed: {e}")
    sys.exit(1)

# 2. Config
print("\n[2/7] Loading configuration...")
config = load_config(sys.argv[1] if len(sys.argv) > 1 else None)
example_config = ExampleConfig.from_dict(config["example"])
print(f"✅ max_len={example_config.max_len}, max_label={example_config.max_label}")

# 3. Tokenizer
print("\n[3/7] Loading tokenizer...")
name_or_path = config["tokenizer"].get("spm_model_path") or config["tokenizer"].get("name")
if not name_or_path or (name_or_path.endswith(".model") and not Path(name_or_path).exists()):
    name_or_path = "albert-base"  # Public, no auth needed
try:
    encoder = SubwordEncoder.from_pretrained(name_or_path)
    print(f"✅ Tokenizer loaded: {name_or_path} (vocab size {encoder.vocab_size})")
except Exception as e:
    print(f"❌ Tokenizer load failed (may need network): {e}")
    sys.exit(1)

# 4. Example assembly
print("\n[4/7] Building examples...")
try:
    token_ids = encoder.encode(SAMPLE_TEXT.lower())
    builder = AlbertExampleBuilder(example_config, seed=0)
    sep_id = encoder.vocab_size + 2
    for _ in range(100):
        ex = builder.build(token_ids, encoder.vocab_size)
        positions = list(ex.target_positions[:ex.num_masked])
        assert len(ex.target_ids) == example_config.max_label
        assert len(set(positions)) == len(positions)
        assert 0 not in positions
        assert all(ex.tokens[p] != sep_id for p in positions)
        types = [t for t in ex.segment_types if t]
        assert types == sorted(types)
    print(f"✅ 100 examples built from {len(token_ids)} tokens")
    print("   " + " ".join(encoder.render(ex.tokens)[:24]) + " ...")
except Exception as e:
    print(f"❌ Example assembly failed: {e}")
    import traceback
    traceback.print_exc()
    sys.exit(1)

try:
    builder.build(token_ids[:10], encoder.vocab_size)
    print("❌ Short input was not rejected")
    sys.exit(1)
except TooShort as e:
    print(f"✅ Short input rejected: {e}")

# 5. Determinism
print("\n[5/7] Checking determinism...")
a = AlbertExampleBuilder(example_config, seed=1234).build(token_ids, encoder.vocab_size)
b = AlbertExampleBuilder(example_config, seed=1234).build(token_ids, encoder.vocab_size)
if a != b:
    print("❌ Same seed produced different examples")
    sys.exit(1)
print("✅ Same seed, same example")

# 6. Tensors
print("\n[6/7] Materializing tensors...")
features = to_features(a)
for key, value in features.items():
    print(f"   {key}: {tuple(value.shape)} {value.dtype}")
print("✅ Tensor features built")

# 7. Logging
print("\n[7/7] Checking logging...")
with tempfile.TemporaryDirectory() as log_dir:
    run_config = dict(config, logging=dict(config["logging"], log_dir=log_dir, log_every_examples=2,
                                           use_wandb=False, run_name="sanity"))
    parser = ExampleParser.from_config(run_config, encoder=encoder)
    for line in [SAMPLE_TEXT, "too short", SAMPLE_TEXT.upper()]:
        parser.parse_line(line)
    parser.finish()
    entries = (Path(log_dir) / "sanity.jsonl").read_text().splitlines()
    if len(entries) != 2:
        print(f"❌ Expected 2 log entries, got {len(entries)}")
        sys.exit(1)
    print(f"✅ {format_metrics(parser.stats.summary())}")

# Summary
print("\n" + "=" * 60)
print("✅ All checks passed!")
print("=" * 60)
