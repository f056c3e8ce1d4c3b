from __future__ import annotations
import os

# /* ~~~ ranking defaults (callers may override per call) ~~~ */
TOP_K: int = 10
MIN_SCORE: float = 0.10

# Characters dropped by the normalizer. Whitespace around them is kept.
PUNCTUATION: str = ",.!?'\"‘’“”"

# Strategy selection
HAMMING_MAX_LEN: int = 12      # equal-length pairs up to this get the Hamming check
EDIT_MAX_RATIO: float = 3.0    # skip whole-string edit distance past len_t > ratio * len_q
PARTIAL_MIN_RATIO: float = 1.0 # windowed partial match once len_t > ratio * len_q
PARTIAL_STRIDE: int = 1        # window advance, in code points

# Fusion weights
TOKEN_WEIGHT: float = 0.7      # token component: Jaccard share vs positional share
PARTIAL_FLOOR: float = 0.5     # coverage weight floor for a windowed match

# Levenshtein execution strategy: "rapidfuzz" (bit-parallel) or "python" (plain DP)
EDIT_BACKEND: str = "rapidfuzz"

# Parallel ranking
_cpu = os.cpu_count() or 4
WORKERS: int = min(8, _cpu)

# Loader: file types turned into (key, value) pairs
INCLUDE_EXTS = (".txt", ".tsv")
EXCLUDE_DIRS = {".git", ".hg", ".svn", ".idea", ".vscode", "node_modules", "__pycache__"}
ENCODING: str = "utf-8"
