"""
Fuzzy Key Search Module

Typo-tolerant lookup ("did-you-mean", autocomplete, key search) over in-memory
key collections. A query is compared with every key by a fused similarity
score and only the best K matches are kept while the candidates stream past.

The module is split along these seams:
- Text normalization (case folding, punctuation stripping, tokens)
- Individual scorers (Hamming, Levenshtein, token Jaccard, windowed partial)
- Strategy selection and fusion into one score in [0, 1]
- Bounded top-K selection and ranking (sequential or shard-then-merge)
- A small key/value cache (Engine) that wires storage to ranking

Example Usage:
    from keysearch import compute_similarity, rank_top_k

    compute_similarity("bella ciao", "ciao bella")   # 0.7
    rank_top_k([("ciao", 1), ("hola", 2), ("hello", 3)],
               compute_similarity, "c", k=2)         # [Candidate("ciao", 1, 0.53...)]
"""

from .engine import Engine
from .models import Candidate, NormalizedText, ScoreComponent, Strategy
from .normalize import normalize
from .ranking import rank_top_k, rank_top_k_parallel
from .similarity import Scorer, compute_similarity, explain, get_scorer
from .topk import BoundedTopK, CapacityMisuse

__version__ = "1.0.0"
__all__ = [
    "BoundedTopK",
    "Candidate",
    "CapacityMisuse",
    "Engine",
    "NormalizedText",
    "ScoreComponent",
    "Scorer",
    "Strategy",
    "compute_similarity",
    "explain",
    "get_scorer",
    "normalize",
    "rank_top_k",
    "rank_top_k_parallel",
]
