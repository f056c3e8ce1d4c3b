import pytest

from keysearch.models import Candidate
from keysearch.ranking import rank_top_k, rank_top_k_parallel
from keysearch.similarity import compute_similarity
from keysearch.topk import CapacityMisuse

PAIRS = [("ciao", 1), ("hola", 2), ("hello", 3)]


def test_ciao_first_for_single_char_query():
    rows = rank_top_k(PAIRS, compute_similarity, "c", k=2, min_score=0.10)
    assert rows[0].key == "ciao"
    assert rows[0].value == 1
    assert rows[0].score >= 0.10
    assert len(rows) <= 2


def test_rows_unpack_as_triples():
    rows = rank_top_k(PAIRS, compute_similarity, "hola", k=3)
    key, value, score = rows[0]
    assert (key, value, score) == ("hola", 2, 1.0)
    assert isinstance(rows[0], Candidate)


def test_strictly_descending_with_first_seen_ties():
    scores = {"a": 0.5, "b": 0.9, "c": 0.5, "d": 0.5, "e": 0.2}
    rows = rank_top_k(((k, i) for i, k in enumerate("abcde")), lambda q, t: scores[t], "q", k=3, min_score=0.0)
    assert [r.key for r in rows] == ["b", "a", "c"]


def test_min_score_rejects_low_scores():
    scores = {"a": 0.05, "b": 0.10, "c": 0.5}
    rows = rank_top_k([(k, None) for k in "abc"], lambda q, t: scores[t], "q", k=5, min_score=0.10)
    assert [r.key for r in rows] == ["c", "b"]


def test_pluggable_scorer_and_non_text_keys():
    seen = []

    def prefix_scorer(query, target):
        seen.append(target)
        return 1.0 if target.startswith(query) else 0.0

    rows = rank_top_k([(42, "x"), (421, "y"), (7, "z")], prefix_scorer, "42", k=5)
    assert [r.key for r in rows] == [42, 421]
    assert seen == ["42", "421", "7"]


@pytest.mark.parametrize("bad", [1.5, -0.1, float("nan"), "0.5", None])
def test_scorer_out_of_contract_is_rejected(bad):
    with pytest.raises(ValueError):
        rank_top_k(PAIRS, lambda q, t: bad, "c")


@pytest.mark.parametrize("min_score", [-0.1, 1.1, float("nan")])
def test_bad_min_score(min_score):
    with pytest.raises(ValueError):
        rank_top_k(PAIRS, compute_similarity, "c", min_score=min_score)


def test_bad_capacity():
    with pytest.raises(CapacityMisuse):
        rank_top_k(PAIRS, compute_similarity, "c", k=0)
    with pytest.raises(CapacityMisuse):
        rank_top_k_parallel(PAIRS, compute_similarity, "c", k=0, workers=2)


def test_empty_candidates():
    assert rank_top_k([], compute_similarity, "c") == []


def test_deterministic():
    keys = [(f"key {i % 17} item", i) for i in range(100)]
    a = rank_top_k(keys, compute_similarity, "key 3 itme", k=10)
    b = rank_top_k(keys, compute_similarity, "key 3 itme", k=10)
    assert a == b


# ---------- shard-then-merge ----------

def _tie_heavy(query, target):
    return (len(target) % 4) / 4


@pytest.mark.parametrize("workers", [1, 2, 3, 5, 8])
@pytest.mark.parametrize("scorer", [compute_similarity, _tie_heavy])
def test_parallel_matches_sequential(workers, scorer):
    pairs = [(f"{w}{i}", i) for i, w in enumerate(["ciao", "hola", "hello", "cia", "salut", "c"] * 30)]
    seq = rank_top_k(pairs, scorer, "ciao", k=7, min_score=0.0)
    par = rank_top_k_parallel(pairs, scorer, "ciao", k=7, min_score=0.0, workers=workers)
    assert par == seq


def test_parallel_accepts_generators():
    gen = ((k, v) for k, v in PAIRS)
    rows = rank_top_k_parallel(gen, compute_similarity, "c", k=2, workers=2)
    assert rows[0].key == "ciao"


def test_parallel_rejects_bad_workers():
    with pytest.raises(ValueError):
        rank_top_k_parallel(PAIRS, compute_similarity, "c", workers=0)


def test_defaults_follow_config_at_call_time(monkeypatch):
    import keysearch.config as CFG

    pairs = [("ciao", 1), ("ciao!", 2), ("cia", 3), ("ciaone", 4)]
    monkeypatch.setattr(CFG, "TOP_K", 1)
    assert len(rank_top_k(pairs, compute_similarity, "ciao")) == 1
    assert len(rank_top_k_parallel(pairs, compute_similarity, "ciao", workers=2)) == 1

    monkeypatch.setattr(CFG, "TOP_K", 10)
    monkeypatch.setattr(CFG, "MIN_SCORE", 0.99)
    rows = rank_top_k(pairs, compute_similarity, "ciao")
    assert [r.key for r in rows] == ["ciao", "ciao!"]
    assert rank_top_k_parallel(pairs, compute_similarity, "ciao", workers=2) == rows
