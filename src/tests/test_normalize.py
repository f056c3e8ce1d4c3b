import pytest

from keysearch.normalize import normalize, normalize_only


def test_casefold_and_punctuation_removed():
    n = normalize("Hello, World!")
    assert n.raw == "Hello, World!"
    assert n.folded_chars == "hello world"
    assert n.tokens == ("hello", "world")


def test_spacing_kept_in_char_view_but_collapsed_in_tokens():
    n = normalize("  Bella   ciao ")
    assert n.folded_chars == "  bella   ciao "
    assert n.tokens == ("bella", "ciao")


@pytest.mark.parametrize("raw, folded", [
    ("don't", "dont"),
    ("a,b", "ab"),
    ("a, b", "a b"),
    ('"quoted" text', "quoted text"),
    ("“Curly” ‘quotes’", "curly quotes"),
    ("Why? Because.", "why because"),
])
def test_fixed_punctuation_set(raw, folded):
    assert normalize_only(raw) == folded


def test_other_symbols_are_kept():
    assert normalize_only("C++ & Rust") == "c++ & rust"


def test_empty_input():
    n = normalize("")
    assert n.folded_chars == ""
    assert n.tokens == ()
    assert len(n) == 0


def test_punctuation_only_input_has_no_tokens():
    n = normalize("?!.")
    assert n.folded_chars == ""
    assert n.tokens == ()


def test_bytes_are_rejected_at_the_boundary():
    with pytest.raises(TypeError):
        normalize(b"ciao")  # type: ignore[arg-type]
