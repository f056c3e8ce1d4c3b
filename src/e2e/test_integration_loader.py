from pathlib import Path
import pytest
from keysearch.loader import load_pairs


def _seed(tmp: Path) -> str:
    root = tmp / "Archive"; root.mkdir()
    (root / "b.txt").write_text("Bella ciao\n\n  hola  \n", encoding="utf-8")
    (root / "a.tsv").write_text("ciao\tgreeting\nhello\tenglish\n\n", encoding="utf-8")
    sub = root / "nested"; sub.mkdir()
    (sub / "c.txt").write_text("salut\n", encoding="utf-8")
    (root / "skip.md").write_text("not a key file\n", encoding="utf-8")
    return str(root)


@pytest.mark.e2e
def test_load_txt_and_tsv(tmp_path: Path):
    pairs = load_pairs([_seed(tmp_path)])
    assert pairs == [
        ("ciao", "greeting"),
        ("hello", "english"),
        ("Bella ciao", {"path": "b.txt", "line_no": 0}),
        ("hola", {"path": "b.txt", "line_no": 2}),
        ("salut", {"path": "nested/c.txt", "line_no": 0}),
    ]


@pytest.mark.e2e
def test_load_is_deterministic(tmp_path: Path):
    root = _seed(tmp_path)
    assert load_pairs([root]) == load_pairs([root])


@pytest.mark.e2e
def test_single_file_root(tmp_path: Path):
    root = Path(_seed(tmp_path))
    assert load_pairs([str(root / "a.tsv")]) == [("ciao", "greeting"), ("hello", "english")]


@pytest.mark.e2e
def test_tsv_line_without_tab(tmp_path: Path):
    (tmp_path / "x.tsv").write_text("lonely\n", encoding="utf-8")
    assert load_pairs([str(tmp_path)]) == [("lonely", "0")]


@pytest.mark.e2e
def test_missing_root(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_pairs([str(tmp_path / "nope")])
