from __future__ import annotations
import logging
import os
from typing import Any, Iterable, Iterator, List, Tuple

from . import config as CFG

log = logging.getLogger(__name__)

PROGRESS_EVERY_FILES = 500


def _iter_key_files(roots: Iterable[str]) -> Iterator[Tuple[str, str]]:
    """Yield (root, path) for included files under each root, in sorted order."""
    exts = tuple(e.lower() for e in CFG.INCLUDE_EXTS)
    for root in roots:
        root = os.path.abspath(root)
        if not os.path.exists(root):
            raise FileNotFoundError(root)
        if os.path.isfile(root):
            if root.lower().endswith(exts):
                yield os.path.dirname(root), root
            continue
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in CFG.EXCLUDE_DIRS)
            for fn in sorted(filenames):
                if fn.lower().endswith(exts):
                    yield root, os.path.join(dirpath, fn)


def _rel_to_any_root(path: str, roots_abs: List[str]) -> str:
    """Return the shortest relative path to any of the given absolute roots."""
    best = path
    for r in roots_abs:
        try:
            rel = os.path.relpath(path, r)
            if len(rel) < len(best):
                best = rel
        except ValueError:
            pass
    return best.replace("\\", "/")


def _pairs_from_txt(lines: List[str], path_rel: str) -> Iterator[Tuple[str, Any]]:
    for i, raw in enumerate(lines):
        key = raw.strip()
        if key:
            yield key, {"path": path_rel, "line_no": i}


def _pairs_from_tsv(lines: List[str], path_rel: str) -> Iterator[Tuple[str, Any]]:
    for i, raw in enumerate(lines):
        if not raw.strip():
            continue
        key, sep, value = raw.partition("\t")
        key = key.strip()
        if not key:
            continue
        if not sep:
            log.warning("%s:%d has no tab separator; using the line number as value", path_rel, i)
            value = str(i)
        yield key, value.strip()


def load_pairs(roots: Iterable[str]) -> List[Tuple[str, Any]]:
    """
    Scan roots for key files and return (key, value) pairs in a stable order.
      .txt  one key per non-blank line, value = {"path", "line_no"}
      .tsv  key<TAB>value per line
    """
    roots = list(roots)
    roots_abs = [os.path.abspath(p) if os.path.isdir(p) else os.path.dirname(os.path.abspath(p)) for p in roots]
    pairs: List[Tuple[str, Any]] = []

    file_count = 0
    for _, path in _iter_key_files(roots):
        rel = _rel_to_any_root(path, roots_abs)
        try:
            with open(path, "r", encoding=CFG.ENCODING, errors="replace") as f:
                lines = [ln.rstrip("\r\n") for ln in f]
        except OSError as exc:
            log.warning("Skipping unreadable file %s: %s", path, exc)
            continue

        gen = _pairs_from_tsv(lines, rel) if path.lower().endswith(".tsv") else _pairs_from_txt(lines, rel)
        pairs.extend(gen)

        file_count += 1
        if file_count % PROGRESS_EVERY_FILES == 0:
            log.info("[scanned] files=%d pairs=%d", file_count, len(pairs))

    log.info("Loaded %d pairs from %d files", len(pairs), file_count)
    return pairs
