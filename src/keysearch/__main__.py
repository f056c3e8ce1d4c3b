from __future__ import annotations
import argparse
import json
import sys

from . import config as CFG
from .engine import Engine
from .similarity import SCORERS, get_scorer


def _print_rows(rows, as_json: bool) -> None:
    if as_json:
        print(json.dumps([r._asdict() for r in rows], ensure_ascii=False, indent=2, default=str))
        return
    if not rows:
        print("(no matches)")
        return
    print("#  Score  Key                                  Value")
    for i, r in enumerate(rows, 1):
        print(f"{i:<2} {r.score:<6.3f} {str(r.key):<36} {r.value}")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Fuzzy key search CLI (Engine-backed)")
    p.add_argument("--roots", nargs="+", default=[], help="Files/folders with .txt/.tsv keys")
    p.add_argument("--score", nargs=2, metavar=("A", "B"), help="Print the similarity of A and B and exit")
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("-k", type=int, default=CFG.TOP_K, help="Top-K results")
    p.add_argument("--min-score", type=float, default=CFG.MIN_SCORE, help="Relevance threshold")
    p.add_argument("--workers", type=int, default=1, help="Threads for shard-then-merge ranking")
    p.add_argument("--scorer", choices=sorted(SCORERS), default="fused")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)
    scorer = get_scorer(args.scorer)

    if args.score:
        a, b = args.score
        print(f"{scorer(a, b):.4f}")
        return 0

    if not args.roots:
        p.error("--roots is required unless --score is given")

    eng = Engine(scorer=scorer)
    try:
        eng.build(roots=args.roots, verbose=args.verbose)

        def run_query(q: str) -> None:
            rows = eng.text_search(q, limit=args.k, min_score=args.min_score, workers=args.workers)
            _print_rows(rows, args.json)

        try:
            if args.q:
                run_query(args.q)

            if args.repl:
                print("Type a query (empty line to exit).")
                while True:
                    try:
                        q = input("> ").strip()
                    except (EOFError, KeyboardInterrupt):
                        break
                    if not q:
                        break
                    run_query(q)
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        return 0
    finally:
        eng.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())
