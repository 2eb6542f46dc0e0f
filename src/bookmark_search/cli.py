"""Command-line search over a NUL-delimited bookmark dataset file."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

import orjson

from bookmark_search.config import Settings
from bookmark_search.engine import SearchEngine
from bookmark_search.observability import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bookmark-search",
        description="Fuzzy-search a dataset of id\\0title\\0url lines.",
    )
    parser.add_argument("dataset", type=Path, help="Dataset file, one record per line")
    parser.add_argument("queries", nargs="+", help="One or more queries")
    parser.add_argument("--tokenize", action="store_true", default=None, help="Match query words independently")
    parser.add_argument("--case-sensitive", action="store_true", default=None)
    parser.add_argument("--threshold", type=float)
    parser.add_argument("--distance", type=int)
    parser.add_argument("--location", type=int)
    parser.add_argument("--log-level", help="Override BOOKMARK_SEARCH_LOG_LEVEL")
    parser.add_argument("--json", action="store_true", help="Print results as JSON with scores")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {
        key: value
        for key, value in {
            "tokenize": args.tokenize,
            "case_sensitive": args.case_sensitive,
            "threshold": args.threshold,
            "distance": args.distance,
            "location": args.location,
            "log_level": args.log_level,
        }.items()
        if value is not None
    }
    settings = Settings(**overrides)
    configure_logging(settings.log_level, json_output=settings.log_json, stream=sys.stderr)

    try:
        buffer = args.dataset.read_bytes()
    except OSError as exc:
        sys.stderr.write(f"Cannot read dataset {args.dataset}: {exc}\n")
        return 2

    engine = SearchEngine.from_settings(settings)
    engine.load_dataset(buffer)

    for query in args.queries:
        hits = engine.rank(query)
        if args.json:
            payload = {
                "query": query,
                "results": [
                    {
                        "id": record.id,
                        "title": record.title,
                        "url": record.url,
                        "score": round(result.score, 4),
                        "matches": {match.field_name: match.ranges for match in result.field_matches},
                    }
                    for record, result in hits
                ],
            }
            sys.stdout.write(orjson.dumps(payload).decode("utf-8") + "\n")
            continue
        for record, _ in hits:
            sys.stdout.write(f"{record.title}\t{record.url}\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
