"""Command line entrypoint: build the HTML model catalog.

Usage:
    python -m odash --filter "code|coder"
    python -m odash --prompt            # read the filter from stdin
    python -m odash --output catalog.html --workers 4

Exit codes: 0 ok, 2 catalog run failed, 3 configuration error.
"""
from __future__ import annotations

import argparse
import json
import sys

from core import metrics
from core.catalog import generate_catalog
from core.config import ConfigError, get_config
from core.library import CatalogError
from core.logging_setup import configure_logging

EXIT_OK = 0
EXIT_CATALOG_ERROR = 2
EXIT_CONFIG_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="odash",
        description="Scrape the model library and write an HTML catalog.",
    )
    ap.add_argument(
        "--filter",
        default=None,
        help=(
            "Regular expression matched against model id, title and "
            "description (not a plain substring). Empty = all models."
        ),
    )
    ap.add_argument(
        "--prompt",
        action="store_true",
        help="Read the filter from stdin instead of --filter",
    )
    ap.add_argument("--output", default=None, help="Override output file path")
    ap.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Parallel detail-page fetches (default from config)",
    )
    ap.add_argument(
        "--print-metrics",
        action="store_true",
        help="Dump the run's metrics snapshot as JSON on stdout",
    )
    return ap


def _read_filter(args: argparse.Namespace) -> str:
    if args.filter is not None:
        return args.filter.strip()
    if args.prompt:
        print("Filter (regex, empty for all): ", end="", flush=True)
        line = sys.stdin.readline()
        return line.strip()
    return ""


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = get_config()
    except ConfigError as e:
        print(f"[error] config: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    if args.workers is not None:
        if args.workers < 1:
            print("[error] --workers must be >= 1", file=sys.stderr)
            return EXIT_CONFIG_ERROR
        cfg = cfg.model_copy(
            update={
                "library": cfg.library.model_copy(
                    update={"detail_workers": args.workers}
                )
            }
        )
    configure_logging(cfg.logging)

    filter_text = _read_filter(args)
    try:
        result = generate_catalog(
            cfg, filter_text, output_path=args.output
        )
    except CatalogError as e:
        print(f"[error] {e.error_type}: {e}", file=sys.stderr)
        return EXIT_CATALOG_ERROR

    print(
        f"[catalog] path={result.path} models={result.model_count} "
        f"failed={len(result.failed_ids)}"
    )
    if args.print_metrics:
        print(json.dumps(metrics.snapshot(), indent=2, sort_keys=True))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
