from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ._errors import ConfigurationError
from ._http import FetchClient
from ._logging import configure_logging
from .config import FetchSettings, OutputSettings
from .exporters import export_all
from .pipeline import Pipeline
from .report import write_report

logger = logging.getLogger("crossbench")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="crossbench",
        description="Fetch leaderboard data, score every model across eight views and export the rankings.",
    )
    ap.add_argument("--endpoint", default=None, help="Leaderboard URL (default: CROSSBENCH_ENDPOINT or ZeroEval).")
    ap.add_argument("--input", default=None, help="Read the payload from a local JSON file instead of fetching.")
    ap.add_argument("--data-dir", default=None, help="Where CSV/JSON/text exports go (default: data).")
    ap.add_argument("--output-dir", default=None, help="Where the HTML report goes (default: output).")
    ap.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ...).")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError:
        print(f"Unknown log level: {args.log_level}", file=sys.stderr)
        return 2

    try:
        fetch_settings = FetchSettings.from_env(args.endpoint)
        output = OutputSettings.from_env(args.data_dir, args.output_dir)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 2

    payload: bytes | None = None
    if args.input:
        path = Path(args.input).expanduser()
        if not path.exists():
            logger.error("Input file not found: %s", path)
            return 1
        payload = path.read_bytes()

    logger.info("Starting data pipeline...")
    with FetchClient.from_settings(fetch_settings) as fetcher:
        result = Pipeline(fetcher=fetcher).run(payload)

    if not result.ok:
        logger.error("Run aborted: %s", result.reason)
        return 1

    written = export_all(result, output)
    report = write_report(result, output)

    print(f"\nPipeline complete: {len(result.registry)} models ranked, {result.skipped} skipped")
    print(f"  Dashboard:  {report}")
    print(f"  Data files: {len(written)} written to {output.data_dir}\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
