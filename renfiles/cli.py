"""Command line interface for renfiles."""
from __future__ import annotations

import argparse
import json
import sys
import traceback
from pathlib import Path

from .batch import BatchRunner
from .config import DEFAULT_PROPERTIES_FILE, ConfigError, load_properties, resolve_config
from .labels import TagCommandLabeler
from .logger import configure_logging
from .scanner import list_pdf_candidates

EXIT_OK = 0
EXIT_FILE_FAILURES = 1
EXIT_FATAL = 2


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_file, debug=args.debug)
        return _run(args)
    except (OSError, ConfigError) as exc:
        print(f"***** failed with {exc} **********", file=sys.stderr)
        if args.debug:
            traceback.print_exc()
        return EXIT_FATAL


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="renfiles",
        description="Rename pdf files by naming rules, move them into a folder tree and add Finder tags.",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="debug mode; report intermediate decisions")
    parser.add_argument("-t", "--test", action="store_true", help="test mode; nothing is changed")
    parser.add_argument(
        "--config",
        type=Path,
        help=f"properties file with srcDirName and destDirName (default ./{DEFAULT_PROPERTIES_FILE})",
    )
    parser.add_argument("--source", type=Path, help="source directory, overrides srcDirName")
    parser.add_argument("--dest", type=Path, help="destination root, overrides destDirName")
    parser.add_argument("--log-file", type=Path, help="write JSON log lines to this file instead of stderr")
    parser.add_argument("--report", type=Path, help="write the run summary as JSON")
    return parser


def _run(args: argparse.Namespace) -> int:
    properties: dict[str, str] = {}
    if args.config is not None:
        properties = load_properties(args.config)
    elif DEFAULT_PROPERTIES_FILE.exists():
        properties = load_properties(DEFAULT_PROPERTIES_FILE)

    config = resolve_config(
        properties,
        source_dir=args.source,
        dest_dir=args.dest,
        dry_run=args.test,
        verbose=args.debug,
    )
    print(f"srcDirName={config.source_dir}")
    print(f"destDirName={config.dest_dir}")

    candidates = list_pdf_candidates(config.source_dir)
    runner = BatchRunner(config, labeler=TagCommandLabeler(config.tag_command))
    summary = runner.run(candidates)

    print(
        f"processed={summary.processed} skipped={summary.skipped} "
        f"failed={summary.failed} ignored={summary.ignored}"
    )
    if args.report:
        args.report.parent.mkdir(parents=True, exist_ok=True)
        payload = {"dry_run": config.dry_run, **summary.to_dict()}
        args.report.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        print(f"Report written to {args.report}")

    if summary.failed:
        for error in summary.errors:
            print(f"conversion of {error}", file=sys.stderr)
        return EXIT_FILE_FAILURES
    print("****** completed successfully **********")
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
