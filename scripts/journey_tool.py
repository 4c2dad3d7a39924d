#!/usr/bin/env python3
"""JourneyShare CLI — preview, share, import and export journey files.

Usage:
    python scripts/journey_tool.py preview Alex_Journey.mapped
    python scripts/journey_tool.py share Alex_Journey.mapped
    python scripts/journey_tool.py import
    python scripts/journey_tool.py export samples.csv --sender "Alex" --out-dir ./shares
"""

from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path
from typing import List, Optional, Sequence

# Ensure project root is on sys.path for consistent import resolution
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from config.defaults import (  # noqa: E402
    CURRENT_MAGIC_HEADER,
    DEFAULT_SENDER_NAME,
)
from config.settings import JourneyConfig  # noqa: E402
from journeyshare.codec.decoder import FormatDecoder  # noqa: E402
from journeyshare.codec.encoder import (  # noqa: E402
    Sample,
    build_export,
    encode_journey,
    write_journey_file,
)
from journeyshare.handlers import (  # noqa: E402
    HandlerResult,
    HandlerStatus,
    ImportHandler,
    PreviewHandler,
    ShareHandler,
)
from journeyshare.utils.date_utils import parse_iso8601  # noqa: E402
from journeyshare.utils.logging_utils import configure_logging, get_logger  # noqa: E402


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the argparse parser with one subcommand per host entry point."""
    parser = argparse.ArgumentParser(
        prog="journey_tool",
        description="JourneyShare — journey file preview, staging and import",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # ── Shared options ──────────────────────────────────────────────────────────
    parser.add_argument("--app-group", type=str, default=None, help="Sharing-group identifier")
    parser.add_argument("--store-root", type=str, default=None, help="Shared store directory")
    parser.add_argument(
        "--wake-uri",
        type=str,
        default=None,
        help="URI opened after staging (empty string disables the wake signal)",
    )
    parser.add_argument("--display-tz", type=str, default=None, help="Timezone for date ranges")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity level (defaults to LOG_LEVEL or INFO)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    preview = sub.add_parser("preview", help="Decode a file and print its summary")
    preview.add_argument("path", type=str, help="File to preview")
    preview.add_argument(
        "--open", action="store_true", default=False, help="Also stage the file for the app"
    )

    share = sub.add_parser("share", help="Stage a .mapped file for the app")
    share.add_argument("path", type=str, help="File to share")

    sub.add_parser("import", help="Take and decode the staged journey")

    export = sub.add_parser("export", help="Write a journey file from a samples CSV")
    export.add_argument("samples", type=str, help="CSV with latitude,longitude,timestamp columns")
    export.add_argument("--sender", type=str, default=None, help="Sender name (omit for legacy)")
    export.add_argument("--out-dir", type=str, default=".", help="Output directory")
    export.add_argument(
        "--no-header", action="store_true", default=False, help="Write a headerless file"
    )

    return parser


def args_to_config(args: argparse.Namespace) -> JourneyConfig:
    """Build a JourneyConfig, letting CLI flags override environment values."""
    overrides = {
        "app_group_id": args.app_group,
        "store_root": args.store_root,
        "wake_uri": args.wake_uri,
        "display_timezone": args.display_tz,
        "log_level": args.log_level,
    }
    return JourneyConfig(**{k: v for k, v in overrides.items() if v is not None})


def load_samples(path: str | Path) -> List[Sample]:
    """Read (latitude, longitude, timestamp) samples from a CSV file.

    Raises:
        KeyError: If a required column is missing.
        ValueError: If a row cannot be parsed.
    """
    samples: List[Sample] = []
    with open(path, "r", encoding="utf-8", newline="") as f:
        for row in csv.DictReader(f):
            samples.append(
                (
                    float(row["latitude"]),
                    float(row["longitude"]),
                    parse_iso8601(row["timestamp"]),
                )
            )
    return samples


def _print_result(result: HandlerResult) -> None:
    print(f"[{result.status}] {result.message}")


def run_export(args: argparse.Namespace) -> int:
    logger = get_logger("cli")
    try:
        samples = load_samples(args.samples)
    except (OSError, csv.Error, KeyError, ValueError) as exc:
        logger.error("Cannot read samples from %s: %s", args.samples, exc)
        return 1

    export = build_export(samples)
    header = None if args.no_header else CURRENT_MAGIC_HEADER
    data = encode_journey(export, sender_name=args.sender, header=header)
    path = write_journey_file(args.out_dir, args.sender or DEFAULT_SENDER_NAME, data)
    print(path)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entrypoint — parse arguments, build config, run one handler."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    config = args_to_config(args)
    configure_logging(log_level=config.log_level)

    if args.command == "export":
        return run_export(args)

    if args.command == "preview":
        handler = PreviewHandler(decoder=FormatDecoder(config.display_timezone))
        result = handler.run(args.path)
        _print_result(result)
        if result.ok:
            summary = result.data
            print(f"{summary.location_count} locations")
            if summary.date_range_text:
                print(summary.date_range_text)
            if args.open:
                _print_result(ShareHandler(config=config, require_extension=False).run(args.path))
        return 0 if result.ok else 1

    if args.command == "share":
        result = ShareHandler(config=config).run(args.path)
        _print_result(result)
        return 0 if result.ok else 1

    result = ImportHandler(config=config).run()
    _print_result(result)
    if result.ok:
        print(result.data.export_json.decode("utf-8"))
    return 0 if result.ok or result.status == HandlerStatus.EMPTY else 1


if __name__ == "__main__":
    sys.exit(main())
