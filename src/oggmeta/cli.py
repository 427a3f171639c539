"""
Command-line interface for oggmeta.

Usage:
  oggmeta song.ogg                   # Default mode (headers only)
  oggmeta --full song.ogg            # Read whole file, report durations
  oggmeta -o report.json *.ogg       # JSON export
  oggmeta -q *.opus                  # Quick summary
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from oggmeta._version import __version__
from oggmeta.analyze import analyze_file
from oggmeta.codecs import get_supported_codecs
from oggmeta.config import get_config
from oggmeta.formatters import (
    format_default,
    format_json,
    format_json_list,
    format_quiet,
)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for oggmeta CLI."""
    parser = argparse.ArgumentParser(
        prog="oggmeta",
        description="Read stream metadata from Ogg files (Vorbis, Opus, Theora, Speex).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Modes:
  (default)    Stop once every stream's headers are read
  --full       Read to the end of the file so durations can be computed
  -q/--quiet   One-line summary per file
  --json       Print JSON instead of text

Examples:
  oggmeta song.ogg                   # Default mode
  oggmeta --full song.ogg            # With durations
  oggmeta -o report.json *.ogg       # JSON export
  oggmeta -q *.opus                  # Quick summary
        """,
    )
    parser.add_argument("files", nargs="*", help="Ogg file(s) to analyze")
    parser.add_argument("-o", "--output", help="Save report to JSON file")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--full",
        action="store_true",
        help="Read the whole file (durations, page counts)",
    )
    parser.add_argument(
        "--verify-crc",
        action="store_true",
        help="Verify page checksums; a bad page ends the scan",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat framing errors as failures instead of reporting partial results",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress (-v for info, -vv for debug)",
    )

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument("-q", "--quiet", action="store_true", help="Quick summary only")
    mode_group.add_argument("--json", action="store_true", help="Print JSON output")
    mode_group.add_argument(
        "--status",
        action="store_true",
        help="Show supported codecs",
    )

    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    # Handle --status mode (no files required)
    if args.status:
        print("oggmeta status:")
        print("-" * 40)
        for codec in get_supported_codecs():
            print(f"  ✓ {codec.value}")
        return 0

    if not args.files:
        parser.error("the following arguments are required: files")

    scan_config = get_config().scan
    if args.verify_crc:
        scan_config = replace(scan_config, verify_crc=True)

    all_metadata = []
    errors = 0

    for file_path in args.files:
        try:
            metadata = analyze_file(
                file_path, full=args.full, strict=args.strict, config=scan_config
            )
            all_metadata.append(metadata)

            if args.quiet:
                print(format_quiet(metadata))
            elif args.json:
                print(format_json(metadata))
            else:
                print(format_default(metadata))
                print()

            if metadata.error:
                errors += 1

        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            errors += 1
        except Exception as e:
            print(f"Error analyzing {file_path}: {e}", file=sys.stderr)
            errors += 1

    # JSON export
    if args.output and all_metadata:
        json_output = format_json_list(all_metadata)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(json_output)
        print(f"Report saved to: {args.output}")

    return 1 if errors > 0 else 0


if __name__ == "__main__":
    sys.exit(main())
