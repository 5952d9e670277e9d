#!/usr/bin/env python
"""Check the required version bump of a module from the command line."""

import argparse
import json
import sys
from pathlib import Path

from apibump import RequiredBump, DiffReport, run_check
from apibump.exceptions import ApiBumpError


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Classify the semantic-version bump between two API snapshots",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_bump_check.py v1.json symbols.yaml
  python run_bump_check.py v1.json symbols.yaml -o v2.json -r report.json
  python run_bump_check.py --old v1.json --symbols symbols.yaml --config apibump.yaml
        """
    )

    parser.add_argument(
        "old",
        nargs="?",
        help="Path to the released snapshot (JSON/YAML)"
    )
    parser.add_argument(
        "symbols",
        nargs="?",
        help="Path to the resolver dump of the new version (YAML/JSON)"
    )

    # Also support named arguments
    parser.add_argument("--old", dest="old_named", help="Path to the released snapshot")
    parser.add_argument("--symbols", dest="symbols_named", help="Path to the resolver dump")
    parser.add_argument("-c", "--config", help="Path to YAML engine config")
    parser.add_argument("-o", "--output", help="Write the new snapshot to this path")
    parser.add_argument("-r", "--report", help="Write the JSON report to this path")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress console output")

    args = parser.parse_args(argv)

    old_path = args.old or args.old_named
    symbols_path = args.symbols or args.symbols_named

    if not old_path:
        parser.error("Old snapshot path is required")
    if not symbols_path:
        parser.error("Symbols path is required")

    if not Path(old_path).exists():
        print(f"Error: Snapshot file not found: {old_path}", file=sys.stderr)
        return 2

    if not Path(symbols_path).exists():
        print(f"Error: Symbols file not found: {symbols_path}", file=sys.stderr)
        return 2

    if not args.quiet:
        print(f"Old snapshot: {old_path}")
        print(f"Symbols: {symbols_path}")

    try:
        result = run_check(
            old_snapshot_path=old_path,
            symbols_path=symbols_path,
            new_snapshot_path=args.output,
            print_report=not args.quiet,
            config_path=args.config,
        )
    except (ApiBumpError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.report:
        with open(args.report, 'w') as f:
            json.dump(result.report.to_dict(), indent=2, fp=f)
        if not args.quiet:
            print(f"\nReport saved to: {args.report}")

    if not isinstance(result.report, DiffReport):
        return 2

    return 1 if result.report.bump == RequiredBump.MAJOR else 0


if __name__ == "__main__":
    sys.exit(main())
