"""
Command-line entry point for MOOD metrics analysis.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from mood_metrics.core.analyzer import ClassMetricsAnalyzer
from mood_metrics.core.config import (
    DEFAULT_CONFIG_PATH,
    SUPPORTED_LANGUAGES,
    SUPPORTED_MEMBER_KEYS,
    SUPPORTED_OUTPUT_FORMATS,
    SUPPORTED_UNRESOLVED_BASES,
    load_config,
)
from mood_metrics.core.errors import MoodMetricsError
from mood_metrics.core.report import render, render_breakdown


def _add_path_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs='?',
        default=None,
        help="Source directory, source file or class schema document. If not provided, uses 'project_root' from config.",
    )


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help=f"Path to configuration YAML file (default: {DEFAULT_CONFIG_PATH})")
    parser.add_argument("--language", choices=list(SUPPORTED_LANGUAGES),
                        help="Input language (overrides config). 'schema' reads YAML/JSON class documents.")
    parser.add_argument("--member-key", choices=list(SUPPORTED_MEMBER_KEYS),
                        help="How members are matched across classes: by name (default) or by name and signature.")
    parser.add_argument("--unresolved-bases", choices=list(SUPPORTED_UNRESOLVED_BASES),
                        help="Treat base classes missing from the input as absent (ignore) or fail (error).")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable informational logging on stderr.")


def _resolve_config_and_path(args: argparse.Namespace):
    cli_overrides = {
        'language': getattr(args, "language", None),
        'member_key': getattr(args, "member_key", None),
        'unresolved_bases': getattr(args, "unresolved_bases", None),
        'output_format': getattr(args, "format", None),
        'precision': getattr(args, "precision", None),
    }
    if getattr(args, "path", None):
        cli_overrides['project_root'] = str(Path(args.path).resolve())

    config = load_config(config_path=getattr(args, "config", None), cli_args=cli_overrides)
    return config, config.require_project_root()


def _run_analyze(args: argparse.Namespace) -> int:
    config, path = _resolve_config_and_path(args)
    analyzer = ClassMetricsAnalyzer(path, config)
    report = analyzer.analyze()

    if args.output:
        analyzer.export_report(report, Path(args.output), config.output_format)
        print(f"📄 Report exported to {args.output}")
    else:
        print(render(report, config.output_format, config.precision))
    return 0


def _run_inspect(args: argparse.Namespace) -> int:
    config, path = _resolve_config_and_path(args)
    analyzer = ClassMetricsAnalyzer(path, config)
    print(render_breakdown(analyzer.inspect(args.class_name)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mood-metrics",
        description="MOOD metrics (MIF, MHF, AHF, AIF, POF) for TypeScript, Python or declarative class sets.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Compute the five MOOD metrics for a class set")
    _add_path_arg(analyze)
    _add_common_flags(analyze)
    analyze.add_argument("--format", choices=list(SUPPORTED_OUTPUT_FORMATS),
                         help="Report format (default: text).")
    analyze.add_argument("--precision", type=int, default=None,
                         help="Round metric values to this many decimal places.")
    analyze.add_argument("--output", help="Write the report to a file instead of stdout.")
    analyze.set_defaults(func=_run_analyze)

    inspect = subparsers.add_parser("inspect", help="Show the member classification of one class")
    _add_path_arg(inspect)
    _add_common_flags(inspect)
    inspect.add_argument("--class", dest="class_name", required=True, help="Name of the class to inspect.")
    inspect.set_defaults(func=_run_inspect)

    return parser


def main(argv: Optional[Sequence[str]] = None):
    """Main entry point for the analyzer."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        exit_code = args.func(args)
        sys.exit(exit_code)
    except MoodMetricsError as e:
        print(f"❌ Error: {e.message}", file=sys.stderr)
        if e.hint:
            print(f"   {e.hint}", file=sys.stderr)
        sys.exit(1)
    except ValidationError as e:
        print(f"❌ Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"\n❌ An unexpected error occurred: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc(file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
