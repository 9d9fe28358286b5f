"""Main CLI entry point for the strict-markup command-line tool.

Provides commands to parse markup files and print their trees, and to check
files for well-formedness.
"""

import argparse
import json
import sys
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from strict_markup_parser import __version__
from strict_markup_parser.api import StrictMarkupParser
from strict_markup_parser.shared.config import ConfigError, ParserConfig
from strict_markup_parser.shared.logging import configure_logging, get_logger
from strict_markup_parser.tree import format_tree, to_markup

MARKUP_SUFFIXES = {".html", ".htm", ".xml"}
OUTPUT_FORMATS = ["json", "text", "tree", "markup"]


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self):
        self.parser_config = ParserConfig.default()
        self.max_workers = None  # Use system default
        self.output_format = "text"
        self.verbose = False
        self.quiet = False

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file."""
        config = cls()
        if not config_path.exists():
            return config

        try:
            data = json.loads(config_path.read_text())
            parser_settings = {
                key: data[key] for key in ("root_tag", "encoding", "logging_level")
                if key in data
            }
            if parser_settings:
                config.parser_config = config.parser_config.override(**parser_settings)
            config.max_workers = data.get("max_workers", config.max_workers)
            output_format = data.get("output_format", config.output_format)
            if output_format in OUTPUT_FORMATS:
                config.output_format = output_format
        except (OSError, ValueError, ConfigError) as e:
            print(f"Warning: Could not load config file: {e}", file=sys.stderr)

        return config


class MarkupProcessor:
    """Core processing logic for CLI operations."""

    def __init__(self, config: CLIConfig):
        self.config = config
        self.parser = StrictMarkupParser(config=config.parser_config)
        self.logger = get_logger(__name__, None, "cli_processor")

    def process_single_file(self, file_path: Path) -> Dict[str, Any]:
        """Parse a single file and return a JSON-serializable summary."""
        result = self.parser.parse_file(file_path)
        summary: Dict[str, Any] = {
            "file": str(file_path),
            "success": result.success,
            "node_count": result.node_count,
            "element_count": result.element_count,
            "max_depth": result.max_depth,
            "processing_time_ms": result.processing_time_ms,
            "diagnostics": [diag.to_dict() for diag in result.diagnostics],
        }

        if result.root is not None:
            output_format = self.config.output_format
            if output_format == "json":
                summary["root"] = result.root.to_dict()
            elif output_format == "tree":
                summary["tree"] = format_tree(result.root)
            elif output_format == "markup":
                summary["markup"] = to_markup(result.root)
        else:
            self.logger.debug("File failed to parse", extra={"file": str(file_path)})

        return summary

    def find_markup_files(self, path: Path, recursive: bool = True) -> Iterator[Path]:
        """Find markup files in path."""
        if path.is_file():
            yield path
        elif path.is_dir():
            candidates = path.rglob("*") if recursive else path.glob("*")
            for candidate in sorted(candidates):
                if candidate.is_file() and candidate.suffix.lower() in MARKUP_SUFFIXES:
                    yield candidate
        else:
            # Missing paths are reported by process_single_file
            yield path

    def batch_process(self, paths: List[Path], recursive: bool = True) -> List[Dict[str, Any]]:
        """Process multiple files, in parallel when more than one worker is allowed."""
        all_files: List[Path] = []
        for path in paths:
            all_files.extend(self.find_markup_files(path, recursive))

        if len(all_files) <= 1 or self.config.max_workers == 1:
            return [self.process_single_file(file_path) for file_path in all_files]

        with ProcessPoolExecutor(max_workers=self.config.max_workers) as executor:
            results = list(executor.map(self.process_single_file, all_files))

        # Workers parse with their own copies of self.parser
        for summary in results:
            self.parser.record(summary["success"], summary["processing_time_ms"])
        return results


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="strict-markup",
        description="Parse well-formed markup into a document tree"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse markup files")
    parse_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Markup files or directories to parse"
    )
    parse_parser.add_argument(
        "--recursive", "-r",
        action="store_true",
        help="Recursively process directories"
    )
    parse_parser.add_argument(
        "--format", "-f",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (default: text)"
    )
    parse_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    parse_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )
    parse_parser.add_argument(
        "--workers", "-w",
        type=int,
        help="Number of parallel workers"
    )

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate", help="Check markup files for well-formedness"
    )
    validate_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Markup files or directories to validate"
    )
    validate_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format"
    )
    validate_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def _error_lines(result: Dict[str, Any]) -> List[str]:
    return [
        diag["message"] for diag in result.get("diagnostics", [])
        if diag.get("severity") in ("ERROR", "CRITICAL")
    ]


def format_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format processing results for output."""
    if format_type == "json":
        return json.dumps(results, indent=2)

    if not results:
        return "No results to display."

    lines = []
    if format_type == "text":
        successful = sum(1 for r in results if r.get("success", False))
        lines.append(f"Processed {len(results)} files, {successful} successful")
        lines.append("-" * 60)

    for result in results:
        status = "✓" if result.get("success", False) else "✗"
        lines.append(f"{status} {result['file']}")

        if format_type == "text" and result.get("success", False):
            lines.append(
                f"   Nodes: {result.get('node_count', 0)}, "
                f"Elements: {result.get('element_count', 0)}, "
                f"Depth: {result.get('max_depth', 0)}, "
                f"Time: {result.get('processing_time_ms', 0):.1f}ms"
            )
        elif format_type in ("tree", "markup") and format_type in result:
            lines.append(result[format_type])

        for message in _error_lines(result):
            lines.append(f"   Error: {message}")

        lines.append("")

    return "\n".join(lines)


def _load_config(args: argparse.Namespace) -> CLIConfig:
    config = CLIConfig()
    if args.config and args.config.exists():
        config = CLIConfig.from_file(args.config)

    # Global verbosity flags take precedence over the file setting
    if args.verbose:
        config.verbose = True
        config.parser_config = config.parser_config.override(logging_level="DEBUG")
    elif args.quiet:
        config.quiet = True
        config.parser_config = config.parser_config.override(logging_level="ERROR")
    return config


def cmd_parse(args: argparse.Namespace) -> int:
    """Handle parse command."""
    config = _load_config(args)

    if args.workers:
        config.max_workers = args.workers
    if args.format:
        config.output_format = args.format

    processor = MarkupProcessor(config)
    try:
        results = processor.batch_process(args.paths, args.recursive)
    except KeyboardInterrupt:
        print("\nProcessing interrupted by user", file=sys.stderr)
        return 1

    formatted_output = format_results(results, config.output_format)

    if args.output:
        try:
            args.output.write_text(formatted_output)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(formatted_output)

    if not results:
        return 1

    successful = sum(1 for r in results if r.get("success", False))
    return 0 if successful == len(results) else 1


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle validate command."""
    processor = MarkupProcessor(_load_config(args))
    results = []

    files = [
        file_path
        for path in args.paths
        for file_path in processor.find_markup_files(path)
    ]
    for file_path in files:
        result = processor.process_single_file(file_path)
        validation_result: Dict[str, Any] = {
            "file": str(file_path),
            "valid": result["success"],
        }
        if not result["success"]:
            diagnostic = result["diagnostics"][0]
            details = diagnostic.get("details", {})
            validation_result["error"] = diagnostic["message"]
            validation_result["kind"] = details.get("kind")
            validation_result["position"] = diagnostic.get("position")
        results.append(validation_result)

    if args.format == "json":
        print(json.dumps(results, indent=2))
    else:
        valid_count = sum(1 for r in results if r["valid"])
        print(f"Validated {len(results)} files, {valid_count} valid")
        print("-" * 50)

        for result in results:
            status = "✓" if result["valid"] else "✗"
            print(f"{status} {result['file']}")
            if not result["valid"]:
                print(f"   Error: {result['error']}")

    valid_count = sum(1 for r in results if r["valid"])
    return 0 if valid_count == len(results) else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")

    try:
        if args.command == "parse":
            return cmd_parse(args)
        if args.command == "validate":
            return cmd_validate(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
