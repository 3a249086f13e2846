"""Main CLI entry point for the mini-dom command-line tool.

Provides parsing, well-formedness validation and tree dumps for markup files.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from mini_dom_parser import __version__
from mini_dom_parser.api import parse_file
from mini_dom_parser.dom import pretty_print, to_dict, to_markup
from mini_dom_parser.shared import (
    CommentMode,
    ConfigValidationError,
    ParserConfig,
    configure_logging,
    get_logger,
)

MARKUP_SUFFIXES = {".html", ".htm"}
OUTPUT_FORMATS = ("json", "text", "markup")


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self) -> None:
        self.parser_config = ParserConfig.default()
        self.parser_overrides: Dict[str, Any] = {}
        self.output_format = "json"
        self.verbose = False
        self.quiet = False

    def apply_preset(self, name: str) -> None:
        """Switch to a parser preset, keeping overrides loaded from file."""
        self.parser_config = ParserConfig.preset(name).override(**self.parser_overrides)

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        Recognized keys are ``parser_preset``, ``comment_mode``,
        ``logging_level`` and ``output_format``. ``comment_mode`` and
        ``logging_level`` are layered on top of the preset.
        """
        config = cls()
        if not config_path.exists():
            return config

        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigValidationError(f"Could not load config file {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError(f"Config file {config_path} must contain a JSON object")

        if "comment_mode" in data:
            config.parser_overrides["comment_mode"] = ParserConfig.from_dict(
                {"comment_mode": data["comment_mode"]}
            ).comment_mode
        if "logging_level" in data:
            config.parser_overrides["logging_level"] = str(data["logging_level"]).upper()
        config.apply_preset(data.get("parser_preset", "default"))

        output_format = data.get("output_format", config.output_format)
        if output_format not in OUTPUT_FORMATS:
            raise ConfigValidationError(
                f"Unknown output_format: {output_format}",
                field_name="output_format",
                suggestions=list(OUTPUT_FORMATS),
            )
        config.output_format = output_format
        return config


class MarkupProcessor:
    """Core markup processing logic for CLI operations."""

    def __init__(self, config: CLIConfig) -> None:
        self.config = config
        self.logger = get_logger(__name__, None, "cli_processor")

    def process_single_file(self, file_path: Path) -> Dict[str, Any]:
        """Parse a single file and return a JSON-serializable report."""
        result = parse_file(file_path, config=self.config.parser_config)
        report = result.summary()
        report["file"] = str(file_path)
        if result.root is not None:
            report["tree"] = result.root
        else:
            self.logger.debug("File failed to parse", extra={"file": str(file_path)})
        return report

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
            # Let parse_file report the missing path
            yield path

    def batch_process(self, paths: List[Path], recursive: bool = True) -> List[Dict[str, Any]]:
        """Process multiple files in order."""
        results = []
        for path in paths:
            for file_path in self.find_markup_files(path, recursive):
                results.append(self.process_single_file(file_path))
        return results


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="mini-dom",
        description="Minimal markup parser producing a simplified DOM tree"
    )

    parser.add_argument("--version", action="version", version=__version__)
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
        help="Output format (default: json)"
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
        "--preset",
        choices=["default", "compatible", "strict"],
        help="Parser configuration preset"
    )

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Check markup files are well formed")
    validate_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Markup files to validate"
    )
    validate_parser.add_argument(
        "--compatible-comments",
        action="store_true",
        help="End comment bodies at the first hyphen"
    )
    validate_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format"
    )

    # Dump command
    dump_parser = subparsers.add_parser("dump", help="Print the indented tree of a document")
    dump_parser.add_argument("path", type=Path, help="Markup file to dump")
    dump_parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="Spaces per nesting level (default: 2)"
    )

    return parser


def format_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format processing results for output."""
    if format_type == "markup":
        return "\n".join(
            to_markup(result["tree"]) for result in results if "tree" in result
        )

    if format_type == "text":
        if not results:
            return "No results to display."

        lines = []
        successful = sum(1 for r in results if r["success"])
        lines.append(f"Processed {len(results)} files, {successful} successful")
        lines.append("-" * 60)

        for result in results:
            status = "✓" if result["success"] else "✗"
            lines.append(f"{status} {result['file']}")
            if result["success"]:
                lines.append(
                    f"   Elements: {result['element_count']}, Text: {result['text_count']}, "
                    f"Comments: {result['comment_count']}, Depth: {result['max_depth']}, "
                    f"Time: {result['processing_time_ms']:.1f}ms"
                )
            else:
                errors = [
                    d["message"] for d in result["diagnostics"]
                    if d["severity"] in ("ERROR", "CRITICAL")
                ]
                for error in errors:
                    lines.append(f"   Error: {error}")
            lines.append("")

        return "\n".join(lines)

    serializable = []
    for result in results:
        entry = {key: value for key, value in result.items() if key != "tree"}
        if "tree" in result:
            entry["tree"] = to_dict(result["tree"])
        serializable.append(entry)
    return json.dumps(serializable, indent=2, ensure_ascii=False)


def cmd_parse(args: argparse.Namespace) -> int:
    """Handle parse command."""
    config = CLIConfig()
    if args.config:
        config = CLIConfig.from_file(args.config)
        if not (args.verbose or args.quiet):
            configure_logging(config.parser_config.logging_level)
    if args.preset:
        config.apply_preset(args.preset)
    if args.format:
        config.output_format = args.format

    processor = MarkupProcessor(config)
    results = processor.batch_process(args.paths, args.recursive)
    formatted_output = format_results(results, config.output_format)

    if args.output:
        try:
            args.output.write_text(formatted_output, encoding="utf-8")
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(formatted_output)

    if not results:
        return 1
    return 0 if all(r["success"] for r in results) else 1


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle validate command."""
    config = CLIConfig()
    if args.compatible_comments:
        config.parser_config = config.parser_config.override(
            comment_mode=CommentMode.FIRST_HYPHEN
        )

    processor = MarkupProcessor(config)
    results = []
    for path in args.paths:
        report = processor.process_single_file(path)
        validation = {"file": report["file"], "valid": report["success"]}
        if "error" in report:
            validation["error"] = report["error"]
        elif not report["success"]:
            validation["error"] = {"message": report["diagnostics"][0]["message"]}
        results.append(validation)

    if args.format == "json":
        print(json.dumps(results, indent=2, ensure_ascii=False))
    else:
        valid_count = sum(1 for r in results if r["valid"])
        print(f"Validated {len(results)} files, {valid_count} valid")
        print("-" * 50)
        for result in results:
            status = "✓" if result["valid"] else "✗"
            print(f"{status} {result['file']}")
            if not result["valid"]:
                print(f"   Error: {result['error']['message']}")

    return 0 if all(r["valid"] for r in results) else 1


def cmd_dump(args: argparse.Namespace) -> int:
    """Handle dump command."""
    if args.indent < 0:
        print("--indent must be >= 0", file=sys.stderr)
        return 1

    result = parse_file(args.path)
    if result.root is None:
        for diag in result.diagnostics:
            print(f"Error: {diag.message}", file=sys.stderr)
        return 1

    print(pretty_print(result.root, indent=args.indent))
    return 0


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
    else:
        configure_logging("WARNING")

    try:
        if args.command == "parse":
            return cmd_parse(args)
        if args.command == "validate":
            return cmd_validate(args)
        if args.command == "dump":
            return cmd_dump(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except ConfigValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
