"""Main CLI entry point for the dom-analyzer command-line tool.

Provides commands to analyze markup from files or stdin, list parser backends,
and serve the web front end.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from dom_analyzer import __version__
from dom_analyzer.api import DomAnalyzer, get_adapter_registry
from dom_analyzer.shared import (
    AnalyzerConfig,
    ConfigError,
    configure_logging,
    get_logger,
)
from dom_analyzer.tree.formatters import to_html, to_json, to_text

logger = get_logger(__name__, None, "cli")


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="dom-analyzer",
        description="Parse HTML and show its document tree with depth-based styling"
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

    # Analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Analyze HTML markup")
    analyze_parser.add_argument(
        "path",
        nargs="?",
        default="-",
        help="HTML file to analyze (default: read stdin)"
    )
    analyze_parser.add_argument(
        "--format", "-f",
        choices=["text", "html", "json"],
        default="text",
        help="Output format (default: text)"
    )
    analyze_parser.add_argument(
        "--backend", "-b",
        help="Parser backend (html.parser, lxml, lxml-native)"
    )
    analyze_parser.add_argument(
        "--palette",
        help="Comma-separated style identifiers cycled by depth"
    )
    analyze_parser.add_argument(
        "--show-styles",
        action="store_true",
        help="Append the depth style to each line of text output"
    )
    analyze_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    analyze_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Serve the analyzer web page")
    serve_parser.add_argument("--host", help="Interface to bind")
    serve_parser.add_argument("--port", "-p", type=int, help="Port to listen on")
    serve_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    serve_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )

    # Backends command
    subparsers.add_parser("backends", help="List parser backends")

    return parser


def load_config(config_path: Optional[Path]) -> AnalyzerConfig:
    """Load configuration from file, or the defaults when no file is given."""
    if config_path is None:
        return AnalyzerConfig()
    return AnalyzerConfig.from_file(config_path)


def read_markup(path: str) -> str:
    """Read markup from a file path, or stdin for ``-``."""
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def cmd_analyze(args: argparse.Namespace) -> int:
    """Handle analyze command."""
    try:
        config = load_config(args.config)
        overrides = {}
        if args.backend:
            overrides["parsing__backend"] = args.backend
        if args.palette:
            overrides["render__palette"] = tuple(
                style.strip() for style in args.palette.split(",") if style.strip()
            )
        if overrides:
            config = config.override(**overrides)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    try:
        markup = read_markup(args.path)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    result = DomAnalyzer(config).analyze(markup)
    if not result.success:
        print(result.error, file=sys.stderr)
        return 1

    if args.format == "json":
        formatted_output = json.dumps(result.to_dict(), indent=2)
    elif args.format == "html":
        formatted_output = to_html(result.units, config.render)
    else:
        formatted_output = to_text(
            result.units, show_styles=args.show_styles, config=config.render
        )

    if args.output:
        try:
            args.output.write_text(formatted_output, encoding="utf-8")
            print(f"Results written to {args.output}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(formatted_output)

    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle serve command."""
    from dom_analyzer.web import run_server

    try:
        config = load_config(args.config)
        overrides = {}
        if args.host:
            overrides["web__host"] = args.host
        if args.port:
            overrides["web__port"] = args.port
        if args.debug:
            overrides["web__debug"] = True
        if overrides:
            config = config.override(**overrides)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    logger.info(
        "Starting web server",
        extra={"host": config.web.host, "port": config.web.port},
    )
    run_server(config)
    return 0


def cmd_backends(args: argparse.Namespace) -> int:
    """Handle backends command."""
    registry = get_adapter_registry()
    available = {meta.name for meta in registry.list_available_adapters()}
    for name in registry.names():
        adapter = registry.get(name)
        status = "available" if name in available else "missing"
        print(f"{name:<14} {status:<10} {adapter.metadata.description}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Set up logging verbosity
    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")

    # Route to appropriate command handler
    try:
        if args.command == "analyze":
            return cmd_analyze(args)
        elif args.command == "serve":
            return cmd_serve(args)
        elif args.command == "backends":
            return cmd_backends(args)
        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
