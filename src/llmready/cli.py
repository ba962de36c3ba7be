"""Command-line interface for llmready."""

import argparse
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console

from . import __version__
from .cache.manager import FileCache, llms_txt_cache_key
from .core.converter import MarkdownConverterService
from .llms_txt import LlmsTxtGenerator
from .logging_config import setup_logging
from .models.config import LlmReadyConfig
from .models.response import SourceResponse

err_console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="llmready",
        description="Convert HTML pages into clean markdown for LLM agents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a saved page
  llmready convert page.html --url https://example.com/pricing

  # Read HTML from stdin, use a config file
  curl -s https://example.com | llmready convert - --url https://example.com --config llmready.yaml

  # Build llms.txt from a list of routes
  llmready llms-txt --base-url https://example.com --route / --route docs/intro

  # Drop one cached page
  llmready clear-cache --url https://example.com/pricing --config llmready.yaml
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # convert
    convert = subparsers.add_parser("convert", help="Convert an HTML document to markdown")
    convert.add_argument(
        "input",
        nargs="?",
        default="-",
        help="HTML file to convert ('-' reads stdin, the default)",
    )
    convert.add_argument("--url", required=True, help="Canonical URL of the page")
    convert.add_argument(
        "--status",
        type=int,
        default=200,
        help="HTTP status of the source response (default: 200)",
    )
    convert.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write markdown here instead of stdout",
    )
    convert_group = convert.add_argument_group("conversion settings")
    convert_group.add_argument(
        "--fallback",
        action="store_true",
        help="Use the whole <body> instead of content selectors",
    )
    convert_group.add_argument(
        "--no-frontmatter",
        action="store_true",
        help="Omit the YAML frontmatter block",
    )
    convert_group.add_argument(
        "--no-tables",
        action="store_true",
        help="Flatten tables to text",
    )
    convert_group.add_argument(
        "--no-eyebrow-detection",
        action="store_true",
        help="Only mark eyebrows matched by configured selectors",
    )
    _add_common_arguments(convert)

    # clear-cache
    clear = subparsers.add_parser("clear-cache", help="Clear the markdown cache")
    clear.add_argument("--url", default=None, help="Clear cache for a specific URL only")
    clear.add_argument("--sitemap", action="store_true", help="Clear only the llms.txt cache")
    _add_common_arguments(clear)

    # llms-txt
    llms = subparsers.add_parser("llms-txt", help="Generate an llms.txt document")
    llms.add_argument("--base-url", required=True, help="Absolute site URL")
    llms.add_argument("--site-name", default="Website", help="Title used when none is configured")
    llms.add_argument("--title", default=None, help="H1 title (overrides llms_txt.title)")
    llms.add_argument(
        "--route",
        action="append",
        default=[],
        metavar="URI",
        help="Route to list (repeatable)",
    )
    llms.add_argument(
        "--routes-file",
        type=Path,
        default=None,
        metavar="FILE",
        help="File with one route URI per line",
    )
    llms.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write llms.txt here instead of stdout",
    )
    _add_common_arguments(llms)

    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="YAML configuration file",
    )
    output_group = parser.add_argument_group("output control")
    output_group.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    output_group.add_argument("--quiet", "-q", action="store_true", help="Only report errors")


def load_config(args: argparse.Namespace) -> LlmReadyConfig:
    """Load the YAML config named on the command line (defaults otherwise)."""
    config = LlmReadyConfig.from_yaml_file(args.config) if args.config else LlmReadyConfig()

    if args.verbose:
        config = config.model_copy(update={"log_level": "DEBUG"})
    elif args.quiet:
        config = config.model_copy(update={"log_level": "ERROR"})

    setup_logging(config)
    return config


def _write_output(text: str, output: Optional[Path]) -> None:
    if output is None:
        sys.stdout.write(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")


def run_convert(args: argparse.Namespace, config: LlmReadyConfig) -> int:
    updates: dict = {}
    if args.fallback:
        updates["extractor"] = "fallback"
    if args.no_eyebrow_detection:
        updates["eyebrow_auto_detect"] = False
    if args.no_tables:
        updates["converter"] = config.converter.model_copy(update={"table_support": False})
    if args.no_frontmatter:
        updates["frontmatter"] = config.frontmatter.model_copy(
            update={
                "include_title": False,
                "include_description": False,
                "include_url": False,
                "include_last_modified": False,
                "custom_fields": {},
            }
        )
    if updates:
        config = config.model_copy(update=updates)

    if args.input == "-":
        body = sys.stdin.buffer.read()
    else:
        body = Path(args.input).read_bytes()

    service = MarkdownConverterService(config)
    markdown = service.convert(SourceResponse(status_code=args.status, body=body), args.url)
    _write_output(markdown, args.output)

    if args.output and not args.quiet:
        err_console.print(f"[green]Wrote[/green] {args.output}")
    return 0


def run_clear_cache(args: argparse.Namespace, config: LlmReadyConfig) -> int:
    if config.cache.directory is None:
        err_console.print("[yellow]No cache directory configured; nothing to clear.[/yellow]")
        return 0

    cache = FileCache(config.cache.directory)

    if args.sitemap:
        cache.forget(llms_txt_cache_key(config.cache.prefix))
        if not args.quiet:
            err_console.print("[green]llms.txt cache cleared.[/green]")
        return 0

    service = MarkdownConverterService(config, cache=cache)
    removed = service.clear_cache(args.url)

    if not args.quiet:
        if args.url:
            err_console.print(f"[green]Cache cleared for URL:[/green] {args.url}")
        else:
            err_console.print(f"[green]Cache cleared[/green] ({removed} entries)")
    return 0


def run_llms_txt(args: argparse.Namespace, config: LlmReadyConfig) -> int:
    routes = list(args.route)
    if args.routes_file:
        routes += [line.strip() for line in args.routes_file.read_text(encoding="utf-8").splitlines() if line.strip()]

    if args.title:
        llms_txt = config.llms_txt.model_copy(update={"title": args.title})
        config = config.model_copy(update={"llms_txt": llms_txt})

    generator = LlmsTxtGenerator(config, base_url=args.base_url, site_name=args.site_name)
    _write_output(generator.generate(routes), args.output)
    return 0


COMMANDS = {
    "convert": run_convert,
    "clear-cache": run_clear_cache,
    "llms-txt": run_llms_txt,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help(sys.stderr)
        return 1

    try:
        config = load_config(args)
    except Exception as e:
        err_console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    try:
        return COMMANDS[args.command](args, config)
    except OSError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
