# ABOUTME: CLI entry point for notion-mdx.
# ABOUTME: Provides 'nextra', 'hextra' and 'json' export commands.

import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from . import __version__
from .config import Config, ConfigError, ExportOptions, load_config
from .export import ExportSummary, IndexEmittedEvent, MarkdownExporter, PageEvent, RawJsonEmittedEvent, StartEvent
from .markdown import HEXTRA_RENDERERS, site_url_renderers
from .notion import NotionClient, RawExportError, export_raw_json
from .throttle import Throttle

logger = logging.getLogger("notion_mdx")


def setup_logging(log_path: Path | None = None, verbose: bool = False) -> None:
    """Configure logging for the application.

    Args:
        log_path: Optional path for log file. If provided, enables rotating file logging.
        verbose: Log debug messages.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # stdout is reserved for `json` output, so log to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(log_format, date_format))
    root_logger.addHandler(console_handler)

    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(log_format, date_format))
        root_logger.addHandler(file_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _load(args: argparse.Namespace) -> tuple[Config, NotionClient]:
    config = load_config(args.config)
    token = config.get_token()
    return config, NotionClient(token, Throttle(config.calls_per_second))


def _options(config: Config, args: argparse.Namespace, extension: str, skip_meta: bool) -> ExportOptions:
    """Merge command-line flags over the configured export options."""
    defaults = config.options
    return ExportOptions(
        base_path=args.base_url if args.base_url is not None else defaults.base_path,
        include_json=args.include_json or defaults.include_json,
        no_frontmatter=args.no_frontmatter or defaults.no_frontmatter,
        extension=extension,
        skip_meta=skip_meta,
    )


def run_export(exporter: MarkdownExporter, database_id: str, output: Path, options: ExportOptions) -> ExportSummary:
    """Run an export, logging each progress event as it arrives."""
    summary = ExportSummary()

    for event in exporter.export(database_id, output, options):
        summary.record(event)
        if isinstance(event, StartEvent):
            logger.info(f"Found {event.total_pages} pages to export")
        elif isinstance(event, PageEvent):
            if event.ok:
                logger.info(f"[{event.current_page}/{event.total_pages}] Exported: {event.output_path}")
            else:
                logger.error(
                    f"[{event.current_page}/{event.total_pages}] "
                    f"Error processing page {event.page_id}: {event.error}"
                )
        elif isinstance(event, IndexEmittedEvent):
            logger.info(f"Generated _meta.ts in {event.directory}")
        elif isinstance(event, RawJsonEmittedEvent):
            logger.info(f"Generated {event.path.name} with raw database content")

    logger.info(
        f"Export complete: {summary.exported}/{summary.total_pages} pages, "
        f"{len(summary.failed)} errors, {summary.indexes} index files "
        f"[{summary.status}] ({summary.duration_seconds:.1f}s)"
    )
    return summary


def _cmd_markdown(args: argparse.Namespace, extension: str, skip_meta: bool, renderers: dict) -> None:
    try:
        config, client = _load(args)
        options = _options(config, args, extension, skip_meta)
        summary = run_export(MarkdownExporter(client, renderers), args.id, args.output, options)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Export failed: {e}")
        sys.exit(1)

    if summary.status == "failed":
        sys.exit(1)


def cmd_nextra(args: argparse.Namespace) -> None:
    """Export to MDX files with _meta.ts navigation for Nextra."""
    _cmd_markdown(args, extension=".mdx", skip_meta=False, renderers={})


def cmd_hextra(args: argparse.Namespace) -> None:
    """Export to Markdown files with callout shortcodes for Hextra."""
    renderers = {**HEXTRA_RENDERERS, **site_url_renderers(args.site_url or "")}
    _cmd_markdown(args, extension=".md", skip_meta=True, renderers=renderers)


def cmd_json(args: argparse.Namespace) -> None:
    """Export the raw API response for a database or page."""
    try:
        _, client = _load(args)
        content = export_raw_json(client, args.id, args.output)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except RawExportError as e:
        logger.error(f"Export failed: {e}")
        sys.exit(1)

    if args.output is None:
        print(content)
    else:
        logger.info(f"Raw JSON exported to: {args.output}")


def _add_markdown_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--id", required=True, help="Notion database ID")
    parser.add_argument("--output", "-o", type=Path, required=True, help="Output directory path")
    parser.add_argument("--include-json", action="store_true", help="Include raw JSON export in output directory")
    parser.add_argument("--base-url", help="Base path for internal links (e.g., /docs)")
    parser.add_argument("--no-frontmatter", action="store_true", help="Exclude frontmatter from output files")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notion-mdx",
        description="Export Notion database pages to Markdown/MDX files",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to an optional YAML config file",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug messages")

    subparsers = parser.add_subparsers(dest="command", required=True)

    nextra_parser = subparsers.add_parser("nextra", help="Export to MDX files for Nextra")
    _add_markdown_arguments(nextra_parser)
    nextra_parser.set_defaults(func=cmd_nextra)

    hextra_parser = subparsers.add_parser("hextra", help="Export to Markdown files for Hextra")
    _add_markdown_arguments(hextra_parser)
    hextra_parser.add_argument("--site-url", help="Rewrite absolute links under this URL to site-relative ones")
    hextra_parser.set_defaults(func=cmd_hextra)

    json_parser = subparsers.add_parser("json", help="Export JSON response from Notion API for a database or page")
    json_parser.add_argument("--id", required=True, help="Notion database or page ID")
    json_parser.add_argument("--output", "-o", type=Path, default=None, help="Output file path (defaults to stdout)")
    json_parser.set_defaults(func=cmd_json)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
