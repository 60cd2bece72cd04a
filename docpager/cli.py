"""
Command-line interface for docpager.

Usage:
    docpager render invoice.json --output invoice.html
    docpager render proposal.json --template classic --no-footer
    docpager info proposal.json --json
    docpager version
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__
from .config import PaginationSettings
from .engine.pipeline import PaginationPipeline
from .exceptions import ContentParseError, DocPagerError
from .models.document import Document
from .renderers.templates import TemplateDispatcher
from .utils.logger import add_file_handler
from .utils.rich_logger import ConsoleReporter, setup_logging

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="docpager",
        description="docpager - paginate business documents into fixed-size pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  docpager render invoice.json --output invoice.html
  docpager render quote.json --template minimalist
  docpager info proposal.json --json
  docpager version
        """,
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Log level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write logs to a rotating log file")
    parser.add_argument("--plain-logs", action="store_true", help="Disable rich log formatting")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render_parser = subparsers.add_parser("render", help="Paginate a document and render it to HTML")
    render_parser.add_argument("input", help="Input document JSON file")
    render_parser.add_argument("-o", "--output", help="Output HTML file (default: input name with .html)")
    render_parser.add_argument("--template", help="Template id for invoices and quotes")
    render_parser.add_argument("--no-header", action="store_true", help="Do not render the first-page header")
    render_parser.add_argument("--no-footer", action="store_true", help="Do not render the last-page footer")
    render_parser.add_argument("--config", help="Pagination settings JSON file")

    info_parser = subparsers.add_parser("info", help="Show the page partition of a document")
    info_parser.add_argument("input", help="Input document JSON file")
    info_parser.add_argument("--config", help="Pagination settings JSON file")
    info_parser.add_argument("--json", action="store_true", help="Output as JSON")

    subparsers.add_parser("version", help="Show version information")
    return parser


def load_document(path: Path) -> Document:
    if not path.exists():
        raise DocPagerError("File not found", str(path))
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ContentParseError("Input is not valid JSON", f"{path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ContentParseError("Input must be a JSON object", str(path))
    return Document.from_dict(data)


def load_settings(path: Optional[str]) -> PaginationSettings:
    return PaginationSettings.from_file(path) if path else PaginationSettings()


def cmd_render(args: argparse.Namespace, reporter: ConsoleReporter) -> int:
    """Handle render command."""
    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else input_path.with_suffix(".html")

    settings = load_settings(args.config)
    document = load_document(input_path)
    pipeline = PaginationPipeline(settings)
    result = pipeline.process(
        document,
        show_header=False if args.no_header else None,
        show_footer=False if args.no_footer else None,
    )

    dispatcher = TemplateDispatcher(settings)
    skin = dispatcher.select(document.meta.type, args.template or document.meta.template_id)
    html = dispatcher.render_document(result.pages, skin)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
    reporter.success(f"Saved {output_path} ({result.page_count} pages, skin {skin.name})")
    return 0


def cmd_info(args: argparse.Namespace, reporter: ConsoleReporter) -> int:
    """Handle info command."""
    settings = load_settings(args.config)
    document = load_document(Path(args.input))
    summary = PaginationPipeline(settings).process(document).summary()

    if args.json:
        print(json.dumps(summary, indent=2, ensure_ascii=False))
        return 0

    overview: Dict[str, Any] = {
        key: value for key, value in summary.items() if key != "pages"
    }
    reporter.table(f"{args.input}", overview)
    rows: List[Dict[str, Any]] = summary["pages"]
    reporter.pages("Pages", rows)
    return 0


def cmd_version(args: Optional[argparse.Namespace] = None) -> int:
    """Handle version command."""
    print(f"docpager v{__version__}")
    print("Deterministic pagination of invoices, quotes, proposals and contracts")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, use_rich=not args.plain_logs)
    if args.log_file:
        add_file_handler(logging.getLogger(), args.log_file, level=args.log_level)

    reporter = ConsoleReporter()
    try:
        if args.command == "render":
            return cmd_render(args, reporter)
        if args.command == "info":
            return cmd_info(args, reporter)
        if args.command == "version":
            return cmd_version(args)
    except DocPagerError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
