"""Minimal CLI entrypoint for opengraph-consumer."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Sequence

from core.models import ObjectBase
from core.structured_logging import emit_json_event, json_event_logger
from opengraph_consumer.consumer import Consumer


PROJECT_ROOT = Path(__file__).resolve().parent.parent
SCHEMAS_DIR = PROJECT_ROOT / "schemas"


def _emit_cli_event(event_type: str, *, command: str, **payload: Any) -> str:
    """Emit one structured CLI event line with standard fields."""
    return emit_json_event(event_type, command=command, component="cli", **payload)


def _build_consumer(args: argparse.Namespace) -> Consumer:
    """Build a consumer from shared extraction flags."""
    consumer = Consumer.create(log_fetches=True)
    consumer.use_fallback_mode = args.fallback
    consumer.debug = args.debug
    consumer.deduplicate_meta_tags = args.dedupe
    consumer.event_logger = json_event_logger
    return consumer


def _print_object(result: ObjectBase, indent: int | None) -> None:
    """Write the extracted object as one JSON document to stdout."""
    payload = {"object_type": result.object_type, **result.model_dump(mode="json")}
    print(json.dumps(payload, indent=indent, ensure_ascii=False, sort_keys=True))


def _validate_schema_file(path: Path) -> None:
    """Validate that a JSON schema file is well-formed and has required top-level keys."""
    data = json.loads(path.read_text(encoding="utf-8"))
    required_keys = {"$schema", "type", "properties"}
    missing = required_keys.difference(data)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ValueError(f"{path.name} missing required schema keys: {missing_str}")


def _cmd_validate_schemas(_: argparse.Namespace) -> int:
    """Validate bundled schema files for basic structural correctness."""
    object_schema = SCHEMAS_DIR / "opengraph_object.schema.json"
    if not object_schema.exists():
        raise FileNotFoundError(f"Schema file not found: {object_schema}")
    _validate_schema_file(object_schema)
    _emit_cli_event(
        "cli_validate_schemas_completed",
        command="validate-schemas",
        schema_files=[str(object_schema)],
    )
    return 0


def _cmd_url(args: argparse.Namespace) -> int:
    """Fetch a URL and print its Open Graph object."""
    consumer = _build_consumer(args)
    result = consumer.load_url(args.url)
    _print_object(result, args.indent)
    _emit_cli_event("cli_url_completed", command="url", url=args.url)
    return 0


def _cmd_html(args: argparse.Namespace) -> int:
    """Read a local HTML file and print its Open Graph object."""
    path = Path(args.path)
    if not path.exists():
        raise FileNotFoundError(f"HTML file not found: {path}")

    consumer = _build_consumer(args)
    result = consumer.load_html(path.read_bytes(), args.fallback_url)
    _print_object(result, args.indent)
    _emit_cli_event("cli_html_completed", command="html", path=str(path))
    return 0


def _add_extraction_flags(parser: argparse.ArgumentParser) -> None:
    """Flags shared by the url and html commands."""
    parser.add_argument(
        "--fallback",
        action="store_true",
        help="Fill url/title/description from generic HTML when og: data is missing",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Fail on og:image:* (etc.) properties that precede their og:image",
    )
    parser.add_argument(
        "--dedupe",
        action="store_true",
        help="Count meta tags with both name= and property= og: attributes once",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (default 2)")


def build_parser() -> argparse.ArgumentParser:
    """Create argument parser for the og-consumer CLI."""
    parser = argparse.ArgumentParser(
        prog="og-consumer",
        description="Extract Open Graph metadata from a URL or HTML file",
    )
    parser.add_argument("--version", action="version", version="og-consumer 0.1.0")

    subparsers = parser.add_subparsers(dest="command")

    url_parser = subparsers.add_parser("url", help="Fetch a URL and extract Open Graph data")
    url_parser.add_argument("url", help="http(s) URL to fetch")
    _add_extraction_flags(url_parser)
    url_parser.set_defaults(func=_cmd_url)

    html_parser = subparsers.add_parser("html", help="Extract Open Graph data from an HTML file")
    html_parser.add_argument("path", help="Path to an HTML file")
    html_parser.add_argument("--fallback-url", help="URL used as og:url fallback")
    _add_extraction_flags(html_parser)
    html_parser.set_defaults(func=_cmd_html)

    validate_parser = subparsers.add_parser(
        "validate-schemas",
        help="Validate JSON schemas used by contract tests",
    )
    validate_parser.set_defaults(func=_cmd_validate_schemas)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Execute CLI and return process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    try:
        return int(args.func(args))
    except Exception as exc:
        _emit_cli_event(
            "cli_error",
            command=str(getattr(args, "command", "unknown")),
            level="error",
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return 1


def cli() -> None:
    """Console-script entrypoint."""
    raise SystemExit(main())


if __name__ == "__main__":
    raise SystemExit(main())
