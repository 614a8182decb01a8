"""Command-line interface for domgen."""

import argparse
from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import ValidationError

from . import ansi
from .errors import StructureError
from .io_utils import emit, json_dumps, read_document, read_text, warn
from .join import RenderMode
from .jsonml import tree_jsonml
from .models import RenderSettings, TreeDocument
from .page import render_page
from .render import Renderer, render_leaf

VERSION = "0.1.0"


def _load_settings(path: Optional[str]) -> RenderSettings:
    if path is None:
        return RenderSettings()
    config_path = Path(path)
    if not config_path.exists():
        raise SystemExit(f"Config not found: {config_path}")
    try:
        data = read_document(config_path) or {}
        return RenderSettings.model_validate(data)
    except (yaml.YAMLError, ValidationError) as exc:
        raise SystemExit(f"Invalid config {config_path}: {exc}") from exc


def _load_document(path: str) -> TreeDocument:
    doc_path = Path(path)
    if not doc_path.exists():
        raise SystemExit(f"Document not found: {doc_path}")
    try:
        data = read_document(doc_path)
        if isinstance(data, list):
            data = {"items": data}
        return TreeDocument.model_validate(data or {})
    except (yaml.YAMLError, ValidationError) as exc:
        raise SystemExit(f"Invalid document {doc_path}: {exc}") from exc


def _resolve_mode(
    flag: Optional[str], document: TreeDocument, settings: RenderSettings
) -> RenderMode:
    """--mode, then the document's own mode, then the config file."""
    if flag:
        return RenderMode(flag)
    if document.mode is not None:
        return document.mode
    return settings.mode


def _handle_render(args: argparse.Namespace) -> None:
    settings = _load_settings(args.config)
    document = _load_document(args.input)
    renderer = Renderer(_resolve_mode(args.mode, document, settings))

    try:
        rendered = renderer.render(document.to_node())
    except StructureError as exc:
        raise SystemExit(f"{args.input}: {exc}") from exc

    if args.page:
        title = args.title or document.title or settings.title or ""
        output = render_page(rendered, title=title)
    else:
        output = rendered.document + "\n"
    emit(output, args.output)


def _ansi_warnings(text: str) -> list[str]:
    warnings: list[str] = []
    depth = 0
    for token in ansi.scan(text):
        if token.kind == "style":
            depth += 1
            if token.code not in ansi.ANSI_CLASSES:
                warnings.append(f"unknown SGR code {token.code!r} renders an empty class")
        elif token.kind == "reset":
            depth -= 1
            if depth < 0:
                warnings.append("reset without an open style closes an unopened span")
                depth = 0
    if depth:
        warnings.append(f"{depth} span(s) left open at end of input")
    return warnings


def _handle_ansi(args: argparse.Namespace) -> None:
    settings = _load_settings(args.config)
    text = read_text(args.input)
    for message in _ansi_warnings(text):
        warn(f"{args.input}: {message}")

    styles = render_leaf(ansi.stylesheet(), "style")
    rendered = render_leaf(text, args.tag, mounted=styles.markup, class_="ansi")

    if args.page:
        title = args.title or settings.title or Path(args.input).name
        output = render_page(rendered, title=title)
    else:
        output = rendered.document + "\n"
    emit(output, args.output)


def _handle_jsonml(args: argparse.Namespace) -> None:
    document = _load_document(args.input)
    try:
        payload = tree_jsonml(document.items, *document.tags, **document.attributes)
    except StructureError as exc:
        raise SystemExit(f"{args.input}: {exc}") from exc
    emit(json_dumps(payload), args.output)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="domgen",
        description="Render nested lists and terminal output as HTML",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"domgen {VERSION}",
        help="Show the domgen version and exit.",
    )

    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser(
        "render",
        help="Render a YAML/JSON tree document as HTML.",
        description="Render a tree document, appending its mounted content after the markup.",
    )
    render_parser.add_argument(
        "--in",
        dest="input",
        required=True,
        help="Path to the tree document (YAML or JSON).",
    )
    render_parser.add_argument(
        "--out",
        dest="output",
        default=None,
        help="Path to write the HTML; stdout when omitted.",
    )
    render_parser.add_argument(
        "--mode",
        choices=[mode.value for mode in RenderMode],
        default=None,
        help="Join strategy; overrides the document and the config file.",
    )
    render_parser.add_argument(
        "--config",
        default=None,
        help="Path to a domgen.yaml settings file.",
    )
    render_parser.add_argument(
        "--page",
        action="store_true",
        help="Wrap the output in a complete HTML page.",
    )
    render_parser.add_argument("--title", default=None, help="Page title for --page.")
    render_parser.set_defaults(func=_handle_render)

    ansi_parser = subparsers.add_parser(
        "ansi",
        help="Convert terminal output with ANSI colours to HTML.",
        description="Escape a text file and turn its ANSI SGR codes into styled spans.",
    )
    ansi_parser.add_argument(
        "--in",
        dest="input",
        required=True,
        help="Path to the captured terminal output.",
    )
    ansi_parser.add_argument(
        "--out",
        dest="output",
        default=None,
        help="Path to write the HTML; stdout when omitted.",
    )
    ansi_parser.add_argument(
        "--tag",
        default="pre",
        help="Element wrapping the converted text.",
    )
    ansi_parser.add_argument(
        "--config",
        default=None,
        help="Path to a domgen.yaml settings file.",
    )
    ansi_parser.add_argument(
        "--page",
        action="store_true",
        help="Wrap the output in a complete HTML page.",
    )
    ansi_parser.add_argument("--title", default=None, help="Page title for --page.")
    ansi_parser.set_defaults(func=_handle_ansi)

    jsonml_parser = subparsers.add_parser(
        "jsonml",
        help="Export a tree document as JsonML.",
        description="Map a tree document to nested [tag, {attrs}, ...children] arrays.",
    )
    jsonml_parser.add_argument(
        "--in",
        dest="input",
        required=True,
        help="Path to the tree document (YAML or JSON).",
    )
    jsonml_parser.add_argument(
        "--out",
        dest="output",
        default=None,
        help="Path to write the JSON; stdout when omitted.",
    )
    jsonml_parser.set_defaults(func=_handle_jsonml)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


__all__ = ["build_parser", "main"]


if __name__ == "__main__":
    main()
