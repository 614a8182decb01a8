"""Wrap rendered markup in a complete HTML page."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

from .dom_model import Rendered

TEMPLATES_DIR = Path(__file__).parent / "templates"


def jinja_env(template_dir: Optional[Path] = None) -> Environment:
    """Create a Jinja environment for page templates.

    ``template_dir`` is searched before the bundled templates, so a project
    can override ``page.jinja``.
    """

    template_dirs = [TEMPLATES_DIR]
    if template_dir is not None:
        template_dirs.insert(0, template_dir)
    return Environment(
        loader=FileSystemLoader(template_dirs),
        autoescape=select_autoescape(["html", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )


def render_page(
    rendered: Rendered,
    *,
    title: str = "",
    lang: str = "en",
    stylesheet: Optional[str] = None,
    template_dir: Optional[Path] = None,
) -> str:
    """Render a page whose body holds the markup followed by the mounted payload."""

    template = jinja_env(template_dir).get_template("page.jinja")
    return template.render(
        title=title,
        lang=lang,
        stylesheet=stylesheet,
        body=rendered,
        mounted=Markup(rendered.mounted),
    )


__all__ = ["TEMPLATES_DIR", "jinja_env", "render_page"]
