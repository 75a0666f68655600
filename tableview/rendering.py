"""Serializes a view tree to HTML through a Jinja2 template."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from tableview.services.view_tree import Node

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

VOID_TAGS = frozenset({"br", "hr", "img", "input", "meta", "link"})

_environment = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


def render_html(root: Node) -> Markup:
    template = _environment.get_template("tableview/node.html")
    return Markup(template.render(root=root, void_tags=VOID_TAGS))
