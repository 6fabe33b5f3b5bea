"""Serialize presentational trees into HTML strings."""
from __future__ import annotations

from html import escape
from typing import Dict, List

from mdast_renderer.renderer.presentation import Element, PresentationNode, Raw, TextNode

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)

# Property names that differ from their HTML attribute names.
ATTRIBUTE_NAMES = {
    "class_name": "class",
    "html_for": "for",
    "http_equiv": "http-equiv",
    "accept_charset": "accept-charset",
}


class HtmlSerializer:
    """Turns a presentational tree into an HTML fragment."""

    def __init__(self, allow_dangerous_html: bool = False) -> None:
        self.allow_dangerous_html = allow_dangerous_html

    def serialize(self, node: PresentationNode) -> str:
        parts: List[str] = []
        self._write(node, parts)
        return "".join(parts)

    # ------------------------------------------------------------------
    def _write(self, node: PresentationNode, parts: List[str]) -> None:
        if isinstance(node, Element):
            self._write_element(node, parts)
        elif isinstance(node, TextNode):
            parts.append(escape(node.value, quote=False))
        elif isinstance(node, Raw):
            parts.append(node.value if self.allow_dangerous_html or node.trusted else escape(node.value, quote=False))
        else:
            for child in getattr(node, "children", None) or []:
                self._write(child, parts)

    def _write_element(self, element: Element, parts: List[str]) -> None:
        tag_name = element.tag_name
        parts.append(f"<{tag_name}{self._attributes(element.properties)}>")
        if tag_name in VOID_ELEMENTS:
            return
        for child in element.children:
            self._write(child, parts)
        parts.append(f"</{tag_name}>")

    @staticmethod
    def _attributes(properties: Dict[str, object]) -> str:
        rendered: List[str] = []
        for name, value in properties.items():
            if value is None or value is False:
                continue
            attribute = ATTRIBUTE_NAMES.get(name, name.replace("_", "-"))
            if value is True:
                rendered.append(f" {attribute}")
                continue
            if isinstance(value, (list, tuple)):
                value = " ".join(str(item) for item in value)
            rendered.append(f' {attribute}="{escape(str(value), quote=True)}"')
        return "".join(rendered)


def to_html(node: PresentationNode, allow_dangerous_html: bool = False) -> str:
    """Serialize ``node`` to HTML; raw nodes pass through only when allowed."""
    return HtmlSerializer(allow_dangerous_html=allow_dangerous_html).serialize(node)
