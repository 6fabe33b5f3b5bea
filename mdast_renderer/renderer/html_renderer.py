"""Render a document tree into a standalone HTML page."""
from __future__ import annotations

from html import escape
from pathlib import Path
from typing import Optional

from mdast_renderer.model.document_model import DocumentModel, RenderOptions
from mdast_renderer.renderer.html_serializer import to_html
from mdast_renderer.renderer.presentation import to_presentation


class HtmlRenderer:
    """Write the document root as an HTML page with basic table styling."""

    def __init__(self, output_path: Path) -> None:
        self._output_path = output_path

    def render(self, model: DocumentModel, options: Optional[RenderOptions] = None) -> None:
        html = self.build_html(model, options or RenderOptions())
        self._output_path.write_text(html, encoding="utf-8")

    def build_html(self, model: DocumentModel, options: RenderOptions) -> str:
        allow = options.allow_dangerous_html
        body = to_html(to_presentation(model.root, allow_dangerous_html=allow), allow_dangerous_html=allow)
        title = escape(model.source_name or "Document")
        return f"""<!DOCTYPE html>
<html lang=\"en\">
<head>
  <meta charset=\"utf-8\" />
  <title>{title}</title>
  <style>
    table {{ border-collapse: collapse; }}
    th, td {{ border: 1px solid #ccc; padding: 4px 8px; vertical-align: top; }}
  </style>
</head>
<body>
{body}
</body>
</html>
"""
