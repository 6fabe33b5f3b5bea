"""Replace irregular tables with literal HTML nodes.

Two kinds of tables cannot be edited structurally downstream:

* invalid tables, whose cells carry ``invalid_children`` that normal table
  rendering cannot express;
* grid tables (``data.type == "grid"``), whose declared column widths are
  lost by markdown tables.

Both are rendered to HTML here and spliced back into their parent in place.
"""
from __future__ import annotations

import math
import re
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, List, Optional

from mdast_renderer.model.document_model import RenderOptions
from mdast_renderer.model.nodes import InvalidTable, Node, Parent, RenderedHtml, Table, TableCell, is_parent
from mdast_renderer.renderer.html_serializer import to_html
from mdast_renderer.renderer.presentation import Element, find_element, to_presentation
from mdast_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)

_LETTER_PATTERN = re.compile(r"[a-z]", re.IGNORECASE)


def format_number(value: float) -> str:
    """Print a number the way JavaScript's ``String(number)`` does.

    Plain decimal notation for exponents from -7 to 20, ``1.5e-7`` style
    otherwise, and no trailing ``.0`` on integral values.
    """
    if value == 0:
        return "0"
    text = repr(value)
    if "e" not in text:
        return text[:-2] if text.endswith(".0") else text
    mantissa, exponent = text.split("e")
    power = int(exponent)
    if -7 < power < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def normalize_width_value(value: str) -> str:
    """Turn a declared column width into a CSS length.

    Values that already carry a unit (``%`` or letters) and values that do not
    parse as a finite number are returned unchanged. Only ASCII numerals
    count: ``float`` also accepts ``1_0`` and non-ASCII digits, which are
    passed through. Numbers up to 1 are ratios and become percentages; larger
    numbers become pixels.
    """
    if "%" in value or _LETTER_PATTERN.search(value):
        return value
    if "_" in value or not value.isascii():
        return value
    try:
        numeric = float(value)
    except ValueError:
        return value
    if not math.isfinite(numeric):
        return value
    if numeric <= 1:
        return f"{format_number(numeric * 100)}%"
    return f"{format_number(numeric)}px"


def _width_text(value: object) -> str:
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def extract_column_widths(table: Table) -> Optional[List[str]]:
    """Return normalized widths, or None when they cannot be applied to ``table``."""
    col_widths = table.data.col_widths if table.data is not None else None
    if not col_widths:
        return None
    if not table.children:
        return None
    first_row = table.children[0]
    column_count = len(first_row.children) if is_parent(first_row) else 0  # type: ignore[attr-defined]
    if len(col_widths) != column_count:
        LOGGER.debug("Ignoring %d column widths for a table with %d columns", len(col_widths), column_count)
        return None
    return [normalize_width_value(_width_text(value)) for value in col_widths]


def build_colgroup(widths: Iterable[str]) -> Element:
    return Element(
        tag_name="colgroup",
        children=[Element(tag_name="col", properties={"style": f"width: {width}"}) for width in widths],
    )


def _find_child_index(parent: Parent, child: Node) -> int:
    for index, candidate in enumerate(parent.children):
        if candidate is child:
            return index
    return -1


class InvalidTableRewriter:
    """Render invalid tables from their cells' ``invalid_children``."""

    def __init__(self, options: Optional[RenderOptions] = None) -> None:
        self.options = options or RenderOptions()

    def rewrite(self, invalid_tables: Iterable[InvalidTable]) -> int:
        """Replace every reachable invalid table; returns how many were replaced."""
        replaced = 0
        for invalid_table in invalid_tables:
            parent = invalid_table.parent
            if parent is None:
                continue
            index = _find_child_index(parent, invalid_table.inner)
            if index == -1:
                continue
            parent.children[index] = RenderedHtml(value=self.render(invalid_table.inner))
            replaced += 1
        LOGGER.debug("Rewrote %d invalid table(s)", replaced)
        return replaced

    def render(self, table: Table) -> str:
        allow = self.options.allow_dangerous_html
        return to_html(to_presentation(self._derive(table), allow_dangerous_html=allow), allow_dangerous_html=allow)

    @staticmethod
    def _derive(table: Table) -> Table:
        """Copy ``table`` with each cell showing its invalid children, if any."""
        rows: List[Node] = []
        for row in table.children:
            if not is_parent(row):
                rows.append(row)
                continue
            cells = [_with_invalid_children(cell) for cell in row.children]  # type: ignore[attr-defined]
            rows.append(replace(row, children=cells))  # type: ignore[type-var]
        return replace(table, children=rows)


def _with_invalid_children(cell: Node) -> Node:
    if not isinstance(cell, TableCell):
        return cell
    if cell.data is not None and cell.data.invalid_children is not None:
        return replace(cell, children=list(cell.data.invalid_children))
    return replace(cell, children=list(cell.children))


class GridTableRewriter:
    """Render grid tables to HTML carrying their column widths in a ``colgroup``."""

    def __init__(self, options: Optional[RenderOptions] = None) -> None:
        self.options = options or RenderOptions()

    def rewrite(self, root: Parent) -> int:
        """Replace every grid table reachable from ``root``; returns how many were replaced."""
        if not is_parent(root):
            raise TypeError(f"Expected a container node, got {root.type or type(root).__name__}")
        replaced = self._visit(root)
        LOGGER.debug("Rewrote %d grid table(s)", replaced)
        return replaced

    def render(self, table: Table) -> str:
        allow = self.options.allow_dangerous_html
        col_widths = extract_column_widths(table)
        tree = to_presentation(table, allow_dangerous_html=allow)
        table_element = find_element(tree, "table")
        if table_element is not None and col_widths:
            table_element.children.insert(0, build_colgroup(col_widths))
        return to_html(tree, allow_dangerous_html=allow)

    def _visit(self, node: Node) -> int:
        replaced = 0
        children = node.children  # type: ignore[attr-defined]
        for index, child in enumerate(children):
            if isinstance(child, Table) and child.is_grid:
                children[index] = RenderedHtml(value=self.render(child))
                replaced += 1
                continue
            if is_parent(child):
                replaced += self._visit(child)
        return replaced


def transform_invalid_tables_to_html(
    invalid_tables: Iterable[InvalidTable], options: Optional[RenderOptions] = None
) -> None:
    """Replace each invalid table in its parent with an equivalent ``html`` node."""
    InvalidTableRewriter(options).rewrite(invalid_tables)


def transform_grid_to_html(root: Parent, options: Optional[RenderOptions] = None) -> None:
    """Replace every grid table under ``root`` with an ``html`` node."""
    GridTableRewriter(options).rewrite(root)
