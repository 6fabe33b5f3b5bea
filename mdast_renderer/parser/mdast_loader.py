"""Load mdast JSON into node dataclasses and dump them back."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from mdast_renderer.model.nodes import (
    Blockquote,
    Break,
    CellData,
    Code,
    Delete,
    Emphasis,
    Heading,
    Html,
    Image,
    InlineCode,
    InvalidTable,
    Link,
    ListItem,
    ListNode,
    Node,
    Paragraph,
    Parent,
    Root,
    Strong,
    Table,
    TableCell,
    TableData,
    TableRow,
    Text,
    ThematicBreak,
    UnknownNode,
    is_parent,
)
from mdast_renderer.utils.logger import get_logger

LOGGER = get_logger(__name__)

# JSON key -> dataclass attribute, per node kind. ``children`` and ``data`` are handled separately.
NODE_FIELDS: Dict[str, Tuple[Type[Node], Tuple[Tuple[str, str], ...]]] = {
    "root": (Root, ()),
    "paragraph": (Paragraph, ()),
    "heading": (Heading, (("depth", "depth"),)),
    "blockquote": (Blockquote, ()),
    "list": (ListNode, (("ordered", "ordered"), ("start", "start"), ("spread", "spread"))),
    "listItem": (ListItem, (("checked", "checked"), ("spread", "spread"))),
    "strong": (Strong, ()),
    "emphasis": (Emphasis, ()),
    "delete": (Delete, ()),
    "link": (Link, (("url", "url"), ("title", "title"))),
    "text": (Text, (("value", "value"),)),
    "inlineCode": (InlineCode, (("value", "value"),)),
    "code": (Code, (("value", "value"), ("lang", "lang"), ("meta", "meta"))),
    "html": (Html, (("value", "value"),)),
    "image": (Image, (("url", "url"), ("alt", "alt"), ("title", "title"))),
    "break": (Break, ()),
    "thematicBreak": (ThematicBreak, ()),
    "table": (Table, (("align", "align"),)),
    "tableRow": (TableRow, ()),
    "tableCell": (TableCell, ()),
}

STRUCTURAL_KEYS = frozenset({"type", "children"})


class MdastParser:
    """Build a node tree from an mdast JSON payload."""

    def __init__(self, payload: Mapping[str, Any]) -> None:
        self._payload = payload

    @classmethod
    def from_file(cls, path: Path) -> "MdastParser":
        """Read a UTF-8 encoded mdast JSON file."""
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise ValueError(f"Expected a JSON object in {path}, got {type(payload).__name__}")
        LOGGER.debug("Read mdast payload from %s", Path(path).name)
        return cls(payload)

    def parse(self) -> Root:
        node = self.parse_node(self._payload)
        if not isinstance(node, Root):
            raise ValueError(f"Expected a root node, got {node.type!r}")
        return node

    # ------------------------------------------------------------------
    def parse_node(self, payload: Mapping[str, Any]) -> Node:
        if not isinstance(payload, Mapping):
            raise ValueError(f"Expected a node object, got {type(payload).__name__}")
        node_type = payload.get("type")
        if not isinstance(node_type, str) or not node_type:
            raise ValueError(f"Node without a type: {sorted(payload)}")

        entry = NODE_FIELDS.get(node_type)
        if entry is None:
            return self._parse_unknown(node_type, payload)

        node_cls, field_map = entry
        kwargs: Dict[str, Any] = {attr: payload[key] for key, attr in field_map if key in payload}
        typed_keys = STRUCTURAL_KEYS | {key for key, _ in field_map}
        if node_cls in (Table, TableCell):
            typed_keys = typed_keys | {"data"}
        kwargs["extra"] = {key: item for key, item in payload.items() if key not in typed_keys}
        if issubclass(node_cls, Parent):
            kwargs["children"] = self._parse_children(payload, node_type) or []
        if node_cls is Table:
            kwargs["data"] = self._parse_table_data(payload.get("data"))
        elif node_cls is TableCell:
            kwargs["data"] = self._parse_cell_data(payload.get("data"))
        return node_cls(**kwargs)

    def _parse_children(self, payload: Mapping[str, Any], node_type: str) -> Optional[List[Node]]:
        children = payload.get("children")
        if children is None:
            return None
        if not isinstance(children, list):
            raise ValueError(f"{node_type} node has non-list children: {type(children).__name__}")
        return [self.parse_node(child) for child in children]

    def _parse_unknown(self, node_type: str, payload: Mapping[str, Any]) -> UnknownNode:
        value = payload.get("value")
        typed_keys = (STRUCTURAL_KEYS | {"value"}) if isinstance(value, str) else STRUCTURAL_KEYS
        extra = {key: item for key, item in payload.items() if key not in typed_keys}
        return UnknownNode(
            node_type=node_type,
            value=value if isinstance(value, str) else None,
            children=self._parse_children(payload, node_type),
            extra=extra,
        )

    @staticmethod
    def _parse_table_data(data: Any) -> Optional[TableData]:
        if not isinstance(data, dict):
            return None
        col_widths = data.get("colWidths")
        return TableData(
            type=data.get("type"),
            col_widths=list(col_widths) if isinstance(col_widths, list) else None,
            extra={key: value for key, value in data.items() if key not in ("type", "colWidths")},
        )

    def _parse_cell_data(self, data: Any) -> Optional[CellData]:
        if not isinstance(data, dict):
            return None
        invalid_children = data.get("invalidChildren")
        if invalid_children is not None and not isinstance(invalid_children, list):
            raise ValueError(f"invalidChildren must be a list, got {type(invalid_children).__name__}")
        return CellData(
            invalid_children=[self.parse_node(child) for child in invalid_children] if invalid_children is not None else None,
            extra={key: value for key, value in data.items() if key != "invalidChildren"},
        )


def load_tree(payload: Mapping[str, Any]) -> Root:
    """Build a root node from an mdast JSON mapping."""
    return MdastParser(payload).parse()


def dump_tree(node: Node) -> Dict[str, Any]:
    """Serialize ``node`` back into an mdast JSON mapping."""
    result: Dict[str, Any] = {"type": node.type}
    result.update(node.extra)

    if isinstance(node, UnknownNode):
        if node.value is not None:
            result["value"] = node.value
        if node.children is not None:
            result["children"] = [dump_tree(child) for child in node.children]
        return result

    entry = NODE_FIELDS.get(node.type)
    for key, attr in entry[1] if entry else ():
        value = getattr(node, attr)
        if value is not None:
            result[key] = value

    if isinstance(node, Table) and node.data is not None:
        data = dict(node.data.extra)
        if node.data.type is not None:
            data["type"] = node.data.type
        if node.data.col_widths is not None:
            data["colWidths"] = list(node.data.col_widths)
        result["data"] = data
    elif isinstance(node, TableCell) and node.data is not None:
        data = dict(node.data.extra)
        if node.data.invalid_children is not None:
            data["invalidChildren"] = [dump_tree(child) for child in node.data.invalid_children]
        result["data"] = data

    if isinstance(node, Parent):
        result["children"] = [dump_tree(child) for child in node.children]
    return result


def collect_invalid_tables(root: Node) -> List[InvalidTable]:
    """Find tables whose cells carry invalid children, in document order."""
    found: List[InvalidTable] = []

    def visit(parent: Node) -> None:
        for child in parent.children:  # type: ignore[attr-defined]
            if isinstance(child, Table) and _has_invalid_cells(child):
                found.append(InvalidTable(inner=child, parent=parent))  # type: ignore[arg-type]
                continue
            if is_parent(child):
                visit(child)

    if is_parent(root):
        visit(root)
    return found


def _has_invalid_cells(table: Table) -> bool:
    for row in table.children:
        if not is_parent(row):
            continue
        for cell in row.children:  # type: ignore[attr-defined]
            if isinstance(cell, TableCell) and cell.data is not None and cell.data.invalid_children is not None:
                return True
    return False
