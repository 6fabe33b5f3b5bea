"""In-memory representation of mdast document trees."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional


@dataclass(eq=False)
class Node:
    """Base class for every document node. Nodes compare by identity.

    ``extra`` keeps the source keys without a typed field (``data``, ``position``, ...).
    """

    type: ClassVar[str] = ""

    extra: Dict[str, object] = field(default_factory=dict, repr=False)


@dataclass(eq=False)
class Parent(Node):
    """Node owning an ordered sequence of child nodes."""

    children: List[Node] = field(default_factory=list)


@dataclass(eq=False)
class Literal(Node):
    """Node carrying a text value."""

    value: str = ""


@dataclass(eq=False)
class Root(Parent):
    type: ClassVar[str] = "root"


@dataclass(eq=False)
class Paragraph(Parent):
    type: ClassVar[str] = "paragraph"


@dataclass(eq=False)
class Heading(Parent):
    type: ClassVar[str] = "heading"

    depth: int = 1


@dataclass(eq=False)
class Blockquote(Parent):
    type: ClassVar[str] = "blockquote"


@dataclass(eq=False)
class ListNode(Parent):
    type: ClassVar[str] = "list"

    ordered: bool = False
    start: Optional[int] = None
    spread: bool = False


@dataclass(eq=False)
class ListItem(Parent):
    type: ClassVar[str] = "listItem"

    checked: Optional[bool] = None
    spread: bool = False


@dataclass(eq=False)
class Strong(Parent):
    type: ClassVar[str] = "strong"


@dataclass(eq=False)
class Emphasis(Parent):
    type: ClassVar[str] = "emphasis"


@dataclass(eq=False)
class Delete(Parent):
    type: ClassVar[str] = "delete"


@dataclass(eq=False)
class Link(Parent):
    type: ClassVar[str] = "link"

    url: str = ""
    title: Optional[str] = None


@dataclass(eq=False)
class Text(Literal):
    type: ClassVar[str] = "text"


@dataclass(eq=False)
class InlineCode(Literal):
    type: ClassVar[str] = "inlineCode"


@dataclass(eq=False)
class Code(Literal):
    type: ClassVar[str] = "code"

    lang: Optional[str] = None
    meta: Optional[str] = None


@dataclass(eq=False)
class Html(Literal):
    """Literal HTML passed to downstream renderers as-is."""

    type: ClassVar[str] = "html"


@dataclass(eq=False)
class RenderedHtml(Html):
    """HTML this library rendered from a rewritten table; trusted by page rendering."""


@dataclass(eq=False)
class Image(Node):
    type: ClassVar[str] = "image"

    url: str = ""
    alt: Optional[str] = None
    title: Optional[str] = None


@dataclass(eq=False)
class Break(Node):
    type: ClassVar[str] = "break"


@dataclass(eq=False)
class ThematicBreak(Node):
    type: ClassVar[str] = "thematicBreak"


@dataclass(slots=True)
class TableData:
    """Table metadata. ``type == "grid"`` marks explicit column layout."""

    type: Optional[str] = None
    col_widths: Optional[List[object]] = None
    extra: Dict[str, object] = field(default_factory=dict)


@dataclass(slots=True)
class CellData:
    """Cell metadata; ``invalid_children`` overrides the rendered content."""

    invalid_children: Optional[List[Node]] = None
    extra: Dict[str, object] = field(default_factory=dict)


@dataclass(eq=False)
class Table(Parent):
    type: ClassVar[str] = "table"

    align: Optional[List[Optional[str]]] = None
    data: Optional[TableData] = None

    @property
    def is_grid(self) -> bool:
        return self.data is not None and self.data.type == "grid"


@dataclass(eq=False)
class TableRow(Parent):
    type: ClassVar[str] = "tableRow"


@dataclass(eq=False)
class TableCell(Parent):
    type: ClassVar[str] = "tableCell"

    data: Optional[CellData] = None


@dataclass(eq=False)
class UnknownNode(Node):
    """Node kind without a dedicated class; keeps its raw fields."""

    node_type: str = "unknown"
    value: Optional[str] = None
    children: Optional[List[Node]] = None

    @property
    def type(self) -> str:  # type: ignore[override]
        return self.node_type


@dataclass(eq=False)
class InvalidTable:
    """A table that failed normal rendering, paired with its container."""

    inner: Table
    parent: Optional[Parent] = None


def is_parent(node: Node) -> bool:
    """Return True when ``node`` holds a child sequence.

    Raises ``TypeError`` for a node whose ``children`` is set but is not a list.
    """
    children = getattr(node, "children", None)
    if children is None:
        return False
    if not isinstance(children, list):
        raise TypeError(f"{node.type or type(node).__name__} node has non-list children: {type(children).__name__}")
    return True
