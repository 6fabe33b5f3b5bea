"""Convert document nodes into an HTML-shaped presentational tree.

The presentational tree is transient: it is built for one conversion, possibly
adjusted (e.g. a ``colgroup`` injected into a table) and then serialized by
:mod:`mdast_renderer.renderer.html_serializer`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Union

from mdast_renderer.model.nodes import (
    Blockquote,
    Break,
    Code,
    Heading,
    Html,
    Image,
    InlineCode,
    Link,
    ListItem,
    ListNode,
    Node,
    Paragraph,
    RenderedHtml,
    Root,
    Table,
    TableRow,
    Text,
    is_parent,
)


@dataclass(eq=False)
class PresentationNode:
    """Base class of presentational nodes."""

    type: str = field(init=False, default="")


@dataclass(eq=False)
class Element(PresentationNode):
    tag_name: str = "div"
    properties: Dict[str, object] = field(default_factory=dict)
    children: List[PresentationNode] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.type = "element"


@dataclass(eq=False)
class TextNode(PresentationNode):
    value: str = ""

    def __post_init__(self) -> None:
        self.type = "text"


@dataclass(eq=False)
class Raw(PresentationNode):
    """Literal HTML; emitted verbatim when dangerous HTML is allowed or the value is ``trusted``."""

    value: str = ""
    trusted: bool = False

    def __post_init__(self) -> None:
        self.type = "raw"


@dataclass(eq=False)
class PresentationRoot(PresentationNode):
    children: List[PresentationNode] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.type = "root"


Converted = Union[PresentationNode, List[PresentationNode], None]


def wrap(nodes: List[PresentationNode], loose: bool = False) -> List[PresentationNode]:
    """Join ``nodes`` with newline text; ``loose`` also pads both ends."""
    result: List[PresentationNode] = []
    if loose:
        result.append(TextNode(value="\n"))
    for index, node in enumerate(nodes):
        if index:
            result.append(TextNode(value="\n"))
        result.append(node)
    if loose and nodes:
        result.append(TextNode(value="\n"))
    return result


class PresentationConverter:
    """Turns a document node into presentational nodes, mdast-to-hast style."""

    def __init__(self, allow_dangerous_html: bool = False) -> None:
        self.allow_dangerous_html = allow_dangerous_html
        self._handlers: Dict[str, Callable[[Node, Optional[Node]], Converted]] = {
            "root": self._root,
            "paragraph": self._paragraph,
            "heading": self._heading,
            "blockquote": self._blockquote,
            "list": self._list,
            "listItem": self._list_item,
            "strong": lambda node, parent: self._simple("strong", node),
            "emphasis": lambda node, parent: self._simple("em", node),
            "delete": lambda node, parent: self._simple("del", node),
            "link": self._link,
            "text": self._text,
            "inlineCode": self._inline_code,
            "code": self._code,
            "html": self._html,
            "image": self._image,
            "break": self._break,
            "thematicBreak": lambda node, parent: Element(tag_name="hr"),
            "table": self._table,
            "tableRow": self._table_row,
            "tableCell": lambda node, parent: self._simple("td", node),
        }

    # ------------------------------------------------------------------
    # Public helpers
    def convert(self, node: Node) -> PresentationNode:
        """Convert ``node``; an empty result becomes an empty root."""
        result = self.one(node, None)
        if isinstance(result, PresentationNode):
            return result
        return PresentationRoot(children=list(result or []))

    def one(self, node: Node, parent: Optional[Node]) -> Converted:
        handler = self._handlers.get(node.type)
        if handler is None:
            return self._unknown(node)
        return handler(node, parent)

    def all(self, parent: Node) -> List[PresentationNode]:
        values: List[PresentationNode] = []
        if not is_parent(parent):
            return values
        for child in parent.children:  # type: ignore[attr-defined]
            result = self.one(child, parent)
            if result is None:
                continue
            if isinstance(result, list):
                values.extend(result)
            else:
                values.append(result)
        return values

    # ------------------------------------------------------------------
    # Handlers
    def _root(self, node: Root, parent: Optional[Node]) -> PresentationRoot:
        return PresentationRoot(children=wrap(self.all(node)))

    def _simple(self, tag_name: str, node: Node) -> Element:
        return Element(tag_name=tag_name, children=self.all(node))

    def _paragraph(self, node: Paragraph, parent: Optional[Node]) -> Element:
        return self._simple("p", node)

    def _heading(self, node: Heading, parent: Optional[Node]) -> Element:
        depth = min(max(node.depth, 1), 6)
        return self._simple(f"h{depth}", node)

    def _blockquote(self, node: Blockquote, parent: Optional[Node]) -> Element:
        return Element(tag_name="blockquote", children=wrap(self.all(node), True))

    def _list(self, node: ListNode, parent: Optional[Node]) -> Element:
        properties: Dict[str, object] = {}
        if node.ordered and node.start is not None and node.start != 1:
            properties["start"] = node.start
        items = self.all(node)
        if any(isinstance(child, ListItem) and child.checked is not None for child in node.children):
            properties["class_name"] = ["contains-task-list"]
        return Element(tag_name="ol" if node.ordered else "ul", properties=properties, children=wrap(items, True))

    def _list_item(self, node: ListItem, parent: Optional[Node]) -> Element:
        loose = node.spread or (isinstance(parent, ListNode) and parent.spread)
        results = self.all(node)
        children: List[PresentationNode] = []
        properties: Dict[str, object] = {}

        if node.checked is not None:
            properties["class_name"] = ["task-list-item"]
            checkbox = Element(
                tag_name="input",
                properties={"type": "checkbox", "checked": node.checked, "disabled": True},
            )
            children.extend([checkbox, TextNode(value=" ")])

        for index, child in enumerate(results):
            is_paragraph = isinstance(child, Element) and child.tag_name == "p"
            if loose or index != 0 or not is_paragraph:
                children.append(TextNode(value="\n"))
            if is_paragraph and not loose:
                children.extend(child.children)  # type: ignore[attr-defined]
            else:
                children.append(child)

        if results:
            tail = results[-1]
            if loose or not (isinstance(tail, Element) and tail.tag_name == "p"):
                children.append(TextNode(value="\n"))
        return Element(tag_name="li", properties=properties, children=children)

    def _link(self, node: Link, parent: Optional[Node]) -> Element:
        properties: Dict[str, object] = {"href": node.url}
        if node.title is not None:
            properties["title"] = node.title
        return Element(tag_name="a", properties=properties, children=self.all(node))

    def _text(self, node: Text, parent: Optional[Node]) -> TextNode:
        return TextNode(value=node.value)

    def _inline_code(self, node: InlineCode, parent: Optional[Node]) -> Element:
        value = node.value.replace("\r\n", " ").replace("\n", " ")
        return Element(tag_name="code", children=[TextNode(value=value)])

    def _code(self, node: Code, parent: Optional[Node]) -> Element:
        properties: Dict[str, object] = {}
        if node.lang:
            properties["class_name"] = [f"language-{node.lang.split()[0]}"]
        value = f"{node.value}\n" if node.value else ""
        code = Element(tag_name="code", properties=properties, children=[TextNode(value=value)])
        return Element(tag_name="pre", children=[code])

    def _html(self, node: Html, parent: Optional[Node]) -> Optional[Raw]:
        if isinstance(node, RenderedHtml):
            return Raw(value=node.value, trusted=True)
        if not self.allow_dangerous_html:
            return None
        return Raw(value=node.value)

    def _image(self, node: Image, parent: Optional[Node]) -> Element:
        properties: Dict[str, object] = {"src": node.url, "alt": node.alt or ""}
        if node.title is not None:
            properties["title"] = node.title
        return Element(tag_name="img", properties=properties)

    def _break(self, node: Break, parent: Optional[Node]) -> List[PresentationNode]:
        return [Element(tag_name="br"), TextNode(value="\n")]

    def _table(self, node: Table, parent: Optional[Node]) -> Element:
        rows = node.children
        sections: List[PresentationNode] = []

        if rows:
            head_row = self._row(rows[0], node, "th")
            sections.append(Element(tag_name="thead", children=wrap([head_row], True)))
        if len(rows) > 1:
            body_rows = [self._row(row, node, "td") for row in rows[1:]]
            sections.append(Element(tag_name="tbody", children=wrap(body_rows, True)))

        return Element(tag_name="table", children=wrap(sections, True))

    def _table_row(self, node: TableRow, parent: Optional[Node]) -> Element:
        table = parent if isinstance(parent, Table) else None
        return self._row(node, table, "td")

    def _row(self, row: Node, table: Optional[Table], cell_tag: str) -> Element:
        """Render one row, padded or cut to the column count given by ``align``."""
        cells = row.children if is_parent(row) else []  # type: ignore[attr-defined]
        align = table.align if table is not None and table.align else None
        column_count = len(align) if align else len(cells)

        converted: List[PresentationNode] = []
        for index in range(column_count):
            properties: Dict[str, object] = {}
            if align and align[index]:
                properties["align"] = align[index]
            children = self.all(cells[index]) if index < len(cells) else []
            converted.append(Element(tag_name=cell_tag, properties=properties, children=children))
        return Element(tag_name="tr", children=wrap(converted, True))

    def _unknown(self, node: Node) -> Converted:
        if is_parent(node):
            return Element(tag_name="div", children=self.all(node))
        value = getattr(node, "value", None)
        if isinstance(value, str):
            return TextNode(value=value)
        return None


def to_presentation(node: Node, allow_dangerous_html: bool = False) -> PresentationNode:
    """Convert ``node`` to its presentational tree."""
    return PresentationConverter(allow_dangerous_html=allow_dangerous_html).convert(node)


def find_element(node: PresentationNode, tag_name: str) -> Optional[Element]:
    """Return the first element named ``tag_name`` in depth-first order."""
    if isinstance(node, Element) and node.tag_name == tag_name:
        return node
    for child in getattr(node, "children", None) or []:
        found = find_element(child, tag_name)
        if found is not None:
            return found
    return None
