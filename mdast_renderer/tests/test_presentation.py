"""Tests for the presentational tree and its HTML serialization."""
import unittest

from mdast_renderer.model.nodes import (
    Break,
    Code,
    Emphasis,
    Heading,
    Html,
    Image,
    InlineCode,
    Link,
    ListItem,
    ListNode,
    Paragraph,
    RenderedHtml,
    Root,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    UnknownNode,
)
from mdast_renderer.renderer.html_serializer import to_html
from mdast_renderer.renderer.presentation import (
    Element,
    PresentationRoot,
    Raw,
    TextNode,
    find_element,
    to_presentation,
)


def render(node, allow_dangerous_html=False) -> str:
    tree = to_presentation(node, allow_dangerous_html=allow_dangerous_html)
    return to_html(tree, allow_dangerous_html=allow_dangerous_html)


class PresentationConverterTest(unittest.TestCase):
    """Document nodes convert the way mdast-to-hast lays them out."""

    def test_root_joins_blocks_with_newlines(self) -> None:
        root = Root(children=[Paragraph(children=[Text(value="a")]), Heading(depth=2, children=[Text(value="b")])])
        self.assertEqual(render(root), "<p>a</p>\n<h2>b</h2>")

    def test_inline_formatting(self) -> None:
        paragraph = Paragraph(
            children=[
                Strong(children=[Text(value="bold")]),
                Emphasis(children=[Text(value="it")]),
                InlineCode(value="a\nb"),
                Break(),
            ]
        )
        self.assertEqual(render(paragraph), "<p><strong>bold</strong><em>it</em><code>a b</code><br>\n</p>")

    def test_code_block_language_class(self) -> None:
        self.assertEqual(
            render(Code(value="x = 1", lang="python")),
            '<pre><code class="language-python">x = 1\n</code></pre>',
        )

    def test_links_and_images_escape_attributes(self) -> None:
        link = Link(url="https://example.com/?a=1&b=2", title='say "hi"', children=[Text(value="go")])
        self.assertEqual(
            render(link),
            '<a href="https://example.com/?a=1&amp;b=2" title="say &quot;hi&quot;">go</a>',
        )
        self.assertEqual(render(Image(url="pic.png", alt="A")), '<img src="pic.png" alt="A">')

    def test_text_is_escaped(self) -> None:
        self.assertEqual(render(Text(value="<b> & co")), "&lt;b&gt; &amp; co")

    def test_html_dropped_unless_allowed(self) -> None:
        paragraph = Paragraph(children=[Text(value="a"), Html(value="<span>b</span>")])
        self.assertEqual(render(paragraph), "<p>a</p>")
        self.assertEqual(render(paragraph, allow_dangerous_html=True), "<p>a<span>b</span></p>")

    def test_rendered_html_passes_through_without_flag(self) -> None:
        paragraph = Paragraph(children=[RenderedHtml(value="<table></table>"), Html(value="<i>x</i>")])
        self.assertEqual(render(paragraph), "<p><table></table></p>")

    def test_tight_and_task_lists(self) -> None:
        tight = ListNode(children=[ListItem(children=[Paragraph(children=[Text(value="one")])])])
        self.assertEqual(render(tight), "<ul>\n<li>one</li>\n</ul>")

        task = ListNode(
            ordered=True,
            start=3,
            children=[ListItem(checked=True, children=[Paragraph(children=[Text(value="done")])])],
        )
        self.assertEqual(
            render(task),
            '<ol start="3" class="contains-task-list">\n'
            '<li class="task-list-item"><input type="checkbox" checked disabled> done</li>\n</ol>',
        )

    def test_loose_list_keeps_paragraphs(self) -> None:
        loose = ListNode(spread=True, children=[ListItem(children=[Paragraph(children=[Text(value="one")])])])
        self.assertEqual(render(loose), "<ul>\n<li>\n<p>one</p>\n</li>\n</ul>")

    def test_table_rows_follow_alignment(self) -> None:
        table = Table(
            align=["left", None],
            children=[
                TableRow(children=[TableCell(children=[Text(value="h1")]), TableCell(children=[Text(value="h2")])]),
                TableRow(children=[TableCell(children=[Text(value="only")])]),
            ],
        )
        self.assertEqual(
            render(table),
            '<table>\n<thead>\n<tr>\n<th align="left">h1</th>\n<th>h2</th>\n</tr>\n</thead>\n'
            '<tbody>\n<tr>\n<td align="left">only</td>\n<td></td>\n</tr>\n</tbody>\n</table>',
        )

    def test_unknown_nodes(self) -> None:
        container = UnknownNode(node_type="details", children=[Text(value="x")])
        literal = UnknownNode(node_type="inlineMath", value="E=mc^2")
        empty = UnknownNode(node_type="footnoteReference")
        self.assertEqual(render(container), "<div>x</div>")
        self.assertEqual(render(literal), "E=mc^2")
        self.assertEqual(render(Paragraph(children=[empty])), "<p></p>")

    def test_find_element_depth_first(self) -> None:
        inner = Element(tag_name="table")
        tree = PresentationRoot(children=[Element(tag_name="div", children=[inner]), Element(tag_name="table")])
        self.assertIs(find_element(tree, "table"), inner)
        self.assertIsNone(find_element(TextNode(value="x"), "table"))


class HtmlSerializerTest(unittest.TestCase):
    def test_void_elements_have_no_closing_tag(self) -> None:
        colgroup = Element(tag_name="colgroup", children=[Element(tag_name="col", properties={"style": "width: 1px"})])
        self.assertEqual(to_html(colgroup), '<colgroup><col style="width: 1px"></colgroup>')

    def test_raw_escaped_unless_allowed(self) -> None:
        self.assertEqual(to_html(Raw(value="<i>x</i>")), "&lt;i&gt;x&lt;/i&gt;")
        self.assertEqual(to_html(Raw(value="<i>x</i>"), allow_dangerous_html=True), "<i>x</i>")
        self.assertEqual(to_html(Raw(value="<i>x</i>", trusted=True)), "<i>x</i>")

    def test_boolean_and_missing_properties(self) -> None:
        element = Element(tag_name="input", properties={"type": "checkbox", "checked": False, "disabled": True, "title": None})
        self.assertEqual(to_html(element), '<input type="checkbox" disabled>')


if __name__ == '__main__':
    unittest.main()
