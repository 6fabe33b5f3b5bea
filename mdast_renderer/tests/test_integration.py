"""
Integration tests for the complete load → rewrite → render pipeline.
"""

import json
import tempfile
import unittest
from pathlib import Path

from mdast_renderer.main import build_document_model, main, render_outputs, transform_document
from mdast_renderer.model.document_model import RenderOptions
from mdast_renderer.model.nodes import Html
from mdast_renderer.utils.debug import DebugDumper
from mdast_renderer.utils.unique_file_name import UniqueFileName

DOCUMENT = {
    "type": "root",
    "children": [
        {"type": "paragraph", "children": [{"type": "text", "value": "Before"}]},
        {
            "type": "table",
            "data": {"type": "grid", "colWidths": [0.25, 0.75]},
            "children": [
                {
                    "type": "tableRow",
                    "children": [
                        {"type": "tableCell", "children": [{"type": "text", "value": "k"}]},
                        {"type": "tableCell", "children": [{"type": "text", "value": "v"}]},
                    ],
                }
            ],
        },
        {
            "type": "table",
            "children": [
                {
                    "type": "tableRow",
                    "children": [
                        {
                            "type": "tableCell",
                            "children": [],
                            "data": {"invalidChildren": [{"type": "code", "value": "print()"}]},
                        }
                    ],
                }
            ],
        },
    ],
}


class IntegrationTest(unittest.TestCase):
    """End-to-end processing of mdast JSON files."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, relative: str) -> Path:
        path = self.tmp / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(DOCUMENT), encoding="utf-8")
        return path

    def test_transform_replaces_both_table_kinds(self) -> None:
        model = build_document_model(self._write("doc.json"))
        self.assertEqual(len(model.invalid_tables), 1)

        transform_document(model)

        grid_html, invalid_html = model.root.children[1], model.root.children[2]
        self.assertIsInstance(grid_html, Html)
        self.assertIn('<col style="width: 25%"><col style="width: 75%">', grid_html.value)
        self.assertIsInstance(invalid_html, Html)
        self.assertIn("<pre><code>print()\n</code></pre>", invalid_html.value)

    def test_render_outputs_writes_json_and_html(self) -> None:
        model = transform_document(build_document_model(self._write("doc.json")))
        written = render_outputs(
            model, self.tmp / "out", UniqueFileName(), options=RenderOptions(allow_dangerous_html=True)
        )

        self.assertEqual([path.name for path in written], ["doc.json", "doc.html"])
        tree = json.loads(written[0].read_text(encoding="utf-8"))
        self.assertEqual([child["type"] for child in tree["children"]], ["paragraph", "html", "html"])
        page = written[1].read_text(encoding="utf-8")
        self.assertTrue(page.startswith("<!DOCTYPE html>"))
        self.assertIn("<title>doc.json</title>", page)
        self.assertIn("<colgroup>", page)

    def test_inputs_with_same_name_do_not_overwrite(self) -> None:
        first = self._write("a/doc.json")
        second = self._write("b/doc.json")

        written = main([str(first), str(second)], str(self.tmp / "out"))

        names = sorted(path.name for path in written)
        self.assertEqual(names, ["doc-1.html", "doc-1.json", "doc.html", "doc.json"])
        for path in written:
            self.assertTrue(path.exists())

    def test_page_keeps_rewritten_tables_by_default(self) -> None:
        model = transform_document(build_document_model(self._write("doc.json")))
        model.root.children.append(Html(value="<script>alert(1)</script>"))
        written = render_outputs(model, self.tmp / "out", UniqueFileName(), json_tree=False)

        page = written[0].read_text(encoding="utf-8")
        self.assertIn('<colgroup><col style="width: 25%"><col style="width: 75%"></colgroup>', page)
        self.assertIn("<th>k</th>", page)
        self.assertIn("<pre><code>print()\n</code></pre>", page)
        self.assertNotIn("<script>", page)

    def test_inputs_sharing_a_stem_do_not_overwrite(self) -> None:
        first = self._write("report.json")
        second = self._write("report.mdast")

        written = main([str(first), str(second)], str(self.tmp / "out"))

        names = sorted(path.name for path in written)
        self.assertEqual(names, ["report-1.html", "report-1.json", "report.html", "report.json"])
        self.assertEqual(len({path.resolve() for path in written}), 4)

    def test_missing_input_raises(self) -> None:
        with self.assertRaises(FileNotFoundError):
            main([str(self.tmp / "missing.json")])

    def test_debug_dump(self) -> None:
        model = build_document_model(self._write("doc.json"))
        target = DebugDumper(self.tmp / "debug").dump(model)
        payload = json.loads(target.read_text(encoding="utf-8"))
        self.assertEqual(payload["source"], "doc.json")
        self.assertEqual(payload["invalid_tables"], 1)
        self.assertEqual(payload["root"]["type"], "root")


if __name__ == '__main__':
    unittest.main()
