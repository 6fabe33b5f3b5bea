"""Entry-point for the mdast table rewriting pipeline."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from mdast_renderer.model.document_model import DocumentModel, RenderOptions
from mdast_renderer.parser.mdast_loader import MdastParser, collect_invalid_tables, dump_tree
from mdast_renderer.renderer.html_renderer import HtmlRenderer
from mdast_renderer.renderer.table_rewriter import GridTableRewriter, InvalidTableRewriter
from mdast_renderer.utils.debug import DebugDumper
from mdast_renderer.utils.logger import get_logger, set_level
from mdast_renderer.utils.unique_file_name import UniqueFileName

LOGGER = get_logger(__name__)


def build_document_model(mdast_path: Path) -> DocumentModel:
    """Load an mdast JSON file and locate its invalid tables."""
    mdast_path = Path(mdast_path)
    root = MdastParser.from_file(mdast_path).parse()
    return DocumentModel(root=root, invalid_tables=collect_invalid_tables(root), source_name=mdast_path.name)


def transform_document(model: DocumentModel, options: Optional[RenderOptions] = None) -> DocumentModel:
    """Replace invalid tables, then grid tables, with literal HTML nodes."""
    options = options or RenderOptions()
    invalid = InvalidTableRewriter(options).rewrite(model.invalid_tables)
    grid = GridTableRewriter(options).rewrite(model.root)
    LOGGER.info("Converted %d invalid and %d grid table(s) in %s", invalid, grid, model.source_name or "document")
    return model


def render_outputs(
    model: DocumentModel,
    output_dir: Path,
    file_names: UniqueFileName,
    *,
    options: Optional[RenderOptions] = None,
    html: bool = True,
    json_tree: bool = True,
) -> List[Path]:
    """Write the transformed tree and/or its HTML page under names unique to the session."""
    output_dir.mkdir(parents=True, exist_ok=True)
    # Reserve the .json name so inputs sharing a stem (report.json, report.mdast) get distinct outputs.
    name = Path(file_names.generate(Path(model.source_name or "document.json").stem + ".json"))
    written: List[Path] = []
    if json_tree:
        target = output_dir / name.with_suffix(".json")
        target.write_text(json.dumps(dump_tree(model.root), indent=2, ensure_ascii=False), encoding="utf-8")
        written.append(target)
    if html:
        target = output_dir / name.with_suffix(".html")
        HtmlRenderer(target).render(model, options)
        written.append(target)
    for path in written:
        LOGGER.info("Wrote %s", path)
    return written


def main(
    mdast_files: Iterable[str],
    output_dir: Optional[str] = None,
    *,
    allow_dangerous_html: bool = False,
    debug: bool = False,
) -> List[Path]:
    """Run the load → rewrite → render pipeline over every input file."""
    paths = [Path(name).resolve() for name in mdast_files]
    for path in paths:
        if not path.exists():
            raise FileNotFoundError(f"mdast file not found: {path}")
    if not paths:
        return []

    output_path = Path(output_dir).resolve() if output_dir else paths[0].parent / "rendered"
    options = RenderOptions(allow_dangerous_html=allow_dangerous_html)
    file_names = UniqueFileName()
    written: List[Path] = []

    for path in paths:
        LOGGER.info("Building document model for %s", path.name)
        model = transform_document(build_document_model(path), options)
        outputs = render_outputs(model, output_path, file_names, options=options)
        written.extend(outputs)
        if debug:
            DebugDumper(output_path / "debug" / outputs[0].stem).dump(model)

    return written


def cli(argv: Optional[List[str]] = None) -> None:
    """Command line wrapper around :func:`main`."""
    import argparse

    parser = argparse.ArgumentParser(description="Replace invalid and grid tables in mdast JSON with literal HTML")
    parser.add_argument("mdast_files", nargs="+", help="Paths to mdast JSON files")
    parser.add_argument("--output", help="Directory to write generated artifacts")
    parser.add_argument("--allow-dangerous-html", action="store_true", help="Pass raw HTML nodes through unescaped")
    parser.add_argument("--debug", action="store_true", help="Verbose logging and debug dumps")

    args = parser.parse_args(argv)
    if args.debug:
        set_level(logging.DEBUG)
    main(args.mdast_files, args.output, allow_dangerous_html=args.allow_dangerous_html, debug=args.debug)


if __name__ == "__main__":  # pragma: no cover
    cli()
