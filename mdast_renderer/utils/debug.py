"""Helpers to persist intermediate representations for debugging."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from mdast_renderer.model.document_model import DocumentModel
from mdast_renderer.parser.mdast_loader import dump_tree


class DebugDumper:
    """Writes intermediate artifacts onto disk for inspection."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def dump(self, model: DocumentModel) -> Path:
        """Persist the document tree as JSON for offline analysis."""
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / "document_model.json"
        target.write_text(json.dumps(self._serialize(model), indent=2, ensure_ascii=False), encoding="utf-8")
        return target

    def _serialize(self, model: DocumentModel) -> Dict[str, Any]:
        return {
            "source": model.source_name,
            "invalid_tables": len(model.invalid_tables),
            "metadata": model.metadata or {},
            "root": dump_tree(model.root),
        }
