"""Aggregate model combining the document tree and its irregular tables."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from mdast_renderer.model.nodes import InvalidTable, Root


@dataclass(slots=True, frozen=True)
class RenderOptions:
    """Options threaded through every tree to HTML conversion.

    ``allow_dangerous_html`` lets raw HTML nodes through unescaped; when False
    they are dropped during conversion and escaped during serialization.
    """

    allow_dangerous_html: bool = False


@dataclass(slots=True)
class DocumentModel:
    """Document tree that the rewriters and renderers consume."""

    root: Root
    invalid_tables: List[InvalidTable] = field(default_factory=list)
    source_name: Optional[str] = None
    metadata: Optional[dict] = None
