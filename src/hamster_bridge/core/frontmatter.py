# src/hamster_bridge/core/frontmatter.py

"""
Front-matter metadata extraction.

Values are a small tagged union: a scalar string, or a tuple of strings (e.g. `tags`).
Malformed YAML fails fast with FrontmatterError; the command using the metadata aborts.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

import yaml

from ..errors import FrontmatterError
from .document import Document

logger = logging.getLogger(__name__)

MetadataValue = str | tuple[str, ...]
FrontmatterMetadata = Mapping[str, MetadataValue]

EMPTY_METADATA: FrontmatterMetadata = MappingProxyType({})


def _normalize_value(value: Any) -> MetadataValue | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, (list, tuple, set)):
        items = tuple(str(item) for item in value if item is not None)
        return items or None
    if isinstance(value, (bool, int, float, dt.date, dt.datetime)):
        return str(value)
    # Nested mappings have no meaning for a fact description.
    return None


def parse_frontmatter_block(raw: str) -> dict[str, MetadataValue]:
    """Parse a raw YAML block into a normalized metadata dict."""
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise FrontmatterError(str(e).splitlines()[0] if str(e) else "invalid YAML") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontmatterError(f"expected a mapping, got {type(data).__name__}")

    out: dict[str, MetadataValue] = {}
    for key, value in data.items():
        norm = _normalize_value(value)
        if norm is None:
            logger.debug("Skipping front-matter key %r (empty or unsupported value).", key)
            continue
        out[str(key)] = norm
    return out


def extract_frontmatter(document: Document) -> FrontmatterMetadata:
    """
    Extract metadata from the document's front-matter block.

    The raw slice is lines [start_line, end_line) of the document; a document
    without front-matter yields an empty mapping.
    """
    pos = document.frontmatter
    if pos is None:
        return EMPTY_METADATA

    raw = "\n".join(document.lines()[pos.start_line:pos.end_line])
    return MappingProxyType(parse_frontmatter_block(raw))
