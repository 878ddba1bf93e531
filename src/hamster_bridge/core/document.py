# src/hamster_bridge/core/document.py

"""
Markdown documents and a minimal editor over them.

A Document keeps the raw note text together with the position of its front-matter
block, the same shape a note-taking host exposes through its metadata cache.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

FRONTMATTER_OPEN = "---"
FRONTMATTER_CLOSE = ("---", "...")


@dataclass(frozen=True, slots=True)
class FrontmatterPosition:
    # Line index of the opening delimiter and of the closing delimiter.
    start_line: int
    end_line: int


def split_lines(text: str) -> list[str]:
    return [line.rstrip("\r") for line in text.split("\n")]


def locate_frontmatter(text: str) -> FrontmatterPosition | None:
    """
    Find the front-matter block at the top of a note.

    The first line must be `---`; the block ends at the next `---` or `...` line.
    Returns None when there is no complete block.
    """
    lines = split_lines(text)
    if not lines or lines[0].rstrip() != FRONTMATTER_OPEN:
        return None
    for idx in range(1, len(lines)):
        if lines[idx].rstrip() in FRONTMATTER_CLOSE:
            return FrontmatterPosition(start_line=0, end_line=idx)
    return None


@dataclass(frozen=True, slots=True)
class Document:
    text: str
    frontmatter: FrontmatterPosition | None = None
    path: Path | None = None

    @classmethod
    def from_text(cls, text: str, path: Path | None = None) -> "Document":
        return cls(text=text, frontmatter=locate_frontmatter(text), path=path)

    @classmethod
    def read(cls, path: str | Path) -> "Document":
        p = Path(path)
        return cls.from_text(p.read_text("utf-8"), path=p)

    def lines(self) -> list[str]:
        return split_lines(self.text)


class FileEditor:
    """Read-only editor: a document plus the line the cursor sits on (0-based)."""

    def __init__(self, document: Document, cursor_line: int = 0) -> None:
        self.document = document
        self.cursor_line = cursor_line

    @classmethod
    def open(cls, path: str | Path, cursor_line: int = 0) -> "FileEditor":
        return cls(Document.read(path), cursor_line)

    def get_cursor_line(self) -> int:
        return self.cursor_line

    def get_line(self, line: int) -> str:
        lines = self.document.lines()
        if line < 0 or line >= len(lines):
            logger.debug("Line %d is outside the document (%d lines).", line, len(lines))
            return ""
        return lines[line]
