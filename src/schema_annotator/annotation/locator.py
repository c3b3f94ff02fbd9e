"""Find an existing annotation block in file text.

Only two regions are scanned: the very start of the file and its trailing
comment region. Header-like text anywhere else is ordinary file content.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from schema_annotator.config import Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Location:
    """Where the managed block sits. ``text[start:end]`` is the block."""

    position: Position = Position.NONE
    start: int = 0
    end: int = 0

    @property
    def present(self) -> bool:
        return self.position is not Position.NONE


NOT_FOUND = Location()


def header_line(header: str, comment_prefix: str = "#") -> str:
    return f"{comment_prefix} {header}"


def locate(text: str, header: str, comment_prefix: str = "#") -> Location:
    """Locate the annotation block identified by header.

    Args:
        text: Current file content.
        header: Marker text, e.g. ``"== Schema Info"``.
        comment_prefix: Comment leader the block was rendered with.

    Returns:
        Location with position BEFORE, AFTER or NONE.
    """
    lines = text.splitlines(keepends=True)
    marker = header_line(header, comment_prefix)

    leading = _leading_block(lines, marker, comment_prefix)
    if leading is not None:
        return leading

    trailing = _trailing_block(lines, marker, comment_prefix)
    if trailing is not None:
        return trailing

    if lines and lines[0].rstrip("\r\n") == marker:
        logger.warning("Annotation header at top of file is not terminated by a blank line; ignoring it")

    return NOT_FOUND


def _is_blank(line: str) -> bool:
    return not line.strip()


def _is_comment(line: str, comment_prefix: str) -> bool:
    return line.startswith(comment_prefix) and not _is_blank(line)


def _leading_block(lines: list[str], marker: str, comment_prefix: str) -> Location | None:
    if not lines or lines[0].rstrip("\r\n") != marker:
        return None

    end = len(lines[0])
    for line in lines[1:]:
        end += len(line)
        if _is_blank(line):
            return Location(Position.BEFORE, 0, end)
        if not _is_comment(line, comment_prefix):
            break

    return None


def _trailing_block(lines: list[str], marker: str, comment_prefix: str) -> Location | None:
    header_idx = None
    for i in range(len(lines) - 1, -1, -1):
        if lines[i].rstrip("\r\n") == marker:
            header_idx = i
            break
        if not (_is_comment(lines[i], comment_prefix) or _is_blank(lines[i])):
            return None
    if header_idx is None:
        return None

    # Comment lines, then only blank lines up to end of file
    seen_blank = False
    for line in lines[header_idx + 1:]:
        if _is_blank(line):
            seen_blank = True
        elif seen_blank or not _is_comment(line, comment_prefix):
            return None

    start = sum(len(line) for line in lines[:header_idx])
    end = sum(len(line) for line in lines)
    return Location(Position.AFTER, start, end)
