"""Merge a freshly rendered block into file text.

The outcome depends on where a block already sits, where the config asks
for it, and whether force is set. Without force an existing block keeps
its position; with force it moves to the requested one.
"""

from __future__ import annotations

from enum import Enum

from schema_annotator.annotation.locator import Location
from schema_annotator.config import AnnotateConfig, Position


class MergeAction(str, Enum):
    INSERT_TOP = "insert_top"
    INSERT_BOTTOM = "insert_bottom"
    REPLACE_TOP = "replace_top"
    REPLACE_BOTTOM = "replace_bottom"
    MOVE_TO_TOP = "move_to_top"
    MOVE_TO_BOTTOM = "move_to_bottom"


# (existing position, requested position, force) -> action
TRANSITIONS: dict[tuple[Position, Position, bool], MergeAction] = {
    (Position.NONE, Position.BEFORE, False): MergeAction.INSERT_TOP,
    (Position.NONE, Position.BEFORE, True): MergeAction.INSERT_TOP,
    (Position.NONE, Position.AFTER, False): MergeAction.INSERT_BOTTOM,
    (Position.NONE, Position.AFTER, True): MergeAction.INSERT_BOTTOM,
    (Position.BEFORE, Position.BEFORE, False): MergeAction.REPLACE_TOP,
    (Position.BEFORE, Position.AFTER, False): MergeAction.REPLACE_TOP,
    (Position.BEFORE, Position.BEFORE, True): MergeAction.REPLACE_TOP,
    (Position.BEFORE, Position.AFTER, True): MergeAction.MOVE_TO_BOTTOM,
    (Position.AFTER, Position.BEFORE, False): MergeAction.REPLACE_BOTTOM,
    (Position.AFTER, Position.AFTER, False): MergeAction.REPLACE_BOTTOM,
    (Position.AFTER, Position.AFTER, True): MergeAction.REPLACE_BOTTOM,
    (Position.AFTER, Position.BEFORE, True): MergeAction.MOVE_TO_TOP,
}


def decide(existing: Position, requested: Position, force: bool) -> MergeAction:
    """Look up the merge action for a located block and a requested position.

    Raises:
        ValueError: If requested is not BEFORE or AFTER.
    """
    action = TRANSITIONS.get((existing, requested, bool(force)))
    if action is None:
        raise ValueError(f"Cannot place an annotation block at '{requested.value}'")
    return action


def merge(text: str, location: Location, block: str, config: AnnotateConfig) -> str:
    """Compute new file text with block placed per config.

    Args:
        text: Current file content.
        location: Result of locate() on text.
        block: Freshly rendered annotation block.
        config: Supplies position and force.

    Returns:
        The new file content. Equal to text when nothing changed.
    """
    action = decide(location.position, config.position, config.force)

    if action is MergeAction.INSERT_TOP:
        return block + text
    if action is MergeAction.INSERT_BOTTOM:
        return _append(text, block)
    if action is MergeAction.REPLACE_TOP:
        return block + text[location.end:]
    if action is MergeAction.REPLACE_BOTTOM:
        return text[:location.start] + block
    if action is MergeAction.MOVE_TO_TOP:
        return block + _without_separator(text[:location.start])
    return _append(text[location.end:], block)


def strip(text: str, location: Location) -> str:
    """Remove the located block (and its separator) from text."""
    if location.position is Position.BEFORE:
        return text[location.end:]
    if location.position is Position.AFTER:
        return _without_separator(text[:location.start])
    return text


def _append(content: str, block: str) -> str:
    # Exactly one blank line between content and a trailing block
    if not content:
        return block
    if not content.endswith("\n"):
        content += "\n"
    return content + "\n" + block


def _without_separator(content: str) -> str:
    if content.endswith("\n\n"):
        return content[:-1]
    if content == "\n":
        return ""
    return content
