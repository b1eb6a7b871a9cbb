"""Rewrite the fold marker of a callout header line."""

import logging
import re
from collections.abc import Iterable

from .model import Callout, LineEdit

logger = logging.getLogger(__name__)

# Quote prefix may be nested ("> > [!tip]"); only the marker group changes.
MARKER_RE = re.compile(r"^(?P<head>(?:>\s*)+\[![A-Za-z0-9-]+\])(?P<marker>[+-]?)(?P<rest>.*)$")

COLLAPSED_MARKER = "-"
EXPANDED_MARKER = "+"


def update_collapse_state(callout: Callout, collapsed: bool) -> str | None:
    """
    Return the header line with its marker set for ``collapsed``.

    Returns None when nothing would change: the header is already in the
    requested state (an unmarked header counts as expanded) or it does not
    look like a callout header at all.
    """
    line = callout.raw_line
    m = MARKER_RE.match(line)
    if not m:
        logger.debug("line %d is not a callout header: %r", callout.start_line, line)
        return None

    current = m.group("marker")
    if collapsed and current == COLLAPSED_MARKER:
        return None
    if not collapsed and current != COLLAPSED_MARKER:
        return None

    marker = COLLAPSED_MARKER if collapsed else EXPANDED_MARKER
    updated = m.group("head") + marker + m.group("rest")
    return None if updated == line else updated


def header_edit(callout: Callout, collapsed: bool) -> LineEdit | None:
    updated = update_collapse_state(callout, collapsed)
    if updated is None:
        return None
    return LineEdit(line=callout.start_line, old_text=callout.raw_line, new_text=updated)


def order_edits(edits: Iterable[LineEdit]) -> list[LineEdit]:
    """Bottom-up order, so applying one edit never moves a pending one."""
    return sorted(edits, key=lambda e: e.line, reverse=True)
