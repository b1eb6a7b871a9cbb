"""Heading-bounded sections of a document."""

from collections.abc import Iterable, Sequence

from .model import Callout

DEFAULT_HEADING_MARKER = "#"


def is_heading(line: str, marker: str = DEFAULT_HEADING_MARKER) -> bool:
    return line.startswith(marker)


def resolve_section(
    lines: Sequence[str], reference_line: int, heading_marker: str = DEFAULT_HEADING_MARKER
) -> tuple[int, int]:
    """
    Get the inclusive line range of the section around ``reference_line``.

    The section starts at the nearest heading at or above the reference
    line (the heading belongs to its section) or at line 0, and ends one
    line before the next heading below it, or at the last line.
    """
    if not lines:
        return (0, 0)
    ref = min(max(reference_line, 0), len(lines) - 1)

    start = ref
    while start > 0 and not is_heading(lines[start], heading_marker):
        start -= 1

    end = ref + 1
    while end < len(lines) and not is_heading(lines[end], heading_marker):
        end += 1

    return (start, end - 1)


def callouts_in_range(callouts: Iterable[Callout], start: int, end: int) -> list[Callout]:
    """Callouts fully inside [start, end]; partial overlaps are dropped."""
    return [c for c in callouts if start <= c.start_line and c.end_line <= end]


def callouts_in_section(
    callouts: Iterable[Callout],
    lines: Sequence[str],
    reference_line: int,
    heading_marker: str = DEFAULT_HEADING_MARKER,
) -> list[Callout]:
    start, end = resolve_section(lines, reference_line, heading_marker)
    return callouts_in_range(callouts, start, end)
