"""Callout detection over raw document text.

Nesting follows quote depth: a callout's content lines are de-quoted one
level and scanned again with the same start-line predicate, so
``> > [!tip]`` inside ``> [!note]`` becomes a nested callout while a
second ``> [!note]`` at the same depth starts a sibling.
"""

import logging
import re
from collections.abc import Iterable, Iterator, Sequence

from .model import Callout

logger = logging.getLogger(__name__)

HEADER_RE = re.compile(r"^>\s*\[!([A-Za-z0-9-]+)\]([+-]?)(.*)$")
QUOTE_RE = re.compile(r"^>\s?")


def is_start_line(line: str) -> bool:
    return HEADER_RE.match(line) is not None


def is_quote_line(line: str) -> bool:
    return line.startswith(">")


def parse_header(line: str) -> tuple[str, str, bool] | None:
    """Return (type, title, is_collapsed) for a header line, else None."""
    m = HEADER_RE.match(line)
    if not m:
        return None
    ctype, marker, title = m.groups()
    return ctype, title.strip(), marker == "-"


def dequote(line: str) -> str:
    """Strip one leading quote marker and at most one whitespace char."""
    m = QUOTE_RE.match(line)
    if not m:
        return line
    return line[m.end() :]


def extract_callout(
    lines: Sequence[str], raw: Sequence[str], start: int, base: int = 0
) -> Callout | None:
    """
    Extract the callout whose header is ``lines[start]``.

    ``lines`` is the view at the current nesting level (already de-quoted
    for nested levels), ``raw`` the matching undecorated document lines and
    ``base`` the document line of ``lines[0]``.
    """
    header = parse_header(lines[start])
    if header is None:
        return None
    ctype, title, collapsed = header

    end = start
    for j in range(start + 1, len(lines)):
        line = lines[j]
        # a sibling header or any unquoted line closes this callout
        if is_start_line(line) or not is_quote_line(line):
            break
        end = j

    body = [dequote(ln) for ln in lines[start + 1 : end + 1]]
    nested = scan_callouts(body, raw[start + 1 : end + 1], base + start + 1)

    return Callout(
        type=ctype,
        title=title,
        is_collapsed=collapsed,
        content="\n".join(body),
        start_line=base + start,
        end_line=base + end,
        raw_line=raw[start],
        nested_callouts=tuple(nested),
    )


def scan_callouts(
    lines: Sequence[str], raw: Sequence[str], base: int = 0
) -> list[Callout]:
    """Find callouts at one nesting level, skipping past each one found."""
    found: list[Callout] = []
    i = 0
    while i < len(lines):
        if is_start_line(lines[i]):
            callout = extract_callout(lines, raw, i, base)
            if callout is not None:
                found.append(callout)
                i = callout.end_line - base + 1
                continue
        i += 1
    return found


def split_lines(text: str) -> list[str]:
    """
    Split on "\\n" only, the way editor line numbers count.

    A trailing "\\r" is dropped from each line and a final newline adds no
    line. Other separators ("\\x0c", "\\u2028") stay inside their line.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [ln[:-1] if ln.endswith("\r") else ln for ln in lines]


def parse_document(text: str) -> list[Callout]:
    """Parse top-level callouts; nested ones hang off ``nested_callouts``."""
    lines = split_lines(text)
    callouts = scan_callouts(lines, lines)
    logger.debug("parsed %d top-level callouts from %d lines", len(callouts), len(lines))
    return callouts


def iter_callouts(callouts: Iterable[Callout]) -> Iterator[Callout]:
    """Depth-first, document-order walk including nested callouts."""
    for callout in callouts:
        yield callout
        yield from iter_callouts(callout.nested_callouts)


def find_by_start_line(callouts: Iterable[Callout], line: int) -> Callout | None:
    for callout in iter_callouts(callouts):
        if callout.start_line == line:
            return callout
    return None


def find_containing(callouts: Iterable[Callout], line: int) -> Callout | None:
    """Innermost callout whose range contains ``line``."""
    for callout in callouts:
        if callout.contains_line(line):
            inner = find_containing(callout.nested_callouts, line)
            return inner if inner is not None else callout
    return None


def find_at_or_above(callouts: Iterable[Callout], line: int) -> Callout | None:
    """Nearest callout whose header sits at or above ``line``."""
    best: Callout | None = None
    for callout in iter_callouts(callouts):
        if callout.start_line <= line and (best is None or callout.start_line > best.start_line):
            best = callout
    return best


def find_closest(callouts: Iterable[Callout], line: int) -> Callout | None:
    """Callout with the smallest header distance to ``line``; first wins ties."""
    best: Callout | None = None
    for callout in iter_callouts(callouts):
        if best is None or abs(callout.start_line - line) < abs(best.start_line - line):
            best = callout
    return best
