"""Pair rendered callout elements with parsed callouts.

Rendered elements carry no line numbers, so a pairing is inferred. Elements
that were tagged with a line range by an earlier correlation are matched on
that range; untagged elements go through a title/type cascade that trades
precision for recall. Everything here is rebuilt per operation.
"""

import logging
import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from .model import Callout, CorrelatedPair
from .parser import find_closest, find_containing, iter_callouts
from .ports import VisualElement
from .section import DEFAULT_HEADING_MARKER, resolve_section

logger = logging.getLogger(__name__)

Matcher = Callable[[VisualElement, Callout], bool]


_MARKUP_RE = re.compile(r"[*_`~=]")


def _norm(title: str) -> str:
    return " ".join(_MARKUP_RE.sub("", title).split())


def _fuzzy(element: VisualElement, callout: Callout) -> bool:
    a, b = _norm(element.title), _norm(callout.title)
    return a in b or b in a


CASCADE: list[tuple[str, Matcher]] = [
    (
        "exact",
        lambda e, c: c.title == e.title and c.type == e.type and c.is_collapsed == e.is_collapsed,
    ),
    ("type", lambda e, c: c.title == e.title and c.type == e.type),
    ("title", lambda e, c: c.title == e.title),
    ("fuzzy", _fuzzy),
]


def match_by_position(element: VisualElement, candidates: Iterable[Callout]) -> Callout | None:
    """
    Callout at the element's tagged line range, if it is still the same one.

    Edits above a callout shift its lines, so the range alone can land on
    a different callout. Type and title must agree too; otherwise the tag
    is stale and is cleared.
    """
    if element.position is None:
        return None
    for callout in candidates:
        if callout.line_range != tuple(element.position) or callout.type != element.type:
            continue
        if callout.title == element.title or _fuzzy(element, callout):
            return callout
    logger.debug("stale position tag %s on rendered %r", element.position, element.title)
    element.position = None
    return None


def match_by_cascade(
    element: VisualElement, candidates: Sequence[Callout], fuzzy: bool = True
) -> tuple[Callout | None, str]:
    """First cascade step that finds a candidate wins; document order breaks ties."""
    for name, matcher in CASCADE:
        if name == "fuzzy" and not fuzzy:
            break
        for callout in candidates:
            if matcher(element, callout):
                return callout, name
    return None, "none"


@dataclass
class Correlation:
    callouts: list[Callout]  # top-level, as parsed
    pairs: list[CorrelatedPair] = field(default_factory=list)

    def pair_for(self, callout: Callout | None) -> CorrelatedPair | None:
        if callout is None:
            return None
        for pair in self.pairs:
            if pair.callout is not None and pair.callout.line_range == callout.line_range:
                return pair
        return None

    def find_by_line(self, line: int) -> CorrelatedPair | None:
        for pair in self.pairs:
            if pair.callout is not None and pair.callout.start_line == line:
                return pair
        return None

    def find_containing_line(self, line: int) -> CorrelatedPair | None:
        return self.pair_for(find_containing(self.callouts, line))

    def find_closest_to_line(self, line: int) -> CorrelatedPair | None:
        return self.pair_for(find_closest(self.callouts, line))

    def in_section(
        self, lines: Sequence[str], reference_line: int, heading_marker: str = DEFAULT_HEADING_MARKER
    ) -> list[CorrelatedPair]:
        start, end = resolve_section(lines, reference_line, heading_marker)
        return [
            p
            for p in self.pairs
            if p.callout is not None and start <= p.callout.start_line and p.callout.end_line <= end
        ]

    def uncorrelated(self) -> list[VisualElement]:
        return [p.element for p in self.pairs if p.callout is None]


def correlate(
    elements: Sequence[VisualElement], callouts: Sequence[Callout], fuzzy: bool = True
) -> Correlation:
    """
    Produce one pair per visual element.

    Each callout is handed out at most once. Position-tagged elements claim
    first; the rest take the first unclaimed callout the cascade accepts.
    Matched elements are re-tagged with their callout's line range.
    """
    flat = list(iter_callouts(callouts))
    claimed: set[tuple[int, int]] = set()
    matches: list[tuple[Callout | None, str]] = [(None, "none")] * len(elements)

    def unclaimed() -> list[Callout]:
        return [c for c in flat if c.line_range not in claimed]

    for i, element in enumerate(elements):
        callout = match_by_position(element, unclaimed())
        if callout is not None:
            claimed.add(callout.line_range)
            matches[i] = (callout, "position")

    for i, element in enumerate(elements):
        if matches[i][0] is not None:
            continue
        callout, via = match_by_cascade(element, unclaimed(), fuzzy=fuzzy)
        if callout is None:
            logger.debug("no callout for rendered %r (%s)", element.title, element.type)
            continue
        claimed.add(callout.line_range)
        matches[i] = (callout, via)

    pairs: list[CorrelatedPair] = []
    for element, (callout, via) in zip(elements, matches):
        if callout is not None:
            element.tag_position(callout.start_line, callout.end_line)
        pairs.append(CorrelatedPair(element=element, callout=callout, via=via))
    return Correlation(callouts=list(callouts), pairs=pairs)
