"""In-process stand-in for the editor's rendered callouts.

The editor renders callouts itself; this module reproduces just enough of
that output (displayed title, type, fold classes, content visibility) to
drive the preview half of an operation from the CLI and from tests.
"""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from ..core.model import Callout
from ..core.parser import iter_callouts
from ..core.ports import VisualElement, VisualSurface

COLLAPSED_CLASS = "is-collapsed"
HIDDEN_STYLE = "display: none;"

_INLINE_MARKUP_RE = re.compile(r"(\*\*|__|\*|`|~~|==)")


def display_title(callout: Callout) -> str:
    """Title as the renderer shows it: markup stripped, spaces collapsed, type as fallback."""
    title = _INLINE_MARKUP_RE.sub("", callout.title)
    title = " ".join(title.split())
    return title or callout.type.capitalize()


@dataclass
class RenderedCallout(VisualElement):
    title: str
    type: str
    classes: set[str] = field(default_factory=lambda: {"callout"})
    fold_classes: set[str] = field(default_factory=lambda: {"callout-fold"})
    content_style: str = ""
    position: tuple[int, int] | None = None

    @property
    def is_collapsed(self) -> bool:
        return COLLAPSED_CLASS in self.classes

    def apply_state(self, collapsed: bool) -> bool:
        if collapsed == self.is_collapsed:
            return False
        # callout class, fold icon and content visibility move together
        for classes in (self.classes, self.fold_classes):
            if collapsed:
                classes.add(COLLAPSED_CLASS)
            else:
                classes.discard(COLLAPSED_CLASS)
        self.content_style = HIDDEN_STYLE if collapsed else ""
        return True

    def tag_position(self, start_line: int, end_line: int) -> None:
        self.position = (start_line, end_line)


def render_callout(callout: Callout) -> RenderedCallout:
    element = RenderedCallout(title=display_title(callout), type=callout.type)
    if callout.is_collapsed:
        element.apply_state(True)
    return element


def render_callouts(callouts: Iterable[Callout]) -> list[RenderedCallout]:
    """One element per callout, nested included, in document order."""
    return [render_callout(c) for c in iter_callouts(callouts)]


class RenderedSurface(VisualSurface):
    def __init__(self, elements: Sequence[RenderedCallout] = ()):
        self.elements = list(elements)

    def get_visual_elements(self) -> Sequence[RenderedCallout]:
        return self.elements
