from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from .ports import VisualElement

Scope = Literal["current", "section", "all"]
Mode = Literal["collapse", "expand", "toggle", "toggle-individual"]
ViewMode = Literal["source", "preview"]

SCOPES: tuple[str, ...] = ("current", "section", "all")
MODES: tuple[str, ...] = ("collapse", "expand", "toggle", "toggle-individual")


@dataclass(frozen=True)
class Callout:
    type: str  # "note", "warning", ... (case-sensitive)
    title: str
    is_collapsed: bool
    content: str  # body with one level of quoting removed
    start_line: int  # 0-based, header line
    end_line: int  # 0-based, inclusive, covers nested callouts
    raw_line: str  # header line exactly as it appears in the document
    nested_callouts: tuple[Callout, ...] = ()

    @property
    def line_range(self) -> tuple[int, int]:
        return (self.start_line, self.end_line)

    def contains_line(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line


@dataclass
class CorrelatedPair:
    element: "VisualElement"
    callout: Callout | None = None
    via: str = "none"  # "position" | "exact" | "type" | "title" | "fuzzy" | "none"


@dataclass(frozen=True)
class LineEdit:
    """Whole-line replacement of a single header line."""
    line: int
    old_text: str
    new_text: str


@dataclass(frozen=True)
class OperationRequest:
    scope: Scope
    mode: Mode
    write_text: bool = False


@dataclass
class OperationReport:
    request: OperationRequest | None = None
    targets: int = 0
    text_edits: list[LineEdit] = field(default_factory=list)
    visual_changes: int = 0
    unchanged: int = 0
    skipped: int = 0  # elements without a callout when text was requested
    aborted: bool = False
