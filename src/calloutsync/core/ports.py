from typing import Protocol, Sequence
from .model import ViewMode


class TextBuffer(Protocol):
    """
    Line-indexed text owned by the host editor. The buffer is the single
    source of truth; every operation re-reads it.
    """

    def get_text(self) -> str:
        pass

    def replace_line_range(
        self, start_line: int, start_col: int, end_line: int, end_col: int, new_text: str
    ) -> None:
        pass


class VisualElement(Protocol):
    """
    One rendered callout. No stable identity across refreshes and no line
    numbers of its own; `position` is whatever was last tagged onto it.
    """

    title: str
    type: str
    position: tuple[int, int] | None

    @property
    def is_collapsed(self) -> bool:
        pass

    def apply_state(self, collapsed: bool) -> bool:
        """Set the collapsed state; return False when it already matched."""
        pass

    def tag_position(self, start_line: int, end_line: int) -> None:
        pass


class VisualSurface(Protocol):
    def get_visual_elements(self) -> Sequence[VisualElement]:
        pass


class Notifier(Protocol):
    def notify(self, message: str) -> None:
        pass


class Host(Protocol):
    """
    Everything the operation engine needs from the editor. Adapters raise
    `HostUnavailable` when there is no active editor or visual root.
    """

    def get_text(self) -> str:
        pass

    def replace_line_range(
        self, start_line: int, start_col: int, end_line: int, end_col: int, new_text: str
    ) -> None:
        pass

    def get_cursor_line(self) -> int:
        pass

    def get_visual_elements(self) -> Sequence[VisualElement]:
        pass

    def get_view_mode(self) -> ViewMode:
        pass

    def notify(self, message: str) -> None:
        pass
