import logging
import sys
from collections.abc import Sequence

from ..core.errors import HostUnavailable
from ..core.model import ViewMode
from ..core.ports import Host, Notifier, TextBuffer, VisualElement, VisualSurface

logger = logging.getLogger(__name__)


class StderrNotifier(Notifier):
    def notify(self, message: str) -> None:
        print(message, file=sys.stderr)


class EditorHost(Host):
    """Compose a text buffer, an optional rendered surface and a cursor."""

    def __init__(
        self,
        buffer: TextBuffer | None,
        surface: VisualSurface | None = None,
        cursor_line: int = 0,
        view: ViewMode = "source",
        notifier: Notifier | None = None,
    ):
        self.buffer = buffer
        self.surface = surface
        self.cursor_line = cursor_line
        self.view = view
        self.notifier = notifier
        self.notices: list[str] = []

    def _buffer(self) -> TextBuffer:
        if self.buffer is None:
            raise HostUnavailable("No active editor")
        return self.buffer

    def get_text(self) -> str:
        return self._buffer().get_text()

    def replace_line_range(
        self, start_line: int, start_col: int, end_line: int, end_col: int, new_text: str
    ) -> None:
        self._buffer().replace_line_range(start_line, start_col, end_line, end_col, new_text)

    def get_cursor_line(self) -> int:
        self._buffer()
        return self.cursor_line

    def get_visual_elements(self) -> Sequence[VisualElement]:
        if self.surface is None:
            raise HostUnavailable("No rendered view to update")
        return self.surface.get_visual_elements()

    def get_view_mode(self) -> ViewMode:
        return self.view

    def notify(self, message: str) -> None:
        logger.info("notice: %s", message)
        self.notices.append(message)
        if self.notifier is not None:
            self.notifier.notify(message)
