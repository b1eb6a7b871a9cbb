from pathlib import Path

from ..core.errors import HostUnavailable
from ..core.ports import TextBuffer


def _offset(text: str, line: int, col: int) -> int:
    """Character offset of (line, col); clamps col to the line's length."""
    start = 0
    for _ in range(line):
        nl = text.find("\n", start)
        if nl == -1:
            return len(text)
        start = nl + 1
    end = text.find("\n", start)
    if end == -1:
        end = len(text)
    if end > start and text[end - 1] == "\r":
        end -= 1
    return start + min(col, end - start)


def replace_range(
    text: str, start_line: int, start_col: int, end_line: int, end_col: int, new_text: str
) -> str:
    start = _offset(text, start_line, start_col)
    end = _offset(text, end_line, end_col)
    return text[:start] + new_text + text[end:]


class InMemoryBuffer(TextBuffer):
    def __init__(self, text: str = ""):
        self.text = text
        self.replacements = 0

    def get_text(self) -> str:
        return self.text

    def replace_line_range(
        self, start_line: int, start_col: int, end_line: int, end_col: int, new_text: str
    ) -> None:
        self.text = replace_range(self.text, start_line, start_col, end_line, end_col, new_text)
        self.replacements += 1


class FileBuffer(TextBuffer):
    """Markdown file loaded on first access; edits stay in memory until save()."""

    def __init__(self, path: Path):
        self.path = path
        self._text: str | None = None
        self.dirty = False

    def get_text(self) -> str:
        if self._text is None:
            if not self.path.is_file():
                raise HostUnavailable(f"No such document: {self.path}")
            with open(self.path, encoding="utf-8", newline="") as f:
                self._text = f.read()
        return self._text

    def replace_line_range(
        self, start_line: int, start_col: int, end_line: int, end_col: int, new_text: str
    ) -> None:
        self._text = replace_range(
            self.get_text(), start_line, start_col, end_line, end_col, new_text
        )
        self.dirty = True

    def save(self) -> bool:
        """Write pending edits back; returns False when there was nothing to write."""
        if not self.dirty or self._text is None:
            return False
        with open(self.path, "w", encoding="utf-8", newline="") as f:
            f.write(self._text)
        self.dirty = False
        return True
