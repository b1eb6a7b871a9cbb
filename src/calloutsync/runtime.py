"""Runtime wiring helper for the CLI."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.buffers import FileBuffer
from .adapters.host import EditorHost, StderrNotifier
from .adapters.rendered import RenderedSurface, render_callouts
from .config import CalloutConfig, load_config
from .core.engine import OperationEngine
from .core.model import ViewMode
from .core.parser import parse_document


@dataclass
class Runtime:
    """Container for all wired components."""
    config: CalloutConfig
    engine: OperationEngine


def build_runtime(config_path: Path | None = None, document_path: Path | None = None) -> Runtime:
    """Load configuration and build an engine from it."""
    config = load_config(config_path=config_path, document_path=document_path)
    engine = OperationEngine(
        heading_marker=config.section.heading_marker,
        fuzzy=config.correlate.fuzzy,
    )
    return Runtime(config=config, engine=engine)


def build_file_host(path: Path, cursor_line: int = 0, view: ViewMode = "source") -> EditorHost:
    """
    Host for a markdown file on disk.

    In preview view the rendered surface is built from the file as it is
    now, the way an editor would have rendered it before the command ran.
    """
    buffer = FileBuffer(path)
    surface = None
    if view == "preview" and path.is_file():
        surface = RenderedSurface(render_callouts(parse_document(buffer.get_text())))
    return EditorHost(
        buffer,
        surface=surface,
        cursor_line=cursor_line,
        view=view,
        notifier=StderrNotifier(),
    )
