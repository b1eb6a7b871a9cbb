"""Command palette: the named operations an editor binds to keys."""

from dataclasses import dataclass

from .core.engine import OperationEngine
from .core.model import OperationReport, OperationRequest
from .core.ports import Host

COMMAND_PREFIX = "callout-control."


@dataclass(frozen=True)
class Command:
    id: str
    name: str
    request: OperationRequest


def _cmd(id: str, name: str, scope: str, mode: str, write_text: bool) -> Command:
    return Command(
        id=COMMAND_PREFIX + id,
        name=name,
        request=OperationRequest(scope=scope, mode=mode, write_text=write_text),  # type: ignore[arg-type]
    )


COMMANDS: list[Command] = [
    # All callouts, rendered view only
    _cmd("toggle-all", "Toggle All Callouts Uniformly (Visual Only)", "all", "toggle", False),
    _cmd("collapse-all", "Collapse All Callouts (Visual Only)", "all", "collapse", False),
    _cmd("expand-all", "Expand All Callouts (Visual Only)", "all", "expand", False),
    # All callouts, with markdown
    _cmd(
        "toggle-all-with-markdown",
        "Toggle All Callouts Individually (with Markdown)",
        "all",
        "toggle-individual",
        True,
    ),
    _cmd("collapse-all-with-markdown", "Collapse All Callouts (with Markdown)", "all", "collapse", True),
    _cmd("expand-all-with-markdown", "Expand All Callouts (with Markdown)", "all", "expand", True),
    # Callout under the cursor
    _cmd("toggle-current", "Toggle Current Callout (Visual Only)", "current", "toggle", False),
    _cmd("collapse-current", "Collapse Current Callout (Visual Only)", "current", "collapse", False),
    _cmd("expand-current", "Expand Current Callout (Visual Only)", "current", "expand", False),
    _cmd("toggle-current-with-markdown", "Toggle Current Callout (with Markdown)", "current", "toggle", True),
    _cmd("collapse-current-with-markdown", "Collapse Current Callout (with Markdown)", "current", "collapse", True),
    _cmd("expand-current-with-markdown", "Expand Current Callout (with Markdown)", "current", "expand", True),
    # Callouts in the cursor's section
    _cmd("toggle-section-visual", "Toggle Section Callouts (Visual Only)", "section", "toggle", False),
    _cmd("collapse-section-visual", "Collapse Section Callouts (Visual Only)", "section", "collapse", False),
    _cmd("expand-section-visual", "Expand Section Callouts (Visual Only)", "section", "expand", False),
    _cmd("toggle-section-with-markdown", "Toggle Section Callouts (with Markdown)", "section", "toggle", True),
    _cmd("collapse-section-with-markdown", "Collapse Section Callouts (with Markdown)", "section", "collapse", True),
    _cmd("expand-section-with-markdown", "Expand Section Callouts (with Markdown)", "section", "expand", True),
]

_BY_ID = {c.id: c for c in COMMANDS}


def get_command(command_id: str) -> Command:
    """Look up a command; the ``callout-control.`` prefix is optional."""
    if not command_id.startswith(COMMAND_PREFIX):
        command_id = COMMAND_PREFIX + command_id
    try:
        return _BY_ID[command_id]
    except KeyError:
        raise KeyError(f"Unknown command: {command_id}") from None


def run_command(host: Host, command_id: str, engine: OperationEngine | None = None) -> OperationReport:
    command = get_command(command_id)
    engine = engine or OperationEngine()
    return engine.operate(host, command.request)
