"""Tests for the command palette."""

import pytest

from calloutsync.adapters.buffers import InMemoryBuffer
from calloutsync.adapters.host import EditorHost
from calloutsync.commands import COMMAND_PREFIX, COMMANDS, get_command, run_command


def test_palette_has_eighteen_unique_commands():
    """Test the shape of the command table."""
    ids = [c.id for c in COMMANDS]
    
    assert len(ids) == 18
    assert len(set(ids)) == 18
    assert all(i.startswith(COMMAND_PREFIX) for i in ids)


def test_command_requests():
    """Test the scope/mode/write mapping of a few commands."""
    toggle_all = get_command("toggle-all").request
    assert (toggle_all.scope, toggle_all.mode, toggle_all.write_text) == ("all", "toggle", False)
    
    individual = get_command("toggle-all-with-markdown").request
    assert (individual.scope, individual.mode, individual.write_text) == (
        "all",
        "toggle-individual",
        True,
    )
    
    section = get_command("callout-control.expand-section-visual").request
    assert (section.scope, section.mode, section.write_text) == ("section", "expand", False)


def test_unknown_command():
    """Test lookup of a missing command."""
    with pytest.raises(KeyError):
        get_command("fold-everything")


def test_run_command_on_buffer():
    """Test running a markdown command against an in-memory editor."""
    host = EditorHost(InMemoryBuffer("> [!note] A\n> a\n\n> [!tip]- B\n"), cursor_line=1)
    
    report = run_command(host, "collapse-current-with-markdown")
    
    assert report.targets == 1
    assert host.get_text() == "> [!note]- A\n> a\n\n> [!tip]- B\n"
