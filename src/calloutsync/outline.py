"""Render a parsed callout tree as JSON, YAML or TSV."""

import json
from collections.abc import Iterable, Iterator
from typing import Any

import yaml

from .core.model import Callout

FORMATS = ("json", "yaml", "tsv")


def callout_to_dict(callout: Callout) -> dict[str, Any]:
    return {
        "type": callout.type,
        "title": callout.title,
        "collapsed": callout.is_collapsed,
        "start_line": callout.start_line,
        "end_line": callout.end_line,
        "content": callout.content,
        "nested": [callout_to_dict(n) for n in callout.nested_callouts],
    }


def _walk(callouts: Iterable[Callout], depth: int = 0) -> Iterator[tuple[int, Callout]]:
    for callout in callouts:
        yield depth, callout
        yield from _walk(callout.nested_callouts, depth + 1)


def format_outline(callouts: list[Callout], format_type: str = "json") -> str:
    """
    Format a callout tree.
    
    Args:
        callouts: Top-level callouts from parse_document
        format_type: "json", "yaml" or "tsv"
    
    Returns:
        The formatted outline (TSV has one row per callout, depth first)
    """
    if format_type == "json":
        return json.dumps([callout_to_dict(c) for c in callouts], indent=2)
    if format_type == "yaml":
        return yaml.safe_dump(
            [callout_to_dict(c) for c in callouts], sort_keys=False, allow_unicode=True
        )
    if format_type == "tsv":
        rows = []
        for depth, c in _walk(callouts):
            state = "-" if c.is_collapsed else "+"
            rows.append(f"{depth}\t{c.start_line}\t{c.end_line}\t{c.type}\t{state}\t{c.title}")
        return "\n".join(rows)
    raise ValueError(f"Unknown outline format: {format_type}")
