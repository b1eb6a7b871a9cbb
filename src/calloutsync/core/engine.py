"""Collapse / expand / toggle callouts in text and in the rendered view."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .correlate import Correlation, correlate
from .errors import HostUnavailable
from .model import Callout, Mode, OperationReport, OperationRequest, Scope
from .mutator import header_edit, order_edits
from .parser import find_at_or_above, find_containing, parse_document, split_lines
from .ports import Host, VisualElement
from .section import DEFAULT_HEADING_MARKER, callouts_in_section

logger = logging.getLogger(__name__)


@dataclass
class Target:
    callout: Callout | None
    element: VisualElement | None

    def current_state(self, prefer_text: bool) -> bool:
        if self.element is not None and not (prefer_text and self.callout is not None):
            return self.element.is_collapsed
        return self.callout.is_collapsed if self.callout is not None else False


def assign_states(states: Sequence[bool], mode: Mode) -> list[bool]:
    """
    New collapsed state per candidate.

    ``toggle`` is uniform: everything collapses when fewer than half are
    collapsed, otherwise everything expands. ``toggle-individual`` flips
    each candidate on its own.
    """
    if mode == "collapse":
        return [True] * len(states)
    if mode == "expand":
        return [False] * len(states)
    if mode == "toggle-individual":
        return [not s for s in states]
    if mode == "toggle":
        collapsed = sum(1 for s in states if s)
        target = collapsed < len(states) / 2
        return [target] * len(states)
    raise ValueError(f"Unknown mode: {mode}")


def visual_patching_enabled(host: Host) -> bool:
    return host.get_view_mode() == "preview"


def select_targets(
    scope: Scope,
    callouts: list[Callout],
    lines: Sequence[str],
    cursor_line: int,
    correlation: Correlation | None,
    heading_marker: str = DEFAULT_HEADING_MARKER,
) -> list[Target]:
    if scope == "current":
        callout = find_containing(callouts, cursor_line)
        if callout is None:
            callout = find_at_or_above(callouts, cursor_line)
        chosen = [callout] if callout is not None else []
    elif scope == "section":
        chosen = callouts_in_section(callouts, lines, cursor_line, heading_marker)
    elif scope == "all":
        chosen = list(callouts)
    else:
        raise ValueError(f"Unknown scope: {scope}")

    targets = []
    for callout in chosen:
        pair = correlation.pair_for(callout) if correlation else None
        targets.append(Target(callout=callout, element=pair.element if pair else None))

    # rendered callouts we could not place still take part in "all"
    if scope == "all" and correlation is not None:
        targets.extend(Target(callout=None, element=e) for e in correlation.uncorrelated())
    return targets


class OperationEngine:
    """
    Runs one operation request against a host. Nothing is cached between
    calls; text and rendered elements are re-read every time.
    """

    def __init__(self, heading_marker: str = DEFAULT_HEADING_MARKER, fuzzy: bool = True):
        self.heading_marker = heading_marker
        self.fuzzy = fuzzy

    def operate(self, host: Host, request: OperationRequest) -> OperationReport:
        try:
            return self._run(host, request)
        except (HostUnavailable, OSError) as e:
            logger.warning("callout operation %s aborted", request, exc_info=True)
            host.notify(f"Callouts: {e}")
            return OperationReport(request=request, aborted=True)

    def _run(self, host: Host, request: OperationRequest) -> OperationReport:
        report = OperationReport(request=request)
        # read everything from the host before touching anything
        text = host.get_text()
        cursor_line = host.get_cursor_line()
        visual = visual_patching_enabled(host)
        elements = list(host.get_visual_elements()) if visual else []

        if not visual and not request.write_text:
            logger.debug("source view and no text write requested: nothing to do")
            return report

        callouts = parse_document(text)
        lines = split_lines(text)
        correlation = correlate(elements, callouts, fuzzy=self.fuzzy) if visual else None

        targets = select_targets(
            request.scope, callouts, lines, cursor_line, correlation, self.heading_marker
        )
        report.targets = len(targets)
        if not targets:
            logger.debug("no callouts in scope %s", request.scope)
            return report

        states = assign_states(
            [t.current_state(prefer_text=request.write_text) for t in targets], request.mode
        )

        edits = []
        edited = [False] * len(targets)
        if request.write_text:
            for i, (target, collapsed) in enumerate(zip(targets, states)):
                if target.callout is None:
                    report.skipped += 1
                    continue
                edit = header_edit(target.callout, collapsed)
                if edit is not None:
                    edits.append(edit)
                    edited[i] = True

        # a failed write aborts before any rendered element changes
        report.text_edits = order_edits(edits)
        for edit in report.text_edits:
            host.replace_line_range(edit.line, 0, edit.line, len(edit.old_text), edit.new_text)

        for target, collapsed, changed in zip(targets, states, edited):
            if target.element is not None and target.element.apply_state(collapsed):
                report.visual_changes += 1
                changed = True
            if not changed:
                report.unchanged += 1

        logger.debug(
            "%s: %d targets, %d text edits, %d visual changes",
            request,
            report.targets,
            len(report.text_edits),
            report.visual_changes,
        )
        return report


def operate(
    host: Host,
    scope: Scope,
    mode: Mode,
    write_text: bool = False,
    heading_marker: str = DEFAULT_HEADING_MARKER,
    fuzzy: bool = True,
) -> OperationReport:
    """Run one operation with a throwaway engine."""
    engine = OperationEngine(heading_marker=heading_marker, fuzzy=fuzzy)
    return engine.operate(host, OperationRequest(scope=scope, mode=mode, write_text=write_text))
