"""CLI for calloutsync - fold and unfold callouts in markdown files."""

import argparse
import json
import logging
import platform
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .commands import COMMANDS, get_command
from .core.parser import iter_callouts, parse_document, split_lines
from .core.section import callouts_in_section, resolve_section
from .outline import FORMATS, callout_to_dict, format_outline
from .runtime import build_file_host, build_runtime


def _read_document(path: Path) -> str | None:
    if not path.is_file():
        print(f"Document {path} not found", file=sys.stderr)
        return None
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def cmd_parse(args: argparse.Namespace, rt: Any) -> int:
    """Print the callout tree of a document."""
    text = _read_document(args.file)
    if text is None:
        return 1
    callouts = parse_document(text)
    print(format_outline(callouts, args.format))
    return 0


def cmd_section(args: argparse.Namespace, rt: Any) -> int:
    """Print the section around a line and the callouts inside it."""
    text = _read_document(args.file)
    if text is None:
        return 1
    lines = split_lines(text)
    marker = rt.config.section.heading_marker
    start, end = resolve_section(lines, args.line, marker)
    inside = callouts_in_section(parse_document(text), lines, args.line, marker)

    if args.json:
        print(json.dumps({
            "section": {"start": start, "end": end},
            "callouts": [callout_to_dict(c) for c in inside],
        }, indent=2))
        return 0

    print(f"Section: lines {start}-{end}")
    for callout in iter_callouts(inside):
        state = "-" if callout.is_collapsed else "+"
        print(f"  {callout.start_line}-{callout.end_line}\t[!{callout.type}]{state} {callout.title}")
    return 0


def cmd_run(args: argparse.Namespace, rt: Any) -> int:
    """Run a palette command against a document."""
    try:
        command = get_command(args.command_id)
    except KeyError:
        print(f"Unknown command: {args.command_id}", file=sys.stderr)
        return 1
    view = args.view or rt.config.commands.view
    host = build_file_host(args.file, cursor_line=args.line, view=view)

    report = rt.engine.operate(host, command.request)
    if report.aborted:
        return 1

    if args.dry_run:
        print(host.buffer.get_text(), end="")
        return 0

    host.buffer.save()

    if args.json:
        print(json.dumps({
            "command": command.id,
            "targets": report.targets,
            "text_edits": [
                {"line": e.line, "old": e.old_text, "new": e.new_text}
                for e in report.text_edits
            ],
            "visual_changes": report.visual_changes,
            "unchanged": report.unchanged,
            "skipped": report.skipped,
        }, indent=2))
    elif not args.quiet:
        print(f"Targets: {report.targets}")
        print(f"Text edits: {len(report.text_edits)}")
        print(f"Visual changes: {report.visual_changes}")
        if report.skipped:
            print(f"Skipped: {report.skipped}")
    return 0


def cmd_commands(args: argparse.Namespace, rt: Any) -> int:
    """List palette commands."""
    for command in COMMANDS:
        print(f"{command.id}\t{command.name}")
    return 0


def _version() -> str:
    return (
        f"calloutsync {__version__}\n"
        f"python {platform.python_version()}\n"
        f"platform {platform.platform()}"
    )


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="callouts", description="Fold and unfold markdown callouts"
    )
    parser.add_argument("--version", action="version", version=_version())
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd, then next to the document)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # parse command
    parser_parse = subparsers.add_parser("parse", help="Print the callout tree")
    parser_parse.add_argument("file", type=Path)
    parser_parse.add_argument("--format", choices=FORMATS, default="json")

    # section command
    parser_section = subparsers.add_parser("section", help="Show the section around a line")
    parser_section.add_argument("file", type=Path)
    parser_section.add_argument("--line", type=int, required=True, help="0-based line")

    # run command
    parser_run = subparsers.add_parser("run", help="Run a palette command on a file")
    parser_run.add_argument("command_id", help="e.g. collapse-all-with-markdown")
    parser_run.add_argument("file", type=Path)
    parser_run.add_argument("--line", type=int, default=0, help="0-based cursor line")
    parser_run.add_argument(
        "--view", choices=("source", "preview"), default=None,
        help="Editor view to simulate (default from config)",
    )
    parser_run.add_argument(
        "--dry-run", action="store_true", help="Print the result instead of saving"
    )

    # commands command
    subparsers.add_parser("commands", help="List palette commands")

    args = parser.parse_args(argv)

    try:
        rt = build_runtime(config_path=args.config, document_path=getattr(args, "file", None))
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else rt.config.log.level,
            format="%(levelname)s %(name)s: %(message)s",
        )
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    handlers = {
        "parse": cmd_parse,
        "section": cmd_section,
        "run": cmd_run,
        "commands": cmd_commands,
    }

    handler = handlers.get(args.cmd)
    if handler:
        try:
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
