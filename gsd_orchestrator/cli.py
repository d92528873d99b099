"""Command-line entry point for the GSD orchestrator.

Subcommands:
    discover                 list installed commands, agents and teams
    classify <query...>      route a query to a command and gate it
    next [--after CMD]       suggest the next lifecycle step
    validate-config [PATH]   validate a project config.json
    extension                report companion extension detection
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .extension import detect_extension
from .pipeline import (
    InstallationNotFoundError,
    Orchestrator,
    discovery_sections,
    suggestion_sections,
)
from .settings import OrchestratorSettings
from .state import read_file_safe, validate_config
from .state.reader import CONFIG_FILE
from .verbosity import MAX_VERBOSITY, MIN_VERBOSITY, OutputSection, filter_by_verbosity

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gsd-orchestrator",
        description="GSD orchestrator - discover, classify and route GSD commands",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version and exit",
    )
    parser.add_argument("--base", type=Path, help="Installation base path (skips detection)")
    parser.add_argument("--planning", type=Path, help="Project planning directory")
    parser.add_argument(
        "--verbosity",
        type=int,
        choices=range(MIN_VERBOSITY, MAX_VERBOSITY + 1),
        metavar=f"{{{MIN_VERBOSITY}-{MAX_VERBOSITY}}}",
        help="Output verbosity (1 = result only, 5 = everything)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("discover", help="List installed commands, agents and teams")

    classify = subparsers.add_parser("classify", help="Route a query to a command")
    classify.add_argument("query", nargs="+", help="Query text or /gsd:command invocation")

    next_step = subparsers.add_parser("next", help="Suggest the next lifecycle step")
    next_step.add_argument("--after", help="Command that just completed")

    validate = subparsers.add_parser("validate-config", help="Validate a project config.json")
    validate.add_argument("path", nargs="?", type=Path, help="Config file (default: <planning>/config.json)")

    subparsers.add_parser("extension", help="Report companion extension detection")
    return parser


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def build_settings(args: argparse.Namespace) -> OrchestratorSettings:
    overrides: Dict[str, Any] = {}
    if args.base is not None:
        overrides["base_path"] = args.base
    if args.planning is not None:
        overrides["planning_dir"] = args.planning
    if args.verbosity is not None:
        overrides["verbosity"] = args.verbosity
    return OrchestratorSettings(**overrides)


def print_sections(console: Console, title: str, sections: Sequence[OutputSection]) -> None:
    console.print(f"[bold]{title}[/bold]")
    console.print("=" * len(title), markup=False)
    for section in sections:
        console.print(section.content, markup=False, highlight=False)


# =============================================================================
# Subcommand handlers
# =============================================================================


def cmd_discover(args: argparse.Namespace, orchestrator: Orchestrator, console: Console) -> int:
    result = orchestrator.discover()
    level = orchestrator.resolve_verbosity(orchestrator.read_state(), args.verbosity)
    sections = filter_by_verbosity(discovery_sections(result), level)
    print_sections(console, "GSD Discovery Results", sections)
    return 0


def cmd_classify(args: argparse.Namespace, orchestrator: Orchestrator, console: Console) -> int:
    outcome = orchestrator.route(" ".join(args.query), verbosity=args.verbosity)
    print_sections(console, "Classification Result", outcome.sections)
    return 0


def cmd_next(args: argparse.Namespace, orchestrator: Orchestrator, console: Console) -> int:
    state = orchestrator.read_state()
    suggestion = orchestrator.next_step(after_command=args.after, state=state)
    level = orchestrator.resolve_verbosity(state, args.verbosity)
    print_sections(console, "Lifecycle Suggestion", filter_by_verbosity(suggestion_sections(suggestion), level))
    return 0


def cmd_validate_config(args: argparse.Namespace, orchestrator: Orchestrator, console: Console) -> int:
    path = args.path or orchestrator.planning_dir / CONFIG_FILE
    content = read_file_safe(path)
    if content is None:
        console.print(f"[red]Config file not found:[/red] {path}")
        return 1
    try:
        raw = json.loads(content)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON in {path}:[/red] {e}")
        return 1

    result = validate_config(raw)
    issues = result.errors + result.warnings + result.security_issues
    if issues:
        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("Severity", style="dim", width=8)
        table.add_column("Field", style="cyan")
        table.add_column("Message")
        for issue in issues:
            table.add_row(issue.severity.value, issue.field, issue.message)
        console.print(table)

    if result.valid:
        console.print(f"[green]Config is valid[/green] ({len(result.warnings)} warnings, "
                      f"{len(result.security_issues)} security issues)")
        return 0
    console.print(f"[red]Config has {len(result.errors)} errors[/red]")
    return 1


def cmd_extension(args: argparse.Namespace, orchestrator: Orchestrator, console: Console) -> int:
    caps = detect_extension(orchestrator.settings.extension_overrides())
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Key", style="bold cyan")
    table.add_column("Value")
    table.add_row("detected", str(caps.detected).lower())
    table.add_row("method", caps.detection_method.value)
    table.add_row("version", caps.version or "-")
    for name, enabled in vars(caps.features).items():
        table.add_row(name, str(enabled).lower())
    console.print(table)
    return 0


HANDLERS = {
    "discover": cmd_discover,
    "classify": cmd_classify,
    "next": cmd_next,
    "validate-config": cmd_validate_config,
    "extension": cmd_extension,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the installed CLI tool."""
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)
    console = Console()

    orchestrator = Orchestrator(settings=build_settings(args))
    try:
        return HANDLERS[args.command](args, orchestrator, console)
    except InstallationNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        return 1
