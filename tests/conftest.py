"""Pytest configuration and shared fixtures for gsd-orchestrator tests.

Fixtures either point at the static trees under ``tests/fixtures/`` or
build small installation and planning trees in ``tmp_path``.
"""

import os
from pathlib import Path

import pytest

from gsd_orchestrator.discovery import DiscoveryResult
from gsd_orchestrator.discovery.models import CommandSpec
from gsd_orchestrator.settings import clear_settings_cache
from gsd_orchestrator.state.models import PhaseInfo, PlanInfo, ProjectState

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch):
    """Keep the developer's GSD_ORCHESTRATOR_* environment out of tests."""
    for key in list(os.environ):
        if key.startswith("GSD_ORCHESTRATOR_"):
            monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def gsd_fixture() -> Path:
    """Static installation: 27 commands, 3 gsd agents, 2 teams, VERSION 1.12.1."""
    return FIXTURES_DIR / "gsd"


@pytest.fixture
def planning_fixture() -> Path:
    """Static planning directory for a project executing phase 2 of 3."""
    return FIXTURES_DIR / "planning"


def write_command(base: Path, verb: str, description: str, namespace: str = "gsd", body: str = "") -> Path:
    folder = base / "commands" / namespace
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / f"{verb}.md"
    path.write_text(f"---\nname: {namespace}:{verb}\ndescription: {description}\n---\n{body}")
    return path


@pytest.fixture
def install_dir(tmp_path):
    """Minimal writable installation with two commands, one agent and a VERSION marker."""
    base = tmp_path / "install"
    write_command(base, "plan-phase", "Create detailed execution plan for a phase")
    write_command(base, "progress", "Show current project progress")
    agents = base / "agents"
    agents.mkdir(parents=True)
    (agents / "gsd-executor.md").write_text(
        "---\nname: gsd-executor\ndescription: Executes plans\ntools: Read, Bash\n---\n"
    )
    marker = base / "get-shit-done"
    marker.mkdir()
    (marker / "VERSION").write_text("1.12.1\n")
    return base


def make_command(name: str, description: str, objective: str = None) -> CommandSpec:
    return CommandSpec(
        name=name,
        description=description,
        objective=objective,
        file_path=Path(f"/test/{name.split(':')[1]}.md"),
    )


# Mirrors a representative slice of the real command set
TEST_COMMANDS = [
    make_command(
        "gsd:plan-phase",
        "Create detailed execution plan for a phase",
        "Create a detailed, executable plan for the specified phase",
    ),
    make_command(
        "gsd:execute-phase",
        "Execute all plans in a phase",
        "Run all plans in the phase with wave-based parallelization",
    ),
    make_command(
        "gsd:progress",
        "Show current project progress",
        "Check project progress and route to next action",
    ),
    make_command(
        "gsd:new-project",
        "Initialize a new project",
        "Set up a new project with deep context gathering",
    ),
    make_command(
        "gsd:debug",
        "Systematic debugging with persistent state",
        "Debug an issue systematically",
    ),
]


@pytest.fixture
def test_commands():
    return list(TEST_COMMANDS)


@pytest.fixture
def discovery_result(test_commands):
    return DiscoveryResult(commands=test_commands, base_path=Path("/test"), version="1.12.1")


def make_state(**overrides) -> ProjectState:
    """Initialized project executing phase 38 with one open plan."""
    values = dict(
        initialized=True,
        phases=[PhaseInfo(number="38", name="Intent", complete=False)],
        plans_by_phase={"38": [PlanInfo(id="38-01", complete=False)]},
        has_roadmap=True,
    )
    values.update(overrides)
    return ProjectState(**values)


@pytest.fixture
def executing_state():
    return make_state()


@pytest.fixture
def uninitialized_state():
    return ProjectState(initialized=False)
