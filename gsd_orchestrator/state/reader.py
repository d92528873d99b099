"""Assembles a ProjectState from a ``.planning/`` directory."""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

from .config_reader import parse_config
from .models import PhaseInfo, ProjectConfig, ProjectState
from .project_parser import parse_project
from .roadmap_parser import parse_roadmap
from .state_parser import parse_state

logger = logging.getLogger(__name__)

ROADMAP_FILE = "ROADMAP.md"
STATE_FILE = "STATE.md"
PROJECT_FILE = "PROJECT.md"
CONFIG_FILE = "config.json"
PHASES_DIR = "phases"

PHASE_DIR_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)-")


def normalize_phase_number(number: str) -> str:
    """Strip zero padding so ``"01"`` and ``"1"`` (or ``"07.1"`` and ``"7.1"``) compare equal."""
    whole, dot, fraction = str(number).partition(".")
    whole = whole.lstrip("0") or "0"
    return f"{whole}{dot}{fraction}"


def read_file_safe(path: Path) -> Optional[str]:
    """Return file text, or None when it is missing or unreadable."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {path}: {e}")
        return None


def find_phase_directories(planning_dir: Path) -> Dict[str, str]:
    """Map normalized phase numbers to ``phases/NN-slug`` directory names."""
    phases_dir = planning_dir / PHASES_DIR
    if not phases_dir.is_dir():
        return {}

    directories: Dict[str, str] = {}
    for entry in sorted(phases_dir.iterdir()):
        if not entry.is_dir():
            continue
        match = PHASE_DIR_PATTERN.match(entry.name)
        if match:
            directories.setdefault(normalize_phase_number(match.group(1)), entry.name)
    return directories


def _attach_directories(phases: List[PhaseInfo], planning_dir: Path) -> None:
    directories = find_phase_directories(planning_dir)
    for phase in phases:
        directory = directories.get(normalize_phase_number(phase.number))
        if directory:
            phase.directory = directory


class ProjectStateReader:
    """Reads ROADMAP.md, STATE.md, PROJECT.md and config.json.

    Each file is optional. A missing planning directory means the project
    has not been initialized yet.
    """

    def __init__(self, planning_dir: Path):
        self.planning_dir = Path(planning_dir)

    def read(self) -> ProjectState:
        if not self.planning_dir.is_dir():
            logger.debug(f"Planning directory not found: {self.planning_dir}")
            return ProjectState(initialized=False)

        roadmap_text = read_file_safe(self.planning_dir / ROADMAP_FILE)
        state_text = read_file_safe(self.planning_dir / STATE_FILE)
        project_text = read_file_safe(self.planning_dir / PROJECT_FILE)
        config_text = read_file_safe(self.planning_dir / CONFIG_FILE)

        roadmap = parse_roadmap(roadmap_text) if roadmap_text is not None else None
        parsed_state = parse_state(state_text) if state_text is not None else None
        project = parse_project(project_text) if project_text is not None else None
        config = parse_config(config_text) if config_text is not None else None

        state = ProjectState(
            initialized=True,
            config=config or ProjectConfig(),
            position=parsed_state.position if parsed_state else None,
            project=project,
            state=parsed_state,
            has_roadmap=roadmap is not None,
            has_state=parsed_state is not None,
            has_project=project is not None,
            has_config=config is not None,
        )

        if roadmap is not None:
            state.phases = roadmap.phases
            state.plans_by_phase = roadmap.plans_by_phase
            state.capabilities_by_phase = roadmap.capabilities_by_phase
            _attach_directories(state.phases, self.planning_dir)

        logger.debug(
            f"Read project state from {self.planning_dir}: "
            f"{len(state.phases)} phases, roadmap={state.has_roadmap}, "
            f"state={state.has_state}, project={state.has_project}, config={state.has_config}"
        )
        return state


def read_project_state(planning_dir: Path) -> ProjectState:
    return ProjectStateReader(planning_dir).read()
