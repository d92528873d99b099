"""Project state reading - typed views of the ``.planning/`` documents."""

from .config_reader import config_from_dict, parse_config
from .config_validator import (
    CONFIG_FIELD_RULES,
    ConfigIssue,
    ConfigValidationResult,
    FieldRule,
    IssueSeverity,
    validate_config,
)
from .models import (
    Capability,
    CurrentPosition,
    ParsedProject,
    ParsedRoadmap,
    ParsedState,
    PhaseInfo,
    PlanInfo,
    ProjectConfig,
    ProjectState,
    SessionContinuity,
)
from .project_parser import parse_project
from .reader import (
    ProjectStateReader,
    normalize_phase_number,
    read_file_safe,
    read_project_state,
)
from .roadmap_parser import parse_roadmap
from .state_parser import parse_state

__all__ = [
    "CONFIG_FIELD_RULES",
    "Capability",
    "ConfigIssue",
    "ConfigValidationResult",
    "CurrentPosition",
    "FieldRule",
    "IssueSeverity",
    "ParsedProject",
    "ParsedRoadmap",
    "ParsedState",
    "PhaseInfo",
    "PlanInfo",
    "ProjectConfig",
    "ProjectState",
    "ProjectStateReader",
    "SessionContinuity",
    "config_from_dict",
    "normalize_phase_number",
    "parse_config",
    "parse_project",
    "parse_roadmap",
    "parse_state",
    "read_file_safe",
    "read_project_state",
    "validate_config",
]
