"""Typed views of the planning documents (.planning/*)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

__all__ = [
    "Capability",
    "CurrentPosition",
    "Depth",
    "GatesConfig",
    "GitConfig",
    "ModelProfile",
    "OperatingMode",
    "ParsedProject",
    "ParsedRoadmap",
    "ParsedState",
    "PhaseInfo",
    "PlanInfo",
    "ProjectConfig",
    "ProjectState",
    "SafetyConfig",
    "SessionContinuity",
    "WorkflowConfig",
]


# =============================================================================
# Roadmap
# =============================================================================


@dataclass
class PhaseInfo:
    """One phase from the roadmap checklist."""

    number: str
    name: str
    complete: bool
    completed_info: Optional[str] = None
    description: Optional[str] = None
    directory: Optional[str] = None


@dataclass
class PlanInfo:
    """One plan line from a phase detail section."""

    id: str
    complete: bool
    description: Optional[str] = None


@dataclass(frozen=True)
class Capability:
    """A ``verb: type/name`` capability reference, e.g. ``use: skill/tdd``."""

    verb: str
    type: str
    name: str


@dataclass
class ParsedRoadmap:
    phases: List[PhaseInfo] = field(default_factory=list)
    plans_by_phase: Dict[str, List[PlanInfo]] = field(default_factory=dict)
    # None when no phase declares capabilities
    capabilities_by_phase: Optional[Dict[str, List[Capability]]] = None


# =============================================================================
# State
# =============================================================================


@dataclass
class CurrentPosition:
    """The ``## Current Position`` block of STATE.md. Every field is optional."""

    phase: Optional[float] = None
    total_phases: Optional[int] = None
    phase_name: Optional[str] = None
    phase_status: Optional[str] = None
    plan: Optional[int] = None
    total_plans: Optional[int] = None
    status: Optional[str] = None
    progress_percent: Optional[int] = None
    last_activity: Optional[str] = None


@dataclass
class SessionContinuity:
    last_session: Optional[str] = None
    stopped_at: Optional[str] = None
    resume_file: Optional[str] = None


@dataclass
class ParsedState:
    position: CurrentPosition
    decisions: List[str] = field(default_factory=list)
    blockers: List[str] = field(default_factory=list)
    pending_todos: List[str] = field(default_factory=list)
    session_continuity: SessionContinuity = field(default_factory=SessionContinuity)


# =============================================================================
# Project
# =============================================================================


@dataclass
class ParsedProject:
    name: Optional[str] = None
    core_value: Optional[str] = None
    current_milestone: Optional[str] = None
    description: Optional[str] = None


# =============================================================================
# Config
# =============================================================================


class OperatingMode(str, Enum):
    """How much the orchestrator asks before acting."""

    INTERACTIVE = "interactive"
    YOLO = "yolo"


class Depth(str, Enum):
    QUICK = "quick"
    STANDARD = "standard"
    COMPREHENSIVE = "comprehensive"


class ModelProfile(str, Enum):
    QUALITY = "quality"
    BALANCED = "balanced"
    BUDGET = "budget"


class WorkflowConfig(BaseModel):
    research: bool = True
    plan_check: bool = True
    verifier: bool = True

    model_config = {"extra": "allow"}


class GatesConfig(BaseModel):
    require_plan_approval: bool = False
    require_checkpoint_approval: bool = True

    model_config = {"extra": "allow"}


class SafetyConfig(BaseModel):
    max_files_per_commit: int = Field(default=20, ge=1)
    require_tests: bool = True

    model_config = {"extra": "allow"}


class GitConfig(BaseModel):
    auto_commit: bool = True
    commit_style: str = "conventional"

    model_config = {"extra": "allow"}


class ProjectConfig(BaseModel):
    """``.planning/config.json`` with every recognized field defaulted.

    ``ProjectConfig()`` is the reference object produced for ``{}``.
    Unrecognized keys are kept as extras.
    """

    mode: OperatingMode = Field(
        default=OperatingMode.INTERACTIVE,
        description="interactive asks before destructive commands, yolo does not",
    )
    verbosity: int = Field(default=3, ge=1, le=5, description="Output verbosity 1-5")
    depth: Depth = Depth.STANDARD
    model_profile: ModelProfile = ModelProfile.BALANCED
    parallelization: Union[bool, Dict[str, Any]] = Field(
        default=False,
        description="true/false, or an object such as {\"max_parallel\": 4} kept as-is",
    )
    commit_docs: bool = True
    search_gitignored: bool = False
    workflow: WorkflowConfig = Field(default_factory=WorkflowConfig)
    gates: GatesConfig = Field(default_factory=GatesConfig)
    safety: SafetyConfig = Field(default_factory=SafetyConfig)
    git: GitConfig = Field(default_factory=GitConfig)

    model_config = {
        "extra": "allow",
        "use_enum_values": True,
        "validate_default": True,
        # model_profile is a config key, not pydantic API
        "protected_namespaces": (),
    }


# =============================================================================
# Composite
# =============================================================================


@dataclass
class ProjectState:
    """Everything read from one planning directory."""

    initialized: bool
    config: ProjectConfig = field(default_factory=ProjectConfig)
    position: Optional[CurrentPosition] = None
    phases: List[PhaseInfo] = field(default_factory=list)
    plans_by_phase: Dict[str, List[PlanInfo]] = field(default_factory=dict)
    capabilities_by_phase: Optional[Dict[str, List[Capability]]] = None
    project: Optional[ParsedProject] = None
    state: Optional[ParsedState] = None
    has_roadmap: bool = False
    has_state: bool = False
    has_project: bool = False
    has_config: bool = False
