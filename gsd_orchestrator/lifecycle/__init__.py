"""Lifecycle coordination - where the project stands and what to run next."""

from .artifacts import PhaseArtifacts, scan_phase_artifacts
from .coordinator import LifecycleCoordinator, artifacts_from_roadmap, suggest_next_step
from .rules import (
    SUCCESSORS,
    ActionSuggestion,
    LifecycleSuggestion,
    qualify_command,
)
from .stages import LifecycleStage, derive_lifecycle_stage, plans_for_phase

__all__ = [
    "SUCCESSORS",
    "ActionSuggestion",
    "LifecycleCoordinator",
    "LifecycleStage",
    "LifecycleSuggestion",
    "PhaseArtifacts",
    "artifacts_from_roadmap",
    "derive_lifecycle_stage",
    "plans_for_phase",
    "qualify_command",
    "scan_phase_artifacts",
    "suggest_next_step",
]
