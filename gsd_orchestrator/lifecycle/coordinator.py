"""Lifecycle coordinator - recommends the next command for a project.

Usage:
    from gsd_orchestrator.lifecycle import LifecycleCoordinator

    coordinator = LifecycleCoordinator(Path(".planning"))
    suggestion = coordinator.suggest_next_step(state, after_command="gsd:plan-phase")
    print(suggestion.primary.command, suggestion.primary.reason)
"""

import logging
from pathlib import Path
from typing import Optional

from ..state.models import PhaseInfo, ProjectState
from ..state.reader import PHASES_DIR, find_phase_directories, normalize_phase_number
from .artifacts import PhaseArtifacts, scan_phase_artifacts
from .rules import (
    ActionSuggestion,
    LifecycleSuggestion,
    apply_successor_bias,
    mutation_suggestion,
    phase_level_suggestion,
    stage_level_suggestion,
)
from .stages import (
    current_phase,
    derive_lifecycle_stage,
    next_phase_after,
    phase_completion,
    plans_for_phase,
)

logger = logging.getLogger(__name__)


def artifacts_from_roadmap(state: ProjectState, phase: PhaseInfo) -> PhaseArtifacts:
    """Approximate phase artifacts from roadmap plan checkboxes.

    Used when the phase has no directory on disk. A checked plan counts
    as executed.
    """
    plans = plans_for_phase(state.plans_by_phase, phase.number)
    return PhaseArtifacts(
        phase_number=phase.number,
        phase_name=phase.name,
        phase_directory=phase.directory,
        plan_ids=[plan.id for plan in plans],
        summary_ids=[plan.id for plan in plans if plan.complete],
    )


class LifecycleCoordinator:
    """Combines stage derivation, artifact scanning and transition rules."""

    def __init__(self, planning_dir: Optional[Path] = None):
        self.planning_dir = Path(planning_dir) if planning_dir is not None else None

    def _phase_artifacts(self, state: ProjectState, phase: PhaseInfo) -> PhaseArtifacts:
        if self.planning_dir is None:
            return artifacts_from_roadmap(state, phase)

        directory = phase.directory
        if directory is None:
            directory = find_phase_directories(self.planning_dir).get(
                normalize_phase_number(phase.number)
            )
        if directory is None:
            return artifacts_from_roadmap(state, phase)

        artifacts = scan_phase_artifacts(self.planning_dir / PHASES_DIR, directory)
        # Report the roadmap's spelling of the number, not the padded folder prefix
        artifacts.phase_number = phase.number
        return artifacts

    def suggest_next_step(
        self, state: Optional[ProjectState], after_command: Optional[str] = None
    ) -> LifecycleSuggestion:
        """Recommend the next command.

        Args:
            state: Project state, or None when it could not be read at all.
            after_command: The command that just completed, if known. Its
                documented successor is preferred when it is a reasonable
                option for the current stage.

        Returns:
            LifecycleSuggestion with the primary command, alternatives,
            stage label and a short context line.
        """
        stage = derive_lifecycle_stage(state)
        phase = current_phase(state) if state is not None else None
        completion = phase_completion(state) if state is not None and state.phases else None

        suggestion = stage_level_suggestion(
            stage,
            completed=after_command,
            phase_number=phase.number if phase else None,
            completion=completion,
        )

        if suggestion is None and phase is not None:
            if after_command:
                suggestion = mutation_suggestion(after_command, stage, phase.number)
            if suggestion is None:
                following = next_phase_after(state, phase.number)
                suggestion = phase_level_suggestion(
                    self._phase_artifacts(state, phase),
                    stage,
                    completed=after_command,
                    next_phase_number=following.number if following else None,
                )

        if suggestion is None:
            suggestion = LifecycleSuggestion(
                primary=ActionSuggestion(
                    command="gsd:progress",
                    reason="Check project progress to determine next step.",
                ),
                stage=stage,
                context="Current phase could not be determined.",
            )

        suggestion = apply_successor_bias(suggestion, after_command)
        logger.debug(
            f"Lifecycle stage {suggestion.stage.value}: suggesting {suggestion.primary.command}"
        )
        return suggestion


def suggest_next_step(
    state: Optional[ProjectState],
    after_command: Optional[str] = None,
    planning_dir: Optional[Path] = None,
) -> LifecycleSuggestion:
    return LifecycleCoordinator(planning_dir).suggest_next_step(state, after_command)
