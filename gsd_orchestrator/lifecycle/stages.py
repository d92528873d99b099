"""Lifecycle stages and stage derivation from project state."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from ..state.models import PhaseInfo, PlanInfo, ProjectState
from ..state.reader import normalize_phase_number


class LifecycleStage(str, Enum):
    """Coarse label for where a project currently stands."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    ROADMAPPED = "roadmapped"
    PLANNING = "planning"
    EXECUTING = "executing"
    VERIFYING = "verifying"
    BETWEEN_PHASES = "between-phases"
    MILESTONE_END = "milestone-end"


# Status phrases (STATE.md "Status:" and the phase line suffix)
PHASE_DONE_MARKERS = ("phase complete", "verified")
PLANNING_MARKERS = ("planning", "ready to plan")


def plans_for_phase(plans_by_phase: Dict[str, List[PlanInfo]], number: str) -> List[PlanInfo]:
    """Look up a phase's plans, tolerating zero-padded keys ("05" vs "5")."""
    if number in plans_by_phase:
        return plans_by_phase[number]
    wanted = normalize_phase_number(number)
    for key, plans in plans_by_phase.items():
        if normalize_phase_number(key) == wanted:
            return plans
    return []


def current_phase(state: ProjectState) -> Optional[PhaseInfo]:
    """The first roadmap phase that is not marked complete."""
    for phase in state.phases:
        if not phase.complete:
            return phase
    return None


def next_phase_after(state: ProjectState, number: str) -> Optional[PhaseInfo]:
    """The next incomplete phase after ``number`` in roadmap order."""
    wanted = normalize_phase_number(number)
    seen = False
    for phase in state.phases:
        if seen and not phase.complete:
            return phase
        if normalize_phase_number(phase.number) == wanted:
            seen = True
    return None


def _status_text(state: ProjectState) -> str:
    position = state.position
    if position is None:
        return ""
    parts = [position.status or "", position.phase_status or ""]
    return " ".join(parts).lower()


def derive_lifecycle_stage(state: Optional[ProjectState]) -> LifecycleStage:
    """Derive the lifecycle stage from roadmap completion and position status.

    Args:
        state: Project state, or None when nothing could be read.

    Returns:
        The stage. The current phase is the first incomplete one in
        roadmap order.
    """
    if state is None or not state.initialized:
        return LifecycleStage.UNINITIALIZED
    if not state.has_roadmap:
        return LifecycleStage.INITIALIZED
    if not state.phases:
        return LifecycleStage.BETWEEN_PHASES

    phase = current_phase(state)
    if phase is None:
        return LifecycleStage.MILESTONE_END

    plans = plans_for_phase(state.plans_by_phase, phase.number)
    if not plans:
        status = _status_text(state)
        if any(marker in status for marker in PHASE_DONE_MARKERS):
            return LifecycleStage.BETWEEN_PHASES
        if any(marker in status for marker in PLANNING_MARKERS):
            return LifecycleStage.PLANNING
        return LifecycleStage.ROADMAPPED

    if any(not plan.complete for plan in plans):
        return LifecycleStage.EXECUTING
    return LifecycleStage.VERIFYING


def phase_completion(state: ProjectState) -> str:
    """``"2/5"`` style count of completed roadmap phases."""
    done = sum(1 for phase in state.phases if phase.complete)
    return f"{done}/{len(state.phases)}"
