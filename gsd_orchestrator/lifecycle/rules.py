"""Transition rules: which command comes next for a stage and phase."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .artifacts import PhaseArtifacts
from .stages import LifecycleStage

COMMAND_NAMESPACE = "gsd"

# Commands that interrupt phase work and then hand back to it
SIDE_QUEST_COMMANDS = frozenset({"gsd:quick", "gsd:debug"})

PHASE_MUTATION_REASONS: Dict[str, str] = {
    "gsd:insert-phase": "Newly inserted phase needs planning.",
    "gsd:add-phase": "Newly added phase needs planning.",
}

# Documented successor of each command
SUCCESSORS: Dict[str, str] = {
    "gsd:new-project": "gsd:new-milestone",
    "gsd:discuss-phase": "gsd:plan-phase",
    "gsd:research-phase": "gsd:plan-phase",
    "gsd:plan-phase": "gsd:execute-phase",
    "gsd:execute-phase": "gsd:verify-work",
    "gsd:verify-work": "gsd:discuss-phase",
    "gsd:insert-phase": "gsd:plan-phase",
    "gsd:add-phase": "gsd:plan-phase",
    "gsd:audit-milestone": "gsd:complete-milestone",
    "gsd:complete-milestone": "gsd:new-milestone",
}


@dataclass
class ActionSuggestion:
    """One recommended command."""

    command: str
    reason: str
    args: Optional[str] = None
    clear_context: bool = False


@dataclass
class LifecycleSuggestion:
    """The recommended next step plus other reasonable options."""

    primary: ActionSuggestion
    stage: LifecycleStage
    alternatives: List[ActionSuggestion] = field(default_factory=list)
    context: str = ""

    @property
    def commands(self) -> List[str]:
        return [self.primary.command] + [alt.command for alt in self.alternatives]


def qualify_command(name: Optional[str]) -> Optional[str]:
    """Add the default namespace to bare names: ``plan-phase`` -> ``gsd:plan-phase``."""
    if not name:
        return None
    name = name.strip().lstrip("/")
    if not name:
        return None
    return name if ":" in name else f"{COMMAND_NAMESPACE}:{name}"


def _action(command: str, reason: str, args: Optional[str] = None, clear_context: bool = False):
    return ActionSuggestion(command=command, reason=reason, args=args, clear_context=clear_context)


def with_completed_context(context: str, completed: Optional[str]) -> str:
    if not completed:
        return context
    if qualify_command(completed) in SIDE_QUEST_COMMANDS:
        return f"Returning to phase work after {completed}. {context}"
    return f"After {completed}: {context}"


def stage_level_suggestion(
    stage: LifecycleStage,
    completed: Optional[str] = None,
    phase_number: Optional[str] = None,
    completion: Optional[str] = None,
) -> Optional[LifecycleSuggestion]:
    """Suggestions that depend only on the stage, or None for phase-level stages."""
    if stage is LifecycleStage.UNINITIALIZED:
        return LifecycleSuggestion(
            primary=_action(
                "gsd:new-project",
                "Project not initialized. Run new-project to set up .planning/.",
            ),
            stage=stage,
            context=with_completed_context(
                "No .planning/ directory found. Initialize the project to begin.", completed
            ),
        )

    if stage is LifecycleStage.INITIALIZED:
        return LifecycleSuggestion(
            primary=_action(
                "gsd:new-milestone",
                "Project initialized but no roadmap. Create a milestone to define phases.",
            ),
            stage=stage,
            context=with_completed_context(
                "Project structure exists but no roadmap. Create a milestone to plan work.",
                completed,
            ),
        )

    if stage is LifecycleStage.MILESTONE_END:
        return LifecycleSuggestion(
            primary=_action(
                "gsd:audit-milestone",
                "All phases complete. Audit the milestone for quality and completeness.",
            ),
            alternatives=[
                _action("gsd:complete-milestone", "Archive the milestone and prepare for the next one."),
                _action("gsd:new-milestone", "Start a new milestone immediately."),
            ],
            stage=stage,
            context=with_completed_context(
                f"All phases complete ({completion or 'all'}). Audit or close the milestone.",
                completed,
            ),
        )

    if stage is LifecycleStage.BETWEEN_PHASES:
        progress = f" {completion} phases complete." if completion else ""
        return LifecycleSuggestion(
            primary=_action(
                "gsd:plan-phase",
                "Between phases. Plan the next phase to continue.",
                args=phase_number,
                clear_context=phase_number is not None,
            ),
            alternatives=[
                _action("gsd:discuss-phase", "Discuss approach before planning.", args=phase_number),
                _action("gsd:audit-milestone", "Check milestone-level progress."),
            ],
            stage=stage,
            context=with_completed_context(
                f"Between phases. Ready to plan the next one.{progress}", completed
            ),
        )

    return None


def mutation_suggestion(
    completed: str, stage: LifecycleStage, phase_number: str
) -> Optional[LifecycleSuggestion]:
    """After inserting or adding a phase, that phase needs planning."""
    reason = PHASE_MUTATION_REASONS.get(qualify_command(completed) or "")
    if reason is None:
        return None
    return LifecycleSuggestion(
        primary=_action("gsd:plan-phase", reason, args=phase_number, clear_context=True),
        alternatives=[
            _action("gsd:discuss-phase", "Discuss approach before planning.", args=phase_number)
        ],
        stage=stage,
        context=reason,
    )


def phase_level_suggestion(
    artifacts: PhaseArtifacts,
    stage: LifecycleStage,
    completed: Optional[str] = None,
    next_phase_number: Optional[str] = None,
) -> LifecycleSuggestion:
    """Pick the next command from what exists for the current phase."""
    num = artifacts.phase_number

    if artifacts.plan_count == 0:
        if artifacts.has_research:
            return LifecycleSuggestion(
                primary=_action(
                    "gsd:plan-phase",
                    "Research complete. Create execution plans from research findings.",
                    args=num,
                    clear_context=True,
                ),
                alternatives=[
                    _action("gsd:discuss-phase", "Discuss approach before committing to plans.", args=num)
                ],
                stage=stage,
                context=with_completed_context(
                    f"Phase {num} has research but no plans. Ready to plan.", completed
                ),
            )
        if artifacts.has_context:
            return LifecycleSuggestion(
                primary=_action(
                    "gsd:plan-phase",
                    "Context captured. Create detailed execution plans.",
                    args=num,
                    clear_context=True,
                ),
                alternatives=[
                    _action("gsd:research-phase", "Research the domain before planning.", args=num),
                    _action("gsd:discuss-phase", "Continue discussing approach.", args=num),
                ],
                stage=stage,
                context=with_completed_context(
                    f"Phase {num} has context discussion but no plans. Ready to plan.", completed
                ),
            )
        return LifecycleSuggestion(
            primary=_action(
                "gsd:discuss-phase",
                "No context or plans yet. Discuss the phase approach first.",
                args=num,
            ),
            alternatives=[
                _action("gsd:plan-phase", "Skip discussion and create plans directly.", args=num, clear_context=True),
                _action("gsd:research-phase", "Research the domain before planning.", args=num),
            ],
            stage=stage,
            context=with_completed_context(
                f"Phase {num} has no artifacts. Discuss or plan to begin.", completed
            ),
        )

    remaining = artifacts.unexecuted_plans
    if remaining:
        total = artifacts.plan_count
        if artifacts.has_uat:
            context = f"Phase {num}: {len(remaining)} gap closure plan(s) need execution before phase is complete."
        else:
            context = (
                f"Phase {num}: {total - len(remaining)}/{total} plans executed, "
                f"{len(remaining)} remaining."
            )
        return LifecycleSuggestion(
            primary=_action(
                "gsd:execute-phase",
                f"{len(remaining)} of {total} plans remaining. Continue execution.",
                args=num,
                clear_context=True,
            ),
            alternatives=[
                _action("gsd:verify-work", "Verify completed work before continuing.", args=num),
                _action("gsd:plan-phase", "Review or update plans.", args=num),
            ],
            stage=stage,
            context=with_completed_context(context, completed),
        )

    if artifacts.has_uat:
        if next_phase_number:
            nxt = next_phase_number
            return LifecycleSuggestion(
                primary=_action(
                    "gsd:discuss-phase",
                    f"Phase {num} complete. Discuss phase {nxt} approach.",
                    args=nxt,
                ),
                alternatives=[
                    _action("gsd:plan-phase", f"Skip discussion and plan phase {nxt} directly.", args=nxt, clear_context=True),
                    _action("gsd:audit-milestone", "Check milestone-level progress."),
                ],
                stage=stage,
                context=with_completed_context(
                    f"Phase {num} complete and verified. Ready for next phase {nxt}.", completed
                ),
            )
        return LifecycleSuggestion(
            primary=_action(
                "gsd:audit-milestone",
                "All phases complete. Audit the milestone for quality and completeness.",
            ),
            alternatives=[
                _action("gsd:complete-milestone", "Archive the milestone and prepare for the next one.")
            ],
            stage=stage,
            context=with_completed_context(
                f"Phase {num} complete and verified. No more phases to execute.", completed
            ),
        )

    alternatives = []
    if next_phase_number:
        alternatives.append(
            _action("gsd:plan-phase", "Plan the next phase (skip verification).", args=next_phase_number, clear_context=True)
        )
    alternatives.append(_action("gsd:execute-phase", "Re-execute plans if needed.", args=num, clear_context=True))
    return LifecycleSuggestion(
        primary=_action("gsd:verify-work", "All plans executed. Verify the work before moving on.", args=num),
        alternatives=alternatives,
        stage=stage,
        context=with_completed_context(
            f"Phase {num}: all {artifacts.plan_count} plans executed. Ready for verification.",
            completed,
        ),
    )


def apply_successor_bias(suggestion: LifecycleSuggestion, completed: Optional[str]) -> LifecycleSuggestion:
    """Promote the completed command's successor when it is already a candidate."""
    successor = SUCCESSORS.get(qualify_command(completed) or "")
    if successor is None or suggestion.primary.command == successor:
        return suggestion

    for index, alternative in enumerate(suggestion.alternatives):
        if alternative.command == successor:
            others = suggestion.alternatives[:index] + suggestion.alternatives[index + 1:]
            return LifecycleSuggestion(
                primary=alternative,
                alternatives=[suggestion.primary] + others,
                stage=suggestion.stage,
                context=suggestion.context,
            )
    return suggestion
