"""Narrow the candidate command set to what makes sense for a lifecycle stage."""

from typing import Dict, FrozenSet, List, Sequence

from ..discovery.models import CommandSpec
from ..lifecycle.stages import LifecycleStage

# Valid at every stage
UNIVERSAL_COMMANDS: FrozenSet[str] = frozenset(
    {
        "gsd:help",
        "gsd:progress",
        "gsd:quick",
        "gsd:debug",
        "gsd:settings",
        "gsd:add-todo",
        "gsd:pause-work",
        "gsd:resume-work",
    }
)

_PHASE_PLANNING = frozenset(
    {
        "gsd:plan-phase",
        "gsd:discuss-phase",
        "gsd:research-phase",
        "gsd:list-phase-assumptions",
        "gsd:add-phase",
        "gsd:insert-phase",
        "gsd:remove-phase",
    }
)

STAGE_COMMANDS: Dict[LifecycleStage, FrozenSet[str]] = {
    LifecycleStage.UNINITIALIZED: frozenset({"gsd:new-project"}),
    LifecycleStage.INITIALIZED: frozenset({"gsd:new-milestone"}),
    LifecycleStage.ROADMAPPED: _PHASE_PLANNING,
    LifecycleStage.PLANNING: _PHASE_PLANNING,
    LifecycleStage.EXECUTING: frozenset(
        {"gsd:execute-phase", "gsd:plan-phase", "gsd:verify-work"}
    ),
    LifecycleStage.VERIFYING: frozenset({"gsd:verify-work", "gsd:execute-phase"}),
    LifecycleStage.MILESTONE_END: frozenset(
        {
            "gsd:audit-milestone",
            "gsd:complete-milestone",
            "gsd:new-milestone",
            "gsd:plan-milestone-gaps",
        }
    ),
    LifecycleStage.BETWEEN_PHASES: frozenset(
        {"gsd:plan-phase", "gsd:discuss-phase", "gsd:audit-milestone"}
    ),
}


def filter_by_lifecycle(
    commands: Sequence[CommandSpec], stage: LifecycleStage
) -> List[CommandSpec]:
    """Keep universal commands plus the stage's own commands, in input order."""
    allowed = UNIVERSAL_COMMANDS | STAGE_COMMANDS.get(stage, frozenset())
    return [command for command in commands if command.name in allowed]
