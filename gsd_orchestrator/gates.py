"""Safety gates for routed commands.

Pure policy: given the command, the project's operating mode and the
classification confidence, decide whether to proceed, ask the user to
confirm, or block. No I/O, fully deterministic.

Decision table:

    gate type        interactive   yolo
    low-confidence   confirm       confirm
    destructive      confirm       proceed (skipped_by_yolo)
    routing          proceed       proceed

Low confidence wins over the command's own gate type.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Union

from pydantic import BaseModel, Field

from .state.models import OperatingMode

LOW_CONFIDENCE_THRESHOLD = 0.5

DEFAULT_DESTRUCTIVE_COMMANDS: FrozenSet[str] = frozenset(
    {
        "gsd:remove-phase",
        "gsd:complete-milestone",
        "gsd:new-project",
        "gsd:new-milestone",
        "gsd:insert-phase",
    }
)


class GateAction(str, Enum):
    PROCEED = "proceed"
    CONFIRM = "confirm"
    BLOCK = "block"


class GateType(str, Enum):
    ROUTING = "routing"
    DESTRUCTIVE = "destructive"
    LOW_CONFIDENCE = "low-confidence"


@dataclass(frozen=True)
class GateDecision:
    """Outcome of evaluating the gate for one command."""

    action: GateAction
    gate_type: GateType
    reason: str
    skipped_by_yolo: bool = False


class GateConfig(BaseModel):
    """Overrides for the gate policy table."""

    model_config = {"frozen": True}

    destructive_commands: FrozenSet[str] = Field(
        default=DEFAULT_DESTRUCTIVE_COMMANDS,
        description="Commands that mutate project files and need confirmation",
    )
    low_confidence_threshold: float = Field(
        default=LOW_CONFIDENCE_THRESHOLD,
        ge=0.0,
        le=1.0,
        description="Classification confidence strictly below this needs confirmation",
    )


_DEFAULT_CONFIG = GateConfig()


def _normalize_mode(mode: Union[OperatingMode, str, None]) -> OperatingMode:
    try:
        return OperatingMode(mode)
    except ValueError:
        return OperatingMode.INTERACTIVE


def _normalize_confidence(confidence) -> float:
    try:
        value = float(confidence)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(value) else value


def evaluate_gate(
    command_name: str,
    mode: Union[OperatingMode, str, None],
    confidence: float,
    config: Optional[GateConfig] = None,
) -> GateDecision:
    """Decide whether ``command_name`` may run.

    Args:
        command_name: Qualified command name, e.g. ``gsd:remove-phase``.
        mode: ``interactive`` or ``yolo``; anything else counts as
            interactive.
        confidence: Classification confidence in ``[0, 1]``. NaN or a
            non-number counts as 0.
        config: Policy overrides.

    Returns:
        The gate decision. Never raises.
    """
    config = config or _DEFAULT_CONFIG

    if not command_name or not str(command_name).strip():
        return GateDecision(
            action=GateAction.BLOCK,
            gate_type=GateType.ROUTING,
            reason="No command to run",
        )

    score = _normalize_confidence(confidence)
    if score < config.low_confidence_threshold:
        return GateDecision(
            action=GateAction.CONFIRM,
            gate_type=GateType.LOW_CONFIDENCE,
            reason=(
                f"Classification confidence {score:.2f} is below "
                f"{config.low_confidence_threshold:.2f}; confirm {command_name}"
            ),
        )

    if command_name in config.destructive_commands:
        if _normalize_mode(mode) == OperatingMode.YOLO:
            return GateDecision(
                action=GateAction.PROCEED,
                gate_type=GateType.DESTRUCTIVE,
                reason=f"{command_name} modifies project files; confirmation skipped in yolo mode",
                skipped_by_yolo=True,
            )
        return GateDecision(
            action=GateAction.CONFIRM,
            gate_type=GateType.DESTRUCTIVE,
            reason=f"{command_name} modifies project files; confirm before running",
        )

    return GateDecision(
        action=GateAction.PROCEED,
        gate_type=GateType.ROUTING,
        reason=f"{command_name} is safe to run",
    )
