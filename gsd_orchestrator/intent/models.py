"""Result and configuration types for intent classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from ..discovery.models import CommandSpec
from ..lifecycle.stages import LifecycleStage


class ClassificationType(str, Enum):
    EXACT_MATCH = "exact-match"
    CLASSIFIED = "classified"
    AMBIGUOUS = "ambiguous"
    ERROR = "error"


class ClassificationMethod(str, Enum):
    EXACT = "exact"
    BAYES = "bayes"
    SEMANTIC = "semantic"


@dataclass
class ExtractedArguments:
    """Values pulled out of the user's input."""

    raw: str = ""
    positional: List[str] = field(default_factory=list)
    phase_number: Optional[str] = None
    flags: List[str] = field(default_factory=list)
    description: Optional[str] = None
    version: Optional[str] = None
    profile: Optional[str] = None


@dataclass(frozen=True)
class Alternative:
    command: CommandSpec
    confidence: float


@dataclass
class ClassificationResult:
    """Outcome of classifying one user input."""

    type: ClassificationType
    command: Optional[CommandSpec] = None
    confidence: float = 0.0
    arguments: ExtractedArguments = field(default_factory=ExtractedArguments)
    method: Optional[ClassificationMethod] = None
    alternatives: List[Alternative] = field(default_factory=list)
    lifecycle_stage: Optional[LifecycleStage] = None
    message: Optional[str] = None


class ClassifierConfig(BaseModel):
    """Tuning knobs for the statistical and semantic layers."""

    enable_semantic: bool = Field(
        default=False,
        description="Request the semantic layer when the extension provides it",
    )
    confidence_threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Minimum top posterior for a 'classified' result",
    )
    ambiguity_gap: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Minimum margin between the top two candidates",
    )
    max_alternatives: int = Field(
        default=3,
        ge=1,
        description="Candidates attached to an ambiguous result",
    )
    semantic_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Minimum similarity for accepting a semantic match",
    )
