"""Verbosity control for orchestrator output.

Output is assembled as tagged sections, each with the minimum verbosity
level at which it appears. Level 1 shows only the routed result, level 5
shows everything.
"""

from __future__ import annotations

from enum import IntEnum
from typing import List, Sequence

from pydantic import BaseModel, Field, StrictInt

MIN_VERBOSITY = 1
MAX_VERBOSITY = 5
DEFAULT_VERBOSITY = 3


class VerbosityLevel(IntEnum):
    SILENT = 1
    TERSE = 2
    NORMAL = 3
    DETAILED = 4
    TRANSPARENT = 5


class OutputSection(BaseModel):
    """One block of output, shown at ``min_level`` and above."""

    model_config = {"extra": "allow", "frozen": True}

    tag: str
    content: str
    min_level: StrictInt = Field(
        default=DEFAULT_VERBOSITY,
        ge=MIN_VERBOSITY,
        le=MAX_VERBOSITY,
        description="Lowest verbosity level that shows this section",
    )


def clamp_verbosity(level: int) -> int:
    return max(MIN_VERBOSITY, min(MAX_VERBOSITY, int(level)))


def filter_by_verbosity(sections: Sequence[OutputSection], level: int) -> List[OutputSection]:
    """Keep the sections with ``min_level <= level``, in input order.

    The input is never modified; a new list is returned.
    """
    return [section for section in sections if section.min_level <= level]
