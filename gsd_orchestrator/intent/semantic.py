"""Interface to the optional semantic (embedding) matcher.

The similarity computation lives in the companion extension. This module
only defines what the classifier expects from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, Set, runtime_checkable

from ..discovery.models import CommandSpec


@dataclass(frozen=True)
class SemanticMatch:
    command: CommandSpec
    similarity: float


@runtime_checkable
class SemanticMatcher(Protocol):
    """Embedding-backed matcher provided by the extension."""

    def initialize(self, commands: Sequence[CommandSpec]) -> None:
        """Index the commands. May raise if the backing model is unavailable."""
        ...

    def is_ready(self) -> bool:
        ...

    def match(self, query: str, allowed: Optional[Set[str]] = None) -> List[SemanticMatch]:
        """Return matches for ``query``, best first."""
        ...
