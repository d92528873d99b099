"""Parsers that turn single artifact files into typed specs.

Each parser raises :class:`ArtifactParseError` for a structurally broken
file. The discovery service catches it and records a warning so one bad
file never aborts a scan.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .frontmatter import extract_objective, parse_frontmatter, split_frontmatter
from .models import AGENT_NAME_PREFIX, AgentSpec, CommandSpec, TeamSpec

logger = logging.getLogger(__name__)


class ArtifactParseError(Exception):
    """Raised when an artifact file cannot be turned into a model."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ArtifactParseError(path, f"unreadable file: {e}") from e


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "(root)"
    return f"invalid {location}: {first['msg']}"


def parse_command_file(path: Path, namespace: Optional[str] = None) -> CommandSpec:
    """Parse a command markdown file.

    Args:
        path: The command file.
        namespace: Namespace folder the file lives in. Bare names such as
            ``help`` are qualified with it.

    Raises:
        ArtifactParseError: When the frontmatter is missing, empty or invalid.
    """
    content = _read(path)
    meta = parse_frontmatter(content)
    if not meta:
        raise ArtifactParseError(path, "missing or empty frontmatter")

    name = meta.get("name")
    if isinstance(name, str) and name and ":" not in name and namespace:
        name = f"{namespace}:{name}"

    # An unquoted "[phase]" hint reads as an inline list
    hint = meta.get("argument-hint")
    if isinstance(hint, list):
        hint = f"[{', '.join(hint)}]"

    _, body = split_frontmatter(content)
    try:
        return CommandSpec(
            name=name,
            description=meta.get("description"),
            argument_hint=hint or None,
            allowed_tools=meta.get("allowed-tools"),
            agent=meta.get("agent") or None,
            objective=extract_objective(body),
            file_path=path,
        )
    except ValidationError as e:
        raise ArtifactParseError(path, _describe(e)) from e


def parse_agent_file(path: Path) -> Optional[AgentSpec]:
    """Parse an agent markdown file.

    Returns:
        The AgentSpec, or None when the declared name falls outside the
        reserved agent prefix. That case is a filter, not an error.

    Raises:
        ArtifactParseError: When the frontmatter is missing, empty or invalid.
    """
    meta = parse_frontmatter(_read(path))
    if not meta:
        raise ArtifactParseError(path, "missing or empty frontmatter")

    name = meta.get("name")
    if isinstance(name, str) and name and not name.startswith(AGENT_NAME_PREFIX):
        logger.debug(f"Skipping agent outside {AGENT_NAME_PREFIX} namespace: {name}")
        return None

    try:
        return AgentSpec(
            name=name,
            description=meta.get("description"),
            tools=meta.get("tools"),
            model=meta.get("model") or None,
            color=meta.get("color") or None,
            file_path=path,
        )
    except ValidationError as e:
        raise ArtifactParseError(path, _describe(e)) from e


def parse_team_config(path: Path) -> TeamSpec:
    """Parse a team ``config.json``.

    Both member shapes are accepted: ``leadAgentId`` with
    ``members[{agentId, role}]`` and ``members[{name, role, ...}]``.

    Raises:
        ArtifactParseError: When the file is not a JSON object or fails
            the team schema.
    """
    try:
        data = json.loads(_read(path))
    except json.JSONDecodeError as e:
        raise ArtifactParseError(path, f"invalid JSON: {e.msg}") from e

    if not isinstance(data, dict):
        raise ArtifactParseError(path, "team config must be a JSON object")

    try:
        return TeamSpec.model_validate({**data, "file_path": path})
    except ValidationError as e:
        raise ArtifactParseError(path, _describe(e)) from e
