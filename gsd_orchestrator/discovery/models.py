"""Typed specs for discovered commands, agents and teams."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, BeforeValidator, Field, model_validator

__all__ = [
    "AGENT_NAME_PREFIX",
    "AgentSpec",
    "CommandSpec",
    "DiscoveryResult",
    "DiscoveryWarning",
    "InstallationInfo",
    "TeamMember",
    "TeamSpec",
]

# Agents outside this namespace belong to other tools and are never admitted
AGENT_NAME_PREFIX = "gsd-"

COMMAND_NAME_PATTERN = r"^[\w-]+:[\w-]+$"


def _to_tool_list(value: Any) -> List[str]:
    """Accept a YAML list or a comma-separated string of tool names."""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        return [tool.strip() for tool in value.split(",") if tool.strip()]
    if isinstance(value, (list, tuple)):
        return [str(tool).strip() for tool in value if str(tool).strip()]
    raise ValueError(f"tools must be a list or comma-separated string, got {type(value).__name__}")


ToolList = Annotated[List[str], BeforeValidator(_to_tool_list)]


class CommandSpec(BaseModel):
    """A slash command parsed from ``commands/<namespace>/<verb>.md``."""

    name: str = Field(
        pattern=COMMAND_NAME_PATTERN,
        description="Namespaced command name, e.g. gsd:plan-phase",
    )
    description: str = Field(min_length=1, description="One-line summary")
    argument_hint: Optional[str] = Field(default=None, description="Usage hint for arguments")
    allowed_tools: ToolList = Field(default_factory=list)
    agent: Optional[str] = Field(default=None, description="Owning specialist agent")
    objective: Optional[str] = Field(
        default=None, description="First <objective> block from the body"
    )
    file_path: Path

    model_config = {"frozen": True, "extra": "forbid"}

    @property
    def namespace(self) -> str:
        return self.name.split(":", 1)[0]

    @property
    def verb(self) -> str:
        return self.name.split(":", 1)[1]


class AgentSpec(BaseModel):
    """A specialist agent parsed from ``agents/gsd-*.md``."""

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    tools: ToolList = Field(default_factory=list)
    model: Optional[str] = None
    color: Optional[str] = None
    file_path: Path

    model_config = {"frozen": True, "extra": "forbid"}


class TeamMember(BaseModel):
    """One team member, normalized from either on-disk member shape."""

    name: str = Field(min_length=1)
    role: Optional[str] = None
    description: Optional[str] = None
    tools: ToolList = Field(default_factory=list)
    model: Optional[str] = None

    model_config = {"frozen": True, "extra": "ignore"}

    @model_validator(mode="before")
    @classmethod
    def _accept_agent_id(cls, data: Any) -> Any:
        # Lead/worker configs reference agents by agentId instead of name
        if isinstance(data, dict) and "name" not in data and "agentId" in data:
            data = {**data, "name": data["agentId"]}
        return data


class TeamSpec(BaseModel):
    """A team parsed from ``teams/<team>/config.json``."""

    name: str = Field(min_length=1)
    description: str = ""
    topology: str = "unknown"
    lead_agent_id: Optional[str] = Field(default=None, alias="leadAgentId")
    members: List[TeamMember] = Field(default_factory=list)
    file_path: Path

    model_config = {"frozen": True, "extra": "ignore", "populate_by_name": True}

    @property
    def member_count(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class DiscoveryWarning:
    """A single artifact that was skipped during discovery."""

    path: Path
    message: str
    type: Literal["parse-error"] = "parse-error"


@dataclass(frozen=True)
class InstallationInfo:
    """Where an installation was found."""

    base_path: Path
    location: Literal["global", "local"]


@dataclass
class DiscoveryResult:
    """Everything found under one installation base path."""

    commands: List[CommandSpec] = field(default_factory=list)
    agents: List[AgentSpec] = field(default_factory=list)
    teams: List[TeamSpec] = field(default_factory=list)
    base_path: Optional[Path] = None
    location: Literal["global", "local"] = "global"
    version: str = "unknown"
    discovered_at: float = 0.0
    warnings: List[DiscoveryWarning] = field(default_factory=list)

    def get_command(self, name: str) -> Optional[CommandSpec]:
        for command in self.commands:
            if command.name == name:
                return command
        return None
