"""Artifact discovery - finds commands, agents and teams on disk.

Discovery is fail-soft: a broken artifact file is skipped and reported
through ``DiscoveryResult.warnings`` instead of aborting the scan.
"""

from .cache import DiscoveryCache
from .frontmatter import extract_objective, parse_frontmatter
from .models import (
    AgentSpec,
    CommandSpec,
    DiscoveryResult,
    DiscoveryWarning,
    InstallationInfo,
    TeamMember,
    TeamSpec,
)
from .parsers import (
    ArtifactParseError,
    parse_agent_file,
    parse_command_file,
    parse_team_config,
)
from .service import (
    DiscoveryService,
    create_discovery_service,
    detect_installation,
    discover,
)

__all__ = [
    "AgentSpec",
    "ArtifactParseError",
    "CommandSpec",
    "DiscoveryCache",
    "DiscoveryResult",
    "DiscoveryService",
    "DiscoveryWarning",
    "InstallationInfo",
    "TeamMember",
    "TeamSpec",
    "create_discovery_service",
    "detect_installation",
    "discover",
    "extract_objective",
    "parse_agent_file",
    "parse_command_file",
    "parse_frontmatter",
    "parse_team_config",
]
