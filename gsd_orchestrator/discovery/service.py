"""Discovery service - scans an installation for commands, agents and teams.

Layout under an installation base path::

    commands/<namespace>/<verb>.md   one file per command
    agents/gsd-<role>.md             flat agent files
    teams/<team>/config.json         one folder per team
    get-shit-done/VERSION            version marker and cache key

Usage:
    from gsd_orchestrator.discovery import create_discovery_service

    service = create_discovery_service()
    if service:
        result = service.discover()
        for warning in result.warnings:
            print(warning.path, warning.message)
"""

import logging
import time
from pathlib import Path
from typing import List, Optional

from .cache import DiscoveryCache
from .models import (
    AGENT_NAME_PREFIX,
    AgentSpec,
    CommandSpec,
    DiscoveryResult,
    DiscoveryWarning,
    InstallationInfo,
    TeamSpec,
)
from .parsers import (
    ArtifactParseError,
    parse_agent_file,
    parse_command_file,
    parse_team_config,
)

logger = logging.getLogger(__name__)

COMMANDS_DIR = "commands"
AGENTS_DIR = "agents"
TEAMS_DIR = "teams"
TEAM_CONFIG_FILE = "config.json"
INSTALL_DIR = "get-shit-done"
VERSION_FILE = "VERSION"
UNKNOWN_VERSION = "unknown"


def get_default_install_bases() -> List[Path]:
    """Return the installation roots checked by detection, in priority order.

    Returns:
        - ~/.claude (global install)
        - ./.claude (project-local install)
    """
    return [Path.home() / ".claude", Path.cwd() / ".claude"]


def detect_installation(
    global_base: Optional[Path] = None, local_base: Optional[Path] = None
) -> Optional[InstallationInfo]:
    """Find an installation, preferring the global one.

    A base qualifies when it contains the ``get-shit-done/`` directory.

    Returns:
        InstallationInfo for the first qualifying base, or None.
    """
    default_global, default_local = get_default_install_bases()
    candidates = [
        (Path(global_base) if global_base else default_global, "global"),
        (Path(local_base) if local_base else default_local, "local"),
    ]
    for base, location in candidates:
        if (base / INSTALL_DIR).is_dir():
            logger.debug(f"Found {location} installation at {base}")
            return InstallationInfo(base_path=base, location=location)
    logger.debug("No installation found")
    return None


class DiscoveryService:
    """Scans one installation base path and caches the result.

    The cache holds a single entry keyed by base path and the version
    marker's mtime. Touching the marker forces a rescan. Without a marker
    nothing is cached.
    """

    def __init__(
        self,
        base_path: Path,
        location: str = "global",
        cache: Optional[DiscoveryCache] = None,
    ):
        self.base_path = Path(base_path)
        self.location = location
        self.cache = cache if cache is not None else DiscoveryCache()
        self._warnings: List[DiscoveryWarning] = []

    @property
    def warnings(self) -> List[DiscoveryWarning]:
        """Files skipped by the most recent scan."""
        return list(self._warnings)

    @property
    def version_file(self) -> Path:
        return self.base_path / INSTALL_DIR / VERSION_FILE

    def _marker_mtime(self) -> Optional[float]:
        try:
            return self.version_file.stat().st_mtime
        except OSError:
            return None

    def _read_version(self) -> str:
        try:
            version = self.version_file.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError):
            return UNKNOWN_VERSION
        return version or UNKNOWN_VERSION

    def _warn(self, error: ArtifactParseError) -> None:
        logger.warning(f"Skipping {error.path}: {error.message}")
        self._warnings.append(DiscoveryWarning(path=error.path, message=error.message))

    def discover(self) -> DiscoveryResult:
        """Scan the installation, or return the cached result.

        Returns:
            DiscoveryResult for the tree as of the version marker's mtime.
        """
        mtime = self._marker_mtime()
        if mtime is not None:
            cached = self.cache.get(self.base_path, mtime)
            if cached is not None:
                self._warnings = list(cached.warnings)
                return cached

        self._warnings = []
        commands = self._discover_commands()
        agents = self._discover_agents()
        teams = self._discover_teams()
        result = DiscoveryResult(
            commands=commands,
            agents=agents,
            teams=teams,
            base_path=self.base_path,
            location=self.location,
            version=self._read_version(),
            discovered_at=time.time(),
            warnings=list(self._warnings),
        )

        logger.info(
            f"Discovered {len(result.commands)} commands, {len(result.agents)} agents, "
            f"{len(result.teams)} teams in {self.base_path} "
            f"({len(self._warnings)} skipped)"
        )

        if mtime is not None:
            self.cache.put(self.base_path, mtime, result)
        return result

    def refresh(self) -> DiscoveryResult:
        """Drop the cached result and rescan."""
        self.cache.clear()
        return self.discover()

    def _discover_commands(self) -> List[CommandSpec]:
        commands_dir = self.base_path / COMMANDS_DIR
        if not commands_dir.is_dir():
            logger.debug(f"Commands directory does not exist: {commands_dir}")
            return []

        commands: List[CommandSpec] = []
        for namespace_dir in sorted(commands_dir.iterdir()):
            if not namespace_dir.is_dir() or namespace_dir.name.startswith("."):
                continue
            for command_file in sorted(namespace_dir.glob("*.md")):
                try:
                    commands.append(parse_command_file(command_file, namespace_dir.name))
                except ArtifactParseError as e:
                    self._warn(e)
        return commands

    def _discover_agents(self) -> List[AgentSpec]:
        agents_dir = self.base_path / AGENTS_DIR
        if not agents_dir.is_dir():
            logger.debug(f"Agents directory does not exist: {agents_dir}")
            return []

        agents: List[AgentSpec] = []
        for agent_file in sorted(agents_dir.glob(f"{AGENT_NAME_PREFIX}*.md")):
            try:
                agent = parse_agent_file(agent_file)
            except ArtifactParseError as e:
                self._warn(e)
                continue
            if agent is not None:
                agents.append(agent)
        return agents

    def _discover_teams(self) -> List[TeamSpec]:
        teams_dir = self.base_path / TEAMS_DIR
        if not teams_dir.is_dir():
            logger.debug(f"Teams directory does not exist: {teams_dir}")
            return []

        teams: List[TeamSpec] = []
        for team_dir in sorted(teams_dir.iterdir()):
            if not team_dir.is_dir() or team_dir.name.startswith("."):
                continue
            config_path = team_dir / TEAM_CONFIG_FILE
            if not config_path.is_file():
                self._warn(ArtifactParseError(config_path, "team directory has no config.json"))
                continue
            try:
                teams.append(parse_team_config(config_path))
            except ArtifactParseError as e:
                self._warn(e)
        return teams


def discover(base_path: Path, cache: Optional[DiscoveryCache] = None) -> DiscoveryResult:
    """Scan ``base_path`` once; pass a shared cache to reuse results across calls."""
    return DiscoveryService(base_path, cache=cache).discover()


def create_discovery_service(
    global_base: Optional[Path] = None,
    local_base: Optional[Path] = None,
    cache: Optional[DiscoveryCache] = None,
) -> Optional[DiscoveryService]:
    """Build a service for the detected installation, or None when absent."""
    install = detect_installation(global_base, local_base)
    if install is None:
        return None
    return DiscoveryService(install.base_path, location=install.location, cache=cache)
