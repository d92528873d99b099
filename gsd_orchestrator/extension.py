"""Companion extension detection.

The extension is detected with an ordered list of probes. The first probe
that succeeds wins:

1. the companion CLI binary answers ``--version`` within a short timeout
2. the companion's installed package directory exists

Detection is all-or-nothing: every feature flag is on when the extension
is found and off otherwise. Probes never raise; a failing probe just
hands over to the next one.

Usage:
    from gsd_orchestrator.extension import detect_extension, ExtensionOverrides

    caps = detect_extension()
    if caps.features.semantic_classification:
        ...

    # Force an outcome without touching the environment
    caps = detect_extension(ExtensionOverrides(cli_available=False, dist_path="/nope"))
"""

from __future__ import annotations

import json
import logging
import re
import shutil
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Protocol, Union

logger = logging.getLogger(__name__)

DEFAULT_CLI_NAME = "skill-creator"
DEFAULT_PROBE_TIMEOUT = 5.0
SEMVER_PATTERN = re.compile(r"(?<![\d.])(\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]*[0-9A-Za-z])?)")


class DetectionMethod(str, Enum):
    CLI_BINARY = "cli-binary"
    DIST_DIRECTORY = "dist-directory"
    NONE = "none"


@dataclass(frozen=True)
class ExtensionFeatures:
    semantic_classification: bool = False
    enhanced_discovery: bool = False
    enhanced_lifecycle: bool = False
    custom_skill_creation: bool = False

    @classmethod
    def all(cls, enabled: bool) -> "ExtensionFeatures":
        return cls(
            semantic_classification=enabled,
            enhanced_discovery=enabled,
            enhanced_lifecycle=enabled,
            custom_skill_creation=enabled,
        )


@dataclass(frozen=True)
class ExtensionCapabilities:
    detected: bool
    detection_method: DetectionMethod
    version: Optional[str] = None
    features: ExtensionFeatures = field(default_factory=ExtensionFeatures)


@dataclass
class ExtensionOverrides:
    """Injected probe outcomes.

    Attributes:
        cli_available: Force the CLI probe to succeed (True) or fail (False)
            without spawning a process.
        cli_version: Version reported when ``cli_available`` is forced True.
        dist_path: Directory checked by the package-directory probe.
        cli_name: Binary to invoke.
        timeout: Seconds to wait for the CLI.
    """

    cli_available: Optional[bool] = None
    cli_version: Optional[str] = None
    dist_path: Optional[Union[str, Path]] = None
    cli_name: str = DEFAULT_CLI_NAME
    timeout: float = DEFAULT_PROBE_TIMEOUT


@dataclass(frozen=True)
class ProbeResult:
    method: DetectionMethod
    version: Optional[str] = None


class ExtensionProbe(Protocol):
    def probe(self) -> Optional[ProbeResult]:
        ...


def create_null_capabilities() -> ExtensionCapabilities:
    """Capabilities for "no extension": nothing detected, every feature off."""
    return ExtensionCapabilities(
        detected=False,
        detection_method=DetectionMethod.NONE,
        version=None,
        features=ExtensionFeatures.all(False),
    )


def parse_version(output: str) -> Optional[str]:
    match = SEMVER_PATTERN.search(output or "")
    return match.group(1) if match else None


class CliBinaryProbe:
    """Runs ``<cli> --version`` and reads a semantic version from its output."""

    def __init__(
        self,
        cli_name: str = DEFAULT_CLI_NAME,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
        available: Optional[bool] = None,
        version: Optional[str] = None,
    ):
        self.cli_name = cli_name
        self.timeout = timeout
        self.available = available
        self.version = version

    def probe(self) -> Optional[ProbeResult]:
        if self.available is not None:
            if not self.available:
                return None
            return ProbeResult(DetectionMethod.CLI_BINARY, self.version)

        if not shutil.which(self.cli_name):
            logger.debug(f"Extension CLI not on PATH: {self.cli_name}")
            return None

        try:
            result = subprocess.run(
                [self.cli_name, "--version"],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (subprocess.TimeoutExpired, FileNotFoundError, OSError) as e:
            logger.debug(f"Extension CLI probe failed: {e}")
            return None

        if result.returncode != 0:
            logger.debug(f"Extension CLI exited with {result.returncode}")
            return None

        version = parse_version(result.stdout) or parse_version(result.stderr)
        if version is None:
            logger.debug("Extension CLI answered without a version string")
            return None
        return ProbeResult(DetectionMethod.CLI_BINARY, version)


class DistDirectoryProbe:
    """Checks that the extension's installed package directory exists."""

    def __init__(self, dist_path: Optional[Union[str, Path]] = None):
        self.dist_path = Path(dist_path).expanduser() if dist_path else None

    def _read_package_version(self) -> Optional[str]:
        manifest = self.dist_path.parent / "package.json"
        try:
            data = json.loads(manifest.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            return None
        version = data.get("version") if isinstance(data, dict) else None
        return version if isinstance(version, str) else None

    def probe(self) -> Optional[ProbeResult]:
        if self.dist_path is None:
            return None
        try:
            found = self.dist_path.is_dir()
        except OSError:
            found = False
        if not found:
            logger.debug(f"Extension dist directory not found: {self.dist_path}")
            return None
        return ProbeResult(DetectionMethod.DIST_DIRECTORY, self._read_package_version())


def default_probes(overrides: ExtensionOverrides) -> List[ExtensionProbe]:
    """Probes in priority order: CLI binary first, then package directory."""
    return [
        CliBinaryProbe(
            cli_name=overrides.cli_name,
            timeout=overrides.timeout,
            available=overrides.cli_available,
            version=overrides.cli_version,
        ),
        DistDirectoryProbe(overrides.dist_path),
    ]


def detect_extension(
    overrides: Optional[ExtensionOverrides] = None,
    probes: Optional[List[ExtensionProbe]] = None,
) -> ExtensionCapabilities:
    """Detect the companion extension.

    Args:
        overrides: Injected probe outcomes and probe parameters.
        probes: Replace the default probe list entirely.

    Returns:
        Capabilities from the first successful probe, or null capabilities.
    """
    overrides = overrides or ExtensionOverrides()
    for probe in probes if probes is not None else default_probes(overrides):
        result = probe.probe()
        if result is None:
            continue
        logger.info(f"Extension detected via {result.method.value} (version {result.version})")
        return ExtensionCapabilities(
            detected=True,
            detection_method=result.method,
            version=result.version,
            features=ExtensionFeatures.all(True),
        )
    return create_null_capabilities()
