"""
Typed orchestrator settings using pydantic-settings.

Every field can be set from the environment with the ``GSD_ORCHESTRATOR_``
prefix, e.g. ``GSD_ORCHESTRATOR_VERBOSITY=5``.

Usage:
    from gsd_orchestrator.settings import get_settings

    settings = get_settings()
    print(settings.planning_dir)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .extension import DEFAULT_CLI_NAME, DEFAULT_PROBE_TIMEOUT, ExtensionOverrides
from .intent.models import ClassifierConfig
from .verbosity import DEFAULT_VERBOSITY, MAX_VERBOSITY, MIN_VERBOSITY


# =============================================================================
# Orchestrator Settings
# =============================================================================


class OrchestratorSettings(BaseSettings):
    """Where to look for the installation and project, and how to route."""

    model_config = SettingsConfigDict(
        env_prefix="GSD_ORCHESTRATOR_",
        extra="ignore",
    )

    # Locations
    base_path: Optional[Path] = Field(
        default=None,
        description="Explicit installation base; skips installation detection",
    )
    global_base: Path = Field(
        default_factory=lambda: Path.home() / ".claude",
        description="Global installation root",
    )
    local_base: Path = Field(
        default_factory=lambda: Path.cwd() / ".claude",
        description="Project-local installation root",
    )
    planning_dir: Path = Field(
        default_factory=lambda: Path.cwd() / ".planning",
        description="Project planning directory",
    )

    # Output
    verbosity: int = Field(
        default=DEFAULT_VERBOSITY,
        ge=MIN_VERBOSITY,
        le=MAX_VERBOSITY,
        description="Default output verbosity (1-5)",
    )

    # Classification
    enable_semantic: bool = Field(
        default=False,
        description="Request the semantic layer when the extension provides it",
    )
    confidence_threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Minimum Bayes posterior for a confident classification",
    )
    ambiguity_gap: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Minimum margin between the top two candidates",
    )

    # Extension
    extension_cli: str = Field(
        default=DEFAULT_CLI_NAME,
        description="Companion CLI binary name",
    )
    extension_dist_path: Optional[Path] = Field(
        default=None,
        description="Companion installed-package directory",
    )
    probe_timeout: float = Field(
        default=DEFAULT_PROBE_TIMEOUT,
        gt=0.0,
        le=60.0,
        description="Seconds to wait for the companion CLI",
    )

    @field_validator("base_path", "global_base", "local_base", "planning_dir", "extension_dist_path")
    @classmethod
    def expand_user(cls, v: Optional[Path]) -> Optional[Path]:
        return v.expanduser() if v is not None else v

    def classifier_config(self) -> ClassifierConfig:
        return ClassifierConfig(
            enable_semantic=self.enable_semantic,
            confidence_threshold=self.confidence_threshold,
            ambiguity_gap=self.ambiguity_gap,
        )

    def extension_overrides(self) -> ExtensionOverrides:
        return ExtensionOverrides(
            dist_path=self.extension_dist_path,
            cli_name=self.extension_cli,
            timeout=self.probe_timeout,
        )


# =============================================================================
# Cached Accessors
# =============================================================================


@lru_cache(maxsize=1)
def get_settings() -> OrchestratorSettings:
    """Get the cached settings singleton.

    To reload after the environment changed, call clear_settings_cache() first.
    """
    return OrchestratorSettings()


def clear_settings_cache() -> None:
    """Clear the cached settings instance."""
    get_settings.cache_clear()
