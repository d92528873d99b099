"""Tests for the pydantic-settings based configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from gsd_orchestrator.settings import OrchestratorSettings, clear_settings_cache, get_settings


class TestDefaults:
    """Settings with an empty environment."""

    def test_defaults(self):
        settings = OrchestratorSettings()
        assert settings.base_path is None
        assert settings.global_base == Path.home() / ".claude"
        assert settings.planning_dir == Path.cwd() / ".planning"
        assert settings.verbosity == 3
        assert settings.enable_semantic is False
        assert settings.extension_cli == "skill-creator"
        assert settings.extension_dist_path is None

    def test_classifier_config(self):
        config = OrchestratorSettings(confidence_threshold=0.6, ambiguity_gap=0.2).classifier_config()
        assert config.confidence_threshold == 0.6
        assert config.ambiguity_gap == 0.2
        assert config.enable_semantic is False

    def test_extension_overrides(self, tmp_path):
        overrides = OrchestratorSettings(
            extension_cli="my-cli", extension_dist_path=tmp_path, probe_timeout=2
        ).extension_overrides()
        assert overrides.cli_name == "my-cli"
        assert overrides.dist_path == tmp_path
        assert overrides.timeout == 2
        assert overrides.cli_available is None


class TestEnvironment:
    """GSD_ORCHESTRATOR_* variables."""

    def test_reads_prefixed_variables(self, monkeypatch, tmp_path):
        monkeypatch.setenv("GSD_ORCHESTRATOR_VERBOSITY", "5")
        monkeypatch.setenv("GSD_ORCHESTRATOR_ENABLE_SEMANTIC", "true")
        monkeypatch.setenv("GSD_ORCHESTRATOR_PLANNING_DIR", str(tmp_path))
        settings = OrchestratorSettings()
        assert settings.verbosity == 5
        assert settings.enable_semantic is True
        assert settings.planning_dir == tmp_path

    def test_expands_user(self, monkeypatch):
        monkeypatch.setenv("GSD_ORCHESTRATOR_BASE_PATH", "~/gsd")
        assert OrchestratorSettings().base_path == Path.home() / "gsd"

    def test_unprefixed_ignored(self, monkeypatch):
        monkeypatch.setenv("VERBOSITY", "1")
        assert OrchestratorSettings().verbosity == 3

    def test_cached_until_cleared(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("GSD_ORCHESTRATOR_VERBOSITY", "2")
        assert get_settings() is first
        clear_settings_cache()
        assert get_settings().verbosity == 2


class TestValidation:
    """Out-of-range values are rejected."""

    @pytest.mark.parametrize(
        "field,value",
        [
            ("verbosity", 0),
            ("verbosity", 6),
            ("confidence_threshold", 1.5),
            ("ambiguity_gap", -0.1),
            ("probe_timeout", 0),
        ],
    )
    def test_rejects(self, field, value):
        with pytest.raises(ValidationError):
            OrchestratorSettings(**{field: value})

    def test_rejects_bad_env(self, monkeypatch):
        monkeypatch.setenv("GSD_ORCHESTRATOR_VERBOSITY", "loud")
        with pytest.raises(ValidationError):
            OrchestratorSettings()
