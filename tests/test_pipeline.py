"""Tests for the end-to-end routing pipeline."""

import json
from unittest.mock import MagicMock

import pytest

from conftest import write_command
from gsd_orchestrator.extension import (
    DetectionMethod,
    ExtensionCapabilities,
    ExtensionFeatures,
    create_null_capabilities,
)
from gsd_orchestrator.gates import GateAction, GateType
from gsd_orchestrator.intent import ClassificationType
from gsd_orchestrator.pipeline import (
    InstallationNotFoundError,
    Orchestrator,
    discovery_sections,
    suggestion_sections,
)
from gsd_orchestrator.settings import OrchestratorSettings
from gsd_orchestrator.state import ProjectState


def tags(sections):
    return [section.tag for section in sections]


@pytest.fixture
def orchestrator(gsd_fixture, planning_fixture):
    settings = OrchestratorSettings(base_path=gsd_fixture, planning_dir=planning_fixture)
    return Orchestrator(settings=settings, capabilities=create_null_capabilities())


class TestRoute:
    """Tests for Orchestrator.route."""

    def test_exact_match(self, orchestrator):
        outcome = orchestrator.route("/gsd:plan-phase 3")
        assert outcome.classification.type == ClassificationType.EXACT_MATCH
        assert outcome.command_name == "gsd:plan-phase"
        assert outcome.classification.arguments.phase_number == "3"
        assert outcome.gate.action == GateAction.PROCEED
        assert outcome.verbosity == 3
        assert tags(outcome.sections) == ["command", "confidence", "phase", "type", "description"]

    def test_destructive_command_needs_confirmation(self, orchestrator):
        outcome = orchestrator.route("/gsd:remove-phase 3")
        assert outcome.gate.action == GateAction.CONFIRM
        assert outcome.gate.gate_type == GateType.DESTRUCTIVE
        assert "gate" in tags(outcome.sections)

    def test_unrecognized_query_gated_on_top_alternative(self, orchestrator):
        outcome = orchestrator.route("zzz qqq")
        assert outcome.classification.type == ClassificationType.AMBIGUOUS
        assert outcome.command_name is None
        assert outcome.gate.gate_type == GateType.LOW_CONFIDENCE
        assert outcome.gate.action == GateAction.CONFIRM

    def test_tied_commands_need_confirmation_in_yolo(self, tmp_path):
        base = tmp_path / "install"
        write_command(base, "remove-phase", "Remove a phase from the roadmap", namespace="acme")
        write_command(base, "insert-phase", "Insert a phase into the roadmap", namespace="acme")
        planning = tmp_path / "planning"
        planning.mkdir()
        (planning / "config.json").write_text(json.dumps({"mode": "yolo"}))
        settings = OrchestratorSettings(base_path=base, planning_dir=planning)

        outcome = Orchestrator(settings=settings).route("phase roadmap")
        assert outcome.classification.type == ClassificationType.AMBIGUOUS
        assert outcome.classification.confidence == pytest.approx(0.5)
        assert outcome.gate.action == GateAction.CONFIRM
        assert outcome.gate.gate_type == GateType.LOW_CONFIDENCE
        assert not outcome.gate.skipped_by_yolo

    def test_suggestion_attached(self, orchestrator):
        outcome = orchestrator.route("/gsd:progress")
        assert outcome.suggestion.primary.command == "gsd:execute-phase"
        assert outcome.suggestion.primary.args == "2"

    def test_terse_verbosity(self, orchestrator):
        outcome = orchestrator.route("/gsd:plan-phase 3", verbosity=1)
        assert tags(outcome.sections) == ["command"]

    def test_full_verbosity(self, orchestrator):
        outcome = orchestrator.route("/gsd:plan-phase 3", verbosity=5)
        assert {"primary", "stage", "context", "alternatives"} <= set(tags(outcome.sections))

    def test_out_of_range_verbosity_clamped(self, orchestrator):
        assert orchestrator.route("/gsd:progress", verbosity=9).verbosity == 5

    def test_extension_not_probed_without_semantic(self, gsd_fixture, planning_fixture, monkeypatch):
        probe = MagicMock(side_effect=AssertionError("detect_extension called"))
        monkeypatch.setattr("gsd_orchestrator.pipeline.detect_extension", probe)
        settings = OrchestratorSettings(base_path=gsd_fixture, planning_dir=planning_fixture)
        Orchestrator(settings=settings).route("/gsd:progress")
        probe.assert_not_called()


class TestOrchestrator:
    """Component wiring."""

    def test_missing_installation(self, tmp_path):
        settings = OrchestratorSettings(
            global_base=tmp_path / "global", local_base=tmp_path / "local", planning_dir=tmp_path
        )
        with pytest.raises(InstallationNotFoundError, match="No GSD installation found"):
            Orchestrator(settings=settings).route("plan the next phase")

    def test_detected_installation(self, install_dir, tmp_path):
        settings = OrchestratorSettings(global_base=tmp_path / "none", local_base=install_dir)
        result = Orchestrator(settings=settings).discover()
        assert result.location == "local"
        assert [c.name for c in result.commands] == ["gsd:plan-phase", "gsd:progress"]

    def test_classifier_reused(self, orchestrator):
        assert orchestrator.classifier() is orchestrator.classifier()

    def test_semantic_wiring(self, gsd_fixture, planning_fixture):
        caps = ExtensionCapabilities(
            detected=True,
            detection_method=DetectionMethod.DIST_DIRECTORY,
            features=ExtensionFeatures.all(True),
        )
        matcher = MagicMock()
        settings = OrchestratorSettings(
            base_path=gsd_fixture, planning_dir=planning_fixture, enable_semantic=True
        )
        orchestrator = Orchestrator(settings=settings, capabilities=caps, semantic_matcher=matcher)
        assert orchestrator.classifier().semantic_enabled
        matcher.initialize.assert_called_once()

    def test_next_step(self, orchestrator):
        suggestion = orchestrator.next_step(after_command="gsd:execute-phase")
        assert suggestion.primary.command == "gsd:verify-work"

    def test_resolve_verbosity(self, orchestrator, tmp_path):
        without_config = ProjectState(initialized=True)
        assert orchestrator.resolve_verbosity(without_config) == orchestrator.settings.verbosity
        assert orchestrator.resolve_verbosity(without_config, 0) == 1
        with_config = orchestrator.read_state()
        assert with_config.has_config
        assert orchestrator.resolve_verbosity(with_config) == 3


class TestSections:
    """Section builders."""

    def test_discovery_sections(self, orchestrator):
        sections = discovery_sections(orchestrator.discover())
        assert tags(sections) == ["commands", "location", "version", "agents", "teams"]
        assert sections[0].content.startswith("Commands (27):")
        assert sections[2].content == "Version: 1.12.1"

    def test_discovery_warnings_shown_at_full_verbosity(self, install_dir):
        (install_dir / "commands" / "gsd" / "broken.md").write_text("no frontmatter")
        result = Orchestrator(settings=OrchestratorSettings(base_path=install_dir)).discover()
        sections = discovery_sections(result)
        assert sections[-1].tag == "warnings"
        assert sections[-1].min_level == 5
        assert "broken.md" in sections[-1].content

    def test_suggestion_levels(self, orchestrator):
        sections = suggestion_sections(orchestrator.next_step())
        assert [s.min_level for s in sections] == [1, 2, 3, 4]
        assert "Args: 2" in sections[0].content
