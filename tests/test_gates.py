"""Tests for the routing safety gates."""

import math

import pytest

from gsd_orchestrator.gates import (
    DEFAULT_DESTRUCTIVE_COMMANDS,
    GateAction,
    GateConfig,
    GateType,
    evaluate_gate,
)
from gsd_orchestrator.state.models import OperatingMode


class TestDecisionTable:
    """Mode x gate type combinations."""

    @pytest.mark.parametrize("mode", ["interactive", "yolo"])
    def test_routing_proceeds(self, mode):
        decision = evaluate_gate("gsd:progress", mode, 0.9)
        assert decision.action == GateAction.PROCEED
        assert decision.gate_type == GateType.ROUTING
        assert decision.skipped_by_yolo is False

    def test_destructive_interactive_confirms(self):
        decision = evaluate_gate("gsd:remove-phase", "interactive", 1.0)
        assert decision.action == GateAction.CONFIRM
        assert decision.gate_type == GateType.DESTRUCTIVE
        assert decision.skipped_by_yolo is False

    def test_destructive_yolo_proceeds(self):
        decision = evaluate_gate("gsd:remove-phase", OperatingMode.YOLO, 1.0)
        assert decision.action == GateAction.PROCEED
        assert decision.gate_type == GateType.DESTRUCTIVE
        assert decision.skipped_by_yolo is True

    @pytest.mark.parametrize("mode", ["interactive", "yolo"])
    def test_low_confidence_confirms_in_both_modes(self, mode):
        decision = evaluate_gate("gsd:progress", mode, 0.3)
        assert decision.action == GateAction.CONFIRM
        assert decision.gate_type == GateType.LOW_CONFIDENCE

    def test_low_confidence_beats_destructive(self):
        decision = evaluate_gate("gsd:complete-milestone", "yolo", 0.2)
        assert decision.gate_type == GateType.LOW_CONFIDENCE
        assert decision.action == GateAction.CONFIRM
        assert decision.skipped_by_yolo is False

    def test_threshold_is_not_low_confidence(self):
        assert evaluate_gate("gsd:progress", "interactive", 0.5).action == GateAction.PROCEED
        assert evaluate_gate("gsd:progress", "interactive", 0.4999).action == GateAction.CONFIRM

    def test_default_destructive_set(self):
        assert DEFAULT_DESTRUCTIVE_COMMANDS == {
            "gsd:remove-phase",
            "gsd:complete-milestone",
            "gsd:new-project",
            "gsd:new-milestone",
            "gsd:insert-phase",
        }

    def test_reason_mentions_command(self):
        assert "gsd:remove-phase" in evaluate_gate("gsd:remove-phase", "interactive", 1.0).reason


class TestBadInput:
    """evaluate_gate never raises."""

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_missing_command_blocks(self, name):
        decision = evaluate_gate(name, "interactive", 1.0)
        assert decision.action == GateAction.BLOCK
        assert decision.gate_type == GateType.ROUTING

    @pytest.mark.parametrize("confidence", [math.nan, None, "high"])
    def test_unusable_confidence_counts_as_zero(self, confidence):
        decision = evaluate_gate("gsd:progress", "interactive", confidence)
        assert decision.gate_type == GateType.LOW_CONFIDENCE
        assert "0.00" in decision.reason

    @pytest.mark.parametrize("mode", ["reckless", None, ""])
    def test_unknown_mode_is_interactive(self, mode):
        decision = evaluate_gate("gsd:remove-phase", mode, 1.0)
        assert decision.action == GateAction.CONFIRM
        assert decision.skipped_by_yolo is False


class TestGateConfig:
    """Policy overrides."""

    def test_custom_destructive_set(self):
        config = GateConfig(destructive_commands=frozenset({"gsd:settings"}))
        assert evaluate_gate("gsd:settings", "interactive", 1.0, config).action == GateAction.CONFIRM
        assert evaluate_gate("gsd:remove-phase", "interactive", 1.0, config).action == GateAction.PROCEED

    def test_custom_threshold(self):
        config = GateConfig(low_confidence_threshold=0.8)
        decision = evaluate_gate("gsd:progress", "yolo", 0.7, config)
        assert decision.gate_type == GateType.LOW_CONFIDENCE

    def test_threshold_bounds(self):
        with pytest.raises(ValueError):
            GateConfig(low_confidence_threshold=1.5)

    def test_frozen(self):
        config = GateConfig()
        with pytest.raises(ValueError):
            config.low_confidence_threshold = 0.1
