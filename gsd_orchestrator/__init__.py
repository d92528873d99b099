import importlib.metadata

try:
    _detected_version = importlib.metadata.version("gsd-orchestrator")
    __version__ = _detected_version if _detected_version else "0.0.0-dev"
except Exception:
    # Running from a source checkout without installed metadata
    __version__ = "0.0.0-dev"

from gsd_orchestrator.discovery import DiscoveryResult, DiscoveryService, discover
from gsd_orchestrator.extension import (
    ExtensionCapabilities,
    ExtensionOverrides,
    create_null_capabilities,
    detect_extension,
)
from gsd_orchestrator.gates import GateAction, GateDecision, GateType, evaluate_gate
from gsd_orchestrator.intent import ClassificationResult, ClassificationType, IntentClassifier
from gsd_orchestrator.lifecycle import LifecycleStage, LifecycleSuggestion, suggest_next_step
from gsd_orchestrator.pipeline import Orchestrator, RouteOutcome
from gsd_orchestrator.settings import OrchestratorSettings, clear_settings_cache, get_settings
from gsd_orchestrator.state import (
    ProjectState,
    parse_config,
    parse_project,
    parse_roadmap,
    parse_state,
    read_project_state,
    validate_config,
)
from gsd_orchestrator.verbosity import OutputSection, filter_by_verbosity

__all__ = [
    "__version__",
    # Pipeline
    "Orchestrator",
    "RouteOutcome",
    # Discovery
    "DiscoveryResult",
    "DiscoveryService",
    "discover",
    # State
    "ProjectState",
    "parse_config",
    "parse_project",
    "parse_roadmap",
    "parse_state",
    "read_project_state",
    "validate_config",
    # Classification
    "ClassificationResult",
    "ClassificationType",
    "IntentClassifier",
    # Gates
    "GateAction",
    "GateDecision",
    "GateType",
    "evaluate_gate",
    # Lifecycle
    "LifecycleStage",
    "LifecycleSuggestion",
    "suggest_next_step",
    # Output
    "OutputSection",
    "filter_by_verbosity",
    # Extension
    "ExtensionCapabilities",
    "ExtensionOverrides",
    "create_null_capabilities",
    "detect_extension",
    # Settings
    "OrchestratorSettings",
    "clear_settings_cache",
    "get_settings",
]
