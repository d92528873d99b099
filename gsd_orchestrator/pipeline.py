"""End-to-end routing: discovery, state, classification, gate, next step.

Control flow:

    extension detector --+
                         +--> intent classifier --> gate evaluator
    artifact discovery --+          ^
                                    |
    project state reader -----------+--> lifecycle coordinator

The verbosity controller runs last, over the output sections the pipeline
produced.

Usage:
    orchestrator = Orchestrator()
    outcome = orchestrator.route("plan the next phase")
    for section in outcome.sections:
        print(section.content)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .discovery import DiscoveryCache, DiscoveryResult, DiscoveryService
from .discovery.service import detect_installation
from .extension import ExtensionCapabilities, detect_extension
from .gates import GateAction, GateDecision, evaluate_gate
from .intent import ClassificationResult, ClassificationType, IntentClassifier, SemanticMatcher
from .lifecycle import LifecycleCoordinator, LifecycleSuggestion
from .settings import OrchestratorSettings, get_settings
from .state import ProjectState, ProjectStateReader
from .verbosity import OutputSection, clamp_verbosity, filter_by_verbosity

logger = logging.getLogger(__name__)


class OrchestratorError(Exception):
    """Base error for pipeline setup failures."""


class InstallationNotFoundError(OrchestratorError):
    def __init__(self, searched: List[Path]):
        self.searched = searched
        locations = ", ".join(str(path) for path in searched)
        super().__init__(f"No GSD installation found (searched: {locations})")


@dataclass
class RouteOutcome:
    """Everything the pipeline decided for one query."""

    query: str
    classification: ClassificationResult
    gate: GateDecision
    suggestion: LifecycleSuggestion
    verbosity: int
    sections: List[OutputSection] = field(default_factory=list)

    @property
    def command_name(self) -> Optional[str]:
        command = self.classification.command
        return command.name if command else None


# =============================================================================
# Output sections
# =============================================================================


def classification_sections(
    result: ClassificationResult, gate: Optional[GateDecision] = None
) -> List[OutputSection]:
    command = result.command
    sections = [
        OutputSection(
            tag="command",
            content=f"Command: {command.name}" if command else "Command: (none)",
            min_level=1,
        ),
        OutputSection(tag="confidence", content=f"Confidence: {result.confidence * 100:.1f}%", min_level=2),
    ]
    if result.arguments.phase_number:
        sections.append(
            OutputSection(tag="phase", content=f"Phase: {result.arguments.phase_number}", min_level=2)
        )
    if gate is not None and gate.action != GateAction.PROCEED:
        sections.append(
            OutputSection(tag="gate", content=f"Gate: {gate.action.value} - {gate.reason}", min_level=2)
        )
    sections.append(OutputSection(tag="type", content=f"Type: {result.type.value}", min_level=3))
    if command:
        sections.append(
            OutputSection(tag="description", content=f"Description: {command.description}", min_level=3)
        )
    if result.lifecycle_stage:
        sections.append(
            OutputSection(
                tag="lifecycle",
                content=f"Lifecycle Stage: {result.lifecycle_stage.value}",
                min_level=4,
            )
        )
    if result.alternatives:
        lines = "\n".join(
            f"  - {alt.command.name} ({alt.confidence * 100:.1f}%)" for alt in result.alternatives
        )
        sections.append(OutputSection(tag="alternatives", content=f"Alternatives:\n{lines}", min_level=5))
    return sections


def suggestion_sections(suggestion: LifecycleSuggestion, primary_level: int = 1) -> List[OutputSection]:
    primary = suggestion.primary
    content = f"Primary Action:\n  Command: {primary.command}"
    if primary.args:
        content += f"\n  Args: {primary.args}"
    content += f"\n  Reason: {primary.reason}"

    sections = [
        OutputSection(tag="primary", content=content, min_level=primary_level),
        OutputSection(tag="stage", content=f"Stage: {suggestion.stage.value}", min_level=min(primary_level + 1, 5)),
        OutputSection(tag="context", content=f"Context: {suggestion.context}", min_level=min(primary_level + 2, 5)),
    ]
    if suggestion.alternatives:
        lines = "\n".join(f"  - {alt.command}: {alt.reason}" for alt in suggestion.alternatives)
        sections.append(
            OutputSection(
                tag="alternatives",
                content=f"Alternatives:\n{lines}",
                min_level=min(primary_level + 3, 5),
            )
        )
    return sections


def discovery_sections(result: DiscoveryResult) -> List[OutputSection]:
    commands = "\n".join(f"  - {c.name}: {c.description}" for c in result.commands)
    agents = "\n".join(f"  - {a.name}: {a.description}" for a in result.agents)
    teams = "\n".join(
        f"  - {t.name}: {t.description or 'no description'} ({t.member_count} members)"
        for t in result.teams
    )
    sections = [
        OutputSection(tag="commands", content=f"Commands ({len(result.commands)}):\n{commands}", min_level=1),
        OutputSection(tag="location", content=f"Location: {result.location} ({result.base_path})", min_level=2),
        OutputSection(tag="version", content=f"Version: {result.version}", min_level=3),
        OutputSection(tag="agents", content=f"Agents ({len(result.agents)}):\n{agents}", min_level=3),
        OutputSection(tag="teams", content=f"Teams ({len(result.teams)}):\n{teams}", min_level=4),
    ]
    if result.warnings:
        lines = "\n".join(f"  - {w.path}: {w.message}" for w in result.warnings)
        sections.append(OutputSection(tag="warnings", content=f"Warnings ({len(result.warnings)}):\n{lines}", min_level=5))
    return sections


# =============================================================================
# Orchestrator
# =============================================================================


class Orchestrator:
    """Wires the routing components together.

    Components are built lazily on first use and reused afterwards. The
    discovery cache is shared across calls, so repeated routing only
    rescans when the installation's version marker changes.
    """

    def __init__(
        self,
        settings: Optional[OrchestratorSettings] = None,
        capabilities: Optional[ExtensionCapabilities] = None,
        semantic_matcher: Optional[SemanticMatcher] = None,
        cache: Optional[DiscoveryCache] = None,
    ):
        self.settings = settings or get_settings()
        self.cache = cache if cache is not None else DiscoveryCache()
        self.semantic_matcher = semantic_matcher
        self._capabilities = capabilities
        self._service: Optional[DiscoveryService] = None
        self._classifier: Optional[IntentClassifier] = None
        self._trained_on: Optional[DiscoveryResult] = None

    @property
    def planning_dir(self) -> Path:
        return self.settings.planning_dir

    def discovery_service(self) -> DiscoveryService:
        if self._service is not None:
            return self._service

        if self.settings.base_path is not None:
            self._service = DiscoveryService(self.settings.base_path, cache=self.cache)
            return self._service

        install = detect_installation(self.settings.global_base, self.settings.local_base)
        if install is None:
            raise InstallationNotFoundError([self.settings.global_base, self.settings.local_base])
        self._service = DiscoveryService(install.base_path, location=install.location, cache=self.cache)
        return self._service

    def discover(self) -> DiscoveryResult:
        """Scan the installation.

        Raises:
            InstallationNotFoundError: No base path configured and no
                installation detected.
        """
        return self.discovery_service().discover()

    def capabilities(self) -> ExtensionCapabilities:
        if self._capabilities is None:
            self._capabilities = detect_extension(self.settings.extension_overrides())
        return self._capabilities

    def read_state(self) -> ProjectState:
        return ProjectStateReader(self.planning_dir).read()

    def classifier(self) -> IntentClassifier:
        """Classifier trained on the current discovery result.

        Retrains when discovery returns a different result object, which
        only happens after the cache was invalidated.
        """
        discovery = self.discover()
        if self._classifier is None or self._trained_on is not discovery:
            classifier = IntentClassifier(self.settings.classifier_config())
            classifier.initialize(
                discovery,
                capabilities=self.capabilities() if self.settings.enable_semantic else None,
                semantic_matcher=self.semantic_matcher,
            )
            self._classifier = classifier
            self._trained_on = discovery
        return self._classifier

    def resolve_verbosity(self, state: ProjectState, verbosity: Optional[int] = None) -> int:
        """Explicit level, then the project's config, then settings."""
        if verbosity is not None:
            return clamp_verbosity(verbosity)
        if state.has_config:
            return clamp_verbosity(state.config.verbosity)
        return self.settings.verbosity

    def next_step(self, after_command: Optional[str] = None, state: Optional[ProjectState] = None) -> LifecycleSuggestion:
        state = state if state is not None else self.read_state()
        return LifecycleCoordinator(self.planning_dir).suggest_next_step(state, after_command)

    def route(self, query: str, verbosity: Optional[int] = None) -> RouteOutcome:
        """Classify ``query``, gate it and suggest what comes after.

        Raises:
            InstallationNotFoundError: When discovery has nothing to scan.
        """
        state = self.read_state()
        result = self.classifier().classify(query, state)

        gate_command = result.command.name if result.command else ""
        if not gate_command and result.alternatives:
            gate_command = result.alternatives[0].command.name
        confidence = result.confidence
        if result.command is None or result.type == ClassificationType.AMBIGUOUS:
            # Nothing was chosen, so the top alternative must be confirmed
            confidence = 0.0
        gate = evaluate_gate(gate_command, state.config.mode, confidence)

        suggestion = self.next_step(state=state)
        level = self.resolve_verbosity(state, verbosity)

        sections = classification_sections(result, gate)
        sections += suggestion_sections(suggestion, primary_level=4)
        logger.info(
            f"Routed {query!r} -> {gate_command or '(none)'} "
            f"[{result.type.value}, gate={gate.action.value}]"
        )
        return RouteOutcome(
            query=query,
            classification=result,
            gate=gate,
            suggestion=suggestion,
            verbosity=level,
            sections=filter_by_verbosity(sections, level),
        )
