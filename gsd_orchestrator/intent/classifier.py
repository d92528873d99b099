"""Intent classifier: explicit invocation, then naive Bayes, then semantic.

Layers run in order and the first confident answer wins:

1. Exact match - ``/gsd:plan-phase 3`` names a discovered command directly.
2. Bayes - multinomial naive Bayes trained on the command descriptions,
   restricted to the commands that make sense at the project's lifecycle
   stage.
3. Semantic - only when requested, available in the extension and the
   Bayes layer is unsure.

Usage:
    classifier = IntentClassifier()
    classifier.initialize(discovery_result)
    result = classifier.classify("plan the next phase", project_state)
    if result.type == ClassificationType.CLASSIFIED:
        print(result.command.name, result.confidence)
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ..discovery.models import CommandSpec, DiscoveryResult
from ..extension import ExtensionCapabilities
from ..lifecycle.stages import derive_lifecycle_stage
from ..state.models import ProjectState
from .arguments import extract_arguments, match_explicit_command
from .bayes import CommandBayesClassifier
from .lifecycle_filter import filter_by_lifecycle
from .models import (
    Alternative,
    ClassificationMethod,
    ClassificationResult,
    ClassificationType,
    ClassifierConfig,
)
from .semantic import SemanticMatch, SemanticMatcher

logger = logging.getLogger(__name__)


class IntentClassifier:
    """Maps free text to a discovered command.

    :meth:`initialize` must run before :meth:`classify`. After it returns the
    trained model is never mutated, so ``classify`` can be called from any
    number of callers.
    """

    def __init__(self, config: Optional[ClassifierConfig] = None):
        self.config = config or ClassifierConfig()
        self._bayes = CommandBayesClassifier()
        self._commands: Tuple[CommandSpec, ...] = ()
        self._by_name: Dict[str, CommandSpec] = {}
        self._semantic: Optional[SemanticMatcher] = None
        self._initialized = False
        self._initializing = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def semantic_enabled(self) -> bool:
        return self._semantic is not None

    @property
    def commands(self) -> Tuple[CommandSpec, ...]:
        return self._commands

    def initialize(
        self,
        discovery: DiscoveryResult,
        enable_semantic: Optional[bool] = None,
        capabilities: Optional[ExtensionCapabilities] = None,
        semantic_matcher: Optional[SemanticMatcher] = None,
    ) -> None:
        """Train the classifier from a discovery result.

        Args:
            discovery: Commands to classify against.
            enable_semantic: Request the semantic layer. Defaults to the
                config's ``enable_semantic``.
            capabilities: Extension capabilities; the semantic layer is only
                engaged when they report ``semantic_classification``.
            semantic_matcher: Matcher backing the semantic layer.

        Raises:
            RuntimeError: If called while a previous ``initialize`` is still
                running.
        """
        if self._initializing:
            raise RuntimeError("IntentClassifier.initialize() is already in progress")
        self._initializing = True
        try:
            commands = tuple(discovery.commands)
            bayes = CommandBayesClassifier()
            bayes.train(commands)

            wanted = self.config.enable_semantic if enable_semantic is None else enable_semantic
            semantic = self._setup_semantic(wanted, capabilities, semantic_matcher, commands)

            self._commands = commands
            self._by_name = {command.name: command for command in commands}
            self._bayes = bayes
            self._semantic = semantic
            self._initialized = True
            logger.info(
                f"Intent classifier trained on {len(commands)} commands "
                f"(semantic={'on' if semantic else 'off'})"
            )
        finally:
            self._initializing = False

    def _setup_semantic(
        self,
        wanted: bool,
        capabilities: Optional[ExtensionCapabilities],
        matcher: Optional[SemanticMatcher],
        commands: Sequence[CommandSpec],
    ) -> Optional[SemanticMatcher]:
        if not wanted:
            return None
        if capabilities is None or not capabilities.features.semantic_classification:
            logger.debug("Semantic classification requested but extension does not provide it")
            return None
        if matcher is None:
            logger.debug("Semantic classification available but no matcher supplied")
            return None
        try:
            matcher.initialize(commands)
        except Exception as e:
            logger.warning(f"Semantic matcher failed to initialize, using Bayes only: {e}")
            return None
        return matcher

    def classify(
        self, query: str, state: Optional[ProjectState] = None
    ) -> ClassificationResult:
        """Classify one user input.

        Args:
            query: Raw user text.
            state: Current project state, used to narrow candidates by
                lifecycle stage.

        Returns:
            The classification. Bad input is ``ambiguous``; ``error`` only
            means ``initialize`` has not been called.
        """
        if not self._initialized:
            return ClassificationResult(
                type=ClassificationType.ERROR,
                message="Classifier not initialized; call initialize() first",
            )

        text = (query or "").strip()
        if not text:
            return ClassificationResult(
                type=ClassificationType.AMBIGUOUS,
                confidence=0.0,
                message="Empty input",
            )

        explicit = match_explicit_command(text, self._commands)
        if explicit is not None:
            return ClassificationResult(
                type=ClassificationType.EXACT_MATCH,
                command=explicit.command,
                confidence=1.0,
                arguments=extract_arguments(explicit.raw_args, positional=True),
                method=ClassificationMethod.EXACT,
            )

        stage = derive_lifecycle_stage(state)
        candidates = filter_by_lifecycle(self._commands, stage)
        if not candidates:
            candidates = list(self._commands)
        arguments = extract_arguments(text)

        if not candidates:
            return ClassificationResult(
                type=ClassificationType.AMBIGUOUS,
                arguments=arguments,
                lifecycle_stage=stage,
                message="No commands discovered",
            )

        allowed = {command.name for command in candidates}
        ranked = self._bayes.classify(text, allowed)
        top_name, top_score = ranked[0]

        if self._semantic is not None and top_score < self.config.confidence_threshold:
            semantic = self._semantic_match(text, allowed)
            if semantic is not None:
                return ClassificationResult(
                    type=ClassificationType.CLASSIFIED,
                    command=semantic.command,
                    confidence=semantic.similarity,
                    arguments=arguments,
                    method=ClassificationMethod.SEMANTIC,
                    lifecycle_stage=stage,
                )

        runner_up = ranked[1][1] if len(ranked) > 1 else 0.0
        if (
            top_score >= self.config.confidence_threshold
            and top_score - runner_up >= self.config.ambiguity_gap
        ):
            return ClassificationResult(
                type=ClassificationType.CLASSIFIED,
                command=self._by_name[top_name],
                confidence=top_score,
                arguments=arguments,
                method=ClassificationMethod.BAYES,
                lifecycle_stage=stage,
            )

        return ClassificationResult(
            type=ClassificationType.AMBIGUOUS,
            confidence=top_score,
            arguments=arguments,
            method=ClassificationMethod.BAYES,
            alternatives=self._alternatives(ranked),
            lifecycle_stage=stage,
            message=f"Could not pick between {', '.join(self._top_names(ranked))}",
        )

    def _semantic_match(self, text: str, allowed: set) -> Optional[SemanticMatch]:
        try:
            if not self._semantic.is_ready():
                return None
            matches = self._semantic.match(text, allowed)
        except Exception as e:
            logger.warning(f"Semantic matcher failed, keeping Bayes result: {e}")
            return None
        for match in matches:
            if match.command.name not in allowed:
                continue
            if match.similarity >= self.config.semantic_threshold:
                return match
            break
        return None

    def _top_names(self, ranked: List[Tuple[str, float]]) -> List[str]:
        return [name for name, _ in ranked[: self.config.max_alternatives]]

    def _alternatives(self, ranked: List[Tuple[str, float]]) -> List[Alternative]:
        return [
            Alternative(command=self._by_name[name], confidence=score)
            for name, score in ranked[: self.config.max_alternatives]
        ]


def create_classifier(
    discovery: DiscoveryResult,
    config: Optional[ClassifierConfig] = None,
    capabilities: Optional[ExtensionCapabilities] = None,
    semantic_matcher: Optional[SemanticMatcher] = None,
) -> IntentClassifier:
    """Build and initialize a classifier in one call."""
    classifier = IntentClassifier(config)
    classifier.initialize(
        discovery,
        capabilities=capabilities,
        semantic_matcher=semantic_matcher,
    )
    return classifier


