"""Intent classification - from free text to a discovered command."""

from .arguments import ExplicitMatch, extract_arguments, match_explicit_command
from .bayes import CommandBayesClassifier, tokenize
from .classifier import IntentClassifier, create_classifier
from .lifecycle_filter import STAGE_COMMANDS, UNIVERSAL_COMMANDS, filter_by_lifecycle
from .models import (
    Alternative,
    ClassificationMethod,
    ClassificationResult,
    ClassificationType,
    ClassifierConfig,
    ExtractedArguments,
)
from .semantic import SemanticMatch, SemanticMatcher

__all__ = [
    "STAGE_COMMANDS",
    "UNIVERSAL_COMMANDS",
    "Alternative",
    "ClassificationMethod",
    "ClassificationResult",
    "ClassificationType",
    "ClassifierConfig",
    "CommandBayesClassifier",
    "ExplicitMatch",
    "ExtractedArguments",
    "IntentClassifier",
    "SemanticMatch",
    "SemanticMatcher",
    "create_classifier",
    "extract_arguments",
    "filter_by_lifecycle",
    "match_explicit_command",
    "tokenize",
]
