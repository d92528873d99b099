"""Multinomial naive Bayes over command descriptions.

Each command is one class. Its training document is the command's verb
(weighted), description, objective and any example phrasings. Scores use
additive smoothing, uniform priors and log space, then a softmax over the
candidate classes turns them into posteriors that sum to 1.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from ..discovery.models import CommandSpec
from .utterances import EXAMPLE_UTTERANCES

TOKEN_PATTERN = re.compile(r"[a-z0-9]+")

STOPWORDS = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "for", "from", "i",
        "in", "into", "is", "it", "its", "me", "my", "of", "on", "or", "our",
        "please", "so", "that", "the", "this", "to", "up", "we", "with", "you",
        "all", "can", "do", "let", "lets", "s", "want", "would", "like",
    }
)

# The verb in "gsd:plan-phase" is the strongest signal a command has
NAME_WEIGHT = 3
# Small enough that one word unique to a command outweighs a word
# shared by every phase command
SMOOTHING = 0.1


def tokenize(text: str) -> List[str]:
    """Lowercase word tokens with hyphenated words split and stopwords dropped."""
    return [token for token in TOKEN_PATTERN.findall(text.lower()) if token not in STOPWORDS]


def training_tokens(command: CommandSpec) -> List[str]:
    tokens = tokenize(command.verb.replace("-", " ")) * NAME_WEIGHT
    tokens += tokenize(command.description)
    if command.objective:
        tokens += tokenize(command.objective)
    for phrase in EXAMPLE_UTTERANCES.get(command.name, ()):
        tokens += tokenize(phrase)
    return tokens


@dataclass(frozen=True)
class _TrainedModel:
    labels: Tuple[str, ...]
    vocabulary: frozenset
    # label -> token -> log P(token | label)
    log_likelihood: Mapping[str, Mapping[str, float]]
    # label -> log P(unseen-in-class token | label)
    log_unseen: Mapping[str, float]


class CommandBayesClassifier:
    """Build once with :meth:`train`, then :meth:`classify` any number of times.

    The trained model is immutable; retraining swaps in a new model object.
    """

    def __init__(self) -> None:
        self._model: Optional[_TrainedModel] = None

    @property
    def is_trained(self) -> bool:
        return self._model is not None

    @property
    def labels(self) -> Tuple[str, ...]:
        return self._model.labels if self._model else ()

    def train(self, commands: Iterable[CommandSpec]) -> None:
        counts = {command.name: Counter(training_tokens(command)) for command in commands}
        vocabulary = frozenset(token for counter in counts.values() for token in counter)
        vocab_size = max(len(vocabulary), 1)

        log_likelihood = {}
        log_unseen = {}
        for label, counter in counts.items():
            denominator = sum(counter.values()) + SMOOTHING * vocab_size
            log_likelihood[label] = MappingProxyType(
                {
                    token: math.log((count + SMOOTHING) / denominator)
                    for token, count in counter.items()
                }
            )
            log_unseen[label] = math.log(SMOOTHING / denominator)

        self._model = _TrainedModel(
            labels=tuple(counts),
            vocabulary=vocabulary,
            log_likelihood=MappingProxyType(log_likelihood),
            log_unseen=MappingProxyType(log_unseen),
        )

    def classify(
        self, text: str, allowed: Optional[Set[str]] = None
    ) -> List[Tuple[str, float]]:
        """Rank candidate commands for ``text``.

        Args:
            text: User input.
            allowed: Restrict ranking to these command names.

        Returns:
            ``(name, posterior)`` pairs, best first. Tokens never seen in
            training are ignored, so input with no known words yields a
            uniform distribution.
        """
        model = self._model
        if model is None:
            return []

        labels: Sequence[str] = [
            label for label in model.labels if allowed is None or label in allowed
        ]
        if not labels:
            return []

        tokens = [token for token in tokenize(text) if token in model.vocabulary]
        scores = []
        for label in labels:
            table = model.log_likelihood[label]
            unseen = model.log_unseen[label]
            scores.append(sum(table.get(token, unseen) for token in tokens))

        # Softmax in log space
        peak = max(scores)
        weights = [math.exp(score - peak) for score in scores]
        total = sum(weights)
        ranked = [(label, weight / total) for label, weight in zip(labels, weights)]
        ranked.sort(key=lambda item: item[1], reverse=True)
        return ranked
