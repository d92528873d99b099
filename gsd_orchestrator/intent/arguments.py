"""Argument extraction and explicit ``/namespace:verb`` invocation matching."""

import re
import shlex
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..discovery.models import CommandSpec
from .models import ExtractedArguments

EXPLICIT_INVOCATION = re.compile(r"^/([\w-]+):([\w-]+)(?:\s+(.*))?$", re.DOTALL)

VERSION = re.compile(r"(?<![\w.])v\d+(?:\.\d+){0,2}\b", re.IGNORECASE)
FLAG = re.compile(r"(?<!\S)--([A-Za-z][\w-]*)")
QUOTED = re.compile(r"\"([^\"]+)\"|'([^']+)'")
PHASE_NUMBER = re.compile(r"(?<![\w.])(\d+(?:\.\d+)?)(?![\w.])")
PROFILE = re.compile(r"\b(quality|balanced|budget)\b", re.IGNORECASE)


@dataclass(frozen=True)
class ExplicitMatch:
    command: CommandSpec
    raw_args: str


def match_explicit_command(text: str, commands: Sequence[CommandSpec]) -> Optional[ExplicitMatch]:
    """Match ``/ns:verb [args]`` against the discovered commands.

    Returns:
        ExplicitMatch when the syntax matches and the command exists,
        otherwise None.
    """
    match = EXPLICIT_INVOCATION.match(text.strip())
    if not match:
        return None
    name = f"{match.group(1)}:{match.group(2)}"
    for command in commands:
        if command.name == name:
            return ExplicitMatch(command=command, raw_args=(match.group(3) or "").strip())
    return None


def _split_positional(text: str) -> List[str]:
    try:
        tokens = shlex.split(text)
    except ValueError:
        # Unbalanced quotes
        tokens = text.split()
    return [token for token in tokens if not token.startswith("--")]


def extract_arguments(text: str, positional: bool = False) -> ExtractedArguments:
    """Pull phase number, flags, quoted description, version and profile from text.

    Args:
        text: Argument string or full natural-language query.
        positional: Also split ``text`` into shell-style positional tokens.
            Only meaningful for an explicit invocation's argument string.
    """
    args = ExtractedArguments(raw=text)
    remaining = text

    quoted = QUOTED.search(remaining)
    if quoted:
        args.description = quoted.group(1) or quoted.group(2)
        remaining = remaining[: quoted.start()] + " " + remaining[quoted.end():]

    version = VERSION.search(remaining)
    if version:
        args.version = version.group(0)
        remaining = remaining[: version.start()] + " " + remaining[version.end():]

    args.flags = FLAG.findall(remaining)
    remaining = FLAG.sub(" ", remaining)

    phase = PHASE_NUMBER.search(remaining)
    if phase:
        args.phase_number = phase.group(1)

    profile = PROFILE.search(remaining)
    if profile:
        args.profile = profile.group(1).lower()

    if positional:
        args.positional = _split_positional(text)
    return args
