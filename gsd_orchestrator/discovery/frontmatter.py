"""Frontmatter parsing for command and agent markdown files."""

import logging
import re
from typing import Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Frontmatter lives between --- delimiters at the very start of the file
FRONTMATTER_PATTERN = re.compile(r"^---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|$)", re.DOTALL)

# Keys may contain hyphens (argument-hint, allowed-tools)
KEY_VALUE_PATTERN = re.compile(r"^([A-Za-z_][A-Za-z0-9_-]*):\s*(.*)$")
LIST_PATTERN = re.compile(r"^\s*-\s+(.+)$")
INLINE_LIST_PATTERN = re.compile(r"^\[(.*)\]$")

# Non-greedy: only the first block counts, later nested ones stay body text
OBJECTIVE_PATTERN = re.compile(r"<objective>(.*?)</objective>", re.DOTALL)

QUOTE_CHARS = ("'", '"')


def _strip_quotes(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTE_CHARS:
        return value[1:-1]
    return value


def _parse_scalar(value: str):
    inline = INLINE_LIST_PATTERN.match(value)
    if inline is None:
        return _strip_quotes(value)
    return [_strip_quotes(item) for item in inline.group(1).split(",") if item.strip()]


def _content_lines(header: str) -> Iterator[str]:
    """Header lines that carry data, skipping blanks and ``#`` comments."""
    for line in header.splitlines():
        text = line.strip()
        if text and not text.startswith("#"):
            yield line


def split_frontmatter(content: str) -> Tuple[Optional[str], str]:
    """Split a markdown document into its raw frontmatter block and body.

    Returns:
        ``(frontmatter, body)``. ``frontmatter`` is None when the document
        does not open with a delimited header.
    """
    content = content.lstrip("﻿")
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return None, content
    return match.group(1), content[match.end():]


def parse_frontmatter(content: str) -> dict:
    """Read the metadata header of a command or agent file into a dict.

    Understands ``key: value`` scalars, inline ``[a, b]`` lists and block
    lists written as ``- item`` lines under a key with no value. Anything
    else in the header is ignored. A document without a header yields an
    empty dict.
    """
    header, _ = split_frontmatter(content)
    if header is None:
        logger.debug("No frontmatter found in content")
        return {}

    meta: dict = {}
    block: Optional[List[str]] = None
    for line in _content_lines(header):
        item = LIST_PATTERN.match(line)
        if item is not None:
            if block is not None:
                block.append(_strip_quotes(item.group(1)))
            continue

        pair = KEY_VALUE_PATTERN.match(line)
        if pair is None:
            continue
        key, raw = pair.group(1), pair.group(2).strip()
        if raw:
            meta[key] = _parse_scalar(raw)
            block = None
        else:
            block = meta[key] = []
    return meta


def extract_objective(body: str) -> Optional[str]:
    """Return the text of the first ``<objective>`` block in a command body."""
    match = OBJECTIVE_PATTERN.search(body)
    if not match:
        return None
    text = match.group(1).strip()
    return text or None
