"""PROJECT.md parser."""

import re
from typing import List, Optional

from .models import ParsedProject

TITLE = re.compile(r"^#\s+(.+)$")
MILESTONE = re.compile(r"^##\s+Current Milestone:\s*(.+)$")


def _first_paragraph(lines: List[str], heading: str) -> Optional[str]:
    """Return the first run of non-blank lines under ``## <heading>``."""
    pattern = re.compile(rf"^##\s+{re.escape(heading)}\s*$")
    paragraph: List[str] = []
    inside = False
    for line in lines:
        stripped = line.strip()
        if not inside:
            inside = bool(pattern.match(stripped))
            continue
        if stripped.startswith("#"):
            break
        if not stripped:
            if paragraph:
                break
            continue
        paragraph.append(stripped)
    return " ".join(paragraph) if paragraph else None


def parse_project(content: str) -> Optional[ParsedProject]:
    """Parse PROJECT.md content.

    Missing sections leave their field as None. Only blank input
    returns None.
    """
    if not content or not content.strip():
        return None

    lines = content.splitlines()
    project = ParsedProject()

    for line in lines:
        stripped = line.strip()
        if project.name is None:
            title = TITLE.match(stripped)
            if title:
                project.name = title.group(1).strip()
                continue
        milestone = MILESTONE.match(stripped)
        if milestone and project.current_milestone is None:
            project.current_milestone = milestone.group(1).strip()

    project.core_value = _first_paragraph(lines, "Core Value")
    project.description = _first_paragraph(lines, "What This Is")
    return project
