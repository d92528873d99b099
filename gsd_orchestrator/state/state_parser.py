"""STATE.md parser."""

import re
from typing import Iterator, List, Optional

from .models import CurrentPosition, ParsedState, SessionContinuity

# Phase: 37 of 44 (State Reading Infrastructure) -- In progress
POSITION_PHASE = re.compile(
    r"^Phase:\s+(\d+(?:\.\d+)?)\s+of\s+(\d+)\s*\((.+?)\)\s*(?:--\s*(.+))?$"
)
POSITION_PLAN = re.compile(r"^Plan:\s+(\d+)\s+of\s+(\d+)")
PERCENT = re.compile(r"(\d+)%")
BULLET = re.compile(r"^-\s+(.*)$")
NONE_MARKER = re.compile(r"^None\.?\s*$", re.IGNORECASE)

CURRENT_POSITION = re.compile(r"^##\s+Current Position\b")
SESSION_CONTINUITY = re.compile(r"^##\s+Session Continuity\b")
LEVEL2_HEADING = re.compile(r"^##\s+")
LEVEL2_OR_3_HEADING = re.compile(r"^#{2,3}\s+")

DECISIONS = "Decisions"
BLOCKERS = "Blockers/Concerns"
PENDING_TODOS = "Pending Todos"


def _section(lines: List[str], start: re.Pattern, stop: re.Pattern) -> Iterator[str]:
    """Yield stripped lines after the first ``start`` heading up to ``stop``."""
    inside = False
    for line in lines:
        stripped = line.strip()
        if start.match(stripped):
            inside = True
            continue
        if not inside:
            continue
        if stop.match(stripped):
            return
        yield stripped


def _after_prefix(line: str, prefix: str) -> Optional[str]:
    match = re.match(rf"^{re.escape(prefix)}:\s+(.*)$", line)
    return match.group(1).strip() if match else None


def _parse_position(lines: List[str]) -> Optional[CurrentPosition]:
    position = CurrentPosition()
    found = False

    for line in _section(lines, CURRENT_POSITION, LEVEL2_HEADING):
        phase = POSITION_PHASE.match(line)
        if phase:
            position.phase = float(phase.group(1))
            position.total_phases = int(phase.group(2))
            position.phase_name = phase.group(3).strip()
            position.phase_status = phase.group(4).strip() if phase.group(4) else None
            found = True
            continue

        plan = POSITION_PLAN.match(line)
        if plan:
            position.plan = int(plan.group(1))
            position.total_plans = int(plan.group(2))
            found = True
            continue

        status = _after_prefix(line, "Status")
        if status is not None:
            position.status = status
            found = True
            continue

        last_activity = _after_prefix(line, "Last activity")
        if last_activity is not None:
            position.last_activity = last_activity
            found = True
            continue

        progress = _after_prefix(line, "Progress")
        if progress is not None:
            percent = PERCENT.search(progress)
            if percent:
                position.progress_percent = int(percent.group(1))
                found = True

    return position if found else None


def _parse_bullets(lines: List[str], name: str) -> List[str]:
    """Collect ``- item`` bullets under ``### <name>``. A lone "None." yields []."""
    heading = re.compile(rf"^###\s+{re.escape(name)}\b")
    items = []
    for line in _section(lines, heading, LEVEL2_OR_3_HEADING):
        if NONE_MARKER.match(line):
            continue
        bullet = BULLET.match(line)
        if bullet and bullet.group(1).strip():
            items.append(bullet.group(1).strip())
    return items


def _parse_session(lines: List[str]) -> SessionContinuity:
    continuity = SessionContinuity()
    for line in _section(lines, SESSION_CONTINUITY, LEVEL2_HEADING):
        for prefix, attr in (
            ("Last session", "last_session"),
            ("Stopped at", "stopped_at"),
            ("Resume file", "resume_file"),
        ):
            value = _after_prefix(line, prefix)
            if value is not None:
                setattr(continuity, attr, value)
                break
    return continuity


def parse_state(content: str) -> Optional[ParsedState]:
    """Parse STATE.md content.

    Returns:
        ParsedState, or None for blank input or when the Current Position
        section has no recognizable field.
    """
    if not content or not content.strip():
        return None

    lines = content.splitlines()
    position = _parse_position(lines)
    if position is None:
        return None

    return ParsedState(
        position=position,
        decisions=_parse_bullets(lines, DECISIONS),
        blockers=_parse_bullets(lines, BLOCKERS),
        pending_todos=_parse_bullets(lines, PENDING_TODOS),
        session_continuity=_parse_session(lines),
    )
