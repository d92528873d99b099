"""ROADMAP.md parser.

Reads the ``## Phases`` checklist and, from the ``### Phase N: ...``
detail sections, each phase's plan list and optional capabilities line.
Lines that do not match the expected shapes are ignored.
"""

import re
from typing import Dict, List, Optional

from .models import Capability, ParsedRoadmap, PhaseInfo, PlanInfo

PHASE_NUMBER = r"\d+(?:\.\d+)?"

PHASES_HEADING = re.compile(r"^##\s+Phases\s*$")
LEVEL2_HEADING = re.compile(r"^##\s+")
ANY_HEADING = re.compile(r"^#{1,4}\s+")

# - [x] **Phase 36: Discovery Foundation** (Complete 2026-02-08) - Scan filesystem
PHASE_LINE = re.compile(
    rf"^-\s+\[([ xX])\]\s+\*\*Phase\s+({PHASE_NUMBER}):\s*(.+?)\*\*"
    r"\s*(?:\(([^)]*)\))?\s*(?:[-–—]+\s*(.*))?$"
)

# ### Phase 36: Discovery Foundation   (or ####)
DETAIL_HEADING = re.compile(rf"^#{{3,4}}\s+Phase\s+({PHASE_NUMBER})\s*:")

# - [x] 36-01-PLAN.md -- description   /   - [ ] 38-01: description
PLAN_LINE = re.compile(
    rf"^-\s+\[([ xX])\]\s+({PHASE_NUMBER}-\d+)(?:-PLAN\.md)?"
    r"(?:\s*(?:--|:)\s*(.*))?$"
)

CAPABILITIES_LINE = re.compile(r"^\*\*Capabilities\*\*\s*:\s*(.+)$")
CAPABILITY_ITEM = re.compile(r"^(?:([A-Za-z][\w-]*)\s*:\s*)?([A-Za-z][\w-]*)/(\S+)$")
DEFAULT_CAPABILITY_VERB = "use"


def _parse_capabilities(text: str) -> List[Capability]:
    """Parse ``use: skill/a, agent/b, create: agent/c``.

    A verb applies to the items after it until another verb appears.
    """
    capabilities: List[Capability] = []
    verb = DEFAULT_CAPABILITY_VERB
    for item in text.split(","):
        match = CAPABILITY_ITEM.match(item.strip())
        if not match:
            continue
        if match.group(1):
            verb = match.group(1)
        capabilities.append(Capability(verb=verb, type=match.group(2), name=match.group(3)))
    return capabilities


def _parse_phase_line(line: str) -> Optional[PhaseInfo]:
    match = PHASE_LINE.match(line)
    if not match:
        return None
    checkbox, number, name, paren, description = match.groups()
    return PhaseInfo(
        number=number,
        name=name.strip(),
        complete=checkbox.lower() == "x",
        completed_info=paren.strip() if paren else None,
        description=description.strip() if description else None,
    )


def parse_roadmap(content: str) -> Optional[ParsedRoadmap]:
    """Parse ROADMAP.md content.

    Returns:
        ParsedRoadmap, or None for blank input or when there is no
        ``## Phases`` section.
    """
    if not content or not content.strip():
        return None

    phases: List[PhaseInfo] = []
    plans_by_phase: Dict[str, List[PlanInfo]] = {}
    capabilities_by_phase: Dict[str, List[Capability]] = {}

    found_phases_section = False
    in_phases_section = False
    current_phase: Optional[str] = None

    for raw_line in content.splitlines():
        line = raw_line.strip()

        if PHASES_HEADING.match(line):
            found_phases_section = True
            in_phases_section = True
            current_phase = None
            continue

        detail = DETAIL_HEADING.match(line)
        if detail:
            in_phases_section = False
            current_phase = detail.group(1)
            continue

        if ANY_HEADING.match(line):
            if LEVEL2_HEADING.match(line):
                in_phases_section = False
            current_phase = None
            continue

        if in_phases_section:
            phase = _parse_phase_line(line)
            if phase:
                phases.append(phase)
            continue

        if current_phase is None:
            continue

        plan = PLAN_LINE.match(line)
        if plan:
            checkbox, plan_id, description = plan.groups()
            plans_by_phase.setdefault(current_phase, []).append(
                PlanInfo(
                    id=plan_id,
                    complete=checkbox.lower() == "x",
                    description=description.strip() if description else None,
                )
            )
            continue

        caps = CAPABILITIES_LINE.match(line)
        if caps:
            parsed = _parse_capabilities(caps.group(1))
            if parsed:
                capabilities_by_phase.setdefault(current_phase, []).extend(parsed)

    if not found_phases_section:
        return None

    return ParsedRoadmap(
        phases=phases,
        plans_by_phase=plans_by_phase,
        capabilities_by_phase=capabilities_by_phase or None,
    )
