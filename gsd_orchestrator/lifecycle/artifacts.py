"""Phase directory artifact scanner."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

PLAN_ID = r"\d+(?:\.\d+)?-\d+"
PLAN_FILE = re.compile(rf"^({PLAN_ID})-PLAN\.md$")
SUMMARY_FILE = re.compile(rf"^({PLAN_ID})-SUMMARY\.md$")
PHASE_DIRECTORY = re.compile(r"^(\d+(?:\.\d+)?)-(.+)$")


@dataclass
class PhaseArtifacts:
    """What exists on disk for one phase."""

    phase_number: str
    phase_name: str = ""
    phase_directory: Optional[str] = None
    plan_ids: List[str] = field(default_factory=list)
    summary_ids: List[str] = field(default_factory=list)
    has_context: bool = False
    has_research: bool = False
    has_uat: bool = False
    has_verification: bool = False

    @property
    def plan_count(self) -> int:
        return len(self.plan_ids)

    @property
    def summary_count(self) -> int:
        return len(self.summary_ids)

    @property
    def unexecuted_plans(self) -> List[str]:
        """Plans that have no matching SUMMARY file."""
        executed = set(self.summary_ids)
        return [plan_id for plan_id in self.plan_ids if plan_id not in executed]


def _has_doc(names: List[str], kind: str) -> bool:
    suffix = f"-{kind}.md"
    return any(name == f"{kind}.md" or name.endswith(suffix) for name in names)


def scan_phase_artifacts(phases_dir: Path, phase_directory: str) -> PhaseArtifacts:
    """Scan ``phases_dir/phase_directory`` for plan, summary and phase documents.

    Args:
        phases_dir: The ``.planning/phases`` directory.
        phase_directory: Folder name such as ``39-lifecycle-coordination``.

    Returns:
        PhaseArtifacts; empty when the directory does not exist.
    """
    match = PHASE_DIRECTORY.match(phase_directory)
    if match:
        artifacts = PhaseArtifacts(
            phase_number=match.group(1),
            phase_name=match.group(2),
            phase_directory=phase_directory,
        )
    else:
        artifacts = PhaseArtifacts(phase_number=phase_directory, phase_directory=phase_directory)

    full_path = Path(phases_dir) / phase_directory
    try:
        names = sorted(entry.name for entry in full_path.iterdir() if entry.is_file())
    except OSError:
        logger.debug(f"Phase directory not readable: {full_path}")
        return artifacts

    for name in names:
        plan = PLAN_FILE.match(name)
        if plan:
            artifacts.plan_ids.append(plan.group(1))
            continue
        summary = SUMMARY_FILE.match(name)
        if summary:
            artifacts.summary_ids.append(summary.group(1))

    artifacts.has_context = _has_doc(names, "CONTEXT")
    artifacts.has_research = _has_doc(names, "RESEARCH")
    artifacts.has_uat = _has_doc(names, "UAT")
    artifacts.has_verification = _has_doc(names, "VERIFICATION")
    return artifacts
