"""config.json reader.

Accepts both the flat shape (``{"mode": "yolo", "commit_docs": false}``)
and the nested template shape that keeps ``commit_docs`` and
``search_gitignored`` under ``planning``.
"""

import json
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .models import ProjectConfig

logger = logging.getLogger(__name__)

# Legacy template keys lifted from "planning" when absent at the top level
HOISTED_PLANNING_KEYS = ("commit_docs", "search_gitignored")


def _hoist_planning_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    planning = data.get("planning")
    if not isinstance(planning, dict):
        return data
    hoisted = dict(data)
    for key in HOISTED_PLANNING_KEYS:
        if key not in hoisted and key in planning:
            hoisted[key] = planning[key]
    return hoisted


def config_from_dict(data: Dict[str, Any]) -> ProjectConfig:
    """Build a fully-defaulted ProjectConfig from a raw config object.

    Fields that are present but unusable fall back to their defaults with
    a warning. Reporting them is ``validate_config``'s job.
    """
    data = _hoist_planning_keys(data)
    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as e:
        bad_keys = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
        logger.warning(f"Ignoring invalid config fields: {', '.join(sorted(bad_keys))}")
        cleaned = {key: value for key, value in data.items() if key not in bad_keys}
        return ProjectConfig.model_validate(cleaned)


def parse_config(content: str) -> Optional[ProjectConfig]:
    """Parse config.json content.

    Returns:
        ProjectConfig, or None for blank input, invalid JSON, or JSON whose
        root is not an object.
    """
    if not content or not content.strip():
        return None
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.debug(f"config.json is not valid JSON: {e.msg}")
        return None
    if not isinstance(data, dict):
        return None
    return config_from_dict(data)
