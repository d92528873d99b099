"""Strict validation of a raw config.json object.

Unlike ``parse_config``, validation never fills defaults: a field that is
present with the wrong type or outside its range is always an error.
Findings fall into three buckets:

- errors: type mismatches and out-of-range values (config unusable)
- warnings: valid but unusual values
- security issues: settings that weaken human oversight

Usage:
    from gsd_orchestrator.state import validate_config

    result = validate_config(json.loads(path.read_text()))
    if not result.valid:
        for issue in result.errors:
            print(issue.field, issue.message)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from .models import Depth, ModelProfile, OperatingMode


class IssueSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    SECURITY = "security"


class FieldType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"


Check = Tuple[Callable[[Any], bool], str]


@dataclass(frozen=True)
class FieldRule:
    """Constraints for one dot-path field."""

    path: str
    type: FieldType
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    default: Any = None
    valid_values: Optional[Tuple[str, ...]] = None
    warning_checks: Tuple[Check, ...] = ()
    security_checks: Tuple[Check, ...] = ()

    def expected(self) -> Dict[str, Any]:
        expected: Dict[str, Any] = {}
        if self.minimum is not None:
            expected["min"] = self.minimum
        if self.maximum is not None:
            expected["max"] = self.maximum
        if self.default is not None:
            expected["default"] = self.default
        if self.valid_values:
            expected["valid_values"] = list(self.valid_values)
        return expected


@dataclass
class ConfigIssue:
    field: str
    message: str
    severity: IssueSeverity
    current_value: Any = None
    expected: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ConfigValidationResult:
    errors: List[ConfigIssue] = field(default_factory=list)
    warnings: List[ConfigIssue] = field(default_factory=list)
    security_issues: List[ConfigIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        """Only errors invalidate a config."""
        return not self.errors


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid number here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _values(enum_cls) -> Tuple[str, ...]:
    return tuple(member.value for member in enum_cls)


# =============================================================================
# Field registry
# =============================================================================

CONFIG_FIELD_RULES: Tuple[FieldRule, ...] = (
    FieldRule(
        path="mode",
        type=FieldType.STRING,
        default="interactive",
        valid_values=_values(OperatingMode),
        security_checks=(
            (
                lambda v: v == "yolo",
                'Mode "yolo" skips confirmations, so actions run without user review',
            ),
        ),
    ),
    FieldRule(path="verbosity", type=FieldType.NUMBER, minimum=1, maximum=5, default=3),
    FieldRule(
        path="depth",
        type=FieldType.STRING,
        default="standard",
        valid_values=_values(Depth),
    ),
    FieldRule(
        path="model_profile",
        type=FieldType.STRING,
        default="balanced",
        valid_values=_values(ModelProfile),
    ),
    FieldRule(path="commit_docs", type=FieldType.BOOLEAN, default=True),
    FieldRule(
        path="safety.max_files_per_commit",
        type=FieldType.NUMBER,
        minimum=1,
        maximum=100,
        default=20,
        warning_checks=((lambda v: v > 50, "Large commits are harder to review and revert"),),
        security_checks=(
            (
                lambda v: v > 50,
                "Very high file limit per commit increases risk of unreviewed changes",
            ),
        ),
    ),
    FieldRule(
        path="safety.require_tests",
        type=FieldType.BOOLEAN,
        default=True,
        security_checks=(
            (lambda v: v is False, "Disabling test requirements may allow broken code"),
        ),
    ),
    FieldRule(path="gates.require_plan_approval", type=FieldType.BOOLEAN, default=False),
    FieldRule(
        path="gates.require_checkpoint_approval",
        type=FieldType.BOOLEAN,
        default=True,
        security_checks=(
            (
                lambda v: v is False,
                "Disabling checkpoint approval removes human verification of critical steps",
            ),
        ),
    ),
    FieldRule(
        path="parallelization.max_parallel",
        type=FieldType.NUMBER,
        minimum=1,
        maximum=10,
        warning_checks=((lambda v: v > 5, "High parallelism may cause file conflicts"),),
    ),
    FieldRule(
        path="contextWindowSize",
        type=FieldType.NUMBER,
        minimum=1000,
        maximum=2_000_000,
        default=200_000,
    ),
    FieldRule(
        path="budgetPercent",
        type=FieldType.NUMBER,
        minimum=0.01,
        maximum=0.20,
        default=0.03,
        warning_checks=(
            (lambda v: v > 0.10, "Budget above 10% consumes significant context"),
        ),
    ),
    FieldRule(
        path="relevanceThreshold",
        type=FieldType.NUMBER,
        minimum=0.0,
        maximum=1.0,
        default=0.1,
        warning_checks=(
            (lambda v: v < 0.05, "Very low threshold, nearly all skills will activate"),
            (lambda v: v > 0.9, "Very high threshold, most skills will never activate"),
        ),
    ),
    FieldRule(
        path="maxSkillsPerSession",
        type=FieldType.NUMBER,
        minimum=1,
        maximum=20,
        default=5,
    ),
    FieldRule(path="hardCeilingPercent", type=FieldType.NUMBER, minimum=0.01, maximum=0.30),
)

_MISSING = object()


def _get_path(data: Dict[str, Any], path: str) -> Any:
    current: Any = data
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _matches_type(value: Any, expected: FieldType) -> bool:
    if expected is FieldType.NUMBER:
        return _is_number(value)
    if expected is FieldType.BOOLEAN:
        return isinstance(value, bool)
    if expected is FieldType.STRING:
        return isinstance(value, str)
    return isinstance(value, dict)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if _is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _check_rule(rule: FieldRule, value: Any, result: ConfigValidationResult) -> None:
    def issue(message: str, severity: IssueSeverity) -> ConfigIssue:
        return ConfigIssue(
            field=rule.path,
            message=message,
            severity=severity,
            current_value=value,
            expected=rule.expected(),
        )

    if not _matches_type(value, rule.type):
        result.errors.append(
            issue(
                f"Type mismatch: expected {rule.type.value}, got {_type_name(value)}",
                IssueSeverity.ERROR,
            )
        )
        return

    if rule.valid_values and value not in rule.valid_values:
        result.errors.append(
            issue(
                f'Invalid value "{value}": must be one of {", ".join(rule.valid_values)}',
                IssueSeverity.ERROR,
            )
        )
        return

    if rule.type is FieldType.NUMBER:
        if rule.minimum is not None and value < rule.minimum:
            result.errors.append(
                issue(f"Value {value} is below minimum {rule.minimum}", IssueSeverity.ERROR)
            )
            return
        if rule.maximum is not None and value > rule.maximum:
            result.errors.append(
                issue(f"Value {value} is above maximum {rule.maximum}", IssueSeverity.ERROR)
            )
            return

    for condition, message in rule.warning_checks:
        if condition(value):
            result.warnings.append(issue(message, IssueSeverity.WARNING))

    for condition, message in rule.security_checks:
        if condition(value):
            result.security_issues.append(issue(message, IssueSeverity.SECURITY))


def validate_config(raw: Any) -> ConfigValidationResult:
    """Validate a raw (pre-default) config object against the field registry.

    Args:
        raw: The decoded config.json value. Absent fields are not checked.

    Returns:
        ConfigValidationResult; ``valid`` is False when any error was found.
    """
    result = ConfigValidationResult()

    if not isinstance(raw, dict):
        result.errors.append(
            ConfigIssue(
                field="(root)",
                message=f"Config must be a plain object, got {_type_name(raw)}",
                severity=IssueSeverity.ERROR,
                current_value=raw,
            )
        )
        return result

    for rule in CONFIG_FIELD_RULES:
        value = _get_path(raw, rule.path)
        if value is _MISSING:
            continue
        _check_rule(rule, value, result)

    return result
