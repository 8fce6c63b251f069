"""Rules about which values a part may hold and how many."""
from typing import Any, List, Optional, Sequence

from ..models import Applicability, GitContext, RuleType, Severity
from ..text import format_list
from .base import FixResult, Rule, RuleErrors


def _quoted(values: Sequence[str], conjunction: str) -> str:
    return format_list([f"'{value}'" for value in values], conjunction)


def as_string_list(value: Any) -> Optional[List[str]]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return list(value)
    return None


class EnumRule(Rule):
    rule_type = RuleType.ENUM

    def __init__(
        self,
        part: str,
        severity: Severity = Severity.ERROR,
        applicability: Applicability = Applicability.ALWAYS,
        value: Sequence[str] = (),
    ):
        super().__init__(part, severity, applicability, list(value))

    @classmethod
    def from_config(cls, part, severity, applicability, value: Any) -> Optional[Rule]:
        values = as_string_list(value)
        if values is None:
            return None
        return cls(part, severity, applicability, values)

    def _is_member(self, part: str) -> bool:
        if not part:
            return self.always
        return part in self.value

    def validate(self, parts: Sequence[str], context: Optional[GitContext] = None) -> Optional[RuleErrors]:
        return self._violations(parts, self._is_member)

    def fix(self, parts: Sequence[str], context: Optional[GitContext] = None) -> FixResult:
        return self._unfixable(parts)

    def describe(self) -> str:
        return self._statement(f"be one of {_quoted(self.value, 'or')}")


class AllowMultipleRule(Rule):
    """Whether a multi-valued part (scopes) may hold more than one value.

    The value is the delimiter the values are joined with in the header.
    """

    rule_type = RuleType.ALLOW_MULTIPLE

    def __init__(
        self,
        part: str,
        severity: Severity = Severity.ERROR,
        applicability: Applicability = Applicability.ALWAYS,
        value: str = ",",
    ):
        super().__init__(part, severity, applicability, value)

    @classmethod
    def from_config(cls, part, severity, applicability, value: Any) -> Optional[Rule]:
        if value is None:
            value = ","
        if not isinstance(value, str) or not value:
            return None
        return cls(part, severity, applicability, value)

    def validate(self, parts: Sequence[str], context: Optional[GitContext] = None) -> Optional[RuleErrors]:
        if self.always:
            return None
        errors = {index: self.describe() for index in range(1, len(parts))}
        return errors or None

    def fix(self, parts: Sequence[str], context: Optional[GitContext] = None) -> FixResult:
        if self.always:
            return None, list(parts)
        return None, list(parts[:1])

    def describe(self) -> str:
        return self._statement("allow multiple values")


class ExistsRule(Rule):
    """Values that must (always) or must not (never) be present, e.g. trailers."""

    rule_type = RuleType.EXISTS

    def __init__(
        self,
        part: str,
        severity: Severity = Severity.ERROR,
        applicability: Applicability = Applicability.ALWAYS,
        value: Sequence[str] = (),
    ):
        super().__init__(part, severity, applicability, list(value))

    @classmethod
    def from_config(cls, part, severity, applicability, value: Any) -> Optional[Rule]:
        values = as_string_list(value)
        if not values:
            return None
        return cls(part, severity, applicability, values)

    def _missing(self, parts: Sequence[str]) -> List[str]:
        present = {part.strip() for part in parts}
        return [value for value in self.value if value not in present]

    def validate(self, parts: Sequence[str], context: Optional[GitContext] = None) -> Optional[RuleErrors]:
        if self.always:
            return {0: self.describe()} if self._missing(parts) else None
        errors = {
            index: f"Forbidden value: '{part.strip()}' - {self.describe()}"
            for index, part in enumerate(parts)
            if part.strip() in self.value
        }
        return errors or None

    def fix(self, parts: Sequence[str], context: Optional[GitContext] = None) -> FixResult:
        if self.always:
            return None, list(parts) + self._missing(parts)
        return None, [part for part in parts if part.strip() not in self.value]

    def describe(self) -> str:
        return self._statement(f"include {_quoted(self.value, 'and' if self.always else 'or')}")
