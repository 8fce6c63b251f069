"""Length limits on whole parts and on individual lines."""
from typing import Any, Optional, Sequence

from ..models import Applicability, GitContext, RuleType, Severity
from ..text import truncate, wrap_text
from .base import FixResult, Rule, RuleErrors


class _LengthRule(Rule):
    """Shared constructor for rules parameterised by a character count."""

    def __init__(
        self,
        part: str,
        severity: Severity = Severity.ERROR,
        applicability: Applicability = Applicability.ALWAYS,
        value: int = 0,
    ):
        super().__init__(part, severity, applicability, value)

    @classmethod
    def from_config(cls, part, severity, applicability, value: Any) -> Optional[Rule]:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return None
        return cls(part, severity, applicability, value)


class MaxLengthRule(_LengthRule):
    rule_type = RuleType.MAX_LENGTH

    def _fits(self, part: str) -> bool:
        return len(part) <= self.value

    def validate(self, parts: Sequence[str], context: Optional[GitContext] = None) -> Optional[RuleErrors]:
        return self._violations(parts, self._fits)

    def fix(self, parts: Sequence[str], context: Optional[GitContext] = None) -> FixResult:
        if not self.always:
            return self._unfixable(parts)
        return self._repair(parts, self._fits, lambda part: truncate(part, self.value))

    def describe(self) -> str:
        return self._statement(f"be {self.value} characters or fewer")


class MinLengthRule(_LengthRule):
    rule_type = RuleType.MIN_LENGTH

    def _long_enough(self, part: str) -> bool:
        return len(part) >= self.value

    def validate(self, parts: Sequence[str], context: Optional[GitContext] = None) -> Optional[RuleErrors]:
        return self._violations(parts, self._long_enough)

    def fix(self, parts: Sequence[str], context: Optional[GitContext] = None) -> FixResult:
        return self._unfixable(parts)

    def describe(self) -> str:
        return self._statement(f"be at least {self.value} characters long")


class MaxLineLengthRule(_LengthRule):
    rule_type = RuleType.MAX_LINE_LENGTH

    def _lines_fit(self, part: str) -> bool:
        return all(len(line) <= self.value for line in part.split("\n"))

    def validate(self, parts: Sequence[str], context: Optional[GitContext] = None) -> Optional[RuleErrors]:
        return self._violations(parts, self._lines_fit)

    def fix(self, parts: Sequence[str], context: Optional[GitContext] = None) -> FixResult:
        if not self.always or self.value < 1:
            return self._unfixable(parts)
        return self._repair(parts, self._lines_fit, lambda part: wrap_text(part, self.value))

    def describe(self) -> str:
        return self._statement(f"wrap lines at {self.value} characters")
