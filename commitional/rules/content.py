"""Rules about what a part contains at its edges."""
import re
from typing import Any, Optional, Sequence

from ..models import Applicability, GitContext, RuleType, Severity
from ..text import indefinite_article
from .base import FixResult, Rule, RuleErrors

SYMBOL_NAMES = {
    ".": "full stop",
    "!": "exclamation mark",
    "?": "question mark",
    ",": "comma",
    ";": "semicolon",
    ":": "colon",
    "-": "hyphen",
    "…": "ellipsis",
}

LEADING_BLANK = re.compile(r"^\s*\n")


def _skip_empty(rule: Rule, holds):
    """Empty values are left to the empty rule."""
    return lambda part: holds(part) if part else rule.always


class EmptyRule(Rule):
    rule_type = RuleType.EMPTY

    @staticmethod
    def _is_empty(part: str) -> bool:
        return not part.strip()

    def validate(self, parts: Sequence[str], context: Optional[GitContext] = None) -> Optional[RuleErrors]:
        # a part with no values at all counts as a single empty value
        return self._violations(list(parts) or [""], self._is_empty)

    def fix(self, parts: Sequence[str], context: Optional[GitContext] = None) -> FixResult:
        if not self.always:
            return self._unfixable(parts)
        return self._repair(parts, self._is_empty, lambda part: "")

    def describe(self) -> str:
        return self._statement("be empty")


class TrimRule(Rule):
    rule_type = RuleType.TRIM

    @staticmethod
    def _is_trimmed(part: str) -> bool:
        return part == part.strip()

    def validate(self, parts: Sequence[str], context: Optional[GitContext] = None) -> Optional[RuleErrors]:
        return self._violations(parts, self._is_trimmed)

    def fix(self, parts: Sequence[str], context: Optional[GitContext] = None) -> FixResult:
        if not self.always:
            return self._unfixable(parts)
        return self._repair(parts, self._is_trimmed, str.strip)

    def describe(self) -> str:
        return self._statement("be trimmed of surrounding whitespace")


class FullStopRule(Rule):
    rule_type = RuleType.FULL_STOP

    def __init__(
        self,
        part: str,
        severity: Severity = Severity.ERROR,
        applicability: Applicability = Applicability.ALWAYS,
        value: str = ".",
    ):
        super().__init__(part, severity, applicability, value)

    @classmethod
    def from_config(cls, part, severity, applicability, value: Any) -> Optional[Rule]:
        if value is None:
            value = "."
        if not isinstance(value, str) or not value:
            return None
        return cls(part, severity, applicability, value)

    def _ends_with_stop(self, part: str) -> bool:
        return part.endswith(self.value)

    def _remove_stops(self, part: str) -> str:
        while part.endswith(self.value):
            part = part[: -len(self.value)]
        return part

    def validate(self, parts: Sequence[str], context: Optional[GitContext] = None) -> Optional[RuleErrors]:
        return self._violations(parts, _skip_empty(self, self._ends_with_stop))

    def fix(self, parts: Sequence[str], context: Optional[GitContext] = None) -> FixResult:
        repair = (lambda part: part + self.value) if self.always else self._remove_stops
        return self._repair(parts, _skip_empty(self, self._ends_with_stop), repair)

    def describe(self) -> str:
        name = SYMBOL_NAMES.get(self.value)
        if name:
            return self._statement(f"end with {indefinite_article(name)} {name}")
        return self._statement(f"end with '{self.value}'")


class ExclamationMarkRule(Rule):
    """Breaking-change marker: ``feat!: ...``."""

    rule_type = RuleType.EXCLAMATION_MARK

    @staticmethod
    def _has_mark(part: str) -> bool:
        colon = part.find(":")
        return colon > 0 and part[colon - 1] == "!"

    def validate(self, parts: Sequence[str], context: Optional[GitContext] = None) -> Optional[RuleErrors]:
        return self._violations(parts, self._has_mark)

    def _toggle(self, part: str) -> str:
        colon = part.find(":")
        if colon <= 0:
            return part
        if self.always:
            return f"{part[:colon]}!{part[colon:]}"
        return f"{part[:colon].rstrip('!')}{part[colon:]}"

    def fix(self, parts: Sequence[str], context: Optional[GitContext] = None) -> FixResult:
        return self._repair(parts, self._has_mark, self._toggle)

    def describe(self) -> str:
        return self._statement("have an exclamation mark before the colon")


class LeadingBlankRule(Rule):
    rule_type = RuleType.LEADING_BLANK

    @staticmethod
    def _has_leading_blank(part: str) -> bool:
        return bool(LEADING_BLANK.match(part))

    def validate(self, parts: Sequence[str], context: Optional[GitContext] = None) -> Optional[RuleErrors]:
        return self._violations(parts, _skip_empty(self, self._has_leading_blank))

    def fix(self, parts: Sequence[str], context: Optional[GitContext] = None) -> FixResult:
        if self.always:
            repair = lambda part: "\n" + part
        else:
            repair = lambda part: LEADING_BLANK.sub("", part, count=1)
        return self._repair(parts, _skip_empty(self, self._has_leading_blank), repair)

    def describe(self) -> str:
        return self._statement("begin with a blank line")
