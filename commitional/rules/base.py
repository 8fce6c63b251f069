"""Rule interface and the severity-aware check shared by every rule."""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..models import Applicability, GitContext, RuleType, Severity

RuleErrors = Dict[int, str]
FixResult = Tuple[Optional[RuleErrors], List[str]]
CheckResult = Tuple[List[str], Optional[RuleErrors], Optional[RuleErrors]]


class Rule(ABC):
    """A single constraint on one commit part.

    Rules work on an ordered list of strings so multi-valued parts (scopes,
    footers, trailers) can report the offending element by index. Rules are
    stateless: ``validate`` and ``fix`` never touch the list they are given.
    """

    rule_type: RuleType

    def __init__(
        self,
        part: str,
        severity: Severity = Severity.ERROR,
        applicability: Applicability = Applicability.ALWAYS,
        value: Any = None,
    ):
        self.part = part
        self.severity = Severity(severity)
        self.applicability = Applicability(applicability)
        self.value = value

    @property
    def id(self) -> str:
        return f"{self.part}-{self.rule_type.value}"

    @property
    def always(self) -> bool:
        return self.applicability == Applicability.ALWAYS

    @classmethod
    def from_config(
        cls, part: str, severity: Severity, applicability: Applicability, value: Any
    ) -> Optional["Rule"]:
        """Build the rule from a configuration value, or None if it is malformed."""
        return cls(part, severity, applicability)

    @abstractmethod
    def validate(self, parts: Sequence[str], context: Optional[GitContext] = None) -> Optional[RuleErrors]:
        """Return ``{index: message}`` for every violating element, or None."""
        pass

    @abstractmethod
    def fix(self, parts: Sequence[str], context: Optional[GitContext] = None) -> FixResult:
        """Return remaining errors (or None) and a repaired copy of the parts."""
        pass

    @abstractmethod
    def describe(self) -> str:
        """Describe the rule as ``The <part> must <always|never> <predicate>``."""
        pass

    def _statement(self, predicate: str) -> str:
        return f"The {self.part} must {self.applicability.value} {predicate}"

    def _violations(self, parts: Sequence[str], holds: Callable[[str], bool]) -> Optional[RuleErrors]:
        errors = {
            index: self.describe()
            for index, part in enumerate(parts)
            if holds(part) != self.always
        }
        return errors or None

    def _repair(self, parts: Sequence[str], holds: Callable[[str], bool], repair: Callable[[str], str]) -> FixResult:
        fixed = [repair(part) if holds(part) != self.always else part for part in parts]
        return self.validate(fixed), fixed

    def _unfixable(self, parts: Sequence[str], context: Optional[GitContext] = None) -> FixResult:
        return self.validate(parts, context), list(parts)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r}, {self.severity.name}, {self.applicability.value}, {self.value!r})"


def check(
    rule: Rule,
    parts: Sequence[str],
    attempt_fix: bool = True,
    context: Optional[GitContext] = None,
) -> CheckResult:
    """Run a rule against parts and sort its violations by severity.

    Returns ``(output, errors, warnings)``. Valid input and disabled rules
    return the input unchanged with no violations.
    """
    parts = list(parts)
    if rule.severity == Severity.DISABLED:
        return parts, None, None

    errors = rule.validate(parts, context)
    if not errors:
        return parts, None, None

    if attempt_fix:
        errors, parts = rule.fix(parts, context)
        if not errors:
            return parts, None, None

    if rule.severity == Severity.WARNING:
        return parts, None, errors
    return parts, errors, None
