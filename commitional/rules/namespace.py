"""Rule tying the header namespace to the directories a commit touches."""
from typing import Any, Optional, Sequence

from ..models import Applicability, GitContext, RuleType, Severity
from ..namespace import NamespaceResolver
from .base import FixResult, Rule, RuleErrors
from .collection import as_string_list


class NamespaceAlignmentRule(Rule):
    """Changed files must resolve to exactly the namespace in the header.

    Needs a git context; without one (or without changed files) there is
    nothing to compare against and the rule passes. The rule cannot be
    inverted, so under ``never`` it never reports.
    """

    rule_type = RuleType.ALIGNMENT

    def __init__(
        self,
        part: str,
        severity: Severity = Severity.ERROR,
        applicability: Applicability = Applicability.ALWAYS,
        value: Sequence[str] = (),
    ):
        super().__init__(part, severity, applicability, list(value))
        self.resolver = NamespaceResolver(self.value)

    @classmethod
    def from_config(cls, part, severity, applicability, value: Any) -> Optional[Rule]:
        directories = as_string_list(value)
        if not directories:
            return None
        return cls(part, severity, applicability, directories)

    def validate(self, parts: Sequence[str], context: Optional[GitContext] = None) -> Optional[RuleErrors]:
        if not self.always or context is None or not context.files:
            return None

        namespace = parts[0].strip() if parts else ""
        single = self.resolver.validate_single_namespace(context.files)
        if not single.valid:
            return {0: single.errors[0]}

        aligned = self.resolver.validate_namespace_alignment(namespace, context.files)
        if not aligned.valid:
            return {0: aligned.errors[0] if aligned.errors else self.describe()}
        return None

    def fix(self, parts: Sequence[str], context: Optional[GitContext] = None) -> FixResult:
        return self._unfixable(parts, context)

    def describe(self) -> str:
        return self._statement("match the namespace of the changed files")
