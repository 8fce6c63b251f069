"""Letter-case rule and the case conversions it uses to repair values."""
import re
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from ..models import Applicability, GitContext, RuleType, Severity
from ..text import capitalize, format_list, kebab_case, split_by_word
from .base import FixResult, Rule, RuleErrors


def _camel(value: str) -> str:
    words = split_by_word(value)
    if not words:
        return value
    return words[0].lower() + "".join(capitalize(word.lower()) for word in words[1:])


CASE_CONVERTERS: Dict[str, Callable[[str], str]] = {
    "lower-case": str.lower,
    "upper-case": str.upper,
    "camel-case": _camel,
    "kebab-case": kebab_case,
    "pascal-case": lambda value: "".join(capitalize(word.lower()) for word in split_by_word(value)),
    "sentence-case": lambda value: capitalize(" ".join(split_by_word(value)).lower()),
    "snake-case": lambda value: "_".join(split_by_word(value)).lower(),
    "start-case": lambda value: " ".join(capitalize(word.lower()) for word in split_by_word(value)),
}

CASE_MATCHERS: Dict[str, Callable[[str], bool]] = {
    "lower-case": lambda value: value == value.lower(),
    "upper-case": lambda value: value == value.upper(),
    "camel-case": lambda value: bool(re.fullmatch(r"[a-z][a-zA-Z0-9]*", value)),
    "kebab-case": lambda value: bool(re.fullmatch(r"[a-z][a-z0-9]*(-[a-z0-9]+)*", value)),
    "pascal-case": lambda value: bool(re.fullmatch(r"[A-Z][a-zA-Z0-9]*", value)),
    "sentence-case": lambda value: bool(re.fullmatch(r"[A-Z][^.!?]*", value, re.DOTALL)),
    "snake-case": lambda value: bool(re.fullmatch(r"[a-z][a-z0-9]*(_[a-z0-9]+)*", value)),
    "start-case": lambda value: all(word and word[0] == word[0].upper() for word in value.split(" ")),
}

CASE_TYPES: List[str] = list(CASE_CONVERTERS)


def matches_case(value: str, case_type: str) -> bool:
    if not value:
        return True
    return CASE_MATCHERS[case_type](value)


def convert_case(value: str, case_type: str) -> str:
    return CASE_CONVERTERS[case_type](value)


class CaseRule(Rule):
    """The part must (or must not) be written in one of the named cases."""

    rule_type = RuleType.CASE

    def __init__(
        self,
        part: str,
        severity: Severity = Severity.ERROR,
        applicability: Applicability = Applicability.ALWAYS,
        value: Union[str, List[str]] = "lower-case",
    ):
        cases = [value] if isinstance(value, str) else list(value)
        unknown = [case for case in cases if case not in CASE_CONVERTERS]
        if not cases or unknown:
            raise ValueError(f"Unknown case type(s): {', '.join(unknown) or '<none>'}")
        super().__init__(part, severity, applicability, cases)

    @classmethod
    def from_config(cls, part, severity, applicability, value: Any) -> Optional[Rule]:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)) or not value:
            return None
        if not all(isinstance(case, str) and case in CASE_CONVERTERS for case in value):
            return None
        return cls(part, severity, applicability, list(value))

    def _in_case(self, part: str) -> bool:
        if not part:
            return self.always
        return any(matches_case(part, case) for case in self.value)

    def validate(self, parts: Sequence[str], context: Optional[GitContext] = None) -> Optional[RuleErrors]:
        return self._violations(parts, self._in_case)

    def _convert(self, part: str) -> str:
        if self.always:
            return convert_case(part, self.value[0])
        for case in CASE_TYPES:
            if case in self.value:
                continue
            converted = convert_case(part, case)
            if not any(matches_case(converted, forbidden) for forbidden in self.value):
                return converted
        return part

    def fix(self, parts: Sequence[str], context: Optional[GitContext] = None) -> FixResult:
        return self._repair(parts, self._in_case, self._convert)

    def describe(self) -> str:
        # each case name is rendered in its own case: "camelCase", "Sentence case"
        names = [convert_case(case, case) for case in self.value]
        if len(names) == 1:
            return self._statement(f"be in {names[0]}")
        return self._statement(f"be in either {format_list(names, 'or')}")
