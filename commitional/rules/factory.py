"""Factory turning configuration entries into rule instances."""
from typing import Any, Dict, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError

from ..models import Applicability, CommitPart, RuleType, Severity
from .base import Rule
from .case import CaseRule
from .collection import AllowMultipleRule, EnumRule, ExistsRule
from .content import EmptyRule, ExclamationMarkRule, FullStopRule, LeadingBlankRule, TrimRule
from .length import MaxLengthRule, MaxLineLengthRule, MinLengthRule
from .namespace import NamespaceAlignmentRule

RULE_CLASSES: Dict[RuleType, Type[Rule]] = {
    RuleType.EMPTY: EmptyRule,
    RuleType.TRIM: TrimRule,
    RuleType.FULL_STOP: FullStopRule,
    RuleType.EXCLAMATION_MARK: ExclamationMarkRule,
    RuleType.MAX_LENGTH: MaxLengthRule,
    RuleType.MIN_LENGTH: MinLengthRule,
    RuleType.MAX_LINE_LENGTH: MaxLineLengthRule,
    RuleType.LEADING_BLANK: LeadingBlankRule,
    RuleType.CASE: CaseRule,
    RuleType.ENUM: EnumRule,
    RuleType.ALLOW_MULTIPLE: AllowMultipleRule,
    RuleType.EXISTS: ExistsRule,
    RuleType.ALIGNMENT: NamespaceAlignmentRule,
}


class RuleSetting(BaseModel):
    """One ``[severity, applicability, value?]`` configuration entry."""

    severity: Severity
    applicability: Applicability = Applicability.ALWAYS
    value: Any = None

    @classmethod
    def from_entry(cls, entry: Any) -> Optional["RuleSetting"]:
        if callable(entry):
            try:
                entry = entry()
            except Exception:
                return None
        if not isinstance(entry, (list, tuple)) or not entry or len(entry) > 3:
            return None
        if isinstance(entry[0], bool):
            return None
        fields = dict(zip(("severity", "applicability", "value"), entry))
        try:
            return cls.model_validate(fields)
        except ValidationError:
            return None


def split_rule_id(rule_id: str) -> Optional[Tuple[CommitPart, RuleType]]:
    """``subject-max-length`` -> ``(CommitPart.SUBJECT, RuleType.MAX_LENGTH)``."""
    part, _, kind = rule_id.partition("-")
    try:
        return CommitPart(part), RuleType(kind)
    except ValueError:
        return None


def create_rule(rule_id: str, entry: Any) -> Optional[Rule]:
    """Build the rule a configuration entry describes.

    Returns None for disabled rules and for anything that can't be built:
    unknown parts or rule types, malformed entries and invalid values.
    """
    target = split_rule_id(rule_id)
    if target is None or entry is None:
        return None

    setting = RuleSetting.from_entry(entry)
    if setting is None or setting.severity == Severity.DISABLED:
        return None

    part, rule_type = target
    return RULE_CLASSES[rule_type].from_config(
        part.value, setting.severity, setting.applicability, setting.value
    )
