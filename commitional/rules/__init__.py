"""Commit message rules."""

from .base import Rule, RuleErrors, check
from .case import CASE_TYPES, CaseRule, convert_case, matches_case
from .collection import AllowMultipleRule, EnumRule, ExistsRule
from .content import EmptyRule, ExclamationMarkRule, FullStopRule, LeadingBlankRule, TrimRule
from .factory import RULE_CLASSES, RuleSetting, create_rule
from .length import MaxLengthRule, MaxLineLengthRule, MinLengthRule
from .namespace import NamespaceAlignmentRule

__all__ = [
    'Rule',
    'RuleErrors',
    'check',
    'create_rule',
    'RuleSetting',
    'RULE_CLASSES',
    'CASE_TYPES',
    'convert_case',
    'matches_case',
    'EmptyRule',
    'TrimRule',
    'FullStopRule',
    'ExclamationMarkRule',
    'MaxLengthRule',
    'MinLengthRule',
    'MaxLineLengthRule',
    'LeadingBlankRule',
    'CaseRule',
    'EnumRule',
    'AllowMultipleRule',
    'ExistsRule',
    'NamespaceAlignmentRule',
]
