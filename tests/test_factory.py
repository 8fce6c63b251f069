"""Tests for building rules from configuration entries."""

import pytest

from commitional.engine import RulesEngine
from commitional.models import Applicability, CommitPart, RuleType, Severity
from commitional.rules import RULE_CLASSES, CaseRule, EmptyRule, MaxLengthRule, create_rule
from commitional.rules.factory import RuleSetting, split_rule_id


def broken_entry():
    raise KeyError("missing")


def test_every_rule_type_has_a_class():
    assert set(RULE_CLASSES) == set(RuleType)
    for rule_type, rule_class in RULE_CLASSES.items():
        assert rule_class.rule_type == rule_type


def test_create_rule():
    rule = create_rule("subject-max-length", [2, "always", 50])

    assert isinstance(rule, MaxLengthRule)
    assert rule.id == "subject-max-length"
    assert rule.severity == Severity.ERROR
    assert rule.applicability == Applicability.ALWAYS
    assert rule.value == 50


def test_create_rule_defaults_applicability():
    rule = create_rule("subject-empty", [2])
    assert isinstance(rule, EmptyRule)
    assert rule.always


def test_create_rule_calls_callable_entries():
    rule = create_rule("subject-case", lambda: [1, "never", ["upper-case"]])
    assert isinstance(rule, CaseRule)
    assert rule.severity == Severity.WARNING
    assert rule.value == ["upper-case"]


@pytest.mark.parametrize("rule_id,entry", [
    ("subject-max-length", [0, "always", 50]),
    ("bogus-max-length", [2, "always", 50]),
    ("subject-bogus", [2, "always"]),
    ("subject-max-length", [2, "sometimes", 50]),
    ("subject-max-length", [2, "always", "fifty"]),
    ("subject-max-length", [2, "always", -1]),
    ("subject-max-length", [True, "always", 50]),
    ("subject-max-length", [3, "always", 50]),
    ("subject-max-length", [2, "always", 50, "extra"]),
    ("subject-max-length", []),
    ("subject-max-length", "2"),
    ("subject-max-length", None),
    ("subject-case", [2, "always", "weird-case"]),
    ("type-enum", [2, "always", [1, 2]]),
    ("trailer-exists", [2, "always", []]),
    ("namespace-alignment", [2, "always", []]),
    ("subject-empty", broken_entry),
])
def test_create_rule_skips_invalid_entries(rule_id, entry):
    """Test that disabled and malformed entries produce no rule."""
    assert create_rule(rule_id, entry) is None


def test_split_rule_id():
    assert split_rule_id("footer-max-line-length") == (CommitPart.FOOTER, RuleType.MAX_LINE_LENGTH)
    assert split_rule_id("footers-max-length") == (CommitPart.FOOTERS, RuleType.MAX_LENGTH)
    assert split_rule_id("namespace-alignment") == (CommitPart.NAMESPACE, RuleType.ALIGNMENT)
    assert split_rule_id("nonsense") is None


def test_rule_setting_from_entry():
    setting = RuleSetting.from_entry([1, "never", "."])
    assert setting.severity == Severity.WARNING
    assert setting.applicability == Applicability.NEVER
    assert setting.value == "."
    assert RuleSetting.from_entry({"severity": 2}) is None


def test_raising_callable_entry_leaves_other_rules():
    engine = RulesEngine.from_rules({"subject-empty": broken_entry, "type-empty": [2, "never"]})
    assert list(engine.rules) == ["type-empty"]
