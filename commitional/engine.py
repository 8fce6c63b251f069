"""Rules engine: applies a configured rule set to commit message parts."""
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from .models import Applicability, GitContext, RuleType, Severity
from .rules import Rule, RuleErrors, check, create_rule
from .text import capitalize, format_list

PROPERTY_ORDER = ("namespace", "type", "scope", "subject", "body", "footers")
DESCRIBE_ORDER = ("namespace", "type", "scope", "subject", "header", "body", "footer", "footers", "trailer")
IMPERATIVE_MOOD = "The subject must be written in imperative mood (Fix, not Fixed / Fixes etc.)"


class Violations:
    """Violation messages grouped by the index of the offending value.

    Every message is labelled ``[<part>:<index>] <message>``.
    """

    def __init__(self):
        self._by_index: Dict[int, List[str]] = {}

    def update(self, part: str, errors: Optional[RuleErrors]) -> None:
        for index, message in (errors or {}).items():
            self._by_index.setdefault(index, []).append(f"[{part}:{index}] {message}")

    def at(self, index: int) -> List[str]:
        return list(self._by_index.get(index, []))

    def indexes(self) -> List[int]:
        return sorted(self._by_index)

    def list(self) -> List[str]:
        return [message for index in self.indexes() for message in self._by_index[index]]

    def __bool__(self) -> bool:
        return bool(self._by_index)

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._by_index.values())


@dataclass
class Evaluation:
    output: List[str]
    errors: Violations = field(default_factory=Violations)
    warnings: Violations = field(default_factory=Violations)

    @property
    def valid(self) -> bool:
        return not self.errors


class RulesEngine:
    """An immutable, ordered set of rules keyed by ``<part>-<rule type>``.

    Rules run in configuration order and each rule sees the output of the
    previous one, so fixes compose.
    """

    def __init__(self, rules: Optional[Mapping[str, Rule]] = None):
        self._rules = MappingProxyType(dict(rules or {}))

    @property
    def rules(self) -> Mapping[str, Rule]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.values())

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __getitem__(self, rule_id: str) -> Rule:
        return self._rules[rule_id]

    def __repr__(self) -> str:
        return f"RulesEngine({list(self._rules)})"

    def evaluate(
        self,
        parts: Sequence[str],
        attempt_fix: bool = True,
        context: Optional[GitContext] = None,
    ) -> Evaluation:
        """Run every rule over the parts, feeding each rule's output to the next."""
        evaluation = Evaluation(list(parts))
        for rule in self:
            try:
                output, errors, warnings = check(rule, evaluation.output, attempt_fix, context)
            except Exception as e:
                evaluation.errors.update(rule.part, {0: f"{rule.id} failed: {e}"})
                continue
            evaluation.output = output
            evaluation.errors.update(rule.part, errors)
            evaluation.warnings.update(rule.part, warnings)
        return evaluation

    def validate(
        self,
        value: Union[str, Sequence[str]],
        attempt_fix: bool = True,
        context: Optional[GitContext] = None,
    ) -> Tuple[Union[str, List[str]], List[str], List[str]]:
        """Validate a single value or a list of values.

        Returns ``(output, errors, warnings)``; ``output`` has the same shape
        as ``value``.
        """
        if isinstance(value, str):
            evaluation = self.evaluate([value], attempt_fix, context)
            output = evaluation.output[0] if evaluation.output else ""
            return output, evaluation.errors.list(), evaluation.warnings.list()

        evaluation = self.evaluate(value, attempt_fix, context)
        return evaluation.output, evaluation.errors.list(), evaluation.warnings.list()

    def parse(self, value: str, context: Optional[GitContext] = None) -> str:
        """Return the repaired value, ignoring any violations left over."""
        output, _, _ = self.validate(value, True, context)
        return output

    def narrow(self, *parts: str) -> "RulesEngine":
        """Sub-engine with only the rules targeting the given parts."""
        prefixes = tuple(f"{part}-" for part in parts)
        return RulesEngine({rule_id: rule for rule_id, rule in self._rules.items() if rule_id.startswith(prefixes)})

    def extract(self, *rule_types: RuleType) -> "RulesEngine":
        """Sub-engine with only the rules of the given types."""
        rule_types = {RuleType(rule_type) for rule_type in rule_types}
        return RulesEngine({rule_id: rule for rule_id, rule in self._rules.items() if rule.rule_type in rule_types})

    def omit(self, *rule_types: RuleType) -> "RulesEngine":
        """Sub-engine without the rules of the given types."""
        rule_types = {RuleType(rule_type) for rule_type in rule_types}
        return RulesEngine({rule_id: rule for rule_id, rule in self._rules.items() if rule.rule_type not in rule_types})

    def get_rules_of_type(self, *rule_types: RuleType) -> List[Rule]:
        rule_types = {RuleType(rule_type) for rule_type in rule_types}
        return [rule for rule in self if rule.rule_type in rule_types]

    def allowed_commit_props(self) -> Dict[str, List[str]]:
        """Split the commit properties into required, optional and forbidden.

        Empty rules decide: ``never`` empty means required, ``always`` empty
        means forbidden, no rule means optional. A ``trailer-exists`` rule
        makes footers required.
        """
        required, forbidden = set(), set()
        optional = {"type", "scope", "subject", "body", "footers"}

        for rule in self.get_rules_of_type(RuleType.EMPTY):
            if rule.part in ("footer", "trailer") or rule.severity == Severity.DISABLED:
                continue
            optional.discard(rule.part)
            if rule.applicability == Applicability.NEVER:
                required.add(rule.part)
            else:
                forbidden.add(rule.part)

        trailer_exists = self.narrow("trailer").get_rules_of_type(RuleType.EXISTS)
        if any(rule.applicability == Applicability.ALWAYS for rule in trailer_exists):
            optional.discard("footers")
            forbidden.discard("footers")
            required.add("footers")

        def ordered(names):
            return [name for name in PROPERTY_ORDER if name in names]

        return {"required": ordered(required), "optional": ordered(optional), "forbidden": ordered(forbidden)}

    def commit_structure(self) -> str:
        """Plain-language summary of the commit shape plus a template."""
        from .commit_message import CommitMessage

        props = self.allowed_commit_props()
        structure: Dict[str, Any] = {}
        clauses = []

        if props["required"]:
            for name in props["required"]:
                if name == "footers":
                    trailers = [
                        value
                        for rule in self.narrow("trailer").get_rules_of_type(RuleType.EXISTS)
                        if rule.applicability == Applicability.ALWAYS
                        for value in rule.value
                    ]
                    structure["footers"] = [f"<{trailer}>: <footer>" for trailer in trailers] or ["<token>: <footer>"]
                else:
                    structure[name] = f"<{name}>"
            clauses.append(f"must have a {format_list(props['required'], 'and')}")

        if props["optional"]:
            for name in props["optional"]:
                if name == "footers":
                    structure["footers"] = structure.get("footers", []) + ["[optional: footer(s)]"]
                else:
                    structure[name] = f"[optional {name}]"
            clauses.append(f"may have a {format_list(props['optional'], 'or')}")

        if props["forbidden"]:
            clauses.append(f"must not contain a {format_list(props['forbidden'], 'or')}")

        if clauses:
            clauses[0] = f"Commit messages {clauses[0]}"

        template = CommitMessage.from_json(structure).to_string()
        return "\n".join([format_list(clauses, "and"), "```txt", template, "```"])

    def general_rules(self) -> str:
        """Markdown list of every non-empty rule, grouped by commit part."""
        lines = []
        remaining = [rule for rule in self if rule.rule_type != RuleType.EMPTY]
        for part in DESCRIBE_ORDER:
            applicable = [rule for rule in remaining if rule.part == part]
            remaining = [rule for rule in remaining if rule.part != part]
            if applicable or part == "subject":
                lines.append(f"### {capitalize(part)}")
            lines.extend(f"- {capitalize(rule.describe())}" for rule in applicable)
            if part == "subject":
                lines.append(f"- {IMPERATIVE_MOOD}")
        return "\n".join(lines)

    def describe(self) -> str:
        """Markdown description of the commit standard this engine enforces."""
        return "\n".join([
            "## Commit message standard",
            self.commit_structure(),
            "",
            "## General Rules",
            self.general_rules(),
        ])

    @classmethod
    def from_rules(cls, config: Mapping[str, Any]) -> "RulesEngine":
        """Build an engine from ``{"<part>-<rule type>": [severity, applicability, value?]}``.

        Disabled, unknown and malformed entries are skipped.
        """
        rules: Dict[str, Rule] = {}
        for rule_id, entry in config.items():
            rule = create_rule(rule_id, entry)
            if rule is not None:
                rules[rule_id] = rule
        return cls(rules)

    @classmethod
    def from_config(cls, repo_path: Union[str, Path] = ".") -> "RulesEngine":
        """Build an engine from the repository's ``.commitional.toml``."""
        from .config import Config

        repo_path = Path(repo_path)
        return cls.from_rules(Config.load(repo_path).resolved_rules(repo_path))
