"""Full commit message: header, body and footers."""
import copy
import re
from collections import Counter
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..models import GitContext, PartReport
from .footer import BREAKING_CHANGE_TOKENS, CommitMessageFooter, InvalidFooterError, normalize_token
from .header import BREAKING_EMOJI, HEADER_FIELDS, CommitMessageHeader

if TYPE_CHECKING:
    from ..engine import Evaluation, RulesEngine

StyleFn = Callable[[str], str]

PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)*")
FOOTER_PARTS = ("footer", "trailer", "footers")
_MISSING = object()


class CommitMessage:
    """A parsed commit message that can be edited, checked and rendered.

    ``from_string`` followed by ``to_string`` reproduces the input up to
    normalization of blank lines between paragraphs.
    """

    def __init__(
        self,
        header: Optional[CommitMessageHeader] = None,
        body: str = "",
        footers: Optional[List[CommitMessageFooter]] = None,
    ):
        self._header = header or CommitMessageHeader()
        self._body = body
        self._footers: List[CommitMessageFooter] = list(footers or [])
        self._body_style: Optional[StyleFn] = None
        self._body_styled = False
        self._breaking_change_text: Optional[str] = None

    # -- header delegation ------------------------------------------------

    @property
    def header(self) -> CommitMessageHeader:
        return self._header

    @property
    def type(self) -> str:
        return self._header.type

    @type.setter
    def type(self, value: str) -> None:
        self._header.type = value

    @property
    def namespace(self) -> str:
        return self._header.namespace

    @namespace.setter
    def namespace(self, value: str) -> None:
        self._header.namespace = value

    @property
    def scope(self) -> str:
        return self._header.scope

    @scope.setter
    def scope(self, value: str) -> None:
        self._header.scope = value

    @property
    def scopes(self) -> List[str]:
        return self._header.scopes

    @scopes.setter
    def scopes(self, values: List[str]) -> None:
        self._header.scopes = values

    def add_scope(self, scope: str) -> "CommitMessage":
        self._header.add_scope(scope)
        return self

    def del_scope(self, scope: str) -> "CommitMessage":
        self._header.del_scope(scope)
        return self

    @property
    def subject(self) -> str:
        return self._header.subject

    @subject.setter
    def subject(self, value: str) -> None:
        self._header.subject = value

    # -- body and footers -------------------------------------------------

    @property
    def body(self) -> str:
        return self._body

    @body.setter
    def body(self, value: str) -> None:
        self._body = value.strip()

    @property
    def footers(self) -> List[str]:
        """Footers rendered as ``Token: text`` strings."""
        return [str(footer) for footer in self._footers]

    @footers.setter
    def footers(self, values: List[str]) -> None:
        footers = []
        for value in values:
            footer = CommitMessageFooter.from_string(value)
            if isinstance(footer, InvalidFooterError):
                raise footer
            footers.append(footer)
        self._footers = footers

    @property
    def trailers(self) -> List[str]:
        """Footer tokens, in order."""
        return [footer.token for footer in self._footers]

    def footer(self, token: str, text: Any = _MISSING) -> Optional[CommitMessageFooter]:
        """Get, upsert or remove a footer.

        ``footer(token)`` returns the first footer with that token,
        ``footer(token, text)`` updates it (or appends a new one) and
        ``footer(token, None)`` removes and returns it.
        """
        existing = next((footer for footer in self._footers if footer.matches(token)), None)
        if text is _MISSING:
            return existing
        if text is None:
            if existing is not None:
                self._footers.remove(existing)
            return existing
        if existing is not None:
            existing.text = text
            return existing
        footer = CommitMessageFooter(token, text)
        self._footers.append(footer)
        return footer

    # -- breaking changes -------------------------------------------------

    @property
    def is_breaking(self) -> bool:
        return self._header.is_breaking or any(footer.is_breaking for footer in self._footers)

    def breaking(self, text: Optional[str] = None) -> "CommitMessage":
        """Toggle the breaking-change state.

        Entering it marks the header (``!`` and emoji) and records a
        ``BREAKING CHANGE`` footer when text is given (or was given before).
        Leaving it removes every breaking-change footer and the header marks.
        """
        if self.is_breaking:
            self._header.breaking(False)
            self._footers = [footer for footer in self._footers if not footer.is_breaking]
            return self

        if text:
            self._breaking_change_text = text
        self._header.breaking(True)
        if self._breaking_change_text:
            self.footer(BREAKING_CHANGE_TOKENS[0], self._breaking_change_text)
        return self

    # -- styling ----------------------------------------------------------

    def _targets(self, part: Optional[str], filter: Optional[str]):
        header_part = part if part in HEADER_FIELDS + ("header",) else None
        footers = []
        if part is None or part in FOOTER_PARTS:
            footers = [footer for footer in self._footers if filter is None or footer.matches(filter)]
        return header_part, part in (None, "body"), footers

    def set_style(self, style: StyleFn, part: Optional[str] = None, filter: Optional[str] = None) -> "CommitMessage":
        header_part, body, footers = self._targets(part, filter)
        if part is None or header_part:
            self._header.set_style(style, header_part)
        if body:
            self._body_style = style
        for footer in footers:
            footer.set_style(style)
        return self

    def style(self, part: Optional[str] = None, filter: Optional[str] = None) -> "CommitMessage":
        header_part, body, footers = self._targets(part, filter)
        if part is None or header_part:
            self._header.style(header_part)
        if body:
            self._body_styled = True
        for footer in footers:
            footer.style()
        return self

    def unstyle(self, part: Optional[str] = None, filter: Optional[str] = None) -> "CommitMessage":
        header_part, body, footers = self._targets(part, filter)
        if part is None or header_part:
            self._header.unstyle(header_part)
        if body:
            self._body_styled = False
        for footer in footers:
            footer.unstyle()
        return self

    # -- serialization ----------------------------------------------------

    def to_string(self) -> str:
        paragraphs = [self._header.to_string()]
        if self._body:
            body = self._body
            if self._body_styled and self._body_style:
                body = self._body_style(body)
            paragraphs.append(body)
        paragraphs.extend(footer.to_string() for footer in self._footers)
        return "\n\n".join(paragraphs)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"CommitMessage({self._header.to_string()!r})"

    @classmethod
    def from_string(
        cls,
        message: str,
        scope_delimiter: str = ",",
        breaking_emoji: str = BREAKING_EMOJI,
    ) -> "CommitMessage":
        """Parse raw commit message text.

        The first line is the header. Trailing paragraphs made up entirely of
        ``Token: text`` lines are footers; scanning stops at the first
        paragraph (from the end) that isn't, and everything before it is the
        body. A last body paragraph shaped like a footer is therefore read as
        a footer.
        """
        message = message.replace("\r\n", "\n").strip("\n")
        header_line, _, rest = message.partition("\n")
        header = CommitMessageHeader.from_string(header_line, scope_delimiter, breaking_emoji)

        paragraphs = [p for p in PARAGRAPH_BREAK.split(rest.strip("\n")) if p.strip()]

        footers: List[CommitMessageFooter] = []
        while paragraphs:
            block = CommitMessageFooter.parse_block(paragraphs[-1])
            if isinstance(block, InvalidFooterError):
                break
            footers = block + footers
            paragraphs.pop()

        return cls(header, "\n\n".join(paragraphs), footers)

    def to_json(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "namespace": self.namespace,
            "scope": self.scopes,
            "subject": self.subject,
            "body": self.body,
            "footers": [footer.plain for footer in self._footers],
        }

    @classmethod
    def from_json(
        cls,
        data: Mapping[str, Any],
        scope_delimiter: str = ",",
        breaking_emoji: str = BREAKING_EMOJI,
    ) -> "CommitMessage":
        """Build a message from a ``to_json`` style mapping.

        ``scope`` may be a delimited string or a list; ``footers`` may hold
        ``"Token: text"`` strings or ``{"token": ..., "text": ...}`` mappings.
        """
        scope = data.get("scope") or []
        if isinstance(scope, str):
            scope = scope.split(scope_delimiter)
        header = CommitMessageHeader(
            type=data.get("type") or "",
            scope=scope,
            subject=data.get("subject") or "",
            namespace=data.get("namespace") or "",
            scope_delimiter=scope_delimiter,
            breaking_emoji=breaking_emoji,
        )

        footers = []
        for entry in data.get("footers", data.get("footer")) or []:
            if isinstance(entry, Mapping):
                footers.append(CommitMessageFooter(entry.get("token", ""), entry.get("text", "")))
            else:
                token, separator, text = str(entry).partition(": ")
                if not separator:
                    token = token.rstrip(":")
                footers.append(CommitMessageFooter(token, text))
        return cls(header, (data.get("body") or "").strip(), footers)

    # -- rules ------------------------------------------------------------

    def _field_parts(self, header: CommitMessageHeader, part: str) -> List[str]:
        if part == "scope":
            return header.scopes
        return [getattr(header, part)]

    @staticmethod
    def _report(part: str, evaluation: "Evaluation", filter: Optional[str] = None, index: Optional[int] = None) -> Optional[PartReport]:
        if index is None:
            errors, warnings = evaluation.errors.list(), evaluation.warnings.list()
        else:
            errors, warnings = evaluation.errors.at(index), evaluation.warnings.at(index)
        if not errors and not warnings:
            return None
        return PartReport(type=part, filter=filter, errors=errors, warnings=warnings)

    @staticmethod
    def _retoken(footers: List[CommitMessageFooter], tokens: List[str]) -> List[CommitMessageFooter]:
        """Rebuild footers after trailer rules renamed, removed or added tokens."""
        if len(tokens) == len(footers):
            for footer, token in zip(footers, tokens):
                footer.token = token
            return footers

        wanted = Counter(normalize_token(token) for token in tokens)
        kept = []
        for footer in footers:
            if wanted[footer.token] > 0:
                wanted[footer.token] -= 1
                kept.append(footer)
        for token in tokens:
            if wanted[normalize_token(token)] > 0:
                wanted[normalize_token(token)] -= 1
                kept.append(CommitMessageFooter(token, ""))
        return kept

    def process(
        self,
        rules_engine: "RulesEngine",
        attempt_fix: bool = True,
        context: Optional[GitContext] = None,
    ) -> Tuple["CommitMessage", bool, List[PartReport]]:
        """Check (and optionally repair) every part against the rules.

        Returns a new message, whether it is free of errors, and one report
        per part (or footer) with violations. The receiver is not modified.
        """
        reports: List[PartReport] = []

        def record(report: Optional[PartReport]) -> None:
            if report is not None:
                reports.append(report)

        header = copy.deepcopy(self._header)
        for part in HEADER_FIELDS:
            engine = rules_engine.narrow(part)
            if not engine:
                continue
            evaluation = engine.evaluate(self._field_parts(header, part), attempt_fix, context)
            if part == "scope":
                header.scopes = evaluation.output
            else:
                setattr(header, part, evaluation.output[0] if evaluation.output else "")
            record(self._report(part, evaluation))

        engine = rules_engine.narrow("header")
        if engine:
            line = header.to_string()
            evaluation = engine.evaluate([line], attempt_fix, context)
            fixed = evaluation.output[0] if evaluation.output else ""
            if fixed != line:
                reparsed = CommitMessageHeader.from_string(fixed, header.scope_delimiter, header.breaking_emoji)
                header = reparsed.copy_styles(header)
            record(self._report("header", evaluation))

        body = self._body
        engine = rules_engine.narrow("body")
        if engine:
            evaluation = engine.evaluate([body], attempt_fix, context)
            body = evaluation.output[0] if evaluation.output else ""
            record(self._report("body", evaluation))

        footers = copy.deepcopy(self._footers)
        engine = rules_engine.narrow("footer")
        if engine:
            evaluation = engine.evaluate([footer.text for footer in footers], attempt_fix, context)
            for footer, text in zip(footers, evaluation.output):
                footer.text = text
            for index in sorted(set(evaluation.errors.indexes()) | set(evaluation.warnings.indexes())):
                token = footers[index].token if index < len(footers) else None
                record(self._report("footer", evaluation, token, index))

        engine = rules_engine.narrow("trailer")
        if engine:
            evaluation = engine.evaluate([footer.token for footer in footers], attempt_fix, context)
            footers = self._retoken(footers, evaluation.output)
            record(self._report("trailer", evaluation))

        engine = rules_engine.narrow("footers")
        if engine:
            rendered = [footer.plain for footer in footers]
            evaluation = engine.evaluate(rendered, attempt_fix, context)
            report = self._report("footers", evaluation)
            if evaluation.output != rendered:
                rebuilt = []
                for value in evaluation.output:
                    footer = CommitMessageFooter.from_string(value)
                    if isinstance(footer, InvalidFooterError):
                        report = report or PartReport(type="footers")
                        report.errors.append(str(footer))
                        continue
                    rebuilt.append(footer)
                footers = rebuilt
            record(report)

        commit = CommitMessage(header, body, footers)
        commit._body_style, commit._body_styled = self._body_style, self._body_styled
        commit._breaking_change_text = self._breaking_change_text
        valid = not any(report.errors for report in reports)
        return commit, valid, reports
