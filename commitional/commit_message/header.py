"""Commit message header: ``[namespace] type(scope)!: subject``."""
import re
from typing import Callable, Dict, Iterable, List, Optional

StyleFn = Callable[[str], str]

HEADER_PATTERN = re.compile(
    r"^(?:\[(?P<namespace>[^\]]*)\] ?)?"
    r"(?:(?P<type>\w+)?(?:\((?P<scope>[^)]*)\))?(?P<breaking>!)?: ?)?"
    r"(?P<subject>.*)$"
)
HEADER_FIELDS = ("namespace", "type", "scope", "subject")
SEPARATOR = ": "
BREAKING_SEPARATOR = "!: "
BREAKING_EMOJI = "⚠️"


class CommitMessageHeader:
    """Structured first line of a commit message.

    Scopes are kept as an ordered list of unique values and rendered joined
    by ``scope_delimiter``. Breaking changes are marked with ``!`` before the
    separator and an emoji at the end of the subject; both are toggled
    together by :meth:`breaking`.
    """

    def __init__(
        self,
        type: str = "",
        scope: Optional[Iterable[str]] = None,
        subject: str = "",
        namespace: str = "",
        breaking: bool = False,
        scope_delimiter: str = ",",
        breaking_emoji: str = BREAKING_EMOJI,
    ):
        self.scope_delimiter = scope_delimiter
        self.breaking_emoji = breaking_emoji
        self._type = type
        self._namespace = namespace
        self._subject = subject
        self._scopes: List[str] = []
        self.scopes = scope or []
        self._separator = BREAKING_SEPARATOR if breaking else SEPARATOR
        self._styles: Dict[str, StyleFn] = {}
        self._styled: Dict[str, bool] = {}

    # -- fields -----------------------------------------------------------

    @property
    def type(self) -> str:
        return self._type

    @type.setter
    def type(self, value: str) -> None:
        self._type = value.strip()

    @property
    def namespace(self) -> str:
        return self._namespace

    @namespace.setter
    def namespace(self, value: str) -> None:
        self._namespace = value.strip()

    @property
    def subject(self) -> str:
        return self._subject

    @subject.setter
    def subject(self, value: str) -> None:
        self._subject = value.strip()

    @property
    def scopes(self) -> List[str]:
        return list(self._scopes)

    @scopes.setter
    def scopes(self, values: Iterable[str]) -> None:
        self._scopes = []
        for value in values:
            self.add_scope(value)

    @property
    def scope(self) -> str:
        return self.scope_delimiter.join(self._scopes)

    @scope.setter
    def scope(self, value: str) -> None:
        self.scopes = value.split(self.scope_delimiter) if value else []

    def add_scope(self, scope: str) -> "CommitMessageHeader":
        scope = scope.strip()
        if scope and scope not in self._scopes:
            self._scopes.append(scope)
        return self

    def del_scope(self, scope: str) -> "CommitMessageHeader":
        if scope.strip() in self._scopes:
            self._scopes.remove(scope.strip())
        return self

    # -- breaking changes -------------------------------------------------

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def is_breaking(self) -> bool:
        return self._separator == BREAKING_SEPARATOR

    def breaking(self, enabled: Optional[bool] = None) -> "CommitMessageHeader":
        """Toggle (or set) the breaking-change marker and emoji."""
        if enabled is None:
            enabled = not self.is_breaking
        if enabled == self.is_breaking:
            return self

        if enabled:
            self._separator = BREAKING_SEPARATOR
            if self.breaking_emoji and not self._subject.endswith(self.breaking_emoji):
                self._subject = f"{self._subject} {self.breaking_emoji}".strip()
        else:
            self._separator = SEPARATOR
            if self.breaking_emoji and self._subject.endswith(self.breaking_emoji):
                self._subject = self._subject[: -len(self.breaking_emoji)].rstrip()
        return self

    # -- styling ----------------------------------------------------------

    def _fields(self, part: Optional[str]) -> Iterable[str]:
        return HEADER_FIELDS if part in (None, "header") else (part,)

    def set_style(self, style: StyleFn, part: Optional[str] = None) -> "CommitMessageHeader":
        for field in self._fields(part):
            self._styles[field] = style
        return self

    def style(self, part: Optional[str] = None) -> "CommitMessageHeader":
        for field in self._fields(part):
            self._styled[field] = True
        return self

    def unstyle(self, part: Optional[str] = None) -> "CommitMessageHeader":
        for field in self._fields(part):
            self._styled[field] = False
        return self

    def copy_styles(self, other: "CommitMessageHeader") -> "CommitMessageHeader":
        self._styles = dict(other._styles)
        self._styled = dict(other._styled)
        return self

    def _render(self, field: str, value: str) -> str:
        style = self._styles.get(field)
        if value and style and self._styled.get(field):
            return style(value)
        return value

    # -- serialization ----------------------------------------------------

    def to_string(self) -> str:
        header = ""
        if self._namespace:
            header += f"[{self._render('namespace', self._namespace)}] "
        if self._type or self._scopes:
            header += self._render("type", self._type)
            if self._scopes:
                header += f"({self._render('scope', self.scope)})"
            header += self._separator
        return header + self._render("subject", self._subject)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"CommitMessageHeader({self.to_string()!r})"

    @classmethod
    def from_string(
        cls,
        header: str,
        scope_delimiter: str = ",",
        breaking_emoji: str = BREAKING_EMOJI,
    ) -> "CommitMessageHeader":
        match = HEADER_PATTERN.match(header.strip())
        if not match:
            return cls(subject=header.strip(), scope_delimiter=scope_delimiter, breaking_emoji=breaking_emoji)

        scope = match.group("scope")
        return cls(
            type=match.group("type") or "",
            scope=scope.split(scope_delimiter) if scope else [],
            subject=match.group("subject").strip(),
            namespace=(match.group("namespace") or "").strip(),
            breaking=bool(match.group("breaking")),
            scope_delimiter=scope_delimiter,
            breaking_emoji=breaking_emoji,
        )
