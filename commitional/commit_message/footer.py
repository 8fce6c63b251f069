"""Commit message footers (``Token: text``)."""
import re
from typing import Callable, List, Optional, Union

from ..text import sentence_kebab_case

StyleFn = Callable[[str], str]

BREAKING_CHANGE_TOKENS = ("BREAKING CHANGE", "BREAKING-CHANGE")
# ``Token:`` with no text is a footer too
FOOTER_PATTERN = re.compile(r"^(?P<token>BREAKING CHANGE|[\w-]+):(?: (?P<text>.*))?$")
WORD_TOKEN = re.compile(r"[\w-]+")


class InvalidFooterError(ValueError):
    """Returned (not raised) when text does not look like a footer."""

    def __init__(self, footer: str):
        self.footer = footer
        super().__init__(f"[Invalid footer] '{footer}' does not conform to \"<Some-token>: <text content>\"")


def normalize_token(token: str) -> str:
    """Sentence-Kebab-Case a footer token, leaving BREAKING CHANGE alone.

    Tokens that aren't plain words (template placeholders such as
    ``<token>``) are kept as written.
    """
    token = token.strip()
    if token in BREAKING_CHANGE_TOKENS or not WORD_TOKEN.fullmatch(token):
        return token
    return sentence_kebab_case(token)


class CommitMessageFooter:
    def __init__(self, token: str, text: str = ""):
        self._token = normalize_token(token)
        self._text = text.strip()
        self._style: Optional[StyleFn] = None
        self._styled = False

    @property
    def token(self) -> str:
        return self._token

    @token.setter
    def token(self, value: str) -> None:
        if value.strip():
            self._token = normalize_token(value)

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self._text = value.strip()

    @property
    def is_breaking(self) -> bool:
        return self._token in BREAKING_CHANGE_TOKENS

    def matches(self, token: str) -> bool:
        return self._token == normalize_token(token)

    def set_style(self, style: StyleFn) -> "CommitMessageFooter":
        self._style = style
        return self

    def style(self) -> "CommitMessageFooter":
        self._styled = True
        return self

    def unstyle(self) -> "CommitMessageFooter":
        self._styled = False
        return self

    @property
    def styled(self) -> bool:
        return self._styled and self._style is not None

    @property
    def plain(self) -> str:
        """``Token: text`` without styling; ``Token:`` when there is no text."""
        return f"{self._token}: {self._text}" if self._text else f"{self._token}:"

    def to_string(self) -> str:
        return self._style(self.plain) if self.styled else self.plain

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"CommitMessageFooter({self._token!r}, {self._text!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommitMessageFooter):
            return NotImplemented
        return (self._token, self._text) == (other._token, other._text)

    @classmethod
    def from_string(cls, footer: str) -> Union["CommitMessageFooter", InvalidFooterError]:
        """Parse a single ``Token: text`` line."""
        match = FOOTER_PATTERN.match(footer.strip())
        if not match:
            return InvalidFooterError(footer)
        return cls(match.group("token"), match.group("text") or "")

    @classmethod
    def parse_block(cls, paragraph: str) -> Union[List["CommitMessageFooter"], InvalidFooterError]:
        """Parse a paragraph in which every line is a footer (a trailer block)."""
        footers = []
        for line in paragraph.split("\n"):
            footer = cls.from_string(line)
            if isinstance(footer, InvalidFooterError):
                return footer
            footers.append(footer)
        return footers
