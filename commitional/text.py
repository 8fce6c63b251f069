"""Casing, wrapping and listing helpers shared by rules and messages."""
import re
import textwrap
import unicodedata
from typing import List, Sequence

ZERO_WIDTH_JOINER = "\u200d"
_WORD_BOUNDARY = re.compile(r"[a-z][A-Z]|[a-zA-Z]\d|\d[a-zA-Z]")
_DELIMITERS = re.compile(r"[\s\-_]+")


def capitalize(value: str) -> str:
    """Upper-case the first character and leave the rest untouched."""
    return value[:1].upper() + value[1:]


def normalize_delimiters(value: str, delimiter: str = " ") -> str:
    """Split camel humps and letter/digit runs, then unify separators."""
    value = _WORD_BOUNDARY.sub(lambda m: m.group(0)[0] + delimiter + m.group(0)[1], value)
    return _DELIMITERS.sub(delimiter, value)


def split_by_word(value: str) -> List[str]:
    return [word for word in normalize_delimiters(value, " ").split(" ") if word]


def kebab_case(value: str) -> str:
    return "-".join(split_by_word(value)).lower()


def sentence_kebab_case(value: str) -> str:
    """``signed-off-by`` -> ``Signed-off-by``."""
    return capitalize(kebab_case(value))


def _continues_cluster(char: str) -> bool:
    """Variation selectors, combining marks and joiners belong to the previous character."""
    return unicodedata.category(char) in ("Mn", "Me") or char == ZERO_WIDTH_JOINER


def truncate(value: str, width: int) -> str:
    """Cut ``value`` to at most ``width`` characters without splitting an emoji.

    ``⚠️`` is two code points; cutting between them would leave a bare ``⚠``.
    """
    if len(value) <= width:
        return value
    cut = width
    while cut > 0 and (_continues_cluster(value[cut]) or value[cut - 1] == ZERO_WIDTH_JOINER):
        cut -= 1
    return value[:cut]


def wrap_text(text: str, width: int) -> str:
    """Greedy word-wrap every over-long line, paragraph by paragraph.

    Lines that already fit are left exactly as they are, so wrapping an
    already wrapped text is a no-op.
    """
    paragraphs = []
    for paragraph in text.split("\n\n"):
        lines = []
        for line in paragraph.split("\n"):
            if len(line) <= width:
                lines.append(line)
                continue
            lines.extend(
                textwrap.wrap(
                    line,
                    width=width,
                    break_long_words=True,
                    break_on_hyphens=False,
                )
            )
        paragraphs.append("\n".join(lines))
    return "\n\n".join(paragraphs)


def format_list(items: Sequence[str], conjunction: str = "and") -> str:
    """``['a', 'b', 'c']`` -> ``'a, b and c'``."""
    items = list(items)
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return f"{', '.join(items[:-1])} {conjunction} {items[-1]}"


def indefinite_article(word: str) -> str:
    return "an" if word[:1].lower() in "aeiou" else "a"
