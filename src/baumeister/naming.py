"""String normalisation utilities used to derive template variables."""

from __future__ import annotations

import re
import unicodedata

__all__ = ["slugify", "titleize", "camelize"]


_NON_WORD = re.compile(r"[^a-z0-9\s_\-]")
_SEPARATORS = re.compile(r"[\s_\-]+")
_WORD_START = re.compile(r"(?:^|(?<=[\s\-]))\S")
_CAMEL_BOUNDARY = re.compile(r"[\s_\-]+(.)?")


def _strip_diacritics(value: str) -> str:
    text = unicodedata.normalize("NFKD", value)
    return text.encode("ascii", "ignore").decode("ascii")


def slugify(value: str, *, separator: str = "-") -> str:
    """Create a filesystem and URL friendly slug from ``value``.

    Diacritics are folded to ASCII, punctuation and whitespace act as word
    separators and the result is lower case. Applying :func:`slugify` to its
    own output returns the output unchanged.
    """

    text = _strip_diacritics(str(value)).lower()
    text = _NON_WORD.sub(" ", text)
    collapsed = _SEPARATORS.sub(separator, text.strip())
    return collapsed.strip(separator)


def titleize(value: str) -> str:
    """Capitalise the first letter of every word in ``value``.

    Words are delimited by whitespace or hyphens; all other letters are
    lowered, so ``"my SUPER-app"`` becomes ``"My Super-App"``.
    """

    return _WORD_START.sub(lambda match: match.group(0).upper(), str(value).lower())


def camelize(value: str) -> str:
    """Join the words of ``value`` into a camel cased identifier."""

    def upper_next(match: re.Match[str]) -> str:
        following = match.group(1)
        return following.upper() if following else ""

    return _CAMEL_BOUNDARY.sub(upper_next, str(value).strip())
