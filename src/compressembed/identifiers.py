"""Random identifier synthesis and identifier validation."""

from __future__ import annotations

import keyword
import re
import secrets
import string
from typing import Final

DEFAULT_FUNCTION_NAME_LENGTH: Final = 6

LEADING_ALPHABET: Final = string.ascii_letters + "_"
IDENTIFIER_ALPHABET: Final = LEADING_ALPHABET + string.digits

IDENTIFIER_PATTERN: Final = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

GO_KEYWORDS: Final = frozenset(
    {
        "break",
        "case",
        "chan",
        "const",
        "continue",
        "default",
        "defer",
        "else",
        "fallthrough",
        "for",
        "func",
        "go",
        "goto",
        "if",
        "import",
        "interface",
        "map",
        "package",
        "range",
        "return",
        "select",
        "struct",
        "switch",
        "type",
        "var",
    }
)


def generate_identifier(length: int = DEFAULT_FUNCTION_NAME_LENGTH) -> str:
    """Return a random identifier of exactly ``length`` characters.

    The first character is drawn from letters and underscore only, so the
    result is valid in every target language without resampling.
    """

    if length < 1:
        raise ValueError(f"identifier length must be >= 1, got {length}")
    head = secrets.choice(LEADING_ALPHABET)
    tail = "".join(secrets.choice(IDENTIFIER_ALPHABET) for _ in range(length - 1))
    return head + tail


def is_valid_identifier(name: str) -> bool:
    """Return True when ``name`` matches ``^[A-Za-z_][A-Za-z0-9_]*$``."""

    return IDENTIFIER_PATTERN.fullmatch(name) is not None


def is_reserved_word(name: str, target: str) -> bool:
    """Return True when ``name`` is a keyword of the target language."""

    if target == "go":
        return name in GO_KEYWORDS
    if target == "python":
        return keyword.iskeyword(name)
    return False
