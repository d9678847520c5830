"""
Canonical character sets shared by password generation and validation.
"""

import string
from enum import Enum

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
DIGITS = string.digits

# Must stay identical for generation and the validator's symbol check
SYMBOLS = "!@#$%^&*()-_=+[]{}|;:,.<>?"

# Visually confusable characters that can optionally be excluded
AMBIGUOUS_CHARS = "Il1O0o"


class CharacterCategory(Enum):
    """A named class of characters bound to a fixed alphabet."""

    UPPER = "upper"
    LOWER = "lower"
    DIGIT = "digit"
    SYMBOL = "symbol"

    @property
    def alphabet(self) -> str:
        """Canonical alphabet of this category."""
        return _ALPHABETS[self]

    @property
    def label(self) -> str:
        """Human-readable name of this category."""
        return _LABELS[self]


_ALPHABETS = {
    CharacterCategory.UPPER: UPPERCASE,
    CharacterCategory.LOWER: LOWERCASE,
    CharacterCategory.DIGIT: DIGITS,
    CharacterCategory.SYMBOL: SYMBOLS,
}

_LABELS = {
    CharacterCategory.UPPER: "uppercase",
    CharacterCategory.LOWER: "lowercase",
    CharacterCategory.DIGIT: "digits",
    CharacterCategory.SYMBOL: "symbols",
}
