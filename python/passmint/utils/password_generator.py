"""
Secure password generation utilities.
"""

import logging
import secrets
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, TypeVar

from ..config import DEFAULT_LENGTH, MAX_COUNT, MAX_LENGTH, MIN_COUNT, MIN_LENGTH
from ..exceptions import ConfigurationError, RangeError
from .charsets import AMBIGUOUS_CHARS, CharacterCategory

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CATEGORIES = frozenset({
    CharacterCategory.UPPER,
    CharacterCategory.LOWER,
    CharacterCategory.DIGIT,
})


def _split_chars(chars: Iterable[str]) -> FrozenSet[str]:
    """Flatten strings (or iterables of strings) into a set of code points."""
    return frozenset(ch for item in chars for ch in item)


@dataclass(frozen=True)
class GenerationOptions:
    """
    Composition rules for generated passwords.

    Attributes:
        categories: Enabled character categories (at least one)
        exclude: Individual characters that must never appear
        exclude_ambiguous: Also exclude visually ambiguous characters (I, l, 1, O, 0, o)
        require_each: Include at least one character from every enabled category
    """

    categories: FrozenSet[CharacterCategory] = DEFAULT_CATEGORIES
    exclude: FrozenSet[str] = field(default_factory=frozenset)
    exclude_ambiguous: bool = False
    require_each: bool = True

    def __post_init__(self) -> None:
        categories = frozenset(self.categories)
        if not categories:
            raise ConfigurationError(
                "At least one character category must be enabled (upper/lower/digits/symbols)"
            )
        if not all(isinstance(category, CharacterCategory) for category in categories):
            raise ConfigurationError("Unknown character category")

        object.__setattr__(self, "categories", categories)
        object.__setattr__(self, "exclude", _split_chars(self.exclude))

    @classmethod
    def from_flags(cls,
                   use_uppercase: bool = True,
                   use_lowercase: bool = True,
                   use_digits: bool = True,
                   use_symbols: bool = False,
                   exclude: Iterable[str] = "",
                   exclude_ambiguous: bool = False,
                   require_each: bool = True) -> "GenerationOptions":
        """Build options from one boolean flag per category."""
        flags = {
            CharacterCategory.UPPER: use_uppercase,
            CharacterCategory.LOWER: use_lowercase,
            CharacterCategory.DIGIT: use_digits,
            CharacterCategory.SYMBOL: use_symbols,
        }
        return cls(
            categories=frozenset(category for category, enabled in flags.items() if enabled),
            exclude=exclude,
            exclude_ambiguous=exclude_ambiguous,
            require_each=require_each,
        )

    @property
    def excluded_chars(self) -> FrozenSet[str]:
        """All characters removed from the alphabets."""
        if self.exclude_ambiguous:
            return self.exclude | frozenset(AMBIGUOUS_CHARS)
        return self.exclude

    def describe(self) -> str:
        """
        Get human-readable description of the character set.

        Returns:
            Description of enabled categories and exclusions
        """
        info = ", ".join(c.label for c in CharacterCategory if c in self.categories)

        if self.exclude_ambiguous:
            info += " (excluding ambiguous chars)"
        if self.exclude:
            info += f" (excluding {''.join(sorted(self.exclude))})"

        return info


@dataclass(frozen=True)
class ResolvedCategorySet:
    """Enabled categories mapped to their exclusion-filtered alphabets."""

    alphabets: Dict[CharacterCategory, str]

    def __post_init__(self) -> None:
        if not self.alphabets:
            raise ConfigurationError(
                "At least one character category must be enabled (upper/lower/digits/symbols)"
            )
        for category, alphabet in self.alphabets.items():
            if not alphabet:
                raise ConfigurationError(
                    f"After applying exclusions, category '{category.label}' has no characters available"
                )

    @property
    def pool(self) -> str:
        """Concatenation of all alphabets in category declaration order."""
        return "".join(self.alphabets.values())

    def __len__(self) -> int:
        return len(self.alphabets)

    def __iter__(self) -> Iterator[CharacterCategory]:
        return iter(self.alphabets)

    def __getitem__(self, category: CharacterCategory) -> str:
        return self.alphabets[category]


def build_character_sets(options: GenerationOptions) -> ResolvedCategorySet:
    """
    Resolve the alphabets of all enabled categories.

    Args:
        options: Generation options

    Returns:
        Resolved category set

    Raises:
        ConfigurationError: If no category is enabled or exclusions empty a category
    """
    excluded = options.excluded_chars
    alphabets: Dict[CharacterCategory, str] = {}

    for category in CharacterCategory:
        if category not in options.categories:
            continue
        alphabets[category] = "".join(c for c in category.alphabet if c not in excluded)

    resolved = ResolvedCategorySet(alphabets)
    logger.debug(f"Resolved {len(resolved)} categories, pool size {len(resolved.pool)}")
    return resolved


def secure_shuffle(items: Sequence[T]) -> List[T]:
    """
    Shuffle a sequence with a cryptographically secure Fisher-Yates pass.

    Strings are shuffled by code point.

    Args:
        items: Sequence to shuffle (not modified)

    Returns:
        New list holding a uniformly random permutation of items
    """
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = secrets.randbelow(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def shuffle_string(value: str) -> str:
    """Securely shuffle the characters of a string."""
    return "".join(secure_shuffle(value))


def _check_range(name: str, value: int, minimum: int, maximum: int) -> None:
    if value < minimum or value > maximum:
        raise RangeError(f"{name} must be between {minimum} and {maximum}")


class PasswordGenerator:
    """Generate secure passwords with customizable character sets."""

    def __init__(self, length: int = DEFAULT_LENGTH, options: Optional[GenerationOptions] = None):
        """
        Initialize password generator with options.

        Args:
            length: Password length (minimum 4, maximum 128)
            options: Composition rules, defaults to upper, lower and digits

        Raises:
            RangeError: If length is out of bounds or too short for require_each
            ConfigurationError: If the options leave no usable characters
        """
        _check_range("Password length", length, MIN_LENGTH, MAX_LENGTH)

        self.length = length
        self.options = options if options is not None else GenerationOptions()
        self.charsets = build_character_sets(self.options)

        if self.options.require_each and length < len(self.charsets):
            raise RangeError(
                f"Password length must be at least {len(self.charsets)} "
                "to include every enabled category"
            )

    def generate(self) -> str:
        """
        Generate a secure password.

        Returns:
            Generated password string
        """
        chars: List[str] = []

        # One guaranteed character per category
        if self.options.require_each:
            for category in self.charsets:
                chars.append(secrets.choice(self.charsets[category]))

        pool = self.charsets.pool
        for _ in range(max(0, self.length - len(chars))):
            chars.append(secrets.choice(pool))

        return "".join(secure_shuffle(chars))

    def generate_many(self, count: int) -> List[str]:
        """
        Generate several independent passwords.

        Args:
            count: Number of passwords (1-100)

        Returns:
            List of generated passwords
        """
        _check_range("Password count", count, MIN_COUNT, MAX_COUNT)
        passwords = [self.generate() for _ in range(count)]
        logger.debug(f"Generated {count} passwords of length {self.length}")
        return passwords

    def get_charset_info(self) -> str:
        """
        Get human-readable description of character set.

        Returns:
            Description of enabled character types
        """
        return self.options.describe()


def generate_password(length: int = DEFAULT_LENGTH,
                      options: Optional[GenerationOptions] = None) -> str:
    """
    Convenience function to generate a password.

    Args:
        length: Password length (4-128)
        options: Composition rules

    Returns:
        Generated password string
    """
    return PasswordGenerator(length=length, options=options).generate()


def generate_passwords(count: int,
                       length: int = DEFAULT_LENGTH,
                       options: Optional[GenerationOptions] = None) -> List[str]:
    """
    Convenience function to generate a batch of passwords.

    Args:
        count: Number of passwords (1-100)
        length: Password length (4-128)
        options: Composition rules

    Returns:
        List of generated passwords
    """
    _check_range("Password count", count, MIN_COUNT, MAX_COUNT)
    return PasswordGenerator(length=length, options=options).generate_many(count)
