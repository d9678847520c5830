"""
Password strength validation for Passmint.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..config import DEFAULT_MAX_LENGTH, DEFAULT_MIN_LENGTH
from .charsets import SYMBOLS

UPPERCASE_PATTERN = re.compile(r"[A-Z]")
LOWERCASE_PATTERN = re.compile(r"[a-z]")
DIGIT_PATTERN = re.compile(r"[0-9]")
SYMBOL_PATTERN = re.compile(f"[{re.escape(SYMBOLS)}]")

# (minimum score, label), checked in order
STRENGTH_LEVELS = (
    (100, "strong"),
    (75, "moderate"),
    (50, "weak"),
)
WEAKEST_LABEL = "very_weak"


@dataclass(frozen=True)
class ValidationRequirements:
    """Strength requirements a password is checked against."""

    min_length: int = DEFAULT_MIN_LENGTH
    max_length: int = DEFAULT_MAX_LENGTH
    require_uppercase: bool = False
    require_lowercase: bool = False
    require_numbers: bool = False
    require_symbols: bool = False


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a single named check."""

    name: str
    passed: bool
    message: str


@dataclass
class ValidationReport:
    """Scored result of validating a password."""

    checks: List[CheckResult] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for check in self.checks if check.passed)

    @property
    def total(self) -> int:
        return len(self.checks)

    @property
    def score(self) -> int:
        return compute_score(self.passed, self.total)

    @property
    def strength(self) -> str:
        return strength_label(self.score)

    @property
    def valid(self) -> bool:
        return self.passed == self.total

    def get_check(self, name: str) -> Optional[CheckResult]:
        """Look up a check by name."""
        for check in self.checks:
            if check.name == name:
                return check
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the API result shape."""
        return {
            "valid": self.valid,
            "score": self.score,
            "strength": self.strength,
            "checks": {
                check.name: {"passed": check.passed, "message": check.message}
                for check in self.checks
            },
        }


def compute_score(passed: int, total: int) -> int:
    """
    Percentage of passed checks, rounded half up.

    Args:
        passed: Number of passed checks
        total: Number of applicable checks

    Returns:
        Score from 0 to 100 (100 when there are no checks)
    """
    if total <= 0:
        return 100
    return (200 * passed + total) // (2 * total)


def strength_label(score: int) -> str:
    """Map a score to its qualitative strength label."""
    for threshold, label in STRENGTH_LEVELS:
        if score >= threshold:
            return label
    return WEAKEST_LABEL


def validate_password(password: str,
                      requirements: Optional[ValidationRequirements] = None) -> ValidationReport:
    """
    Check a password against strength requirements.

    Length checks always apply; character class checks only when required.
    Never raises for string input: failures are reported in the checks.

    Args:
        password: The password to check
        requirements: Requirements, defaults to ValidationRequirements()

    Returns:
        Validation report
    """
    req = requirements if requirements is not None else ValidationRequirements()
    length = len(password)

    checks = [
        CheckResult(
            "minLength",
            length >= req.min_length,
            f"At least {req.min_length} characters (has {length})",
        ),
        CheckResult(
            "maxLength",
            length <= req.max_length,
            f"At most {req.max_length} characters",
        ),
    ]

    if req.require_uppercase:
        checks.append(CheckResult(
            "requireUppercase",
            bool(UPPERCASE_PATTERN.search(password)),
            "Must contain at least one uppercase letter",
        ))

    if req.require_lowercase:
        checks.append(CheckResult(
            "requireLowercase",
            bool(LOWERCASE_PATTERN.search(password)),
            "Must contain at least one lowercase letter",
        ))

    if req.require_numbers:
        checks.append(CheckResult(
            "requireNumbers",
            bool(DIGIT_PATTERN.search(password)),
            "Must contain at least one number",
        ))

    if req.require_symbols:
        checks.append(CheckResult(
            "requireSymbols",
            bool(SYMBOL_PATTERN.search(password)),
            "Must contain at least one symbol",
        ))

    return ValidationReport(checks)
