"""
Lenient parsing of query string and JSON body parameters.
"""

import math
from typing import Any, Dict, Mapping, Optional

from ..config import DEFAULT_MAX_LENGTH, DEFAULT_MIN_LENGTH
from ..utils.password_generator import GenerationOptions
from ..utils.validation import ValidationRequirements

TRUE_STRINGS = {"true", "1", "yes"}

# Request key -> default, in the order they are echoed back
GENERATION_FLAGS = (
    ("includeUppercase", True),
    ("includeLowercase", True),
    ("includeNumbers", True),
    ("includeSymbols", False),
    ("excludeAmbiguous", False),
)


def bool_param(value: Any, default: bool = False) -> bool:
    """
    Interpret a loosely typed boolean parameter.

    Native booleans pass through, integers are true when nonzero, strings are
    true for "true", "1" or "yes" (any case). Anything else gives the default.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in TRUE_STRINGS
    if isinstance(value, int):
        return value != 0
    return default


def int_param(value: Any, default: int) -> int:
    """
    Interpret a loosely typed integer parameter.

    Integers pass through, floats and numeric strings are truncated toward
    zero. Anything else gives the default.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return default
        return int(number) if math.isfinite(number) else default
    return default


def str_param(value: Any, default: str = "") -> str:
    """Interpret a string parameter, stringifying plain numbers."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def parse_generation_params(source: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Read generation options from query parameters or a JSON body.

    Returns:
        Resolved options keyed by their request names
    """
    params: Dict[str, Any] = {
        key: bool_param(source.get(key), default) for key, default in GENERATION_FLAGS
    }
    params["exclude"] = str_param(source.get("exclude"))
    params["requireEach"] = bool_param(source.get("requireEach"), True)
    return params


def options_from_params(params: Mapping[str, Any]) -> GenerationOptions:
    """
    Build GenerationOptions from parsed request parameters.

    Raises:
        ConfigurationError: If every category is disabled
    """
    return GenerationOptions.from_flags(
        use_uppercase=params["includeUppercase"],
        use_lowercase=params["includeLowercase"],
        use_digits=params["includeNumbers"],
        use_symbols=params["includeSymbols"],
        exclude=params["exclude"],
        exclude_ambiguous=params["excludeAmbiguous"],
        require_each=params["requireEach"],
    )


def requirements_from_params(source: Optional[Any]) -> ValidationRequirements:
    """Build ValidationRequirements from a request's requirements object."""
    if not isinstance(source, Mapping):
        return ValidationRequirements()

    def given(key: str) -> bool:
        return source.get(key) is not None

    fields: Dict[str, Any] = {}
    if given("minLength"):
        fields["min_length"] = int_param(source["minLength"], DEFAULT_MIN_LENGTH)
    if given("maxLength"):
        fields["max_length"] = int_param(source["maxLength"], DEFAULT_MAX_LENGTH)
    if given("requireUppercase"):
        fields["require_uppercase"] = bool_param(source["requireUppercase"])
    if given("requireLowercase"):
        fields["require_lowercase"] = bool_param(source["requireLowercase"])
    if given("requireNumbers"):
        fields["require_numbers"] = bool_param(source["requireNumbers"])
    if given("requireSymbols"):
        fields["require_symbols"] = bool_param(source["requireSymbols"])

    return ValidationRequirements(**fields)
