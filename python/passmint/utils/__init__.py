"""
Password engine for Passmint.

Provides character set resolution, secure generation and strength validation.
"""

from .password_generator import (
    GenerationOptions,
    PasswordGenerator,
    build_character_sets,
    generate_password,
    generate_passwords,
    secure_shuffle,
)
from .validation import ValidationReport, ValidationRequirements, validate_password

__all__ = [
    'GenerationOptions',
    'PasswordGenerator',
    'ValidationReport',
    'ValidationRequirements',
    'build_character_sets',
    'generate_password',
    'generate_passwords',
    'secure_shuffle',
    'validate_password',
]
