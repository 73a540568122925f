"""Credential validation rules for signup."""

import re

from pydantic import BaseModel, Field

MIN_PASSWORD_LENGTH = 12
MIN_USERNAME_LENGTH = 3
MAX_USERNAME_LENGTH = 50
SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

PASSWORD_TOO_SHORT = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
PASSWORD_NO_UPPERCASE = "Password must contain at least one uppercase letter"
PASSWORD_NO_LOWERCASE = "Password must contain at least one lowercase letter"
PASSWORD_NO_DIGIT = "Password must contain at least one number"
PASSWORD_NO_SPECIAL = "Password must contain at least one special character"

# Syntactic check only: local@domain.tld with no whitespace and a single @
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_UPPERCASE = re.compile(r"[A-Z]")
_LOWERCASE = re.compile(r"[a-z]")
_DIGIT = re.compile(r"[0-9]")


class PasswordValidationResult(BaseModel):
    """Outcome of a password strength check."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)


def validate_password(password: str) -> PasswordValidationResult:
    """Check password strength.

    Every rule is evaluated, so a weak password reports all of its problems at once.
    """
    errors = []

    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(PASSWORD_TOO_SHORT)
    if not _UPPERCASE.search(password):
        errors.append(PASSWORD_NO_UPPERCASE)
    if not _LOWERCASE.search(password):
        errors.append(PASSWORD_NO_LOWERCASE)
    if not _DIGIT.search(password):
        errors.append(PASSWORD_NO_DIGIT)
    if not any(char in SPECIAL_CHARACTERS for char in password):
        errors.append(PASSWORD_NO_SPECIAL)

    return PasswordValidationResult(is_valid=not errors, errors=errors)


def validate_email(email: str) -> bool:
    """Return True if the email is syntactically plausible."""
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_username(username: str) -> bool:
    """Return True if the username length is within bounds."""
    return MIN_USERNAME_LENGTH <= len(username) <= MAX_USERNAME_LENGTH
