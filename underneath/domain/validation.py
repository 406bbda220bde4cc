"""
Validation Utilities

Stateless predicates and formatters shared by the API request models and
the use cases. Multi-rule validators accumulate every violated rule so
callers can report them all at once.
"""

import re
from typing import List

from pydantic import BaseModel, Field

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
INVITATION_CODE_PATTERN = re.compile(r"^[A-Z0-9]{8}$")
DISPLAY_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\s._-]+$")
SCRIPT_BLOCK_PATTERN = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE
)
STRIPPED_CHARACTERS = re.compile(r"[<>'\"]")

PASSWORD_SPECIAL_CHARACTERS = "@$!%*?&"
VALID_ROLES = {"DOM", "SUB", "OBSERVER", "ADMIN"}
MESSAGE_MAX_LENGTH = 500


class ValidationResult(BaseModel):
    is_valid: bool
    errors: List[str] = Field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: List[str]) -> "ValidationResult":
        return cls(is_valid=not errors, errors=errors)


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.fullmatch(email))


def validate_password(password: str) -> ValidationResult:
    """
    Check password strength.

    Rules: at least 8 characters, one lowercase letter, one uppercase
    letter, one digit and one of @$!%*?&.
    """
    errors = []

    if len(password) < 8:
        errors.append("Password must be at least 8 characters long")

    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")

    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")

    if not re.search(r"\d", password):
        errors.append("Password must contain at least one digit")

    if not any(c in PASSWORD_SPECIAL_CHARACTERS for c in password):
        errors.append(
            f"Password must contain at least one special character ({PASSWORD_SPECIAL_CHARACTERS})"
        )

    return ValidationResult.from_errors(errors)


def is_valid_invitation_code(code: str) -> bool:
    return bool(INVITATION_CODE_PATTERN.fullmatch(code))


def is_valid_role(role: str) -> bool:
    return role.upper() in VALID_ROLES


def sanitize_input(value: str) -> str:
    """
    Remove <script> blocks, then the characters < > ' and ", then trim.

    Known limitation: this is a character filter, not an HTML sanitizer.
    '<b>x</b>' becomes 'bx/b'.
    """
    value = SCRIPT_BLOCK_PATTERN.sub("", value)
    value = STRIPPED_CHARACTERS.sub("", value)
    return value.strip()


def validate_display_name(display_name: str) -> ValidationResult:
    errors = []

    if len(display_name) < 2:
        errors.append("Display name must be at least 2 characters long")

    if len(display_name) > 50:
        errors.append("Display name must not exceed 50 characters")

    if not DISPLAY_NAME_PATTERN.fullmatch(display_name):
        errors.append(
            "Display name can only contain letters, numbers, spaces, dots, underscores, and hyphens"
        )

    return ValidationResult.from_errors(errors)


def validate_message(message: str) -> ValidationResult:
    errors = []

    if len(message) > MESSAGE_MAX_LENGTH:
        errors.append(f"Message must not exceed {MESSAGE_MAX_LENGTH} characters")

    # Literal substring check only
    if "<script>" in message or "javascript:" in message:
        errors.append("Message contains potentially dangerous content")

    return ValidationResult.from_errors(errors)
