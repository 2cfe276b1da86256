"""Format checks applied by callers before they reach the credential store."""

from __future__ import annotations

import re
import string
from typing import List, Optional

_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

PASSWORD_MIN_LENGTH = 8
PASSWORD_SPECIAL_CHARACTERS = "!@#$%^&*"
PASSWORD_REQUIREMENTS = (
    f"Password must be at least {PASSWORD_MIN_LENGTH} characters long and include an "
    "uppercase letter, a lowercase letter, a number, and a special character "
    f"({' '.join(PASSWORD_SPECIAL_CHARACTERS)})."
)


def is_valid_email(value: str) -> bool:
    """Coarse ``local@domain.tld`` check; intentionally far from RFC 5322."""

    if not isinstance(value, str):
        return False
    return _EMAIL_PATTERN.fullmatch(value) is not None


def is_strong_password(value: str) -> bool:
    if not isinstance(value, str) or len(value) < PASSWORD_MIN_LENGTH:
        return False
    return (
        any(char in string.ascii_lowercase for char in value)
        and any(char in string.ascii_uppercase for char in value)
        and any(char in string.digits for char in value)
        and any(char in PASSWORD_SPECIAL_CHARACTERS for char in value)
    )


def missing_fields(**fields: Optional[str]) -> List[str]:
    """Return the names of fields that are absent or blank, in argument order."""

    return [name for name, value in fields.items() if value is None or not value.strip()]


__all__ = [
    "PASSWORD_MIN_LENGTH",
    "PASSWORD_REQUIREMENTS",
    "PASSWORD_SPECIAL_CHARACTERS",
    "is_strong_password",
    "is_valid_email",
    "missing_fields",
]
