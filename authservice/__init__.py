"""In-memory credential store and session service."""

from __future__ import annotations

from typing import Any

from .models import Outcome, OutcomeKind, User
from .sessions import SessionManager
from .store import CredentialStore
from .validation import is_strong_password, is_valid_email


def create_app(*args: Any, **kwargs: Any):
    """Factory function that returns the HTTP application."""

    from .application import create_application as _create_application

    return _create_application(*args, **kwargs)


__all__ = [
    "CredentialStore",
    "Outcome",
    "OutcomeKind",
    "SessionManager",
    "User",
    "create_app",
    "is_strong_password",
    "is_valid_email",
]
