"""Domain models shared by the credential store, sessions and API."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class User:
    """Represents one registered account. Password material lives in the store only."""

    id: str
    first_name: str
    last_name: str
    email: str
    created_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class OutcomeKind(str, Enum):
    """Every result an authentication operation can report."""

    SUCCESS = "Success"
    DUPLICATE_EMAIL = "DuplicateEmail"
    USER_NOT_FOUND = "UserNotFound"
    WRONG_PASSWORD = "WrongPassword"
    NOT_FOUND = "NotFound"
    SESSION_ACTIVE = "SessionActive"


@dataclass(frozen=True)
class Outcome:
    """Result of a register, login or password reset call.

    Expected failures are reported through ``kind`` rather than raised, so
    callers branch on the value explicitly.
    """

    kind: OutcomeKind
    user: Optional[User] = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def success(cls, user: Optional[User] = None) -> "Outcome":
        return cls(kind=OutcomeKind.SUCCESS, user=user)

    @classmethod
    def failure(cls, kind: OutcomeKind) -> "Outcome":
        if kind is OutcomeKind.SUCCESS:
            raise ValueError("A failure outcome needs a failure kind")
        return cls(kind=kind)


__all__ = ["Outcome", "OutcomeKind", "User"]
