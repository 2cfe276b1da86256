"""In-memory credential registry with case-insensitive email uniqueness."""
from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional

from passlib.context import CryptContext

from .models import Outcome, OutcomeKind, User

logger = logging.getLogger("authservice.store")

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def _hash_password(password: str) -> str:
    return _pwd_context.hash(password)


def _verify_password(password: str, hashed: str) -> bool:
    try:
        return _pwd_context.verify(password, hashed)
    except ValueError:
        return False


def _email_key(email: str) -> str:
    return email.strip().casefold()


def _current_timestamp() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class _UserRecord:
    user: User
    password_hash: str


class CredentialStore:
    """Sole owner of user records.

    Records are indexed by the case-folded email while the email is kept as
    supplied for display. Insertion order is preserved for enumeration.
    """

    def __init__(self) -> None:
        self._records: Dict[str, _UserRecord] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, email: object) -> bool:
        if not isinstance(email, str):
            return False
        with self._lock:
            return _email_key(email) in self._records

    # ------------------------------------------------------------------
    # Registration and lookup
    # ------------------------------------------------------------------
    def register(self, first_name: str, last_name: str, email: str, password: str) -> Outcome:
        """Create a user unless the email is already taken in any casing."""

        key = _email_key(email)
        password_hash = _hash_password(password)
        with self._lock:
            if key in self._records:
                logger.info("Rejected registration for %s: email already registered", email)
                return Outcome.failure(OutcomeKind.DUPLICATE_EMAIL)

            user = User(
                id=uuid.uuid4().hex,
                first_name=first_name,
                last_name=last_name,
                email=email.strip(),
                created_at=_current_timestamp(),
            )
            self._records[key] = _UserRecord(user=user, password_hash=password_hash)

        logger.info("Registered user %s <%s>", user.id, user.email)
        return Outcome.success(user)

    def find_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            record = self._records.get(_email_key(email))
        return record.user if record is not None else None

    def get(self, user_id: str) -> Optional[User]:
        with self._lock:
            for record in self._records.values():
                if record.user.id == user_id:
                    return record.user
        return None

    def list_users(self) -> List[User]:
        with self._lock:
            return [record.user for record in self._records.values()]

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------
    def verify(self, email: str, password: str) -> Outcome:
        """Check a login attempt: unknown email, wrong password, or the matching user."""

        with self._lock:
            record = self._records.get(_email_key(email))
            if record is None:
                return Outcome.failure(OutcomeKind.USER_NOT_FOUND)
            stored_hash = record.password_hash
            user = record.user

        if not _verify_password(password, stored_hash):
            return Outcome.failure(OutcomeKind.WRONG_PASSWORD)
        return Outcome.success(user)

    def update_password(self, email: str, new_password: str) -> Outcome:
        """Replace the stored password for ``email``; sessions are not affected."""

        password_hash = _hash_password(new_password)
        with self._lock:
            record = self._records.get(_email_key(email))
            if record is None:
                return Outcome.failure(OutcomeKind.NOT_FOUND)
            record.password_hash = password_hash
            user = record.user

        logger.info("Password updated for user %s", user.id)
        return Outcome.success(user)


__all__ = ["CredentialStore"]
