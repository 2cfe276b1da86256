"""Single active session tracking on top of the credential store."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .models import Outcome, OutcomeKind, User
from .store import CredentialStore

logger = logging.getLogger("authservice.sessions")


@dataclass
class _SessionRecord:
    user_id: str
    started_at: datetime


class SessionManager:
    """Hold at most one authenticated identity and route account operations.

    The session keeps only the user id; the store stays the owner of the
    record, so a password reset never invalidates an active session.
    """

    def __init__(self, store: CredentialStore) -> None:
        self._store = store
        self._session: Optional[_SessionRecord] = None
        self._lock = threading.Lock()

    @property
    def store(self) -> CredentialStore:
        return self._store

    @property
    def is_authenticated(self) -> bool:
        with self._lock:
            return self._session is not None

    @property
    def session_started_at(self) -> Optional[datetime]:
        with self._lock:
            return self._session.started_at if self._session is not None else None

    def login(self, email: str, password: str) -> Outcome:
        with self._lock:
            if self._session is not None:
                logger.warning("Login for %s refused: a session is already active", email)
                return Outcome.failure(OutcomeKind.SESSION_ACTIVE)

            outcome = self._store.verify(email, password)
            if not outcome.ok or outcome.user is None:
                logger.warning("Failed login attempt for %s (%s)", email, outcome.kind.value)
                return outcome

            self._session = _SessionRecord(user_id=outcome.user.id, started_at=self._now())

        logger.info("User %s signed in", outcome.user.id)
        return outcome

    def logout(self) -> None:
        with self._lock:
            record, self._session = self._session, None
        if record is not None:
            logger.info("User %s signed out", record.user_id)

    def current_session(self) -> Optional[User]:
        with self._lock:
            record = self._session
        if record is None:
            return None
        return self._store.get(record.user_id)

    def reset_password(self, email: str, new_password: str) -> Outcome:
        return self._store.update_password(email, new_password)

    def register(self, first_name: str, last_name: str, email: str, password: str) -> Outcome:
        return self._store.register(first_name, last_name, email, password)

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)


__all__ = ["SessionManager"]
