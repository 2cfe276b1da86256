"""FastAPI application exposing registration, login, logout and password reset."""
from __future__ import annotations

import logging
from typing import Dict, List

from fastapi import Depends, FastAPI, HTTPException, status

from .models import Outcome, OutcomeKind
from .schemas import (
    LoginRequest,
    PasswordResetRequest,
    RegisterRequest,
    SessionResponse,
    StatusResponse,
    UserResponse,
)
from .sessions import SessionManager
from .store import CredentialStore

logger = logging.getLogger("authservice.api")

OUTCOME_STATUS_CODES: Dict[OutcomeKind, int] = {
    OutcomeKind.DUPLICATE_EMAIL: status.HTTP_409_CONFLICT,
    OutcomeKind.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    OutcomeKind.WRONG_PASSWORD: status.HTTP_401_UNAUTHORIZED,
    OutcomeKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    OutcomeKind.SESSION_ACTIVE: status.HTTP_409_CONFLICT,
}


def _raise_for_outcome(outcome: Outcome) -> None:
    if outcome.ok:
        return
    raise HTTPException(status_code=OUTCOME_STATUS_CODES[outcome.kind], detail=outcome.kind.value)


def create_app(*, sessions: SessionManager | None = None) -> FastAPI:
    if sessions is None:
        sessions = SessionManager(CredentialStore())

    app = FastAPI(
        title="Credential Store Service",
        description="Registration, login verification, session tracking and password reset",
        version="1.0.0",
    )
    app.state.sessions = sessions

    def get_sessions() -> SessionManager:
        return sessions

    @app.get("/health")
    def healthcheck() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
    def register(payload: RegisterRequest, manager: SessionManager = Depends(get_sessions)) -> UserResponse:
        outcome = manager.register(payload.first_name, payload.last_name, payload.email, payload.password)
        _raise_for_outcome(outcome)
        assert outcome.user is not None
        return UserResponse.from_user(outcome.user)

    @app.post("/login", response_model=UserResponse)
    def login(payload: LoginRequest, manager: SessionManager = Depends(get_sessions)) -> UserResponse:
        outcome = manager.login(payload.email, payload.password)
        _raise_for_outcome(outcome)
        assert outcome.user is not None
        return UserResponse.from_user(outcome.user)

    @app.post("/logout", response_model=StatusResponse)
    def logout(manager: SessionManager = Depends(get_sessions)) -> StatusResponse:
        manager.logout()
        return StatusResponse()

    @app.post("/password-reset", response_model=StatusResponse)
    def reset_password(
        payload: PasswordResetRequest, manager: SessionManager = Depends(get_sessions)
    ) -> StatusResponse:
        outcome = manager.reset_password(payload.email, payload.new_password)
        if not outcome.ok:
            logger.warning("Password reset requested for unknown email %s", payload.email)
        _raise_for_outcome(outcome)
        return StatusResponse()

    @app.get("/session", response_model=SessionResponse)
    def read_session(manager: SessionManager = Depends(get_sessions)) -> SessionResponse:
        user = manager.current_session()
        if user is None:
            return SessionResponse(authenticated=False)
        return SessionResponse(authenticated=True, user=UserResponse.from_user(user))

    @app.get("/users", response_model=List[UserResponse])
    def list_users(manager: SessionManager = Depends(get_sessions)) -> List[UserResponse]:
        return [UserResponse.from_user(user) for user in manager.store.list_users()]

    return app


__all__ = ["OUTCOME_STATUS_CODES", "create_app"]
