"""HTTP client for a running credential service."""
from __future__ import annotations

from typing import Dict, List, Optional

import httpx

from .models import Outcome, OutcomeKind, User
from .schemas import SessionResponse, UserResponse

DEFAULT_SERVICE_URL = "http://127.0.0.1:8000"


class AuthClientError(RuntimeError):
    """Raised when the service cannot be reached or answers unexpectedly."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthClient:
    """Talk to the HTTP API and report results as :class:`Outcome` values.

    Offers the same methods as :class:`~authservice.sessions.SessionManager`
    so callers such as the console can use either one.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_SERVICE_URL,
        *,
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)

    def __enter__(self) -> "AuthClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def register(self, first_name: str, last_name: str, email: str, password: str) -> Outcome:
        response = self._request(
            "POST",
            "/register",
            {"firstName": first_name, "lastName": last_name, "email": email, "password": password},
        )
        return self._user_outcome(response, expected=201)

    def login(self, email: str, password: str) -> Outcome:
        response = self._request("POST", "/login", {"email": email, "password": password})
        return self._user_outcome(response, expected=200)

    def logout(self) -> None:
        response = self._request("POST", "/logout")
        if response.status_code != 200:
            raise self._unexpected(response)

    def current_session(self) -> Optional[User]:
        response = self._request("GET", "/session")
        if response.status_code != 200:
            raise self._unexpected(response)
        session = SessionResponse.model_validate(self._json(response))
        if not session.authenticated or session.user is None:
            return None
        return session.user.to_user()

    def reset_password(self, email: str, new_password: str) -> Outcome:
        response = self._request("POST", "/password-reset", {"email": email, "newPassword": new_password})
        if response.status_code == 200:
            return Outcome.success()
        return self._failure(response)

    def list_users(self) -> List[User]:
        response = self._request("GET", "/users")
        if response.status_code != 200:
            raise self._unexpected(response)
        return [UserResponse.model_validate(item).to_user() for item in self._json(response)]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, payload: Optional[Dict[str, str]] = None) -> httpx.Response:
        try:
            return self._client.request(method, path, json=payload)
        except httpx.HTTPError as exc:
            raise AuthClientError(f"Failed to contact credential service: {exc}") from exc

    def _user_outcome(self, response: httpx.Response, *, expected: int) -> Outcome:
        if response.status_code == expected:
            return Outcome.success(UserResponse.model_validate(self._json(response)).to_user())
        return self._failure(response)

    def _failure(self, response: httpx.Response) -> Outcome:
        try:
            payload = response.json()
        except ValueError:
            raise self._unexpected(response) from None
        detail = payload.get("detail") if isinstance(payload, dict) else None
        try:
            kind = OutcomeKind(detail)
        except ValueError:
            raise self._unexpected(response) from None
        if kind is OutcomeKind.SUCCESS:
            raise self._unexpected(response)
        return Outcome.failure(kind)

    @staticmethod
    def _json(response: httpx.Response):
        try:
            return response.json()
        except ValueError as exc:
            raise AuthClientError("Service returned an unexpected response format.") from exc

    @staticmethod
    def _unexpected(response: httpx.Response) -> AuthClientError:
        return AuthClientError(
            f"Service responded with {response.status_code}: {response.text.strip()}",
            status_code=response.status_code,
        )


__all__ = ["AuthClient", "AuthClientError", "DEFAULT_SERVICE_URL"]
