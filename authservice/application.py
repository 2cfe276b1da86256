"""Application factory that wires configuration, the store and the HTTP API."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI

from .api import create_app as create_api_app
from .config import ServiceConfig, load_config
from .sessions import SessionManager
from .store import CredentialStore

logger = logging.getLogger("authservice.application")


def build_session_manager(config: ServiceConfig) -> SessionManager:
    """Create the store, register configured seed users and wrap it in a session manager."""

    store = CredentialStore()
    for seed in config.seed_users:
        outcome = store.register(seed.first_name, seed.last_name, seed.email, seed.password)
        if not outcome.ok:
            raise ValueError(f"Seed user {seed.email!r} could not be registered: {outcome.kind.value}")
    if config.seed_users:
        logger.info("Seeded %d user(s) from configuration", len(config.seed_users))
    return SessionManager(store)


def create_application(*, config: Optional[ServiceConfig] = None) -> FastAPI:
    """Create the ASGI application."""

    if config is None:
        config = load_config()
    sessions = build_session_manager(config)
    app = create_api_app(sessions=sessions)
    app.state.config = config
    return app


__all__ = ["build_session_manager", "create_application"]
