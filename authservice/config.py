"""Configuration management for the credential service."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

import yaml

from .validation import PASSWORD_REQUIREMENTS, is_strong_password, is_valid_email, missing_fields

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class SeedUser:
    """An account registered when the service starts."""

    first_name: str
    last_name: str
    email: str
    password: str = field(repr=False)

    @staticmethod
    def from_dict(data: Dict[str, object]) -> "SeedUser":
        """Create a :class:`SeedUser` from raw dictionary data."""
        if not isinstance(data, dict):
            raise ValueError("Each seed user must be a mapping")
        required_fields = {"first_name", "last_name", "email", "password"}
        missing = required_fields - data.keys()
        if missing:
            raise ValueError(f"Missing required seed user fields: {', '.join(sorted(missing))}")

        seed = SeedUser(
            first_name=str(data["first_name"]).strip(),
            last_name=str(data["last_name"]).strip(),
            email=str(data["email"]).strip(),
            password=str(data["password"]),
        )
        blank = missing_fields(first_name=seed.first_name, last_name=seed.last_name)
        if blank:
            raise ValueError(f"Seed user {seed.email!r} has blank fields: {', '.join(blank)}")
        if not is_valid_email(seed.email):
            raise ValueError(f"Seed user email {seed.email!r} is not a valid email address")
        if not is_strong_password(seed.password):
            raise ValueError(f"Seed user {seed.email!r} has a weak password. {PASSWORD_REQUIREMENTS}")
        return seed


@dataclass(frozen=True)
class ServiceConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    seed_users: Tuple[SeedUser, ...] = ()

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    @staticmethod
    def from_dict(data: Mapping[str, object]) -> "ServiceConfig":
        server = data.get("server") or {}
        logging_section = data.get("logging") or {}
        if not isinstance(server, dict) or not isinstance(logging_section, dict):
            raise ValueError("The 'server' and 'logging' sections must be mappings")

        users_raw = data.get("users") or []
        if not isinstance(users_raw, list):
            raise ValueError("The 'users' key must be a list of seed users")
        seeds = tuple(SeedUser.from_dict(item) for item in users_raw)

        seen = set()
        for seed in seeds:
            key = seed.email.casefold()
            if key in seen:
                raise ValueError(f"Seed user email {seed.email!r} is listed more than once")
            seen.add(key)

        return ServiceConfig(
            host=str(server.get("host", DEFAULT_HOST)),
            port=_parse_port(server.get("port", DEFAULT_PORT)),
            log_level=_parse_log_level(logging_section.get("level", DEFAULT_LOG_LEVEL)),
            seed_users=seeds,
        )


def _parse_port(value: object) -> int:
    try:
        port = int(str(value))
    except ValueError as exc:
        raise ValueError(f"Invalid port {value!r}") from exc
    if not 1 <= port <= 65535:
        raise ValueError(f"Port {port} is outside the range 1-65535")
    return port


def _parse_log_level(value: object) -> str:
    level = str(value).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level {value!r}")
    return level


def resolve_config_path(env_value: Optional[str]) -> Path:
    """Resolve the path to the configuration file."""
    if env_value:
        candidate = Path(env_value).expanduser().resolve(strict=False)
    else:
        candidate = (Path(__file__).resolve().parent.parent / "config" / "authservice.yaml").resolve(strict=False)
    return candidate


def load_config(config_path: Optional[Path] = None, *, environ: Optional[Mapping[str, str]] = None) -> ServiceConfig:
    """Load configuration from YAML and apply ``AUTHSERVICE_*`` environment overrides.

    An explicitly requested file (argument or ``AUTHSERVICE_CONFIG``) must
    exist; the default location is optional.
    """
    env = os.environ if environ is None else environ
    explicit = config_path is not None or bool(env.get("AUTHSERVICE_CONFIG"))
    path = config_path if config_path is not None else resolve_config_path(env.get("AUTHSERVICE_CONFIG"))

    raw: Dict[str, object] = {}
    if path.exists():
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")
        raw = loaded
    elif explicit:
        raise ValueError(f"Configuration file {path} does not exist")

    config = ServiceConfig.from_dict(raw)

    overrides: Dict[str, object] = {}
    if env.get("AUTHSERVICE_HOST"):
        overrides["host"] = env["AUTHSERVICE_HOST"].strip()
    if env.get("AUTHSERVICE_PORT"):
        overrides["port"] = _parse_port(env["AUTHSERVICE_PORT"])
    if env.get("AUTHSERVICE_LOG_LEVEL"):
        overrides["log_level"] = _parse_log_level(env["AUTHSERVICE_LOG_LEVEL"])
    return replace(config, **overrides) if overrides else config


__all__ = ["SeedUser", "ServiceConfig", "load_config", "resolve_config_path"]
