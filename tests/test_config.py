from __future__ import annotations

import logging
from pathlib import Path

import pytest

from authservice.application import build_session_manager
from authservice.config import ServiceConfig, load_config, resolve_config_path


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_when_default_file_is_missing(tmp_path: Path) -> None:
    config = load_config(environ={"AUTHSERVICE_CONFIG": ""})

    assert config.host == "127.0.0.1"
    assert config.port == 8000
    assert config.log_level == "INFO"
    assert config.log_level_number == logging.INFO
    assert config.seed_users == ()


def test_loads_yaml_with_seed_users(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "service.yaml",
        """
server:
  host: 0.0.0.0
  port: 9000
logging:
  level: debug
users:
  - first_name: Ann
    last_name: Lee
    email: Ann@X.com
    password: "Abcd123!"
""",
    )

    config = load_config(path, environ={})

    assert (config.host, config.port, config.log_level) == ("0.0.0.0", 9000, "DEBUG")
    assert len(config.seed_users) == 1
    seed = config.seed_users[0]
    assert seed.email == "Ann@X.com"
    assert "Abcd123!" not in repr(seed)


def test_environment_overrides_file(tmp_path: Path) -> None:
    path = _write(tmp_path / "service.yaml", "server:\n  port: 9000\n")

    config = load_config(
        path,
        environ={"AUTHSERVICE_HOST": "10.0.0.5", "AUTHSERVICE_PORT": "9100", "AUTHSERVICE_LOG_LEVEL": "warning"},
    )

    assert (config.host, config.port, config.log_level) == ("10.0.0.5", 9100, "WARNING")


def test_config_path_from_environment(tmp_path: Path) -> None:
    path = _write(tmp_path / "env.yaml", "server:\n  port: 8123\n")

    assert load_config(environ={"AUTHSERVICE_CONFIG": str(path)}).port == 8123
    assert resolve_config_path(str(path)) == path.resolve()
    assert resolve_config_path(None).name == "authservice.yaml"


def test_explicit_missing_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        load_config(tmp_path / "absent.yaml", environ={})


@pytest.mark.parametrize(
    "text",
    [
        "server:\n  port: 70000\n",
        "server:\n  port: abc\n",
        "logging:\n  level: chatty\n",
        "users:\n  - first_name: Ann\n    email: ann@x.com\n",
        "users:\n  - {first_name: Ann, last_name: Lee, email: not-an-email, password: 'Abcd123!'}\n",
        "users:\n  - {first_name: Ann, last_name: Lee, email: ann@x.com, password: weakpass}\n",
        "users:\n  - {first_name: ' ', last_name: Lee, email: ann@x.com, password: 'Abcd123!'}\n",
        (
            "users:\n"
            "  - {first_name: Ann, last_name: Lee, email: ann@x.com, password: 'Abcd123!'}\n"
            "  - {first_name: Ann, last_name: Lee, email: ANN@x.com, password: 'Abcd123!'}\n"
        ),
        "- just\n- a list\n",
    ],
)
def test_invalid_configuration_is_rejected(tmp_path: Path, text: str) -> None:
    path = _write(tmp_path / "bad.yaml", text)
    with pytest.raises(ValueError):
        load_config(path, environ={})


def test_seed_users_are_registered_but_not_logged_in(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "seed.yaml",
        "users:\n  - {first_name: Ann, last_name: Lee, email: ann@x.com, password: 'Abcd123!'}\n",
    )

    sessions = build_session_manager(load_config(path, environ={}))

    assert sessions.store.find_by_email("ANN@X.COM") is not None
    assert sessions.current_session() is None
    assert sessions.login("ann@x.com", "Abcd123!").ok


def test_empty_config_builds_empty_store() -> None:
    sessions = build_session_manager(ServiceConfig())
    assert len(sessions.store) == 0
