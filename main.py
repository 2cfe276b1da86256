"""Command-line interface for the credential service."""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from authservice.config import ServiceConfig, load_config

logger = logging.getLogger("authservice.main")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Credential store and session service")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the YAML configuration file (default: AUTHSERVICE_CONFIG or config/authservice.yaml)",
    )
    subparsers = parser.add_subparsers(dest="command")

    parser.set_defaults(command="serve")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP service")
    serve_parser.add_argument("--host", default=None, help="Bind address (overrides the configuration)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to listen on (overrides the configuration)")

    console_parser = subparsers.add_parser("console", help="Launch the interactive account console")
    console_parser.add_argument(
        "--service-url",
        default=None,
        help="Base URL of a running service; an in-process service is used when unset",
    )

    args_list = list(argv) if argv is not None else sys.argv[1:]
    known_commands = {"serve", "console"}

    # Global options may precede the subcommand; find the first positional token.
    index = 0
    while index < len(args_list):
        token = args_list[index]
        if token.startswith("--config="):
            index += 1
        elif token == "--config":
            if index + 1 >= len(args_list):
                # Let argparse report the missing value.
                return parser.parse_args(args_list)
            index += 2
        else:
            break
    rest = args_list[index:]

    if not rest:
        args_list = [*args_list[:index], "serve"]
    else:
        first = rest[0]
        if first in ("-h", "--help"):
            return parser.parse_args(args_list)
        if first not in known_commands:
            if any(flag in rest for flag in ("-h", "--help")):
                return parser.parse_args(args_list)
            args_list = [*args_list[:index], "serve", *rest]

    return parser.parse_args(args_list)


def _load_config(config_path: str | None) -> ServiceConfig:
    try:
        return load_config(Path(config_path).expanduser() if config_path else None)
    except ValueError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc


def _serve(config: ServiceConfig, *, host: str | None, port: int | None) -> None:
    from authservice.application import create_application
    import uvicorn

    bind_host = host or config.host
    bind_port = port or config.port
    logger.info("Starting credential service on http://%s:%s", bind_host, bind_port)

    try:
        app = create_application(config=config)
    except ValueError as exc:
        raise SystemExit(f"Failed to start service: {exc}") from exc

    uvicorn.run(app, host=bind_host, port=bind_port, log_level=config.log_level.lower())


def _console(config: ServiceConfig, *, service_url: str | None) -> None:
    from authservice.console import run_console

    if service_url:
        from authservice.client import AuthClient

        logger.info("Using credential service at %s", service_url)
        with AuthClient(service_url) as client:
            run_console(client)
        return

    from authservice.application import build_session_manager

    try:
        sessions = build_session_manager(config)
    except ValueError as exc:
        raise SystemExit(f"Failed to start service: {exc}") from exc
    run_console(sessions)


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for CLI usage."""

    args = _parse_args(argv)
    config = _load_config(args.config)

    logging.basicConfig(level=config.log_level_number, format="%(asctime)s [%(levelname)s] %(message)s")

    if args.command == "serve":
        _serve(config, host=args.host, port=args.port)
    elif args.command == "console":
        _console(config, service_url=args.service_url)


if __name__ == "__main__":
    main()
