"""Configuration helpers for the inventory services.

Values come from environment variables, after an optional ``.env`` file in
the working directory has been loaded. Tests pass an explicit mapping instead
so nothing leaks in from the developer's shell.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler


class ConfigurationError(Exception):
    """Raised when a configuration value is present but invalid."""


@dataclass(frozen=True)
class ServerConfig:
    """Settings for the REST service."""

    host: str
    port: int
    allowed_origins: tuple[str, ...]
    log_level: str
    enable_reset: bool


def resolve_env(env: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return ``env`` as a dict, or the process env after loading ``.env``."""

    if env is not None:
        return dict(env)
    load_dotenv(Path.cwd() / ".env")
    return dict(os.environ)


def parse_int(env_map: Mapping[str, str], key: str, default: int, *, minimum: int = 0) -> int:
    raw = (env_map.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ConfigurationError(f"{key} must be >= {minimum}, got {value}")
    return value


def parse_bool(env_map: Mapping[str, str], key: str, default: bool) -> bool:
    raw = (env_map.get(key) or "").strip().lower()
    if not raw:
        return default
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    raise ConfigurationError(f"{key} must be a boolean, got {raw!r}")


def _coerce_origins(raw: str | Iterable[str]) -> tuple[str, ...]:
    if isinstance(raw, str):
        items = [piece.strip() for piece in raw.split(",")]
    else:
        items = [piece.strip() for piece in raw]
    return tuple(filter(None, items)) or ("*",)


def load_server_config(env: Mapping[str, str] | None = None) -> ServerConfig:
    """Load REST service configuration from ``env`` (or the process env)."""

    env_map = resolve_env(env)
    return ServerConfig(
        host=(env_map.get("INVENTORY_HOST") or "127.0.0.1").strip(),
        port=parse_int(env_map, "INVENTORY_PORT", 8085, minimum=1),
        allowed_origins=_coerce_origins(env_map.get("INVENTORY_ALLOWED_ORIGINS", "*")),
        log_level=(env_map.get("INVENTORY_LOG_LEVEL") or "INFO").strip().upper(),
        enable_reset=parse_bool(env_map, "INVENTORY_ENABLE_RESET", True),
    )


def configure_logging(level: str = "INFO", console: Optional[Console] = None) -> None:
    """Install a rich log handler on the root logger.

    Safe to call more than once; later calls only adjust the level.
    """

    root = logging.getLogger()
    root.setLevel(level)
    if any(isinstance(h, RichHandler) for h in root.handlers):
        return
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
