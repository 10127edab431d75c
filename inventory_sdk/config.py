"""Client-side settings for the SDK and the terminal front end."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from inventory_app.config import ConfigurationError, parse_int, resolve_env

PAGE_SIZE_OPTIONS = (5, 10, 20, 50)


@dataclass(frozen=True)
class ClientConfig:
    base_url: str
    timeout: int
    page_size: int
    log_level: str


def load_client_config(env: Mapping[str, str] | None = None) -> ClientConfig:
    env_map = resolve_env(env)
    page_size = parse_int(env_map, "INVENTORY_PAGE_SIZE", 10, minimum=1)
    if page_size not in PAGE_SIZE_OPTIONS:
        raise ConfigurationError(
            f"INVENTORY_PAGE_SIZE must be one of {PAGE_SIZE_OPTIONS}, got {page_size}"
        )
    return ClientConfig(
        base_url=(env_map.get("INVENTORY_API_URL") or "http://127.0.0.1:8085").strip().rstrip("/"),
        timeout=parse_int(env_map, "INVENTORY_TIMEOUT", 10, minimum=1),
        page_size=page_size,
        log_level=(env_map.get("INVENTORY_LOG_LEVEL") or "INFO").strip().upper(),
    )
