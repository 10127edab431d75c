# tests/test_config.py
import logging

import pytest
from rich.logging import RichHandler

from inventory_app.config import ConfigurationError, configure_logging, load_server_config
from inventory_sdk.config import PAGE_SIZE_OPTIONS, load_client_config


def test_server_defaults():
    config = load_server_config({})
    assert config.host == "127.0.0.1"
    assert config.port == 8085
    assert config.allowed_origins == ("*",)
    assert config.log_level == "INFO"
    assert config.enable_reset is True


def test_server_explicit_values():
    config = load_server_config({
        "INVENTORY_HOST": "0.0.0.0",
        "INVENTORY_PORT": "9000",
        "INVENTORY_ALLOWED_ORIGINS": "http://a.test, http://b.test,",
        "INVENTORY_LOG_LEVEL": "debug",
        "INVENTORY_ENABLE_RESET": "no",
    })
    assert config.host == "0.0.0.0"
    assert config.port == 9000
    assert config.allowed_origins == ("http://a.test", "http://b.test")
    assert config.log_level == "DEBUG"
    assert config.enable_reset is False


@pytest.mark.parametrize("env", [
    {"INVENTORY_PORT": "eighty"},
    {"INVENTORY_PORT": "0"},
    {"INVENTORY_ENABLE_RESET": "maybe"},
])
def test_server_rejects_bad_values(env):
    with pytest.raises(ConfigurationError):
        load_server_config(env)


def test_client_defaults():
    config = load_client_config({})
    assert config.base_url == "http://127.0.0.1:8085"
    assert config.timeout == 10
    assert config.page_size == 10
    assert config.page_size in PAGE_SIZE_OPTIONS


def test_client_strips_trailing_slash():
    config = load_client_config({"INVENTORY_API_URL": "http://inventory.test/", "INVENTORY_PAGE_SIZE": "50"})
    assert config.base_url == "http://inventory.test"
    assert config.page_size == 50


def test_client_rejects_page_size_outside_options():
    with pytest.raises(ConfigurationError):
        load_client_config({"INVENTORY_PAGE_SIZE": "7"})


def test_configure_logging_installs_one_handler():
    root = logging.getLogger()
    before, level = list(root.handlers), root.level
    try:
        configure_logging("DEBUG")
        configure_logging("WARNING")
        rich_handlers = [h for h in root.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert root.level == logging.WARNING
    finally:
        root.handlers = before
        root.setLevel(level)
