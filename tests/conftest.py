"""Shared test fixtures for Templator tests."""
import logging

import pytest

from templator.core import logger as logger_module
from templator.core.config import TemplatorConfig, set_config

ENV_VARS = [
    "TEMPLATOR_EDITOR",
    "VISUAL",
    "EDITOR",
    "TEMPLATOR_EDIT_SUFFIX",
    "TEMPLATOR_MARKDOWN_WIDTH",
    "TEMPLATOR_MARKDOWN_COLOR",
    "TEMPLATOR_LOG_FILE",
]


@pytest.fixture(autouse=True)
def clean_config(monkeypatch, tmp_path):
    """Start every test from defaults, logging to a per-test file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TEMPLATOR_LOG_FILE", str(tmp_path / "templator.log"))
    set_config(None)
    yield
    set_config(None)
    _reset_file_logging()


def _reset_file_logging():
    handler = logger_module._file_handler
    if handler is not None:
        root = logging.getLogger(logger_module.ROOT_LOGGER)
        root.removeHandler(handler)
        handler.close()
        root.setLevel(logging.INFO)
        logger_module._file_handler = None


@pytest.fixture
def plain_config():
    """Config with uncoloured, fixed-width Markdown output."""
    config = TemplatorConfig(markdown_color=False, markdown_width=60)
    set_config(config)
    return config


class Node:
    """Minimal node model used as a render context."""

    def __init__(self, name, ip=None, gateway=None):
        self.name = name
        self.ip = ip
        self.gateway = gateway
        self._secret = "hidden"

    def fqdn(self, domain="cluster.local"):
        return f"{self.name}.{domain}"

    def bmc_address(self):
        raise RuntimeError("no BMC configured")


@pytest.fixture
def node():
    """A node with an address but no gateway."""
    return Node("node01", ip="10.10.0.1")


@pytest.fixture
def node_data():
    """Node data as a plain mapping."""
    return {
        'name': 'node01',
        'ip': '10.10.0.1',
        'gateway': None,
        'groups': ['compute', 'gpu'],
    }
