"""Unit tests configuration file."""

import os

import pytest

FIXTURES_DIR = os.path.join(os.path.dirname(os.path.realpath(__file__)), "schema", "fixtures")


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def fixture_path():
    """Return the path of a JSON document under fixtures/."""

    def _path(name):
        return os.path.join(FIXTURES_DIR, name)

    return _path
