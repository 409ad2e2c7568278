"""Shared fixtures for the xkb_data tests."""

from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the host's overrides out of the tests."""
    for name in ("X11_BASE_RULES_XML", "X11_EXTRA_RULES_XML", "XKB_DATA_OUTPUT_FORMAT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_rules() -> Path:
    return FIXTURES / "base.xml"


@pytest.fixture
def extra_rules() -> Path:
    return FIXTURES / "base.extras.xml"


@pytest.fixture
def rules_env(monkeypatch, base_rules, extra_rules):
    """Point both default-path loaders at the fixture documents."""
    monkeypatch.setenv("X11_BASE_RULES_XML", str(base_rules))
    monkeypatch.setenv("X11_EXTRA_RULES_XML", str(extra_rules))
