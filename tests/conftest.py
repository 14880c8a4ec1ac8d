"""
Shared test fixtures and configuration.
"""

from typing import Callable

import pytest

from linmaint.adapters.mock import MockAdapter
from linmaint.adapters.registry import AdapterRegistry
from linmaint.core.config.loader import Settings
from linmaint.core.models.system import Ecosystem, Helper, SystemProfile
from linmaint.ui.notify import Notifier


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's real config and env out of every test."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("LINMAINT_CONFIG", raising=False)
    monkeypatch.delenv("LINMAINT_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LINMAINT_LOG_FILE", str(tmp_path / "linmaint.log"))


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def mock_shell() -> MockAdapter:
    """A mock standing in for the shell adapter."""
    return MockAdapter(adapter_name="shell")


@pytest.fixture
def registry(mock_shell: MockAdapter) -> AdapterRegistry:
    reg = AdapterRegistry()
    reg.register(mock_shell)
    return reg


@pytest.fixture
def notifier() -> Notifier:
    return Notifier(dry_run=True)


@pytest.fixture
def make_which() -> Callable[..., Callable[[str], str | None]]:
    """Build a fake ``shutil.which`` that only knows the given tools."""

    def factory(*present: str) -> Callable[[str], str | None]:
        def which(name: str) -> str | None:
            return f"/usr/bin/{name}" if name in present else None
        return which

    return factory


@pytest.fixture
def arch() -> SystemProfile:
    return SystemProfile(ecosystem=Ecosystem.ARCH)


@pytest.fixture
def arch_yay() -> SystemProfile:
    return SystemProfile(ecosystem=Ecosystem.ARCH, helper=Helper.YAY)


@pytest.fixture
def void() -> SystemProfile:
    return SystemProfile(ecosystem=Ecosystem.VOID)


@pytest.fixture
def debian() -> SystemProfile:
    return SystemProfile(ecosystem=Ecosystem.DEBIAN)
