"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from pkgchain.adapters.mock import MockBackend
from pkgchain.adapters.registry import BackendRegistry
from pkgchain.core.models.outcome import BackendKind


@pytest.fixture
def pacman() -> MockBackend:
    return MockBackend(BackendKind.PACMAN)


@pytest.fixture
def aur() -> MockBackend:
    return MockBackend(BackendKind.AUR)


@pytest.fixture
def flatpak() -> MockBackend:
    return MockBackend(BackendKind.FLATPAK)


@pytest.fixture
def backends(pacman: MockBackend, aur: MockBackend, flatpak: MockBackend) -> BackendRegistry:
    """pacman → aur → flatpak chain of mocks, all tools present."""
    return BackendRegistry([pacman, aur, flatpak])


@pytest.fixture
def registry_yml(tmp_path: Path) -> Path:
    """A small packages.yml covering each kind of entry."""
    content = textwrap.dedent("""\
        settings:
          install_timeout: 600
          query_timeout: 30
        packages:
          - name: brave-bin
            flatpak: com.brave.Browser
          - name: discord
            flatpak: com.discordapp.Discord
            force_flatpak: true
          - name: obscure-pkg
    """)
    path = tmp_path / "packages.yml"
    path.write_text(content)
    return path
