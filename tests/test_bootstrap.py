"""
Tests for the bootstrap sequencer — helper tool setup before any install.
"""

from unittest.mock import patch

import pytest

from pkgchain.adapters.mock import MockBackend
from pkgchain.adapters.registry import BackendRegistry
from pkgchain.core.engine.bootstrap import (
    BootstrapResult,
    PackageManagerMissingError,
    bootstrap,
)
from pkgchain.core.models.outcome import BackendKind

IS_ROOT = "pkgchain.core.engine.bootstrap.is_root"


class TestBootstrapPresent:
    def test_noop_when_everything_present(self, backends, pacman, flatpak):
        result = bootstrap(backends)
        assert result.helper_available
        assert result.sandbox_available
        assert result.warnings == []
        assert pacman.install_count == 0
        # remote-add --if-not-exists runs every time
        assert flatpak.remote_calls == 1

    def test_idempotent(self, backends, pacman):
        first = bootstrap(backends)
        second = bootstrap(backends)
        assert first.disabled() == second.disabled() == set()
        assert pacman.install_count == 0

    def test_missing_pacman_is_fatal(self, backends, pacman):
        pacman.set_available(False)
        with pytest.raises(PackageManagerMissingError, match="pacman"):
            bootstrap(backends)

    def test_no_pacman_registered_is_fatal(self, aur, flatpak):
        with pytest.raises(PackageManagerMissingError):
            bootstrap(BackendRegistry([aur, flatpak]))


class TestBootstrapHelper:
    def test_installs_yay_via_pacman(self, backends, pacman, aur):
        aur.set_available(False)
        pacman.provides[aur.tool] = aur
        result = bootstrap(backends)
        assert pacman.installs[0] == (aur.tool, False)
        assert result.helper_available

    def test_yay_install_failure_disables_aur(self, backends, pacman, aur):
        aur.set_available(False)
        pacman.failing.add(aur.tool)
        result = bootstrap(backends)
        assert not result.helper_available
        assert result.sandbox_available
        assert BackendKind.AUR in result.disabled()
        assert len(result.warnings) == 1

    def test_install_ok_but_not_on_path(self, backends, pacman, aur):
        aur.set_available(False)
        result = bootstrap(backends)
        assert pacman.installed == [aur.tool]
        assert not result.helper_available


class TestBootstrapSandbox:
    def test_installs_flatpak_with_refresh(self, backends, pacman, flatpak):
        flatpak.set_available(False)
        pacman.provides[flatpak.tool] = flatpak
        result = bootstrap(backends)
        assert pacman.installs == [(flatpak.tool, True)]
        assert result.sandbox_available
        assert flatpak.remote_calls == 1

    def test_flatpak_install_failure_disables_flatpak(self, backends, pacman, flatpak):
        flatpak.set_available(False)
        pacman.failing.add(flatpak.tool)
        result = bootstrap(backends)
        assert not result.sandbox_available
        assert flatpak.remote_calls == 0
        assert BackendKind.FLATPAK in result.disabled()

    def test_remote_failure_disables_flatpak(self, backends, flatpak):
        flatpak.remote_ok = False
        result = bootstrap(backends)
        assert not result.sandbox_available
        assert result.helper_available
        assert "remote" in result.warnings[0]


class TestBootstrapDryRun:
    def test_dry_run_installs_nothing(self, backends, pacman, aur, flatpak):
        aur.set_available(False)
        flatpak.set_available(False)
        result = bootstrap(backends, dry_run=True)
        assert pacman.install_count == 0
        assert flatpak.remote_calls == 0
        assert result.pending == {BackendKind.AUR, BackendKind.FLATPAK}
        assert result.disabled() == set()
        assert len(result.actions) == 2
        assert all(a.startswith("would install") for a in result.actions)

    def test_dry_run_skips_remote(self, backends, flatpak):
        result = bootstrap(backends, dry_run=True)
        assert flatpak.remote_calls == 0
        assert result.sandbox_available

    def test_present_tools_are_not_pending(self, backends):
        result = bootstrap(backends, dry_run=True)
        assert result.pending == set()


class TestBootstrapAsRoot:
    def _chain(self, pacman, flatpak, **kwargs):
        helper = MockBackend(BackendKind.AUR, refuses_root=True, **kwargs)
        return helper, BackendRegistry([pacman, helper, flatpak])

    def test_root_disables_helper(self, pacman, flatpak):
        helper, chain = self._chain(pacman, flatpak)
        with patch(IS_ROOT, return_value=True):
            result = bootstrap(chain)
        assert not result.helper_available
        assert BackendKind.AUR in result.disabled()
        assert "root" in result.warnings[0]
        assert result.sandbox_available

    def test_root_does_not_install_yay(self, pacman, flatpak):
        helper, chain = self._chain(pacman, flatpak, available=False)
        with patch(IS_ROOT, return_value=True):
            bootstrap(chain)
        assert pacman.install_count == 0

    def test_root_dry_run_is_not_pending(self, pacman, flatpak):
        helper, chain = self._chain(pacman, flatpak, available=False)
        with patch(IS_ROOT, return_value=True):
            result = bootstrap(chain, dry_run=True)
        assert result.pending == set()
        assert BackendKind.AUR in result.disabled()

    def test_regular_user_keeps_helper(self, pacman, flatpak):
        helper, chain = self._chain(pacman, flatpak)
        with patch(IS_ROOT, return_value=False):
            result = bootstrap(chain)
        assert result.helper_available
        assert result.warnings == []


class TestBootstrapResult:
    def test_defaults(self):
        r = BootstrapResult()
        assert r.disabled() == set()

    def test_to_dict(self):
        r = BootstrapResult(helper_available=False)
        r.warn("yay missing")
        d = r.to_dict()
        assert d["helper_available"] is False
        assert d["warnings"] == ["yay missing"]
        assert d["pending"] == []
