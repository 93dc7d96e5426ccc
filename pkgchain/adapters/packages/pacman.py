"""
Pacman backend — the native Arch repositories.

Mutates system-wide package state, so installs run through sudo.
"""

from __future__ import annotations

from pkgchain.adapters.base import Backend
from pkgchain.core.models.outcome import BackendKind


class PacmanBackend(Backend):
    kind = BackendKind.PACMAN
    tool = "pacman"
    needs_sudo = True

    def query_cmd(self, name: str) -> list[str]:
        return ["pacman", "-Si", name]

    def install_cmd(self, name: str, *, refresh: bool = False) -> list[str]:
        # -Syu refreshes the sync databases and upgrades before installing
        op = "-Syu" if refresh else "-S"
        return ["pacman", op, "--noconfirm", "--needed", name]
