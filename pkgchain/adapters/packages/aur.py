"""
AUR backend — community packages built through yay.

yay elevates itself for the final pacman step and refuses to
build as root, so commands are never prefixed with sudo and the
backend is disabled for runs started as root.
"""

from __future__ import annotations

from pkgchain.adapters.base import Backend
from pkgchain.core.models.outcome import BackendKind


class AurBackend(Backend):
    kind = BackendKind.AUR
    tool = "yay"
    refuses_root = True

    def query_cmd(self, name: str) -> list[str]:
        return ["yay", "-Si", name]

    def install_cmd(self, name: str, *, refresh: bool = False) -> list[str]:
        op = "-Syu" if refresh else "-S"
        return ["yay", op, "--noconfirm", "--needed", name]
