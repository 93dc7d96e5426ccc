"""
Flatpak backend — sandboxed applications from a Flatpak remote.

Addresses apps by their application ID, not the repo package name,
and is installed without probing first: a registry entry that names
a Flatpak ID is taken as a declared install path.
"""

from __future__ import annotations

from pkgchain.adapters.base import Backend
from pkgchain.adapters.shell.command import run_command
from pkgchain.core.models.outcome import BackendKind
from pkgchain.core.models.package import PackageRequest
from pkgchain.core.models.receipt import Receipt
from pkgchain.core.models.registry import FlatpakRemote


class FlatpakBackend(Backend):
    kind = BackendKind.FLATPAK
    tool = "flatpak"
    probes = False

    def __init__(
        self,
        remote: FlatpakRemote | None = None,
        query_timeout: int = 60,
        install_timeout: int = 1800,
    ):
        super().__init__(query_timeout=query_timeout, install_timeout=install_timeout)
        self.remote = remote or FlatpakRemote()

    def identifier_for(self, request: PackageRequest) -> str:
        return request.flatpak

    def query_cmd(self, name: str) -> list[str]:
        return ["flatpak", "remote-info", self.remote.name, name]

    def install_cmd(self, name: str, *, refresh: bool = False) -> list[str]:
        return ["flatpak", "install", "-y", "--noninteractive", self.remote.name, name]

    def remote_add_cmd(self) -> list[str]:
        return [
            "flatpak", "remote-add", "--if-not-exists",
            self.remote.name, self.remote.url,
        ]

    def ensure_remote(self) -> Receipt:
        """Add the configured remote unless it is already registered."""
        return run_command(
            self.remote_add_cmd(),
            backend=self.name,
            target=self.remote.name,
            timeout=self.query_timeout,
        )
