"""
Mock backend — test double for every backend operation.

Simulates an ecosystem in memory without touching external tools.
Configurable per package: known to the ecosystem, install fails.
"""

from __future__ import annotations

from pkgchain.adapters.base import Backend
from pkgchain.core.models.outcome import BackendKind
from pkgchain.core.models.package import PackageRequest
from pkgchain.core.models.receipt import Receipt


class MockBackend(Backend):
    """In-memory backend.

    By default the tool is present, no package is known, and every
    install succeeds. ``provides`` maps a package name to another
    MockBackend whose tool becomes present once that package is
    installed (e.g. installing ``yay`` through pacman).
    """

    def __init__(
        self,
        kind: BackendKind,
        available: bool = True,
        known: set[str] | None = None,
        failing: set[str] | None = None,
        remote_ok: bool = True,
        probes: bool | None = None,
        refuses_root: bool = False,
    ):
        super().__init__()
        self.kind = kind
        self.tool = f"mock-{kind.value}"
        self.probes = kind is not BackendKind.FLATPAK if probes is None else probes
        self.refuses_root = refuses_root
        self._available = available
        self.known = set(known or ())
        self.failing = set(failing or ())
        self.remote_ok = remote_ok
        self.provides: dict[str, MockBackend] = {}
        self.queries: list[str] = []
        self.installs: list[tuple[str, bool]] = []
        self.remote_calls = 0

    # Mocks never shell out
    def query_cmd(self, name: str) -> list[str]:
        return ["mock", "query", name]

    def install_cmd(self, name: str, *, refresh: bool = False) -> list[str]:
        return ["mock", "install", name]

    def identifier_for(self, request: PackageRequest) -> str:
        if self.kind is BackendKind.FLATPAK:
            return request.flatpak
        return request.name

    @property
    def installed(self) -> list[str]:
        """Names passed to install(), in call order."""
        return [name for name, _ in self.installs]

    @property
    def install_count(self) -> int:
        return len(self.installs)

    def is_available(self) -> bool:
        return self._available

    def set_available(self, available: bool) -> None:
        self._available = available

    def query_available(self, name: str) -> bool:
        self.queries.append(name)
        return name in self.known

    def install(self, name: str, *, refresh: bool = False) -> Receipt:
        self.installs.append((name, refresh))
        if name in self.failing:
            return Receipt.failure(
                backend=self.name,
                target=name,
                error=f"mock install of {name} failed",
                metadata={"mock": True},
            )
        if name in self.provides:
            self.provides[name].set_available(True)
        return Receipt.success(
            backend=self.name,
            target=name,
            output=f"[mock] installed {name}",
            metadata={"mock": True},
        )

    def ensure_remote(self) -> Receipt:
        self.remote_calls += 1
        if self.remote_ok:
            return Receipt.success(backend=self.name, target="mock-remote")
        return Receipt.failure(backend=self.name, target="mock-remote", error="mock remote-add failed")

    def reset(self) -> None:
        """Clear call logs."""
        self.queries.clear()
        self.installs.clear()
        self.remote_calls = 0
