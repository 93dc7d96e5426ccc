"""
Backend registry — the ordered fallback chain.

The registry owns the backends and their priority order. The
resolver walks ``chain()``; reordering or adding an ecosystem is a
change here, not in the resolver.
"""

from __future__ import annotations

import logging
from typing import Any

from pkgchain.adapters.base import Backend
from pkgchain.adapters.packages import AurBackend, FlatpakBackend, PacmanBackend
from pkgchain.core.models.outcome import BackendKind
from pkgchain.core.models.registry import Settings

logger = logging.getLogger(__name__)


class BackendRegistry:
    """Ordered collection of backends, one per kind."""

    def __init__(self, backends: list[Backend] | None = None):
        self._backends: dict[BackendKind, Backend] = {}
        for backend in backends or []:
            self.register(backend)

    def register(self, backend: Backend) -> None:
        """Append a backend to the chain (replacing one of the same kind in place)."""
        if backend.kind in self._backends:
            logger.warning("Overwriting existing backend: %s", backend.name)
        self._backends[backend.kind] = backend
        logger.debug("Registered backend: %s", backend.name)

    def get(self, kind: BackendKind) -> Backend | None:
        """Look up a backend by kind."""
        return self._backends.get(kind)

    def require(self, kind: BackendKind) -> Backend:
        backend = self._backends.get(kind)
        if backend is None:
            raise KeyError(f"No backend registered for '{kind.value}'")
        return backend

    def chain(self) -> list[Backend]:
        """Backends in priority order."""
        return list(self._backends.values())

    def status(self) -> dict[str, dict[str, Any]]:
        """Availability of every registered backend's tool."""
        result = {}
        for kind, backend in self._backends.items():
            try:
                available = backend.is_available()
            except Exception:
                available = False
            result[kind.value] = {
                "name": kind.value,
                "label": kind.label,
                "tool": backend.tool,
                "available": available,
                "type": backend.__class__.__name__,
            }
        return result


def default_registry(settings: Settings | None = None) -> BackendRegistry:
    """The pacman → AUR → Flatpak chain."""
    settings = settings or Settings()
    timeouts = {
        "query_timeout": settings.query_timeout,
        "install_timeout": settings.install_timeout,
    }
    return BackendRegistry([
        PacmanBackend(**timeouts),
        AurBackend(**timeouts),
        FlatpakBackend(remote=settings.flatpak_remote, **timeouts),
    ])
