"""Adapters — package backend bindings.

Public re-exports for convenient access.
"""

from pkgchain.adapters.base import Backend
from pkgchain.adapters.mock import MockBackend
from pkgchain.adapters.registry import BackendRegistry, default_registry

__all__ = [
    "Backend",
    "BackendRegistry",
    "MockBackend",
    "default_registry",
]
