"""
Backend base — the protocol contract between the resolver and package tools.

This defines the abstract interface that every package backend must
implement. The resolver only talks to backends through this protocol,
never directly to pacman, yay or flatpak.
"""

from __future__ import annotations

import logging
import shutil
from abc import ABC, abstractmethod

from pkgchain.adapters.shell.command import run_command
from pkgchain.core.models.outcome import BackendKind
from pkgchain.core.models.package import PackageRequest
from pkgchain.core.models.receipt import Receipt

logger = logging.getLogger(__name__)


class Backend(ABC):
    """Abstract base class for package backends.

    Backends perform external side effects and return receipts.
    They NEVER raise exceptions — failures are captured in the Receipt.

    To add an ecosystem:
        1. Subclass Backend
        2. Set kind and tool, implement the command builders
        3. Add it to the chain in ``default_registry``
    """

    kind: BackendKind
    tool: str                       # executable that must be on PATH
    needs_sudo: bool = False
    # Tool exits with an error when run as root
    refuses_root: bool = False
    # Whether the resolver asks query_available() before install()
    probes: bool = True

    def __init__(self, query_timeout: int = 60, install_timeout: int = 1800):
        self.query_timeout = query_timeout
        self.install_timeout = install_timeout

    @property
    def name(self) -> str:
        return self.kind.value

    # ── Command builders ────────────────────────────────────────

    @abstractmethod
    def query_cmd(self, name: str) -> list[str]:
        """Read-only metadata lookup for ``name``."""

    @abstractmethod
    def install_cmd(self, name: str, *, refresh: bool = False) -> list[str]:
        """Non-interactive install of ``name``."""

    def identifier_for(self, request: PackageRequest) -> str:
        """The identifier this ecosystem knows the request by."""
        return request.name

    # ── Operations ──────────────────────────────────────────────

    def is_available(self) -> bool:
        """Whether the backend's tool is installed. Fast, never raises."""
        return shutil.which(self.tool) is not None

    def query_available(self, name: str) -> bool:
        """Whether ``name`` is known to this ecosystem.

        Any non-zero exit, timeout, or execution error means "not
        available". Nothing is installed.
        """
        receipt = run_command(
            self.query_cmd(name),
            backend=self.name,
            target=name,
            timeout=self.query_timeout,
        )
        return receipt.ok

    def install(self, name: str, *, refresh: bool = False) -> Receipt:
        """Install ``name`` without prompting."""
        logger.debug("%s: installing %s", self.kind.label, name)
        return run_command(
            self.install_cmd(name, refresh=refresh),
            backend=self.name,
            target=name,
            needs_sudo=self.needs_sudo,
            timeout=self.install_timeout,
        )

    def ensure_remote(self) -> Receipt:
        """Register the backend's package source. No-op by default."""
        return Receipt.skip(backend=self.name, target="", reason="no remote to register")

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
