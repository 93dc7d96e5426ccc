"""
Install outcome — the terminal result of resolving one PackageRequest.

Exactly one outcome is produced per request. It is consumed for
reporting only: never retried, never persisted.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field


class BackendKind(str, Enum):
    """The three package ecosystems, in default priority order."""

    PACMAN = "pacman"      # native repositories
    AUR = "aur"            # community repository via yay
    FLATPAK = "flatpak"    # sandboxed app store

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    BackendKind.PACMAN: "Pacman",
    BackendKind.AUR: "AUR",
    BackendKind.FLATPAK: "Flatpak",
}

# Per-backend trail entries recorded by the resolver
AttemptResult = Literal[
    "installed",
    "would-install",
    "failed",
    "miss",
    "disabled",
    "no-identifier",
]


class Attempt(BaseModel):
    """One step of the fallback chain, kept for diagnostics."""

    backend: BackendKind
    result: AttemptResult
    detail: str = ""


class InstallOutcome(BaseModel):
    """Installed(via) | Skipped(reason) | Failed(via, cause)."""

    package: str
    status: Literal["installed", "skipped", "failed"]
    via: BackendKind | None = None
    reason: str = ""
    dry_run: bool = False
    attempts: list[Attempt] = Field(default_factory=list)

    @property
    def installed(self) -> bool:
        return self.status == "installed"

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def make_installed(cls, package: str, via: BackendKind, **kwargs: Any) -> InstallOutcome:
        return cls(package=package, status="installed", via=via, **kwargs)

    @classmethod
    def make_skipped(cls, package: str, reason: str, **kwargs: Any) -> InstallOutcome:
        return cls(package=package, status="skipped", reason=reason, **kwargs)

    @classmethod
    def make_failed(
        cls,
        package: str,
        via: BackendKind,
        cause: str,
        **kwargs: Any,
    ) -> InstallOutcome:
        return cls(package=package, status="failed", via=via, reason=cause, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
