"""
Bootstrap — make sure the helper backends exist before any install.

Runs once per invocation, before the first package is resolved:

    pacman present?  → no: PackageManagerMissingError (fatal)
    running as root? → yes: AUR disabled (yay will not build as root)
    yay present?     → no: pacman -S yay          (failure: AUR disabled)
    flatpak present? → no: pacman -Syu flatpak    (failure: Flatpak disabled)
    flatpak remote   → remote-add --if-not-exists (failure: Flatpak disabled)

On a host that already has everything, this is a set of PATH checks
plus an idempotent remote-add. A dry run installs nothing: a missing
helper is recorded as pending, i.e. usable once a real run has
installed it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pkgchain.adapters.registry import BackendRegistry
from pkgchain.adapters.shell.command import is_root
from pkgchain.core.models.outcome import BackendKind

logger = logging.getLogger(__name__)


class PackageManagerMissingError(Exception):
    """The primary package manager is not installed; nothing can run."""


@dataclass
class BootstrapResult:
    """Which helper backends are usable for the rest of the run.

    Read-only after bootstrap; the resolver consults it to decide
    which backends of the chain it may use. ``pending`` holds backends
    whose tool a dry run found missing but a real run would install.
    """

    helper_available: bool = True
    sandbox_available: bool = True
    pending: set[BackendKind] = field(default_factory=set)
    warnings: list[str] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)

    def disabled(self) -> set[BackendKind]:
        """Backend kinds unavailable for this run."""
        out: set[BackendKind] = set()
        if not self.helper_available:
            out.add(BackendKind.AUR)
        if not self.sandbox_available:
            out.add(BackendKind.FLATPAK)
        return out

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)

    def to_dict(self) -> dict:
        return {
            "helper_available": self.helper_available,
            "sandbox_available": self.sandbox_available,
            "pending": sorted(kind.value for kind in self.pending),
            "warnings": list(self.warnings),
            "actions": list(self.actions),
        }


def bootstrap(registry: BackendRegistry, dry_run: bool = False) -> BootstrapResult:
    """Check for (and if needed install) yay and flatpak.

    Args:
        registry: The backend chain; must contain a pacman backend.
        dry_run: Only check presence; report what would be installed.

    Returns:
        BootstrapResult with helper/sandbox availability for the run.

    Raises:
        PackageManagerMissingError: pacman is not installed.
    """
    primary = registry.get(BackendKind.PACMAN)
    if primary is None or not primary.is_available():
        raise PackageManagerMissingError(
            "pacman is not found. This tool is designed for Arch-based systems."
        )

    result = BootstrapResult()

    helper = registry.get(BackendKind.AUR)
    if helper is None:
        result.helper_available = False
    elif helper.refuses_root and is_root():
        result.helper_available = False
        result.warn(
            f"Running as root: {helper.tool} refuses to build packages as root, "
            f"so AUR packages will be skipped for this run. "
            f"Run as a regular user with sudo rights instead."
        )
    elif helper.is_available():
        logger.info("%s is already installed.", helper.tool)
    elif dry_run:
        result.actions.append(f"would install {helper.tool} via pacman")
        result.pending.add(helper.kind)
    else:
        logger.info("%s (AUR helper) not found. Installing via pacman...", helper.tool)
        result.actions.append(f"install {helper.tool} via pacman")
        receipt = primary.install(helper.tool)
        if receipt.ok and helper.is_available():
            logger.info("%s successfully installed.", helper.tool)
        else:
            result.helper_available = False
            result.warn(
                f"Failed to install {helper.tool} via pacman; "
                f"AUR packages will be skipped for this run. ({receipt.error or 'not on PATH'})"
            )

    sandbox = registry.get(BackendKind.FLATPAK)
    if sandbox is None:
        result.sandbox_available = False
        return result

    if sandbox.is_available():
        logger.info("%s is already installed.", sandbox.tool)
    elif dry_run:
        result.actions.append(f"would install {sandbox.tool} via pacman -Syu")
        result.pending.add(sandbox.kind)
        return result
    else:
        logger.info("%s not found. Installing via pacman...", sandbox.tool)
        result.actions.append(f"install {sandbox.tool} via pacman -Syu")
        receipt = primary.install(sandbox.tool, refresh=True)
        if not (receipt.ok and sandbox.is_available()):
            result.sandbox_available = False
            result.warn(
                f"Failed to install {sandbox.tool}; "
                f"Flatpak installs are disabled for this run. ({receipt.error or 'not on PATH'})"
            )
            return result
        logger.info("%s successfully installed.", sandbox.tool)

    if dry_run:
        return result

    logger.info("Ensuring the %s remote is enabled...", sandbox.tool)
    receipt = sandbox.ensure_remote()
    if receipt.failed:
        result.sandbox_available = False
        result.warn(
            f"Failed to register the {sandbox.tool} remote; "
            f"Flatpak installs are disabled for this run. ({receipt.error})"
        )

    return result
