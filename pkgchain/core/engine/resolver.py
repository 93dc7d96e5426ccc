"""
Fallback resolver — pick the ecosystem for one package and install it.

For a normal request the chain is walked in priority order
(pacman → AUR → Flatpak). Backends that probe (the native repos) are
asked ``query_available`` first; a miss silently advances, an install
failure is logged and advances. The first successful install ends the
chain. ``force_flatpak`` requests go straight to Flatpak and never
fall back.

A "miss" and an "install failed" both advance the chain; the
difference is kept in the outcome's ``attempts`` trail and the log,
not in the outcome tag.
"""

from __future__ import annotations

import logging

from pkgchain.adapters.base import Backend
from pkgchain.adapters.registry import BackendRegistry
from pkgchain.core.engine.bootstrap import BootstrapResult
from pkgchain.core.models.outcome import Attempt, BackendKind, InstallOutcome
from pkgchain.core.models.package import PackageRequest

logger = logging.getLogger(__name__)

NO_PATH = "no installation path"
NO_IDENTIFIER = "no identifier provided"
NO_IDENTIFIER_AFTER_FAILURE = "no identifier and no prior backend succeeded"


class FallbackResolver:
    """Resolves one PackageRequest into one InstallOutcome."""

    def __init__(
        self,
        registry: BackendRegistry,
        bootstrap: BootstrapResult | None = None,
        dry_run: bool = False,
    ):
        self._registry = registry
        boot = bootstrap or BootstrapResult()
        self._disabled = boot.disabled()
        # Tools a real run would install first; only a dry run leaves them pending
        self._pending = boot.pending
        self._dry_run = dry_run

    def resolve(self, request: PackageRequest) -> InstallOutcome:
        if request.force_flatpak:
            return self._resolve_forced(request)
        return self._resolve_chain(request)

    # ── Forced Flatpak ──────────────────────────────────────────

    def _resolve_forced(self, request: PackageRequest) -> InstallOutcome:
        """Flatpak only. Terminal: no other backend is ever tried."""
        logger.info("%s: Flatpak only (force_flatpak)", request.name)
        kind = BackendKind.FLATPAK
        backend = self._registry.get(kind)

        if not request.flatpak:
            return InstallOutcome.make_failed(
                request.name, kind, NO_IDENTIFIER,
                attempts=[Attempt(backend=kind, result="no-identifier")],
            )
        if backend is None or kind in self._disabled:
            return InstallOutcome.make_failed(
                request.name, kind, "flatpak backend unavailable",
                attempts=[Attempt(backend=kind, result="disabled")],
            )

        ident = backend.identifier_for(request)
        if self._dry_run:
            return InstallOutcome.make_installed(
                request.name, kind, dry_run=True,
                attempts=[Attempt(backend=kind, result="would-install", detail=self._detail(backend, ident))],
            )

        receipt = backend.install(ident)
        if receipt.ok:
            return InstallOutcome.make_installed(
                request.name, kind,
                attempts=[Attempt(backend=kind, result="installed", detail=ident)],
            )

        cause = receipt.error or "install failed"
        logger.warning("%s: Flatpak installation failed: %s", request.name, cause)
        return InstallOutcome.make_failed(
            request.name, kind, cause,
            attempts=[Attempt(backend=kind, result="failed", detail=cause)],
        )

    # ── Priority chain ──────────────────────────────────────────

    def _resolve_chain(self, request: PackageRequest) -> InstallOutcome:
        chain = self._registry.chain()
        attempts: list[Attempt] = []
        last_failure: tuple[BackendKind, str] | None = None
        blocked: BackendKind | None = None

        for backend in chain:
            kind = backend.kind
            ident = backend.identifier_for(request)

            if not ident:
                attempts.append(Attempt(backend=kind, result="no-identifier"))
                continue

            if kind in self._disabled:
                logger.debug("%s: %s disabled for this run", request.name, kind.label)
                attempts.append(Attempt(backend=kind, result="disabled"))
                # An unprobed backend with an identifier was a declared path
                if not backend.probes:
                    blocked = kind
                continue

            if kind in self._pending:
                # Tool not installed yet, so it cannot be queried
                attempts.append(Attempt(
                    backend=kind, result="would-install", detail=self._detail(backend, ident),
                ))
                return InstallOutcome.make_installed(
                    request.name, kind, dry_run=True, attempts=attempts,
                )

            if backend.probes and not backend.query_available(ident):
                logger.debug("%s: not found in %s", request.name, kind.label)
                attempts.append(Attempt(backend=kind, result="miss"))
                continue

            if self._dry_run:
                attempts.append(Attempt(backend=kind, result="would-install", detail=ident))
                return InstallOutcome.make_installed(
                    request.name, kind, dry_run=True, attempts=attempts,
                )

            logger.info("%s: installing via %s (%s)", request.name, kind.label, ident)
            receipt = backend.install(ident)
            if receipt.ok:
                attempts.append(Attempt(backend=kind, result="installed", detail=ident))
                return InstallOutcome.make_installed(request.name, kind, attempts=attempts)

            cause = receipt.error or "install failed"
            logger.warning(
                "%s: found in %s but installation failed: %s", request.name, kind.label, cause,
            )
            attempts.append(Attempt(backend=kind, result="failed", detail=cause))
            last_failure = (kind, cause)

        return self._exhausted(request, chain, attempts, last_failure, blocked)

    def _detail(self, backend: Backend, ident: str) -> str:
        if backend.kind in self._pending:
            return f"{ident} (after bootstrap installs {backend.tool})"
        return ident

    def _exhausted(
        self,
        request: PackageRequest,
        chain: list[Backend],
        attempts: list[Attempt],
        last_failure: tuple[BackendKind, str] | None,
        blocked: BackendKind | None,
    ) -> InstallOutcome:
        """Outcome when no backend installed the package."""
        final = chain[-1] if chain else None

        if last_failure and final is not None and not final.identifier_for(request):
            return InstallOutcome.make_failed(
                request.name, final.kind, NO_IDENTIFIER_AFTER_FAILURE, attempts=attempts,
            )
        if last_failure:
            kind, cause = last_failure
            return InstallOutcome.make_failed(request.name, kind, cause, attempts=attempts)
        if blocked is not None:
            return InstallOutcome.make_failed(
                request.name, blocked, f"{blocked.value} backend unavailable", attempts=attempts,
            )

        logger.info("%s: not found in any repository and no Flatpak ID given", request.name)
        return InstallOutcome.make_skipped(request.name, NO_PATH, attempts=attempts)
