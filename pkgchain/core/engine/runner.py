"""
Batch runner — bootstrap once, then resolve every registry entry in order.

Best effort: a Skipped or Failed package never stops the batch. Only
a missing primary package manager (raised by bootstrap) or a user
interrupt escapes.

Flow:
    bootstrap → for each request: resolve → report outcome → tally
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from pkgchain.adapters.registry import BackendRegistry
from pkgchain.core.engine.bootstrap import BootstrapResult, bootstrap
from pkgchain.core.engine.resolver import FallbackResolver
from pkgchain.core.models.outcome import BackendKind, InstallOutcome
from pkgchain.core.models.package import PackageRequest

logger = logging.getLogger(__name__)


@dataclass
class BatchReport:
    """Result of running the whole registry."""

    outcomes: list[InstallOutcome] = field(default_factory=list)
    bootstrap: BootstrapResult = field(default_factory=BootstrapResult)
    dry_run: bool = False

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def installed(self) -> int:
        return sum(1 for o in self.outcomes if o.installed)

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.skipped)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.failed)

    @property
    def status(self) -> str:
        if self.failed == 0:
            return "ok"
        if self.installed > 0:
            return "partial"
        return "failed"

    def installed_via(self, kind: BackendKind) -> list[str]:
        return [o.package for o in self.outcomes if o.installed and o.via is kind]

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "dry_run": self.dry_run,
            "total": self.total,
            "installed": self.installed,
            "skipped": self.skipped,
            "failed": self.failed,
            "bootstrap": self.bootstrap.to_dict(),
            "outcomes": [o.to_dict() for o in self.outcomes],
        }


def run_batch(
    requests: Iterable[PackageRequest],
    registry: BackendRegistry,
    dry_run: bool = False,
    on_outcome: Callable[[InstallOutcome], None] | None = None,
) -> BatchReport:
    """Install every request, in order, through the fallback chain.

    Args:
        requests: Registry entries to process.
        registry: Backend chain.
        dry_run: Resolve without installing anything.
        on_outcome: Called with each outcome as soon as it is known.

    Returns:
        BatchReport with exactly one outcome per request.

    Raises:
        PackageManagerMissingError: pacman is not installed.
    """
    boot = bootstrap(registry, dry_run=dry_run)
    resolver = FallbackResolver(registry, boot, dry_run=dry_run)
    report = BatchReport(bootstrap=boot, dry_run=dry_run)

    for request in requests:
        outcome = resolver.resolve(request)
        report.outcomes.append(outcome)

        status_marker = "✓" if outcome.installed else "✗" if outcome.failed else "⊘"
        logger.info(
            "%s %s → %s%s",
            status_marker,
            request.name,
            outcome.status,
            f" ({outcome.via.value})" if outcome.via else "",
        )

        if on_outcome is not None:
            on_outcome(outcome)

    logger.info(
        "Batch complete: %d installed, %d skipped, %d failed",
        report.installed, report.skipped, report.failed,
    )
    return report
