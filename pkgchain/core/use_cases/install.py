"""
Install use case — load the registry, run the batch, package the result.

The CLI is a thin wrapper over ``run_install``. Fatal conditions
(bad config, missing pacman) come back as ``error`` with an exit
code instead of raising; per-package problems live in the report.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from pkgchain.adapters.registry import BackendRegistry, default_registry
from pkgchain.core.config.loader import ConfigError, load_registry
from pkgchain.core.engine.bootstrap import PackageManagerMissingError
from pkgchain.core.engine.runner import BatchReport, run_batch
from pkgchain.core.models.outcome import InstallOutcome
from pkgchain.core.models.registry import PackageRegistry

logger = logging.getLogger(__name__)

EXIT_ERROR = 1
EXIT_USAGE = 2


@dataclass
class InstallResult:
    """Result of an install run."""

    registry: PackageRegistry | None = None
    report: BatchReport | None = None
    error: str | None = None
    exit_code: int = 0

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        assert self.report is not None
        return self.report.to_dict()


def run_install(
    config_path: Path | None = None,
    only: str | None = None,
    dry_run: bool = False,
    backends: BackendRegistry | None = None,
    on_outcome: Callable[[InstallOutcome], None] | None = None,
) -> InstallResult:
    """Install the registry (or one entry of it).

    Args:
        config_path: Explicit packages.yml; auto-detected when None.
        only: Restrict the run to the package with this name.
        dry_run: Resolve without installing.
        backends: Backend chain; built from the registry settings when None.
        on_outcome: Per-package callback for live output.

    Returns:
        InstallResult. ``exit_code`` is 0 whenever the batch completed,
        whatever the individual outcomes.
    """
    try:
        registry = load_registry(config_path)
    except ConfigError as e:
        return InstallResult(error=str(e), exit_code=EXIT_ERROR)

    requests = registry.packages
    if only is not None:
        requests = registry.only(only)
        if not requests:
            return InstallResult(
                registry=registry,
                error=f"No package named '{only}' in the registry",
                exit_code=EXIT_USAGE,
            )

    if backends is None:
        backends = default_registry(registry.settings)

    try:
        report = run_batch(requests, backends, dry_run=dry_run, on_outcome=on_outcome)
    except PackageManagerMissingError as e:
        logger.error("%s", e)
        return InstallResult(registry=registry, error=str(e), exit_code=EXIT_ERROR)

    return InstallResult(registry=registry, report=report)
