"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from pkgchain.core.models import PackageRequest, InstallOutcome, Receipt
"""

from pkgchain.core.models.outcome import Attempt, BackendKind, InstallOutcome
from pkgchain.core.models.package import PackageRequest
from pkgchain.core.models.receipt import Receipt
from pkgchain.core.models.registry import FlatpakRemote, PackageRegistry, Settings

__all__ = [
    # outcome.py
    "Attempt",
    "BackendKind",
    "FlatpakRemote",
    "InstallOutcome",
    # package.py
    "PackageRequest",
    # registry.py
    "PackageRegistry",
    # receipt.py
    "Receipt",
    "Settings",
]
