"""
Registry model — the ordered list of install requests plus run settings.

Maps directly to ``packages.yml``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from pkgchain.core.models.package import PackageRequest

DEFAULT_FLATPAK_REMOTE = "flathub"
DEFAULT_FLATPAK_REMOTE_URL = "https://flathub.org/repo/flathub.flatpakrepo"


class FlatpakRemote(BaseModel):
    """The Flatpak remote apps are installed from."""

    name: str = DEFAULT_FLATPAK_REMOTE
    url: str = DEFAULT_FLATPAK_REMOTE_URL


class Settings(BaseModel):
    """Run-wide tuning knobs."""

    install_timeout: int = Field(default=1800, gt=0)   # seconds per install
    query_timeout: int = Field(default=60, gt=0)       # seconds per -Si / remote-info
    flatpak_remote: FlatpakRemote = Field(default_factory=FlatpakRemote)


class PackageRegistry(BaseModel):
    """Top-level registry — the full contents of packages.yml."""

    settings: Settings = Field(default_factory=Settings)
    packages: list[PackageRequest] = Field(default_factory=list)

    @field_validator("packages")
    @classmethod
    def _unique_names(cls, v: list[PackageRequest]) -> list[PackageRequest]:
        seen: set[str] = set()
        for pkg in v:
            if pkg.name in seen:
                raise ValueError(f"Duplicate package name: {pkg.name}")
            seen.add(pkg.name)
        return v

    def get(self, name: str) -> PackageRequest | None:
        """Look up a request by canonical name."""
        for pkg in self.packages:
            if pkg.name == name:
                return pkg
        return None

    def only(self, name: str) -> list[PackageRequest]:
        """Filter the registry down to a single entry (empty if absent)."""
        pkg = self.get(name)
        return [pkg] if pkg else []
