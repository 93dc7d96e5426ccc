"""
Package request model — one entry of the install registry.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class PackageRequest(BaseModel):
    """A single application to install.

    ``name`` is the pacman/AUR identifier, ``flatpak`` the Flatpak
    application ID (empty when the app has no Flatpak build).
    ``force_flatpak`` skips the native chain entirely.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    flatpak: str = ""
    force_flatpak: bool = False

    @model_validator(mode="before")
    @classmethod
    def _from_pipe_string(cls, data: Any) -> Any:
        """Accept the compact ``name|flatpak_id|force`` form."""
        if not isinstance(data, str):
            return data
        parts = [p.strip() for p in data.split("|")]
        if len(parts) > 3:
            raise ValueError(f"Expected 'name|flatpak_id|force', got {data!r}")
        parts += [""] * (3 - len(parts))
        name, flatpak, force = parts
        return {
            "name": name,
            "flatpak": flatpak,
            "force_flatpak": force.lower() == "true",
        }

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Package name must not be empty")
        return v

    @field_validator("flatpak", mode="before")
    @classmethod
    def _flatpak_none_is_empty(cls, v: Any) -> Any:
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v
