"""Package backends — one module per ecosystem."""

from pkgchain.adapters.packages.aur import AurBackend
from pkgchain.adapters.packages.flatpak import FlatpakBackend
from pkgchain.adapters.packages.pacman import PacmanBackend

__all__ = ["AurBackend", "FlatpakBackend", "PacmanBackend"]
