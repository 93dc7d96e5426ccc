"""pkgchain — install desktop applications through a pacman → AUR → Flatpak fallback chain."""

__version__ = "0.1.0"
