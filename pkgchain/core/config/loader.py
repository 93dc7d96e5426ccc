"""
Configuration loader — reads packages.yml into the registry model.

This is the primary entry point for loading the install registry.
It reads YAML, validates against Pydantic schemas, and returns
typed domain objects. When no packages.yml is found the bundled
default registry is used.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from pkgchain.core.models.registry import PackageRegistry

logger = logging.getLogger(__name__)

# Default config filename
REGISTRY_FILE = "packages.yml"

# Shipped with the package
DEFAULT_REGISTRY_PATH = Path(__file__).resolve().parent.parent / "data" / REGISTRY_FILE


class ConfigError(Exception):
    """Raised when the registry file is invalid or missing."""


def find_registry_file(start_dir: Path | None = None) -> Path | None:
    """Search for packages.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to packages.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / REGISTRY_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def resolve_registry_path(path: Path | None = None) -> Path:
    """Explicit path, else nearest packages.yml, else the bundled default."""
    if path is not None:
        return path
    return find_registry_file() or DEFAULT_REGISTRY_PATH


def load_registry(path: Path | None = None) -> PackageRegistry:
    """Load and validate the install registry.

    Args:
        path: Explicit path to packages.yml. If None, searches upward
            and falls back to the bundled registry.

    Returns:
        Validated PackageRegistry, packages in file order.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    path = resolve_registry_path(path)

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading registry from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    if data.get("packages") is None:
        data["packages"] = []

    try:
        registry = PackageRegistry.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid registry in {path}: {e}") from e

    logger.info("Loaded %d packages from %s", len(registry.packages), path)
    return registry
