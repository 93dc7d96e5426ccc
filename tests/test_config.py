"""
Tests for configuration loading — packages.yml parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from pkgchain.core.config.loader import (
    DEFAULT_REGISTRY_PATH,
    ConfigError,
    find_registry_file,
    load_registry,
    resolve_registry_path,
)


class TestLoadRegistry:
    def test_load_valid(self, registry_yml: Path):
        registry = load_registry(registry_yml)
        assert [p.name for p in registry.packages] == ["brave-bin", "discord", "obscure-pkg"]
        assert registry.packages[1].force_flatpak is True
        assert registry.packages[2].flatpak == ""
        assert registry.settings.install_timeout == 600
        assert registry.settings.query_timeout == 30

    def test_pipe_strings(self, tmp_path: Path):
        path = tmp_path / "packages.yml"
        path.write_text(textwrap.dedent("""\
            packages:
              - "vlc|org.videolan.VLC|false"
              - "discord|com.discordapp.Discord|true"
        """))
        registry = load_registry(path)
        assert registry.packages[0].flatpak == "org.videolan.VLC"
        assert registry.packages[1].force_flatpak is True

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "packages.yml"
        path.write_text("")
        assert load_registry(path).packages == []

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_registry(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "packages.yml"
        path.write_text("packages: [unclosed")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_registry(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "packages.yml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_registry(path)

    def test_invalid_entry(self, tmp_path: Path):
        path = tmp_path / "packages.yml"
        path.write_text("packages:\n  - flatpak: org.example.App\n")
        with pytest.raises(ConfigError, match="Invalid registry"):
            load_registry(path)

    def test_duplicate_entry(self, tmp_path: Path):
        path = tmp_path / "packages.yml"
        path.write_text("packages:\n  - name: vlc\n  - name: vlc\n")
        with pytest.raises(ConfigError, match="Duplicate"):
            load_registry(path)


class TestBundledRegistry:
    def test_bundled_file_exists(self):
        assert DEFAULT_REGISTRY_PATH.is_file()

    def test_bundled_registry(self):
        registry = load_registry(DEFAULT_REGISTRY_PATH)
        names = [p.name for p in registry.packages]
        assert len(names) == 15
        assert names[0] == "brave-bin"
        assert names[-1] == "zoom"
        forced = [p.name for p in registry.packages if p.force_flatpak]
        assert forced == ["discord"]
        assert all(p.flatpak for p in registry.packages)


class TestFindRegistryFile:
    def test_finds_in_current_dir(self, registry_yml: Path):
        assert find_registry_file(registry_yml.parent) == registry_yml

    def test_walks_up(self, registry_yml: Path):
        nested = registry_yml.parent / "a" / "b"
        nested.mkdir(parents=True)
        assert find_registry_file(nested) == registry_yml

    def test_none_when_absent(self, tmp_path: Path):
        assert find_registry_file(tmp_path) is None

    def test_resolve_falls_back_to_bundled(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert resolve_registry_path() == DEFAULT_REGISTRY_PATH

    def test_resolve_explicit_wins(self, tmp_path: Path):
        explicit = tmp_path / "custom.yml"
        assert resolve_registry_path(explicit) == explicit
