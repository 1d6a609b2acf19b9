"""Tests for the snapdiff config loader (snapdiff.yaml)."""

from pathlib import Path

import pytest

from snapdiff.comparer import CopyMode
from snapdiff.config import SnapdiffConfig, find_config, load_config

# --- find_config ---


class TestFindConfig:
    def test_finds_in_start_dir(self, tmp_path: Path):
        cfg = tmp_path / "snapdiff.yaml"
        cfg.write_text("format: json\n", encoding="utf-8")
        assert find_config(tmp_path) == cfg

    def test_finds_in_parent(self, tmp_path: Path):
        cfg = tmp_path / "snapdiff.yaml"
        cfg.write_text("format: json\n", encoding="utf-8")
        child = tmp_path / "sub" / "deep"
        child.mkdir(parents=True)
        assert find_config(child) == cfg

    def test_returns_none_when_missing(self, tmp_path: Path):
        assert find_config(tmp_path) is None

    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert find_config() is None

    def test_ignores_directories_named_config(self, tmp_path: Path):
        (tmp_path / "snapdiff.yaml").mkdir()
        assert find_config(tmp_path) is None


# --- load_config ---


class TestLoadConfig:
    def test_explicit_path(self, tmp_path: Path):
        cfg_path = tmp_path / "snapdiff.yaml"
        cfg_path.write_text(
            "format: yaml\ncopy_mode: shallow\nfail_on_change: true\n",
            encoding="utf-8",
        )
        cfg = load_config(cfg_path)
        assert cfg.config_path == cfg_path.resolve()
        assert cfg.format == "yaml"
        assert cfg.copy_mode is CopyMode.SHALLOW
        assert cfg.fail_on_change is True

    def test_explicit_path_not_found(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_auto_discover(self, tmp_path: Path, monkeypatch):
        (tmp_path / "snapdiff.yaml").write_text("format: json\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert load_config().format == "json"

    def test_auto_discover_disabled(self, tmp_path: Path, monkeypatch):
        (tmp_path / "snapdiff.yaml").write_text("format: json\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert load_config(auto_discover=False) == SnapdiffConfig()

    def test_no_config_returns_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        cfg = load_config()
        assert cfg.config_path is None
        assert cfg.format is None
        assert cfg.copy_mode is None
        assert cfg.fail_on_change is None

    def test_empty_file(self, tmp_path: Path):
        cfg_path = tmp_path / "snapdiff.yaml"
        cfg_path.write_text("", encoding="utf-8")
        cfg = load_config(cfg_path)
        assert cfg.config_path == cfg_path.resolve()
        assert cfg.format is None

    def test_non_mapping(self, tmp_path: Path):
        cfg_path = tmp_path / "snapdiff.yaml"
        cfg_path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Expected a YAML mapping"):
            load_config(cfg_path)

    def test_invalid_format(self, tmp_path: Path):
        cfg_path = tmp_path / "snapdiff.yaml"
        cfg_path.write_text("format: xml\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid format 'xml'"):
            load_config(cfg_path)

    def test_invalid_copy_mode(self, tmp_path: Path):
        cfg_path = tmp_path / "snapdiff.yaml"
        cfg_path.write_text("copy_mode: sideways\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid copy_mode"):
            load_config(cfg_path)

    def test_invalid_fail_on_change(self, tmp_path: Path):
        cfg_path = tmp_path / "snapdiff.yaml"
        cfg_path.write_text("fail_on_change: sometimes\n", encoding="utf-8")
        with pytest.raises(ValueError, match="fail_on_change"):
            load_config(cfg_path)

    def test_config_is_frozen(self):
        cfg = SnapdiffConfig()
        with pytest.raises(AttributeError):
            cfg.format = "json"  # type: ignore[misc]
