"""Tests for configuration loading."""
import pytest

from rirekisho_layout.config import LayoutConfig, load_config
from rirekisho_layout.dimensions import PaperSize
from rirekisho_layout.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("LOG_LEVEL", "RIREKISHO_PAPER_SIZE", "RIREKISHO_HIDE_MOTIVATION"):
        monkeypatch.delenv(name, raising=False)


class TestLayoutConfig:
    """Tests for the LayoutConfig model."""

    def test_defaults(self):
        config = LayoutConfig()
        assert config.paper_size is PaperSize.A4
        assert config.hide_motivation is False
        assert config.chronological_order == "asc"
        assert config.log_level == "INFO"

    def test_paper_size_from_string(self):
        assert LayoutConfig(paper_size="B5").paper_size is PaperSize.B5

    def test_unknown_keys_rejected(self):
        with pytest.raises(Exception):
            LayoutConfig(paper="a4")

    def test_merged_ignores_none(self):
        config = LayoutConfig(paper_size="a3").merged(paper_size=None, hide_motivation=True)
        assert config.paper_size is PaperSize.A3
        assert config.hide_motivation is True

    def test_merged_invalid_value(self):
        with pytest.raises(ConfigError):
            LayoutConfig().merged(log_level="LOUD")


class TestLoadConfig:
    """Tests for load_config."""

    def test_load_yaml(self, write_data_file):
        path = write_data_file("rirekisho.yaml", "paper_size: b4\nhide_motivation: true\nchronological_order: desc\n")
        config = load_config(path, use_env=False)
        assert config.paper_size is PaperSize.B4
        assert config.hide_motivation is True
        assert config.chronological_order == "desc"

    def test_empty_file_gives_defaults(self, write_data_file):
        path = write_data_file("empty.yaml", "")
        assert load_config(path, use_env=False) == LayoutConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.yaml", use_env=False)

    def test_invalid_yaml(self, write_data_file):
        path = write_data_file("bad.yaml", "paper_size: [a4\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path, use_env=False)

    def test_non_mapping(self, write_data_file):
        path = write_data_file("list.yaml", "- a4\n- b5\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path, use_env=False)

    def test_invalid_paper_size(self, write_data_file):
        path = write_data_file("bad_paper.yaml", "paper_size: a5\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path, use_env=False)

    def test_environment_overrides_file(self, write_data_file, monkeypatch):
        path = write_data_file("rirekisho.yaml", "paper_size: b4\nlog_level: debug\n")
        monkeypatch.setenv("RIREKISHO_PAPER_SIZE", "letter")
        config = load_config(path)
        assert config.paper_size is PaperSize.LETTER
        assert config.log_level == "DEBUG"
