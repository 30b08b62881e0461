"""
Unit tests for configuration loading.
"""
import pytest
from pathlib import Path

from reindex.config import ReindexConfig, get_config, load_config_file, path_from_env


class TestReindexConfig:
    """Test environment driven configuration."""

    def test_defaults_under_home(self, isolated_env):
        """Should place state files under REINDEX_HOME."""
        config = ReindexConfig()

        assert config.home == isolated_env
        assert config.catalog_path == isolated_env / "catalog.ndjson"
        assert config.spool_path == isolated_env / "queue.ndjson"
        assert config.documents_path == isolated_env / "documents.ndjson"
        assert config.fail_fast is True
        assert config.log_level == "WARNING"
        assert config.plugins == []
        assert config.config_path is None

    def test_home_defaults_to_user_dir(self, monkeypatch):
        """Should fall back to ~/.reindex."""
        monkeypatch.delenv("REINDEX_HOME")
        assert ReindexConfig().home == Path.home() / ".reindex"

    def test_env_overrides(self, monkeypatch, tmp_path):
        """Should honor per-file environment overrides."""
        monkeypatch.setenv("REINDEX_CATALOG_PATH", str(tmp_path / "c.ndjson"))
        monkeypatch.setenv("REINDEX_SPOOL_PATH", str(tmp_path / "q.ndjson"))
        monkeypatch.setenv("REINDEX_FAIL_FAST", "false")
        monkeypatch.setenv("REINDEX_LOG_LEVEL", "debug")

        config = get_config()

        assert config.catalog_path == tmp_path / "c.ndjson"
        assert config.spool_path == tmp_path / "q.ndjson"
        assert config.fail_fast is False
        assert config.log_level == "DEBUG"

    def test_invalid_log_level(self, monkeypatch):
        """Should reject unknown log levels."""
        monkeypatch.setenv("REINDEX_LOG_LEVEL", "FOO")

        with pytest.raises(ValueError, match="REINDEX_LOG_LEVEL"):
            ReindexConfig()

    def test_path_from_env(self, monkeypatch, tmp_path):
        """Should prefer the variable over the default file."""
        assert path_from_env("REINDEX_SPOOL_PATH", "x.ndjson", tmp_path) == tmp_path / "x.ndjson"
        monkeypatch.setenv("REINDEX_SPOOL_PATH", "/var/spool/reindex.ndjson")
        assert path_from_env("REINDEX_SPOOL_PATH", "x.ndjson", tmp_path) == Path("/var/spool/reindex.ndjson")

    def test_yaml_file(self, tmp_path):
        """Should load plugins and fail_fast from YAML."""
        config_file = tmp_path / "reindex.yaml"
        config_file.write_text("plugins:\n  - mypkg.indexers:ProjectIndexer\nfail_fast: false\n")

        config = ReindexConfig(config_path=config_file)

        assert config.plugins == ["mypkg.indexers:ProjectIndexer"]
        assert config.fail_fast is False

    def test_yaml_file_from_env(self, monkeypatch, tmp_path):
        """Should read the config path from REINDEX_CONFIG_PATH."""
        config_file = tmp_path / "reindex.yaml"
        config_file.write_text("plugins: []\n")
        monkeypatch.setenv("REINDEX_CONFIG_PATH", str(config_file))

        assert ReindexConfig().config_path == config_file


class TestLoadConfigFile:
    """Test YAML validation."""

    def test_missing_file(self, tmp_path):
        """Should raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config_file(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        """Should treat an empty file as no settings."""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert load_config_file(config_file) == {}

    @pytest.mark.parametrize("content", [
        "- just\n- a list\n",
        "plugins: mypkg:Indexer\n",
        "plugins:\n  - 42\n",
        "fail_fast: sometimes\n",
    ])
    def test_invalid_shapes(self, tmp_path, content):
        """Should raise ValueError for invalid shapes."""
        config_file = tmp_path / "bad.yaml"
        config_file.write_text(content)

        with pytest.raises(ValueError):
            load_config_file(config_file)
