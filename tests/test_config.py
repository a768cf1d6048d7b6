"""Tests for configuration loading."""

import pytest
import tomllib
from pathlib import Path

from config import Config, load_config


class TestLoadConfig:
    """Tests for load_config."""

    def test_creates_default_config_when_missing(self, tmp_path):
        """Test that a missing config file is written with defaults."""
        config_path = tmp_path / "famfin.toml"

        config = load_config(config_path)

        assert config_path.exists()
        assert config.db_filename == "famfin.db"
        assert config.log_level == "INFO"
        assert config.import_max_row_count == 100
        assert config.enable_reset is False

        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        assert data["imports"]["max_row_count"] == 100
        assert data["database"]["filename"] == "famfin.db"

    def test_reads_existing_config(self, tmp_path):
        config_path = tmp_path / "famfin.toml"
        config_path.write_text(
            f'base_dir = "{tmp_path / "data"}"\n'
            "[database]\n"
            'filename = "custom.db"\n'
            "[logging]\n"
            'level = "DEBUG"\n'
            "[imports]\n"
            "max_row_count = 25\n"
            "[reset]\n"
            "enabled = true\n"
        )

        config = load_config(config_path)

        assert config.base_dir == tmp_path / "data"
        assert config.db_path == tmp_path / "data" / "db" / "custom.db"
        assert config.log_dir == tmp_path / "data" / "logs"
        assert config.log_level == "DEBUG"
        assert config.import_max_row_count == 25
        assert config.enable_reset is True

    def test_missing_sections_use_defaults(self, tmp_path):
        config_path = tmp_path / "famfin.toml"
        config_path.write_text(f'base_dir = "{tmp_path}"\n')

        config = load_config(config_path)

        assert config.db_data_dir == tmp_path / "db"
        assert config.import_max_row_count == 100

    def test_invalid_max_row_count_raises_error(self, tmp_path):
        config_path = tmp_path / "famfin.toml"
        config_path.write_text("[imports]\nmax_row_count = 0\n")

        with pytest.raises(ValueError, match="max_row_count"):
            load_config(config_path)

    def test_db_path(self):
        config = Config(
            base_dir=Path("/tmp/x"),
            db_data_dir=Path("/tmp/x/db"),
            db_filename="a.db",
            log_level="INFO",
            log_dir=Path("/tmp/x/logs"),
        )

        assert config.db_path == Path("/tmp/x/db/a.db")
