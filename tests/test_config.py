"""Tests for TOML-backed report configuration."""

from pathlib import Path

import pytest

from heapgraph_cli import config
from heapgraph_cli.config_manager import (
    clear_report_config,
    load_full_config,
    load_report_config,
    save_report_config,
)


class TestReportConfig:
    """Tests for load/save/clear of the [report] section."""

    def test_defaults_without_file(self):
        assert load_report_config() == {"rows": config.DEFAULT_ROWS, "pretty": False}

    def test_save_and_load(self):
        settings = save_report_config(rows=25, pretty=True)

        assert settings == {"rows": 25, "pretty": True}
        assert config.CONFIG_FILE.exists()
        assert load_report_config() == {"rows": 25, "pretty": True}

    def test_partial_update_keeps_other_values(self):
        save_report_config(rows=7)
        save_report_config(pretty=True)

        assert load_report_config() == {"rows": 7, "pretty": True}

    def test_other_sections_preserved(self):
        config.CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        config.CONFIG_FILE.write_text('[other]\nkey = "value"\n', encoding="utf-8")

        save_report_config(rows=3)
        clear_report_config()

        assert load_full_config() == {"other": {"key": "value"}}

    def test_invalid_values_fall_back(self):
        config.CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        config.CONFIG_FILE.write_text('[report]\nrows = -4\npretty = "yes"\n', encoding="utf-8")

        assert load_report_config() == {"rows": config.DEFAULT_ROWS, "pretty": False}

    def test_unparseable_file_falls_back(self):
        config.CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        config.CONFIG_FILE.write_text("[report\nrows = ", encoding="utf-8")

        assert load_report_config()["rows"] == config.DEFAULT_ROWS

    def test_rejects_non_positive_rows(self):
        with pytest.raises(ValueError):
            save_report_config(rows=0)

    def test_config_file_is_isolated(self, tmp_path: Path):
        assert config.CONFIG_FILE == tmp_path / "home" / "config.toml"
