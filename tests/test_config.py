"""Tests for configuration loading and validation."""

import textwrap
from pathlib import Path

import pytest

from schema_doctor.config import (
    ConfigurationError,
    DoctorConfig,
    build_config,
    default_config,
    load_config,
)


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / ".schema-doctor.toml"
    path.write_text(textwrap.dedent(content))
    return path


class TestDefaults:
    """Unset options receive their declared defaults."""

    def test_default_config(self) -> None:
        config = default_config()

        assert isinstance(config, DoctorConfig)
        assert config.globals == {}
        assert config.detectors["incorrect_length_validation"] == {
            "enabled": True,
            "ignore_models": [],
            "ignore_attributes": [],
        }

    def test_load_config_without_path(self) -> None:
        assert load_config(None) == default_config()

    def test_defaults_are_not_shared(self) -> None:
        first = default_config()
        first.detectors["incorrect_length_validation"]["ignore_models"].append("User")

        assert default_config().detectors["incorrect_length_validation"]["ignore_models"] == []


class TestLoadConfig:
    """TOML files are parsed and validated."""

    def test_full_file(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            """
            database_url = "sqlite:///app.db"
            models = "app.models:Base"

            [globals]
            ignore_models = ["Admin"]

            [detectors.incorrect_length_validation]
            ignore_attributes = ["User.email"]
            """,
        )

        config = load_config(path)

        assert config.database_url == "sqlite:///app.db"
        assert config.models == "app.models:Base"
        assert config.globals == {"ignore_models": ["Admin"]}
        assert config.detectors["incorrect_length_validation"] == {
            "enabled": True,
            "ignore_models": [],
            "ignore_attributes": ["User.email"],
        }

    def test_disable_detector(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            """
            [detectors.incorrect_length_validation]
            enabled = false
            """,
        )

        assert load_config(path).detectors["incorrect_length_validation"]["enabled"] is False

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "[detectors\n")

        with pytest.raises(ConfigurationError):
            load_config(path)


class TestValidation:
    """Unknown names and wrong types are rejected."""

    def test_unknown_detector(self) -> None:
        with pytest.raises(ConfigurationError, match="missing_indexes"):
            build_config({"detectors": {"missing_indexes": {}}})

    def test_unknown_option(self) -> None:
        with pytest.raises(ConfigurationError, match="incorrect_length_validation"):
            build_config({"detectors": {"incorrect_length_validation": {"ignore_tables": []}}})

    def test_wrong_option_type(self) -> None:
        with pytest.raises(ConfigurationError):
            build_config({"detectors": {"incorrect_length_validation": {"ignore_models": "User"}}})

    def test_non_global_option_in_globals(self) -> None:
        with pytest.raises(ConfigurationError, match="ignore_attributes"):
            build_config({"globals": {"ignore_attributes": ["User.email"]}})

    def test_wrong_global_type(self) -> None:
        with pytest.raises(ConfigurationError):
            build_config({"globals": {"ignore_models": 3}})

    @pytest.mark.parametrize(
        "data",
        [
            {"detectors": 5},
            {"detectors": ["incorrect_length_validation"]},
            {"globals": "User"},
            {"detectors": {"incorrect_length_validation": 5}},
        ],
    )
    def test_sections_must_be_tables(self, data: dict) -> None:
        with pytest.raises(ConfigurationError):
            build_config(data)

    def test_non_table_section_in_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("detectors = 5\n")

        with pytest.raises(ConfigurationError, match="detectors"):
            load_config(path)

    def test_unknown_top_level_key(self) -> None:
        with pytest.raises(ConfigurationError, match="detector"):
            build_config({"detector": {}})
