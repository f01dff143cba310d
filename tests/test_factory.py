"""Tests for URL resolution and provider construction."""

import textwrap
from pathlib import Path

import pytest

from schema_doctor.adapters.reflection import SqlAlchemySchemaProvider
from schema_doctor.config.models import DoctorConfig
from schema_doctor.factory import (
    DATABASE_URL_ENV,
    DatabaseUrlNotFoundError,
    ModelsNotFoundError,
    create_provider,
    load_model_provider,
    normalize_database_url,
    resolve_database_url,
)
from schema_doctor.validations.base import StaticModelProvider
from schema_doctor.validations.declarative import DeclarativeModelProvider


class TestNormalizeDatabaseUrl:
    """PostgreSQL URLs use the psycopg driver with a connect timeout."""

    def test_postgres_alias(self) -> None:
        assert (
            normalize_database_url("postgres://u:p@localhost:5432/app")
            == "postgresql+psycopg://u:p@localhost:5432/app?connect_timeout=10"
        )

    def test_postgresql_scheme(self) -> None:
        assert (
            normalize_database_url("postgresql://localhost/app?sslmode=require")
            == "postgresql+psycopg://localhost/app?sslmode=require&connect_timeout=10"
        )

    def test_existing_timeout_kept(self) -> None:
        url = "postgresql+psycopg://localhost/app?connect_timeout=3"
        assert normalize_database_url(url) == url

    def test_other_backends_unchanged(self) -> None:
        assert normalize_database_url("sqlite:///app.db") == "sqlite:///app.db"
        assert normalize_database_url("mysql+pymysql://localhost/app") == "mysql+pymysql://localhost/app"


class TestResolveDatabaseUrl:
    """Explicit value, then environment, then config file."""

    def test_explicit_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(DATABASE_URL_ENV, "sqlite:///env.db")
        config = DoctorConfig(database_url="sqlite:///config.db")

        assert resolve_database_url("sqlite:///cli.db", config) == "sqlite:///cli.db"

    def test_env_before_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(DATABASE_URL_ENV, "sqlite:///env.db")
        config = DoctorConfig(database_url="sqlite:///config.db")

        assert resolve_database_url(None, config) == "sqlite:///env.db"

    def test_config_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(DATABASE_URL_ENV, raising=False)

        assert resolve_database_url(None, DoctorConfig(database_url="sqlite:///c.db")) == "sqlite:///c.db"

    def test_nothing_configured(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(DATABASE_URL_ENV, raising=False)

        with pytest.raises(DatabaseUrlNotFoundError):
            resolve_database_url(None, DoctorConfig())


class TestCreateProvider:
    def test_sqlite(self) -> None:
        provider = create_provider("sqlite://")

        assert isinstance(provider, SqlAlchemySchemaProvider)
        assert provider.adapter_name() == "sqlite"
        assert provider.tables() == []


class TestLoadModelProvider:
    """Model sources are TOML files or module:Base references."""

    def test_toml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "models.toml"
        path.write_text(
            textwrap.dedent(
                """
                [[models]]
                name = "User"
                table_name = "users"
                """
            )
        )

        provider = load_model_provider(str(path))

        assert isinstance(provider, StaticModelProvider)
        assert [m.name for m in provider.all_models()] == ["User"]

    def test_declarative_base(self) -> None:
        provider = load_model_provider("test_declarative:Base")

        assert isinstance(provider, DeclarativeModelProvider)
        assert "User" in [m.name for m in provider.all_models()]

    def test_config_fallback(self, tmp_path: Path) -> None:
        path = tmp_path / "models.toml"
        path.write_text("")

        provider = load_model_provider(None, DoctorConfig(models=str(path)))

        assert provider.all_models() == []

    def test_nothing_configured(self) -> None:
        with pytest.raises(ModelsNotFoundError):
            load_model_provider(None, DoctorConfig())

    def test_not_a_reference(self) -> None:
        with pytest.raises(ModelsNotFoundError):
            load_model_provider("app.models")

    def test_missing_module(self) -> None:
        with pytest.raises(ImportError):
            load_model_provider("no_such_module_here:Base")
