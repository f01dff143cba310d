"""Provider factory.

Resolves where the schema and the model definitions come from and builds
the matching providers.

Database URL priority:
1. Explicit value (``--database-url``)
2. ``SCHEMA_DOCTOR_DATABASE_URL`` env var
3. ``database_url`` in the configuration file
"""

import importlib
import logging
import os
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from schema_doctor.adapters.reflection import SqlAlchemySchemaProvider
from schema_doctor.config.models import DoctorConfig
from schema_doctor.validations.base import ValidationMetadataProvider
from schema_doctor.validations.declarative import DeclarativeModelProvider
from schema_doctor.validations.loader import load_models

logger = logging.getLogger(__name__)

DATABASE_URL_ENV = "SCHEMA_DOCTOR_DATABASE_URL"


class DatabaseUrlNotFoundError(Exception):
    """Raised when no database URL is configured."""

    pass


class ModelsNotFoundError(Exception):
    """Raised when no model source is configured."""

    pass


def normalize_database_url(database_url: str) -> str:
    """Normalize PostgreSQL URLs to the psycopg (v3) driver.

    ``postgres://`` (Heroku, Railway, Supabase alias) and ``postgresql://``
    both become ``postgresql+psycopg://``, with ``connect_timeout=10``
    appended unless already present. Other URLs are returned unchanged.

    Example:
        >>> normalize_database_url("postgres://u@localhost/app")
        'postgresql+psycopg://u@localhost/app?connect_timeout=10'
    """
    url = database_url
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    if url.startswith("postgresql://"):
        url = "postgresql+psycopg://" + url[len("postgresql://"):]

    if url.startswith("postgresql+psycopg://") and "connect_timeout" not in url:
        separator = "&" if "?" in url else "?"
        url = f"{url}{separator}connect_timeout=10"
    return url


def resolve_database_url(database_url: str | None = None, config: DoctorConfig | None = None) -> str:
    """Return the database URL to inspect.

    Raises:
        DatabaseUrlNotFoundError: If no source provides a URL.
    """
    if database_url:
        return database_url

    env_url = os.environ.get(DATABASE_URL_ENV)
    if env_url:
        return env_url

    if config is not None and config.database_url:
        return config.database_url

    raise DatabaseUrlNotFoundError(
        "No database URL configured.\n"
        f"Pass --database-url, set {DATABASE_URL_ENV}, or add database_url to the config file."
    )


def create_schema_engine(database_url: str, **kwargs: Any) -> Engine:
    """Create a synchronous SQLAlchemy engine for introspection."""
    return create_engine(normalize_database_url(database_url), **kwargs)


def create_provider(
    database_url: str,
    schema: str | None = None,
    **engine_kwargs: Any,
) -> SqlAlchemySchemaProvider:
    """Create a schema provider for *database_url*.

    Args:
        database_url: Database to inspect.
        schema: Optional database schema (default: the connection's default).
        **engine_kwargs: Forwarded to ``create_engine``.
    """
    engine = create_schema_engine(database_url, **engine_kwargs)
    logger.debug(f"Inspecting {engine.dialect.name} database")
    return SqlAlchemySchemaProvider(engine, schema=schema)


def load_model_provider(source: str | None = None, config: DoctorConfig | None = None) -> ValidationMetadataProvider:
    """Build the model provider from a ``module:Base`` reference or a TOML path.

    Args:
        source: Explicit model source (``--models``). Falls back to the
            ``models`` entry of *config*.
        config: Loaded configuration.

    Raises:
        ModelsNotFoundError: If no source is configured.
        FileNotFoundError: If a TOML source doesn't exist.
        ImportError: If the module of a ``module:Base`` source can't be imported.
        AttributeError: If the module has no such attribute.
    """
    if not source and config is not None:
        source = config.models
    if not source:
        raise ModelsNotFoundError(
            "No models configured.\n"
            "Pass --models (module:Base or a .toml file) or add models to the config file."
        )

    if source.endswith(".toml"):
        return load_models(Path(source))

    module_name, _, attribute = source.partition(":")
    if not attribute:
        raise ModelsNotFoundError(f"Expected module:Base or a .toml file, got {source!r}")

    module = importlib.import_module(module_name)
    return DeclarativeModelProvider(getattr(module, attribute))
