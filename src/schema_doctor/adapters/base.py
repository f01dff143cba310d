"""Schema metadata provider protocol definition.

Defines the ``SchemaMetadataProvider`` Protocol that every database backend
must implement to be inspected. All methods are synchronous: an inspection
run is a single sequential pass over a schema snapshot.

Usage:
    from schema_doctor.adapters.base import SchemaMetadataProvider

    def list_limits(provider: SchemaMetadataProvider) -> dict[str, int | None]:
        return {
            f"{table}.{column.name}": column.limit
            for table in provider.tables()
            for column in provider.columns(table)
        }
"""

from typing import Any, Protocol

from schema_doctor.schema.models import (
    CheckConstraintSchema,
    ColumnSchema,
    ForeignKeySchema,
    IndexSchema,
)


class SchemaMetadataProvider(Protocol):
    """Connection-like object answering structural questions about a database.

    Providers are expected to cache ``primary_key()`` and ``columns()``
    themselves; ``CachingSchemaInspector`` delegates those two directly and
    memoizes everything else.
    """

    def adapter_name(self) -> str:
        """Return the backend identity (e.g. ``"postgresql"``, ``"sqlite"``)."""
        ...

    def tables(self) -> list[str]:
        """Return the names of all tables, in a stable order."""
        ...

    def primary_key(self, table: str) -> str | None:
        """Return the primary key column name, or None if there isn't exactly one."""
        ...

    def columns(self, table: str) -> list[ColumnSchema]:
        """Return the columns of *table* in declaration order."""
        ...

    def indexes(self, table: str) -> list[IndexSchema]:
        """Return the indexes of *table* (excluding the primary key)."""
        ...

    def foreign_keys(self, table: str) -> list[ForeignKeySchema]:
        """Return the foreign keys declared on *table*."""
        ...

    def supports_check_constraints(self) -> bool:
        """True if ``check_constraints()`` reports constraints with validity."""
        ...

    def check_constraints(self, table: str) -> list[CheckConstraintSchema]:
        """Return the check constraints of *table*.

        Only called when ``supports_check_constraints()`` is True.
        """
        ...

    def quote_table_name(self, table: str) -> str:
        """Quote *table* as an identifier in the backend's dialect."""
        ...

    def select_values(self, sql: str, params: dict[str, Any] | None = None) -> list[Any]:
        """Run a raw catalog query and return the first column of every row.

        Args:
            sql: SQL text with ``:name`` style bound parameters.
            params: Values for the bound parameters.
        """
        ...
