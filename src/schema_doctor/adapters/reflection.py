"""SQLAlchemy reflection-backed schema provider.

Provides ``SqlAlchemySchemaProvider``, an implementation of the
``SchemaMetadataProvider`` protocol over a synchronous SQLAlchemy ``Engine``.
Table, column, index and foreign key metadata come from SQLAlchemy's
reflection ``Inspector``, which caches every answer for its own lifetime.

Usage:
    from sqlalchemy import create_engine
    from schema_doctor.adapters.reflection import SqlAlchemySchemaProvider

    provider = SqlAlchemySchemaProvider(create_engine("sqlite:///app.db"))
    provider.columns("users")
"""

import logging
from typing import Any

from sqlalchemy import inspect, text
from sqlalchemy import types as sqltypes
from sqlalchemy.engine import Engine

from schema_doctor.schema.models import (
    CheckConstraintSchema,
    ColumnSchema,
    ForeignKeySchema,
    IndexSchema,
)

logger = logging.getLogger(__name__)

# Order matters: Enum and Text are subclasses of String, Float of Numeric.
_TYPE_CATEGORIES: list[tuple[type[sqltypes.TypeEngine], str]] = [
    (sqltypes.Enum, "enum"),
    (sqltypes.Text, "text"),
    (sqltypes.String, "string"),
    (sqltypes.Integer, "integer"),
    (sqltypes.Float, "float"),
    (sqltypes.Numeric, "decimal"),
    (sqltypes.Boolean, "boolean"),
    (sqltypes.DateTime, "datetime"),
    (sqltypes.Date, "date"),
    (sqltypes.Time, "time"),
    (sqltypes.LargeBinary, "binary"),
]

# Dialects whose reflected check constraints are always enforced.
_NATIVE_CHECK_CONSTRAINT_DIALECTS = frozenset({"sqlite", "mysql", "mariadb"})


def type_category(column_type: sqltypes.TypeEngine) -> str:
    """Map a reflected SQLAlchemy type to a coarse category name.

    Example:
        >>> type_category(sqltypes.VARCHAR(64))
        'string'
        >>> type_category(sqltypes.TEXT())
        'text'
    """
    for type_class, category in _TYPE_CATEGORIES:
        if isinstance(column_type, type_class):
            return category
    return "other"


class SqlAlchemySchemaProvider:
    """``SchemaMetadataProvider`` over SQLAlchemy reflection.

    PostgreSQL check constraints are not listed natively: SQLAlchemy does
    not expose ``pg_constraint.convalidated`` uniformly, so the PostgreSQL
    path is left to ``CachingSchemaInspector``'s catalog query through
    ``select_values()``.

    Args:
        engine: Synchronous SQLAlchemy engine.
        schema: Optional database schema to inspect (default: the
            connection's default schema).
    """

    def __init__(self, engine: Engine, schema: str | None = None) -> None:
        self._engine = engine
        self._schema = schema
        self._inspector = inspect(engine)

    def adapter_name(self) -> str:
        return self._engine.dialect.name

    def tables(self) -> list[str]:
        return self._inspector.get_table_names(schema=self._schema)

    def primary_key(self, table: str) -> str | None:
        constraint = self._inspector.get_pk_constraint(table, schema=self._schema)
        columns = constraint.get("constrained_columns") or []
        # Composite keys have no single primary key column
        return columns[0] if len(columns) == 1 else None

    def columns(self, table: str) -> list[ColumnSchema]:
        result = []
        for column in self._inspector.get_columns(table, schema=self._schema):
            column_type = column["type"]
            schema_column = ColumnSchema(
                name=column["name"],
                type_category=type_category(column_type),
                is_nullable=column.get("nullable", True),
            )
            if schema_column.is_textual:
                schema_column = schema_column.model_copy(
                    update={"limit": getattr(column_type, "length", None)}
                )
            result.append(schema_column)
        return result

    def indexes(self, table: str) -> list[IndexSchema]:
        return [
            IndexSchema(
                name=index.get("name"),
                columns=list(index.get("column_names") or []),
                is_unique=bool(index.get("unique")),
            )
            for index in self._inspector.get_indexes(table, schema=self._schema)
        ]

    def foreign_keys(self, table: str) -> list[ForeignKeySchema]:
        return [
            ForeignKeySchema(
                name=fk.get("name"),
                columns=list(fk["constrained_columns"]),
                references_table=fk["referred_table"],
                references_columns=list(fk["referred_columns"]),
                on_delete=(fk.get("options") or {}).get("ondelete"),
            )
            for fk in self._inspector.get_foreign_keys(table, schema=self._schema)
        ]

    def supports_check_constraints(self) -> bool:
        return self.adapter_name() in _NATIVE_CHECK_CONSTRAINT_DIALECTS

    def check_constraints(self, table: str) -> list[CheckConstraintSchema]:
        return [
            CheckConstraintSchema(
                expression=constraint["sqltext"],
                name=constraint.get("name"),
            )
            for constraint in self._inspector.get_check_constraints(table, schema=self._schema)
        ]

    def quote_table_name(self, table: str) -> str:
        preparer = self._engine.dialect.identifier_preparer
        if self._schema:
            return f"{preparer.quote_schema(self._schema)}.{preparer.quote(table)}"
        return preparer.quote(table)

    def select_values(self, sql: str, params: dict[str, Any] | None = None) -> list[Any]:
        logger.debug(f"Catalog query on {self.adapter_name()}: {params or {}}")
        with self._engine.connect() as conn:
            return list(conn.execute(text(sql), params or {}).scalars())
