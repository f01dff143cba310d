"""Per-run memoizing view over a ``SchemaMetadataProvider``.

One ``CachingSchemaInspector`` is created per inspection run. Every detector
of the run shares it, so each table's indexes, foreign keys and check
constraints are fetched at most once no matter how many detectors ask.

The schema is assumed not to change during a run: cached entries are never
refreshed.

Usage:
    from schema_doctor.schema.inspector import CachingSchemaInspector

    inspector = CachingSchemaInspector(provider)
    inspector.check_constraints("users")   # queries the provider
    inspector.check_constraints("users")   # served from the cache
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from schema_doctor.schema.constraints import extract_check_predicate
from schema_doctor.schema.models import ColumnSchema, ForeignKeySchema, IndexSchema

if TYPE_CHECKING:
    from schema_doctor.adapters.base import SchemaMetadataProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")

POSTGRESQL_ADAPTERS = frozenset({"postgresql", "postgis"})

_PG_CHECK_CONSTRAINTS_SQL = """
    SELECT pg_get_constraintdef(oid, true)
    FROM pg_constraint
    WHERE contype = 'c'
      AND convalidated
      AND conrelid = CAST(:table_name AS regclass)
"""


class CachingSchemaInspector:
    """Memoizes per-table schema lookups for the duration of one run.

    ``primary_key()`` and ``columns()`` delegate straight to the provider,
    which caches them itself. ``indexes()``, ``foreign_keys()`` and
    ``check_constraints()`` are memoized here, keyed by table name.

    Args:
        provider: The schema metadata provider to wrap.
    """

    def __init__(self, provider: SchemaMetadataProvider) -> None:
        self._provider = provider
        self._tables: list[str] | None = None
        self._indexes: dict[str, list[IndexSchema]] = {}
        self._foreign_keys: dict[str, list[ForeignKeySchema]] = {}
        self._check_constraints: dict[str, list[str]] = {}

    def tables(self) -> list[str]:
        if self._tables is None:
            self._tables = list(self._provider.tables())
            logger.debug(f"Found {len(self._tables)} tables")
        return self._tables

    def primary_key(self, table: str) -> ColumnSchema | None:
        name = self._provider.primary_key(table)
        if name is None:
            return None
        return next((column for column in self.columns(table) if column.name == name), None)

    def columns(self, table: str) -> list[ColumnSchema]:
        return self._provider.columns(table)

    def indexes(self, table: str) -> list[IndexSchema]:
        return self._fetch(self._indexes, table, self._provider.indexes, "indexes")

    def foreign_keys(self, table: str) -> list[ForeignKeySchema]:
        return self._fetch(self._foreign_keys, table, self._provider.foreign_keys, "foreign keys")

    def check_constraints(self, table: str) -> list[str]:
        """Return the expressions of the validated check constraints on *table*.

        Retrieval strategy, in order:

        1. The provider lists check constraints natively: keep the validated
           ones and return their expressions.
        2. The backend is PostgreSQL: read validated ``CHECK`` definitions
           from ``pg_constraint`` and strip the ``CHECK (...)`` wrapper.
        3. Otherwise the backend is unsupported and the result is empty.
           Callers must read an empty result as "no information".
        """
        return self._fetch(
            self._check_constraints, table, self._load_check_constraints, "check constraints"
        )

    def is_postgresql(self) -> bool:
        return self._provider.adapter_name().lower() in POSTGRESQL_ADAPTERS

    def _load_check_constraints(self, table: str) -> list[str]:
        if self._provider.supports_check_constraints():
            return [
                constraint.expression
                for constraint in self._provider.check_constraints(table)
                if constraint.validated
            ]

        if self.is_postgresql():
            definitions = self._provider.select_values(
                _PG_CHECK_CONSTRAINTS_SQL,
                {"table_name": self._provider.quote_table_name(table)},
            )
            predicates = (extract_check_predicate(definition) for definition in definitions)
            return [predicate for predicate in predicates if predicate is not None]

        logger.debug(
            f"Check constraints are not supported on {self._provider.adapter_name()}; "
            f"treating {table} as having no information"
        )
        return []

    def _fetch(
        self,
        cache: dict[str, list[T]],
        table: str,
        loader: Callable[[str], list[T]],
        kind: str,
    ) -> list[T]:
        if table not in cache:
            cache[table] = list(loader(table))
            logger.debug(f"Cached {kind} for {table}: {len(cache[table])} entries")
        return cache[table]
