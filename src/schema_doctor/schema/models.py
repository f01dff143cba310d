"""Pydantic models for schema snapshots.

This module contains the read-only values a ``SchemaMetadataProvider``
returns for one table:
- ColumnSchema: name, type category, length limit, nullability
- IndexSchema, ForeignKeySchema: structural metadata
- CheckConstraintSchema: raw predicate text and its validity flag

None of these are mutated after being fetched; ``CachingSchemaInspector``
hands the same instances to every detector of a run.
"""

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Column
# ============================================================================


class ColumnSchema(BaseModel):
    """Schema for a database column.

    Example:
        >>> col = ColumnSchema(name="email", type_category="string", limit=64)
        >>> col.is_nullable
        True
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type_category: str  # string, text, integer, decimal, ...
    limit: int | None = None
    is_nullable: bool = True

    @property
    def is_textual(self) -> bool:
        """True for string and text columns."""
        return self.type_category in ("string", "text")


# ============================================================================
# Indexes, foreign keys, check constraints
# ============================================================================


class IndexSchema(BaseModel):
    """Schema for a database index."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    columns: list[str | None] = Field(default_factory=list)  # None for expressions
    is_unique: bool = False


class ForeignKeySchema(BaseModel):
    """Schema for a foreign key constraint."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    columns: list[str] = Field(default_factory=list)
    references_table: str
    references_columns: list[str] = Field(default_factory=list)
    on_delete: str | None = None


class CheckConstraintSchema(BaseModel):
    """Schema for a check constraint.

    ``expression`` is the predicate in the backend's SQL dialect, without
    the ``CHECK (...)`` wrapper. Constraints added as ``NOT VALID`` carry
    ``validated=False`` and are ignored by detectors.
    """

    model_config = ConfigDict(frozen=True)

    expression: str
    validated: bool = True
    name: str | None = None
