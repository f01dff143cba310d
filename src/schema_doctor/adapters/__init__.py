"""Schema metadata providers.

Provides the ``SchemaMetadataProvider`` Protocol and the SQLAlchemy
reflection-backed implementation.

Usage:
    from schema_doctor.adapters import SchemaMetadataProvider, SqlAlchemySchemaProvider
"""

from schema_doctor.adapters.base import SchemaMetadataProvider
from schema_doctor.adapters.reflection import SqlAlchemySchemaProvider

__all__ = [
    "SchemaMetadataProvider",
    "SqlAlchemySchemaProvider",
]
