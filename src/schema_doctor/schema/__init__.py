"""Schema snapshots, introspection caching, and constraint matching.

Usage:
    from schema_doctor.schema import CachingSchemaInspector, ColumnSchema
    from schema_doctor.schema import length_limit_from_constraint
"""

from schema_doctor.schema.constraints import (
    extract_check_predicate,
    length_limit_from_constraint,
    length_limit_from_constraints,
)
from schema_doctor.schema.inspector import CachingSchemaInspector
from schema_doctor.schema.models import (
    CheckConstraintSchema,
    ColumnSchema,
    ForeignKeySchema,
    IndexSchema,
)

__all__ = [
    "CachingSchemaInspector",
    "ColumnSchema",
    "IndexSchema",
    "ForeignKeySchema",
    "CheckConstraintSchema",
    "extract_check_predicate",
    "length_limit_from_constraint",
    "length_limit_from_constraints",
]
