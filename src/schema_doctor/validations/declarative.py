"""Read model definitions from a SQLAlchemy declarative base.

Validators are declared in each column's ``info`` dictionary under the
``"validates"`` key, one entry per validator kind::

    class User(Base):
        __tablename__ = "users"

        id: Mapped[int] = mapped_column(primary_key=True)
        email: Mapped[str] = mapped_column(
            String(64), info={"validates": {"length": {"maximum": 64}}}
        )
        status: Mapped[str] = mapped_column(
            String(16), info={"validates": {"inclusion": {"in": ["new", "vip"]}}}
        )

Single-table inheritance subclasses (mappers with ``single=True``) report
their ``base_mapper`` class as ``base_model``.
"""

from typing import Any

from sqlalchemy import Column, Table
from sqlalchemy.orm import Mapper

from schema_doctor.validations.models import ModelDef, Validator

VALIDATES_KEY = "validates"


class DeclarativeModelProvider:
    """``ValidationMetadataProvider`` over the mappers of a declarative base.

    Args:
        base: A declarative base class (``DeclarativeBase`` subclass or the
            result of ``declarative_base()``) or its ``registry``.
    """

    def __init__(self, base: Any) -> None:
        self._registry = getattr(base, "registry", base)

    def all_models(self) -> list[ModelDef]:
        mappers = sorted(self._registry.mappers, key=lambda m: m.class_.__name__)
        return [self._model_def(mapper) for mapper in mappers]

    def _model_def(self, mapper: Mapper) -> ModelDef:
        table = mapper.local_table if isinstance(mapper.local_table, Table) else None

        inheritance_column = "type"
        if isinstance(mapper.polymorphic_on, Column):
            inheritance_column = mapper.polymorphic_on.name

        return ModelDef(
            name=mapper.class_.__name__,
            table_name=table.name if table is not None else None,
            validators=self._validators(mapper),
            columns={column.name for column in table.columns} if table is not None else set(),
            inheritance_column=inheritance_column,
            base_model=mapper.base_mapper.class_.__name__ if mapper.single else None,
        )

    def _validators(self, mapper: Mapper) -> list[Validator]:
        validators = []
        for column in mapper.columns:
            if not isinstance(column, Column):
                continue
            for kind, options in column.info.get(VALIDATES_KEY, {}).items():
                validators.append(
                    Validator(kind=kind, attributes=[column.name], options=dict(options))
                )
        return validators
