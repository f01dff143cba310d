"""Validation metadata provider protocol and a list-backed implementation.

Detectors never enumerate application models through global state; a
``ValidationMetadataProvider`` is passed in explicitly.

Usage:
    from schema_doctor.validations.base import StaticModelProvider
    from schema_doctor.validations.models import ModelDef

    models = StaticModelProvider([ModelDef(name="User", table_name="users")])
    [m.name for m in models.all_models()]
    # ['User']
"""

from collections.abc import Iterable
from typing import Protocol

from schema_doctor.validations.models import ModelDef


class ValidationMetadataProvider(Protocol):
    """Source of the application's registered models and their validators."""

    def all_models(self) -> list[ModelDef]:
        """Return every registered model in a stable order."""
        ...


class StaticModelProvider:
    """``ValidationMetadataProvider`` over a fixed list of model definitions."""

    def __init__(self, models: Iterable[ModelDef]) -> None:
        self._models = list(models)

    def all_models(self) -> list[ModelDef]:
        return list(self._models)
