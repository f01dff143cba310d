"""Base class and configuration resolution for all detectors.

A detector declares its options, inspects the schema and the application
models during ``detect()``, records typed problems with ``problem()`` and
renders each one with ``message()``. ``Detector.run()`` drives one pass and
writes one line per problem to the output sink.

Usage:
    from schema_doctor.detectors.base import Detector, OptionSpec

    class MissingThing(Detector[str]):
        description = "detect missing things"
        options = {"ignore_tables": OptionSpec("tables to skip", is_global=True)}

        def detect(self) -> None:
            ...

        def message(self, problem: str) -> str:
            return f"{problem} is missing"
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TextIO, TypeVar

from schema_doctor.schema.inspector import CachingSchemaInspector
from schema_doctor.schema.models import ColumnSchema
from schema_doctor.validations.base import ValidationMetadataProvider
from schema_doctor.validations.models import ModelDef

if TYPE_CHECKING:
    from schema_doctor.config.models import DoctorConfig

logger = logging.getLogger(__name__)

ProblemT = TypeVar("ProblemT")


class UnknownOptionError(Exception):
    """Raised when a detector reads an option it doesn't declare."""

    pass


class ImplementationMissingError(NotImplementedError):
    """Raised when a detector doesn't override a required hook."""

    pass


@dataclass(frozen=True)
class OptionSpec:
    """Declared metadata for one detector option.

    Attributes:
        description: Human-readable help text.
        annotation: Type the configured value is validated against.
        default_factory: Produces the value used when the option isn't configured.
        is_global: Also read the same-named entry of the global configuration.
    """

    description: str
    annotation: Any = list[str]
    default_factory: Callable[[], Any] = field(default=list)
    is_global: bool = False


BASE_CONFIG: dict[str, OptionSpec] = {
    "enabled": OptionSpec(
        "set to false to disable the detector altogether",
        annotation=bool,
        default_factory=lambda: True,
    ),
}


def resolve_option(config: DoctorConfig, detector: type[Detector], option: str) -> Any:
    """Return the effective value of *option* for *detector*.

    Non-global options resolve to the local value. Global options resolve to
    the local value followed by the global one, so local entries win in
    "first match" lookups.

    Raises:
        UnknownOptionError: If *detector* doesn't declare *option*.
        KeyError: If the configuration lacks the local value.
        TypeError: If a global option isn't a list; no merge rule exists
            for scalar or mapping globals.

    Example:
        >>> config = DoctorConfig(
        ...     globals={"ignore_models": ["Admin"]},
        ...     detectors={"incorrect_length_validation": {"ignore_models": ["User"]}},
        ... )
        >>> resolve_option(config, IncorrectLengthValidation, "ignore_models")
        ['User', 'Admin']
    """
    schema = detector.config_schema()
    if option not in schema:
        raise UnknownOptionError(
            f"{detector.identifier()} has no option {option!r}. "
            f"Available: {', '.join(schema)}"
        )

    local = config.detectors[detector.identifier()][option]
    if not schema[option].is_global:
        return local

    global_value = config.globals.get(option)
    if global_value is None:
        return local

    if not isinstance(local, (list, tuple)) or not isinstance(global_value, (list, tuple)):
        raise TypeError(f"Global option {option!r} has no merge rule for non-list values")

    return [*local, *global_value]


class Detector(Generic[ProblemT]):
    """Base class for all detectors.

    Subclasses set ``description`` and ``options`` and implement
    ``detect()`` and ``message()``.
    """

    description: ClassVar[str] = ""
    options: ClassVar[dict[str, OptionSpec]] = {}

    def __init__(
        self,
        config: DoctorConfig,
        schema_inspector: CachingSchemaInspector,
        models: ValidationMetadataProvider,
        io: TextIO,
    ) -> None:
        self._config = config
        self._schema_inspector = schema_inspector
        self._models = models
        self._io = io
        self._problems: list[ProblemT] = []

    # ------------------------------------------------------------------
    # Class-level metadata
    # ------------------------------------------------------------------

    @classmethod
    def config_schema(cls) -> dict[str, OptionSpec]:
        """Return the declared options, including ``enabled``."""
        return {**cls.options, **BASE_CONFIG}

    @classmethod
    def identifier(cls) -> str:
        """Return the snake_case name used as the configuration key."""
        name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", cls.__name__)
        return re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name).lower()

    @classmethod
    def locals_and_globals(cls) -> tuple[list[str], list[str]]:
        """Return all option names, and the names of the global ones."""
        schema = cls.config_schema()
        return list(schema), [name for name, spec in schema.items() if spec.is_global]

    @classmethod
    def run(
        cls,
        config: DoctorConfig,
        schema_inspector: CachingSchemaInspector,
        models: ValidationMetadataProvider,
        io: TextIO,
    ) -> bool:
        """Run one detection pass and write every problem to *io*.

        Returns:
            True if no problems were found (or the detector is disabled).
        """
        return cls(config, schema_inspector, models, io).execute()

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def execute(self) -> bool:
        self._problems = []

        if self.config("enabled"):
            logger.debug(f"Running {self.identifier()}")
            self.detect()
        else:
            logger.debug(f"Skipping {self.identifier()}: disabled")

        for problem in self._problems:
            self._io.write(f"{self.message(problem)}\n")

        success = not self._problems
        logger.debug(f"{self.identifier()} found {len(self._problems)} problems")
        self._problems = []
        return success

    def detect(self) -> None:
        raise ImplementationMissingError(f"{type(self).__name__}.detect() must be implemented")

    def message(self, problem: ProblemT) -> str:
        raise ImplementationMissingError(f"{type(self).__name__}.message() must be implemented")

    def problem(self, problem: ProblemT) -> None:
        self._problems.append(problem)

    def config(self, option: str) -> Any:
        return resolve_option(self._config, type(self), option)

    # ------------------------------------------------------------------
    # Schema and model helpers
    # ------------------------------------------------------------------

    def tables(self) -> list[str]:
        return self._schema_inspector.tables()

    def columns(self, table: str) -> list[ColumnSchema]:
        return self._schema_inspector.columns(table)

    def check_constraints(self, table: str) -> list[str]:
        return self._schema_inspector.check_constraints(table)

    def each_model(
        self,
        exclude: Iterable[str] = (),
        existing_tables_only: bool = False,
    ) -> Iterator[ModelDef]:
        """Yield registered models not named in *exclude*.

        With *existing_tables_only*, models without a table binding or whose
        table no longer exists are skipped.
        """
        exclude = set(exclude)
        for model in self._models.all_models():
            if model.name in exclude:
                continue
            if existing_tables_only and (
                model.table_name is None or model.table_name not in self.tables()
            ):
                continue
            yield model

    def each_attribute(
        self,
        model: ModelDef,
        exclude: Iterable[str] = (),
        types: Iterable[str] | None = None,
    ) -> Iterator[ColumnSchema]:
        """Yield the columns of *model*'s table.

        Args:
            model: A model bound to an existing table.
            exclude: Attributes to skip, written as ``Model.attribute``.
            types: Type categories to keep (default: all).
        """
        if model.table_name is None:
            return
        exclude = set(exclude)
        types = set(types) if types is not None else None
        for column in self.columns(model.table_name):
            if f"{model.name}.{column.name}" in exclude:
                continue
            if types is not None and column.type_category not in types:
                continue
            yield column
