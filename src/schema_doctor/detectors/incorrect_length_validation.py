"""Detect mismatches between database length limits and model length validations.

For every string or text column of every model's table, the database-side
limit is either the column's declared length or, failing that, a length
bound found in a validated check constraint (``length(email) <= 64``). The
model-side limit is the ``maximum`` of the attribute's length validator.
The two must agree.
"""

from dataclasses import dataclass

from schema_doctor.detectors.base import Detector, OptionSpec
from schema_doctor.schema.constraints import length_limit_from_constraints
from schema_doctor.schema.models import ColumnSchema
from schema_doctor.validations.models import ModelDef


@dataclass(frozen=True)
class LengthProblem:
    """A column whose database and model length limits disagree."""

    model: str
    attribute: str
    table: str
    database_maximum: int | None
    model_maximum: int | None


class IncorrectLengthValidation(Detector[LengthProblem]):
    description = "detect mismatches between database length limits and model length validations"
    options = {
        "ignore_models": OptionSpec(
            "models whose validators should not be checked",
            is_global=True,
        ),
        "ignore_attributes": OptionSpec(
            "attributes, written as Model.attribute, whose validators should not be checked",
        ),
    }

    def message(self, problem: LengthProblem) -> str:
        model, attribute, table = problem.model, problem.attribute, problem.table
        database_maximum, model_maximum = problem.database_maximum, problem.model_maximum

        if database_maximum is not None and model_maximum is not None:
            return (
                f"the schema limits {table}.{attribute} to {database_maximum} characters "
                f"but the length validator on {model}.{attribute} enforces a maximum of "
                f"{model_maximum} characters - set both limits to the same value or remove both"
            )
        if database_maximum is not None:
            return (
                f"the schema limits {table}.{attribute} to {database_maximum} characters "
                f"but there's no length validator on {model}.{attribute} - remove the "
                f"database limit or add the validator"
            )
        return (
            f"the length validator on {model}.{attribute} enforces a maximum of "
            f"{model_maximum} characters but there's no schema limit on {table}.{attribute} "
            f"- remove the validator or the schema length limit"
        )

    def detect(self) -> None:
        for model in self.each_model(exclude=self.config("ignore_models"), existing_tables_only=True):
            for column in self.each_attribute(
                model, exclude=self.config("ignore_attributes"), types=("string", "text")
            ):
                table = model.table_name
                model_maximum = model.length_maximum(column.name)
                database_maximum = self.column_limit(table, column)
                if model_maximum == database_maximum:
                    continue
                if column.limit is not None and self.covered_by_inclusion_validation(
                    model, column.name, database_maximum
                ):
                    continue

                # Only the STI root reports a missing limit on a shared column
                if (model_maximum is None or database_maximum is None) and model.is_sti_subclass:
                    continue

                self.problem(
                    LengthProblem(
                        model=model.name,
                        attribute=column.name,
                        table=table,
                        database_maximum=database_maximum,
                        model_maximum=model_maximum,
                    )
                )

    def column_limit(self, table: str, column: ColumnSchema) -> int | None:
        if column.limit is not None:
            return column.limit
        return length_limit_from_constraints(self.check_constraints(table), column.name)

    def covered_by_inclusion_validation(self, model: ModelDef, attribute: str, limit: int) -> bool:
        """True if an inclusion validator only allows literal strings within *limit*.

        Computed value sets (callables) never count as covering.
        """
        values = model.inclusion_values(attribute)
        if not isinstance(values, (list, tuple, set, frozenset)) or not values:
            return False
        if not all(isinstance(value, str) for value in values):
            return False
        return max(len(value) for value in values) <= limit
