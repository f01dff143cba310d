"""Pydantic models for application-side validation metadata.

A ``ModelDef`` describes one application model bound to a table, with the
validators it declares. Only two validator kinds are consulted by the
bundled detector:

- ``length`` with a ``maximum`` option
- ``inclusion`` with an ``in`` (or ``within``) option holding either a
  literal collection or a callable computing the allowed values

Example:
    >>> user = ModelDef(
    ...     name="User",
    ...     table_name="users",
    ...     columns={"id", "email"},
    ...     validators=[Validator(kind="length", attributes=["email"], options={"maximum": 64})],
    ... )
    >>> user.length_maximum("email")
    64
"""

from typing import Any

from pydantic import BaseModel, Field


class Validator(BaseModel):
    """A validator declared on a model."""

    kind: str  # length, inclusion, presence, ...
    attributes: list[str]
    options: dict[str, Any] = Field(default_factory=dict)

    def governs(self, attribute: str) -> bool:
        return attribute in self.attributes


class ModelDef(BaseModel):
    """An application model and its declared validators.

    ``base_model`` names the root of a single-table-inheritance hierarchy;
    None means the model is its own root. ``columns`` lists the table's
    column names as the application sees them and is used to tell whether
    the inheritance column is present.
    """

    name: str
    table_name: str | None = None
    validators: list[Validator] = Field(default_factory=list)
    columns: set[str] = Field(default_factory=set)
    inheritance_column: str = "type"
    base_model: str | None = None

    @property
    def is_sti_subclass(self) -> bool:
        """True for non-root members of a single-table-inheritance hierarchy."""
        return (
            self.inheritance_column in self.columns
            and self.base_model is not None
            and self.base_model != self.name
        )

    def validators_for(self, attribute: str, kind: str) -> list[Validator]:
        return [v for v in self.validators if v.kind == kind and v.governs(attribute)]

    def length_maximum(self, attribute: str) -> int | None:
        """Return the ``maximum`` of the first length validator on *attribute*."""
        for validator in self.validators_for(attribute, "length"):
            if "maximum" in validator.options:
                return validator.options["maximum"]
        return None

    def inclusion_values(self, attribute: str) -> Any:
        """Return the ``in``/``within`` option of the first inclusion validator.

        Returns None when *attribute* has no inclusion validator.
        """
        for validator in self.validators_for(attribute, "inclusion"):
            values = validator.options.get("in")
            if values is None:
                values = validator.options.get("within")
            return values
        return None
