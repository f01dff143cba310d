"""Load model definitions from a TOML file.

File format::

    [[models]]
    name = "User"
    table_name = "users"
    columns = ["id", "email", "type"]

    [[models.validators]]
    kind = "length"
    attributes = ["email"]
    options = { maximum = 64 }

    [[models]]
    name = "Client"
    table_name = "users"
    columns = ["id", "email", "type"]
    base_model = "User"
"""

import tomllib
from pathlib import Path

from pydantic import ValidationError

from schema_doctor.validations.base import StaticModelProvider
from schema_doctor.validations.models import ModelDef


def load_models(models_path: Path) -> StaticModelProvider:
    """Load model definitions from a TOML file.

    Args:
        models_path: Path to the models file.

    Returns:
        StaticModelProvider listing the models in file order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If a model definition is invalid.
    """
    if not models_path.exists():
        raise FileNotFoundError(f"Models file not found: {models_path}")

    with open(models_path, "rb") as f:
        data = tomllib.load(f)

    models = []
    for index, model_data in enumerate(data.get("models", [])):
        try:
            models.append(ModelDef(**model_data))
        except ValidationError as e:
            raise ValueError(f"Invalid model #{index + 1} in {models_path.name}: {e}") from e

    return StaticModelProvider(models)
