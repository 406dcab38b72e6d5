"""
Schema Base Classes

Wire-format configuration shared by every request and response model.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Immutable model serialized with camelCase property names."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class SnakeModel(BaseModel):
    """Immutable model whose field names are the snake_case wire names."""
    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
    )


def none_as_empty_list(value):
    """Coerce a JSON null sent for a list field into an empty list."""
    return [] if value is None else value
