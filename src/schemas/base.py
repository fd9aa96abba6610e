"""Shared Pydantic configuration for camelCase API payloads."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema whose JSON field names are camelCase.

    Input accepts either camelCase or snake_case; FastAPI serializes responses
    by alias, so clients always receive camelCase.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
