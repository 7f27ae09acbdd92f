"""
Common Pydantic schemas used across SEOLens.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base schema: immutable, snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
