from typing import Any, ClassVar, Tuple
from pydantic import BaseModel, field_validator, model_validator


class InputSchema(BaseModel):
    """Base for request bodies.

    Form submissions send ``""`` for untouched optional inputs; those are
    stored as NULL. Fields listed in ``required_fields`` keep the empty string
    so their own length constraint reports the error.
    """

    required_fields: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def _blank_to_none(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {
            key: (None if value == "" and key not in cls.required_fields else value)
            for key, value in data.items()
        }


class UpdateSchema(InputSchema):
    """Partial update: omitted fields keep their stored value."""

    @field_validator("*")
    @classmethod
    def _reject_null_required(cls, value, info):
        if value is None and info.field_name in cls.required_fields:
            raise ValueError(f"{info.field_name} may not be null")
        return value
