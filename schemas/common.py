# schemas/common.py
"""
Shared pydantic configuration: camelCase on the wire, snake_case in Python.
"""
from datetime import date, datetime
from typing import Annotated, Any, ClassVar, Tuple

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
     """Base for response models (read from ORM objects)."""
     model_config = ConfigDict(
          alias_generator=to_camel,
          populate_by_name=True,
          from_attributes=True,
     )


class CamelInput(BaseModel):
     """Base for request bodies: unknown fields are rejected instead of merged."""
     model_config = ConfigDict(
          alias_generator=to_camel,
          populate_by_name=True,
          extra="forbid",
          str_strip_whitespace=True,
     )

     # Fields that may be omitted from a body but never sent as an explicit null
     non_nullable: ClassVar[Tuple[str, ...]] = ()

     @field_validator("*")
     @classmethod
     def _reject_null(cls, value: Any, info: ValidationInfo) -> Any:
          if value is None and info.field_name in cls.non_nullable:
               raise ValueError("must not be null")
          return value

     def changes(self) -> dict:
          """Only the fields the caller actually sent, keyed by column name."""
          return self.model_dump(exclude_unset=True)


def coerce_date(value: Any) -> Any:
     """Accept `2024-05-01`, `2024-05-01T03:00:00.000Z` or a datetime and return a date."""
     if value is None:
          return None
     if isinstance(value, datetime):
          return value.date()
     if isinstance(value, date):
          return value
     if isinstance(value, str) and "T" in value:
          return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
     return value


# A date that also accepts ISO datetime text coming from browser date pickers
FlexibleDate = Annotated[date, BeforeValidator(coerce_date)]
