"""Shared schema bases."""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RequestModel(BaseModel):
    """Request body accepting both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    def changes(self, nullable: Iterable[str] = ()) -> dict[str, Any]:
        """Fields sent by the client; explicit nulls only for clearable fields."""
        clearable = set(nullable)
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if value is not None or field in clearable
        }


class ErrorResponse(BaseModel):
    error: str
