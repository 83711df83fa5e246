"""Todo data models using Pydantic."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

TEXT_MAX_LENGTH = 255
# ids are int4 SERIAL values
ID_MIN = -(2**31)
ID_MAX = 2**31 - 1


class TodoCreate(BaseModel):
    """Model for creating new todos."""

    text: StrictStr = Field(..., max_length=TEXT_MAX_LENGTH)

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Todo text cannot be empty")
        return value


class TodoUpdate(BaseModel):
    """Model for toggling completion of an existing todo."""

    completed: StrictBool


class Todo(BaseModel):
    """Persisted todo item."""

    id: int
    text: str
    completed: bool = False

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
