"""
Todo API - Label Schemas
==========================
"""

from pydantic import BaseModel, ConfigDict, Field

from todo_api.schemas.common import TEXT_MAX_LENGTH


class Label(BaseModel):
    """A stored label."""
    id: int = Field(description="Store-assigned identifier")
    name: str = Field(description="Label name")

    model_config = ConfigDict(from_attributes=True)


class CreateLabel(BaseModel):
    """Payload for creating a label."""
    name: str = Field(min_length=1, max_length=TEXT_MAX_LENGTH)

    model_config = ConfigDict(strict=True)
