from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# PUBLIC_INTERFACE
class Todo(BaseModel):
    """
    A single row of the ``todos`` table.

    Fields:
    - id: Unique integer identifier assigned by the store
    - title: Non-empty title (at most 500 characters, enforced by the store)
    - completed: Completion flag, the only field that changes after creation
    - created_at: Insert timestamp assigned by the store
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Title of the todo item")
    completed: bool = Field(default=False, description="Completion status flag")
    created_at: datetime = Field(..., description="Creation timestamp")
