"""
app/models/todo.py

Purpose: Todo record as served by the todo API

- Server assigns the id on creation
- Only the completed flag changes after creation
"""

from pydantic import BaseModel, Field


class Todo(BaseModel):
    """
    A single todo item.
    The API uses camelCase (userId); Python code uses user_id.
    """

    id: int = Field(..., description="Todo id assigned by the API")
    user_id: int = Field(..., alias="userId", description="Owning user id")
    title: str = Field(..., description="Task text")
    completed: bool = Field(default=False)

    class Config:
        frozen = True
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": 10,
                "userId": 1,
                "title": "Buy milk",
                "completed": False
            }
        }
