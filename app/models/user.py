"""
app/models/user.py

Purpose: User record as served by the todo API

- Immutable after load
- Keyed by id in the state store
"""

from pydantic import BaseModel, Field


class User(BaseModel):
    """A todo author. Extra API fields (username, email, ...) are dropped."""

    id: int = Field(..., description="User id assigned by the API")
    name: str = Field(..., description="Display name")

    class Config:
        frozen = True
