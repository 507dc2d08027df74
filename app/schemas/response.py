from pydantic import BaseModel
from typing import Optional, Any, List

from app.models.todo import Todo
from app.models.user import User

class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    error: str
    code: str
    details: Optional[Any] = None

class AlertResponse(BaseModel):
    visible: bool
    message: str = ""

class StateResponse(BaseModel):
    """
    JSON snapshot of the loaded state.
    Todos are listed in rendered order (most recent first).
    """
    loaded: bool
    users: List[User]
    todos: List[Todo]
    alert: AlertResponse
