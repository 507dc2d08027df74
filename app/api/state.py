"""
app/api/state.py

Purpose: Read-only JSON view of the application state

- Snapshot of users, rendered todos and alert
- Single todo lookup
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_todo_app
from app.core.exceptions import ResourceNotFoundError
from app.models.todo import Todo
from app.schemas.response import AlertResponse, StateResponse
from app.services.todo_app import TodoApp

router = APIRouter()


@router.get("/state", response_model=StateResponse)
async def get_state(todo_app: TodoApp = Depends(get_todo_app)):
    """
    Returns loaded users and todos. Todos follow the rendered order,
    most recent first.
    """
    state = todo_app.store.state
    todos = [
        state.todos[node.todo_id]
        for node in todo_app.view.nodes
        if node.todo_id in state.todos
    ]

    return StateResponse(
        loaded=todo_app.store.loaded,
        users=list(state.users.values()),
        todos=todos,
        alert=AlertResponse(
            visible=todo_app.alerts.visible,
            message=todo_app.alerts.message
        )
    )


@router.get("/todos/{todo_id}", response_model=Todo)
async def get_todo(todo_id: int, todo_app: TodoApp = Depends(get_todo_app)):
    todo = todo_app.store.get_todo(todo_id)
    if todo is None:
        raise ResourceNotFoundError(message=f"Todo {todo_id} not found", details={"todo_id": todo_id})
    return todo
