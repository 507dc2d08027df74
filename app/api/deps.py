from fastapi import Request

from app.services.todo_app import TodoApp


def get_todo_app(request: Request) -> TodoApp:
    """Returns the controller created during application startup."""
    return request.app.state.todo_app
