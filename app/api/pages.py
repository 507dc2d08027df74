"""
app/api/pages.py

Purpose: HTML page and its form actions

- Serves the todo page
- Receives form posts (add, toggle, delete, dismiss alert, reload)
- Every action redirects back to the page, which shows the result
  or the alert
"""

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from typing import Optional

from app.api.deps import get_todo_app
from app.core.logging import get_logger
from app.services.todo_app import TodoApp
from app.views.page import render_page
from utils.validation_utils import parse_todo_id, parse_user_id

logger = get_logger(__name__)
router = APIRouter()


def back_to_page() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


@router.get("/", response_class=HTMLResponse)
async def todo_page(todo_app: TodoApp = Depends(get_todo_app)):
    """Renders the current view and alert state."""
    return HTMLResponse(content=render_page(todo_app.view, todo_app.alerts))


@router.post("/todos")
async def add_todo(
    user_id: Optional[str] = Form(None),
    title: Optional[str] = Form(None),
    todo_app: TodoApp = Depends(get_todo_app)
):
    """New-todo form submission."""
    await todo_app.submit_todo(parse_user_id(user_id), title)
    return back_to_page()


@router.post("/todos/{todo_id}/toggle")
async def toggle_todo(todo_id: str, todo_app: TodoApp = Depends(get_todo_app)):
    parsed_id = parse_todo_id(todo_id)
    if parsed_id is None:
        todo_app.reject_todo_id(todo_id, "toggle")
    else:
        await todo_app.toggle_todo(parsed_id)
    return back_to_page()


@router.post("/todos/{todo_id}/delete")
async def delete_todo(todo_id: str, todo_app: TodoApp = Depends(get_todo_app)):
    parsed_id = parse_todo_id(todo_id)
    if parsed_id is None:
        todo_app.reject_todo_id(todo_id, "delete")
    else:
        await todo_app.remove_todo(parsed_id)
    return back_to_page()


@router.post("/alert/dismiss")
async def dismiss_alert(todo_app: TodoApp = Depends(get_todo_app)):
    todo_app.dismiss_alert()
    return back_to_page()


@router.post("/reload")
async def reload_data(todo_app: TodoApp = Depends(get_todo_app)):
    """Re-runs the startup load, e.g. after it failed."""
    logger.info("Manual reload requested")
    await todo_app.load()
    return back_to_page()
