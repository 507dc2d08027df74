"""
app/services/todo_app.py

Purpose: Application controller

- Runs the startup load (users + todos in parallel)
- Handles create / toggle / delete / dismiss actions
- Patches the state store on success
- Turns every failure into an alert, nothing propagates
"""

import asyncio
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import (
    InvalidIdError,
    MalformedResponseError,
    ResourceNotFoundError,
    TodoBoardError,
)
from app.core.logging import get_logger
from app.models.todo import Todo
from app.models.user import User
from app.services.alert_channel import AlertChannel
from app.services.state_store import StateStore
from app.services.todo_gateway import TodoGateway
from app.views.renderer import TodoListView
from utils.constants import (
    TODO_NOT_LOADED_MESSAGE,
    TODOS_RESOURCE,
    USERS_RESOURCE,
)
from utils.validation_utils import normalize_title

logger = get_logger(__name__)


class TodoApp:
    """
    Wires the gateway, state store, view and alert channel together.
    One instance per running application; tests build their own.
    """

    def __init__(
        self,
        gateway: TodoGateway,
        store: StateStore,
        view: TodoListView,
        alerts: AlertChannel
    ):
        self.gateway = gateway
        self.store = store
        self.view = view
        self.alerts = alerts

    async def load(self) -> bool:
        """
        Fetches users and todos simultaneously and renders them.
        If either fetch fails nothing is loaded or rendered.

        Returns:
            True if the state was (re)loaded
        """
        logger.info("Loading users and todos...")

        users_data, todos_data = await asyncio.gather(
            self._fetch_for_load(USERS_RESOURCE),
            self._fetch_for_load(TODOS_RESOURCE),
        )

        if users_data is None or todos_data is None:
            logger.warning("Startup load incomplete, nothing rendered")
            return False

        try:
            users = [User.model_validate(item) for item in users_data]
            todos = [Todo.model_validate(item) for item in todos_data]
            self.store.load(users, todos)
        except PydanticValidationError as e:
            logger.error(f"Todo API returned malformed records: {e}")
            self._report(MalformedResponseError(), during_init=True)
            return False
        except TodoBoardError as e:
            self._report(e, during_init=True)
            return False

        logger.info(f"✅ Loaded {len(users)} users and {len(todos)} todos")
        return True

    async def submit_todo(self, user_id: Optional[int], title: Optional[str]) -> Optional[Todo]:
        """
        Creates a todo and prepends it to the list.
        The form keeps its input on failure and is reset on success.
        """
        self.view.selected_user_id = user_id or 0
        self.view.draft_title = title or ""

        try:
            todo = await self.gateway.create_todo(user_id, normalize_title(title))
            self.store.upsert_todo(todo, created=True)
        except TodoBoardError as e:
            self._report(e, extra={"user_id": user_id, "action": "create"})
            return None

        logger.info(f"Todo {todo.id} created", extra={"user_id": user_id, "todo_id": todo.id})
        self.view.reset_form()
        return todo

    async def toggle_todo(self, todo_id: int) -> Optional[Todo]:
        """Flips the completed flag of a loaded todo."""
        try:
            current = self.store.get_todo(todo_id)
            if current is None:
                raise ResourceNotFoundError(TODO_NOT_LOADED_MESSAGE.format(todo_id=todo_id))

            todo = await self.gateway.set_completed(todo_id, not current.completed)
            self.store.upsert_todo(todo)
        except TodoBoardError as e:
            self._report(e, extra={"todo_id": todo_id, "action": "toggle"})
            return None

        logger.info(f"Todo {todo_id} completed={todo.completed}", extra={"todo_id": todo_id})
        return todo

    async def remove_todo(self, todo_id: int) -> bool:
        """Deletes a todo on the server, then from state and view."""
        try:
            await self.gateway.delete_todo(todo_id)
        except TodoBoardError as e:
            self._report(e, extra={"todo_id": todo_id, "action": "delete"})
            return False

        self.store.remove_todo(todo_id)
        logger.info(f"Todo {todo_id} deleted", extra={"todo_id": todo_id})
        return True

    def reject_todo_id(self, raw_id: str, action: str) -> None:
        """Reports a todo id that could not be parsed from the request."""
        self._report(InvalidIdError(details={"todo_id": raw_id}), extra={"action": action})

    def dismiss_alert(self) -> None:
        self.alerts.dismiss()

    async def _fetch_for_load(self, resource: str) -> Optional[List[Dict[str, Any]]]:
        try:
            return await self.gateway.fetch_collection(resource)
        except TodoBoardError as e:
            self._report(e, during_init=True, extra={"resource": resource, "action": "load"})
            return None

    def _report(
        self,
        error: TodoBoardError,
        during_init: bool = False,
        extra: Optional[Dict[str, Any]] = None
    ) -> None:
        logger.warning(f"{type(error).__name__}: {error.message}", extra=extra)
        self.alerts.show(error.message, during_init=during_init)
