"""
app/views/renderer.py

Purpose: View model for the todo page

- Projects state into user options and todo list nodes
- Consumes StateChange events from the store, never writes state
- Keeps one node per todo id, most recent first
- Holds the new-todo form state
"""

from dataclasses import dataclass
from html import escape
from typing import List, Optional

from app.core.exceptions import UnknownUserError
from app.core.logging import get_logger
from app.models.todo import Todo
from app.models.user import User
from app.services.state_store import AppState, StateChange, StateStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class UserOption:
    value: int
    label: str


@dataclass(frozen=True)
class TodoNode:
    """
    Rendered list item. Its controls post to routes keyed by todo_id, so a
    replaced node always acts on the todo as it is now.
    """
    todo_id: int
    title: str
    author: str
    completed: bool

    @property
    def toggle_action(self) -> str:
        return f"/todos/{self.todo_id}/toggle"

    @property
    def delete_action(self) -> str:
        return f"/todos/{self.todo_id}/delete"

    @property
    def html(self) -> str:
        checked = " checked" if self.completed else ""
        return (
            f'<li class="todo-item" id="todo-{self.todo_id}">'
            f'<form method="post" action="{self.toggle_action}" class="toggle-form">'
            f'<input type="checkbox" aria-label="Completed"{checked} onchange="this.form.submit()">'
            f'</form>'
            f'<div>{escape(self.title)}</div><i>by</i> <b>{escape(self.author)}</b>'
            f'<form method="post" action="{self.delete_action}" class="remove-form">'
            f'<button type="submit" class="removeBtn" aria-label="Delete">&#10005;</button>'
            f'</form>'
            f'</li>'
        )


class TodoListView:
    """
    Rendering surface fed by StateStore notifications.

    loaded  -> options and nodes rebuilt
    created -> node prepended
    updated -> node replaced at the same position
    removed -> node dropped
    """

    def __init__(self, store: StateStore):
        self._store = store
        self.user_options: List[UserOption] = []
        self.nodes: List[TodoNode] = []
        self.selected_user_id = 0
        self.draft_title = ""
        self._unsubscribe = store.subscribe(self.on_state_change)

    def close(self) -> None:
        self._unsubscribe()

    def render_user_options(self, users: List[User]) -> List[UserOption]:
        """Appends one option per user (value=id, label=name)."""
        options = [UserOption(value=user.id, label=user.name) for user in users]
        self.user_options.extend(options)
        return options

    def render_todo_node(self, todo: Todo, state: Optional[AppState] = None) -> TodoNode:
        """
        Builds the list item for todo.

        Raises:
            UnknownUserError: If the owning user is not loaded
        """
        state = state or self._store.state
        user = state.users.get(todo.user_id)
        if user is None:
            raise UnknownUserError(todo.user_id, details={"todo_id": todo.id})

        return TodoNode(
            todo_id=todo.id,
            title=todo.title,
            author=user.name,
            completed=todo.completed,
        )

    def on_state_change(self, change: StateChange) -> None:
        if change.kind == "loaded":
            self._render_all(change.state)
        elif change.kind == "created":
            node = self.render_todo_node(change.todo, change.state)
            self.nodes = [node] + [n for n in self.nodes if n.todo_id != node.todo_id]
        elif change.kind == "updated":
            self._replace_node(self.render_todo_node(change.todo, change.state))
        elif change.kind == "removed":
            self.nodes = [n for n in self.nodes if n.todo_id != change.todo_id]

    def find_node(self, todo_id: int) -> Optional[TodoNode]:
        for node in self.nodes:
            if node.todo_id == todo_id:
                return node
        return None

    def reset_form(self) -> None:
        """Back to the placeholder user and an empty text field."""
        self.selected_user_id = 0
        self.draft_title = ""

    def _render_all(self, state: AppState) -> None:
        # Build everything first so a failed lookup leaves the old view in place
        nodes: List[TodoNode] = []
        for todo in state.todos.values():
            nodes.insert(0, self.render_todo_node(todo, state))

        self.user_options = []
        self.render_user_options(list(state.users.values()))
        self.nodes = nodes
        logger.debug(f"Rendered {len(nodes)} todos")

    def _replace_node(self, node: TodoNode) -> None:
        for index, existing in enumerate(self.nodes):
            if existing.todo_id == node.todo_id:
                self.nodes[index] = node
                return
        self.nodes.insert(0, node)
