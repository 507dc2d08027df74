"""
app/services/state_store.py

Purpose: In-memory application state

- Id-keyed mappings of loaded users and todos
- Every change swaps in a new immutable snapshot
- Notifies subscribers (the view) after each swap
- A swap a subscriber rejects is rolled back
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Callable, Iterable, List, Literal, Mapping, Optional

from app.core.logging import get_logger, LogContext
from app.models.todo import Todo
from app.models.user import User

logger = get_logger(__name__)


ChangeKind = Literal["loaded", "created", "updated", "removed"]


def _freeze(items: dict) -> Mapping:
    return MappingProxyType(items)


@dataclass(frozen=True)
class AppState:
    """Snapshot of everything loaded from the API."""
    users: Mapping[int, User] = field(default_factory=lambda: _freeze({}))
    todos: Mapping[int, Todo] = field(default_factory=lambda: _freeze({}))


@dataclass(frozen=True)
class StateChange:
    """
    Emitted after every snapshot swap.
    todo_id/todo are set for single-todo changes; todo is None on removal.
    """
    kind: ChangeKind
    state: AppState
    todo_id: Optional[int] = None
    todo: Optional[Todo] = None


StateListener = Callable[[StateChange], None]


class StateStore:
    """
    Owns the current AppState.

    Snapshots are never mutated: readers holding an old snapshot keep a
    consistent view, and a swap happens synchronously between awaits.
    """

    def __init__(self):
        self._state = AppState()
        self._loaded = False
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def loaded(self) -> bool:
        return self._loaded

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Registers a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def load(self, users: Iterable[User], todos: Iterable[Todo]) -> AppState:
        """
        Replaces the whole state with the given collections, grouped by id.
        If a listener rejects the new state, the previous one is kept.
        """
        state = AppState(
            users=_freeze({user.id: user for user in users}),
            todos=_freeze({todo.id: todo for todo in todos}),
        )
        self._commit(StateChange(kind="loaded", state=state), loaded=True)
        logger.info(f"State loaded: {len(state.users)} users, {len(state.todos)} todos")
        return self._state

    def upsert_todo(self, todo: Todo, created: bool = False) -> AppState:
        """
        Inserts or replaces the entry for todo.id.

        Args:
            todo: Record returned by the API
            created: True when the record comes from a create call, even if
                the API reused an id already present
        """
        existed = todo.id in self._state.todos
        state = replace(self._state, todos=_freeze({**self._state.todos, todo.id: todo}))

        kind: ChangeKind = "created" if created or not existed else "updated"
        self._commit(StateChange(kind=kind, state=state, todo_id=todo.id, todo=todo))
        with LogContext(todo_id=todo.id, user_id=todo.user_id, action=kind):
            logger.debug("Todo stored")
        return self._state

    def remove_todo(self, todo_id: int) -> AppState:
        """Drops the entry for todo_id; unknown ids leave the state untouched."""
        if todo_id not in self._state.todos:
            return self._state

        todos = {key: value for key, value in self._state.todos.items() if key != todo_id}
        state = replace(self._state, todos=_freeze(todos))
        self._commit(StateChange(kind="removed", state=state, todo_id=todo_id))
        with LogContext(todo_id=todo_id, action="removed"):
            logger.debug("Todo dropped")
        return self._state

    def get_user(self, user_id: int) -> Optional[User]:
        return self._state.users.get(user_id)

    def get_todo(self, todo_id: int) -> Optional[Todo]:
        return self._state.todos.get(todo_id)

    def _commit(self, change: StateChange, loaded: Optional[bool] = None) -> None:
        """Swaps in change.state and notifies; restores the old snapshot if a listener raises."""
        previous, was_loaded = self._state, self._loaded
        self._state = change.state
        if loaded is not None:
            self._loaded = loaded

        try:
            for listener in list(self._listeners):
                listener(change)
        except Exception as e:
            self._state, self._loaded = previous, was_loaded
            logger.warning(f"State change '{change.kind}' rolled back: {e}")
            raise
