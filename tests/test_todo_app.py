import pytest

from app.services.alert_channel import AlertChannel
from app.services.state_store import StateStore
from app.services.todo_app import TodoApp
from app.views.renderer import TodoListView
from utils.constants import (
    INVALID_ID_MESSAGE,
    MISSING_TITLE_MESSAGE,
    NO_CONNECTION_MESSAGE,
    TODO_NOT_LOADED_MESSAGE,
)


async def test_startup_renders_loaded_todos(todo_app, fake_api):
    assert await todo_app.load() is True

    assert sorted(fake_api.paths()) == ["GET /todos", "GET /users"]
    assert len(todo_app.view.nodes) == 1

    node = todo_app.view.nodes[0]
    assert node.title == "Buy milk"
    assert node.author == "Ann"
    assert node.completed is False
    assert "<div>Buy milk</div><i>by</i> <b>Ann</b>" in node.html
    assert " checked" not in node.html
    assert todo_app.alerts.visible is False


async def test_startup_failure_renders_nothing(todo_app, fake_api):
    fake_api.fail("GET", "/users", 500)

    assert await todo_app.load() is False

    assert todo_app.store.loaded is False
    assert todo_app.view.nodes == []
    assert todo_app.view.user_options == []
    assert todo_app.alerts.visible is True
    assert todo_app.alerts.message == "Error while loading data: 500 - Internal Server Error."


async def test_startup_double_failure_shows_one_alert(todo_app, fake_api):
    fake_api.fail("GET", "/users", 500)
    fake_api.fail("GET", "/todos", 404)

    assert await todo_app.load() is False

    assert todo_app.alerts.visible is True
    assert todo_app.alerts.message in {
        "Error while loading data: 500 - Internal Server Error.",
        "Error while loading data: 404 - Not Found.",
    }


async def test_startup_with_malformed_records_renders_nothing(todo_app, fake_api):
    fake_api.todos = [{"id": "not-a-number", "title": "x"}]

    assert await todo_app.load() is False

    assert todo_app.store.loaded is False
    assert todo_app.alerts.visible is True


async def test_create_prepends_and_resets_form(todo_app):
    await todo_app.load()

    todo = await todo_app.submit_todo(1, "Wash car")

    assert todo.id == 11
    assert todo.user_id == 1
    assert todo.title == "Wash car"
    assert todo.completed is False
    assert [node.title for node in todo_app.view.nodes] == ["Wash car", "Buy milk"]
    assert todo_app.view.nodes[0].author == "Ann"
    assert todo_app.store.get_todo(11) == todo
    assert todo_app.view.selected_user_id == 0
    assert todo_app.view.draft_title == ""


async def test_create_without_title_keeps_form_input(todo_app, fake_api):
    await todo_app.load()
    fake_api.requests.clear()

    assert await todo_app.submit_todo(1, "   ") is None

    assert fake_api.requests == []
    assert todo_app.alerts.message == MISSING_TITLE_MESSAGE
    assert todo_app.view.selected_user_id == 1
    assert len(todo_app.view.nodes) == 1


async def test_create_http_failure_leaves_state(todo_app, fake_api):
    await todo_app.load()
    fake_api.fail("POST", "/todos", 500)
    before = todo_app.store.state

    assert await todo_app.submit_todo(1, "Wash car") is None

    assert todo_app.store.state is before
    assert todo_app.alerts.message == "Error while adding the task: 500 - Internal Server Error."
    assert todo_app.view.draft_title == "Wash car"


async def test_toggle_marks_todo_completed(todo_app, fake_api):
    await todo_app.load()

    todo = await todo_app.toggle_todo(10)

    assert todo.completed is True
    assert todo_app.store.get_todo(10).completed is True
    assert " checked" in todo_app.view.find_node(10).html
    assert fake_api.paths()[-1] == "PATCH /todos/10"


async def test_toggle_twice_restores_initial_value(todo_app):
    await todo_app.load()

    await todo_app.toggle_todo(10)
    todo = await todo_app.toggle_todo(10)

    assert todo.completed is False
    assert todo_app.store.get_todo(10).completed is False
    assert todo_app.view.find_node(10).completed is False


async def test_toggle_unloaded_todo_alerts(todo_app, fake_api):
    await todo_app.load()
    fake_api.requests.clear()

    assert await todo_app.toggle_todo(150) is None

    assert fake_api.requests == []
    assert todo_app.alerts.message == TODO_NOT_LOADED_MESSAGE.format(todo_id=150)


async def test_toggle_created_todo_beyond_stored_range(todo_app, fake_api):
    fake_api.next_id = 201
    await todo_app.load()
    await todo_app.submit_todo(1, "Wash car")
    fake_api.requests.clear()

    assert await todo_app.toggle_todo(201) is None

    assert fake_api.requests == []
    assert todo_app.alerts.message == INVALID_ID_MESSAGE
    assert todo_app.store.get_todo(201).completed is False


async def test_delete_removes_exactly_that_todo(todo_app):
    await todo_app.load()
    await todo_app.submit_todo(1, "Wash car")

    assert await todo_app.remove_todo(10) is True

    assert list(todo_app.store.state.todos) == [11]
    assert [node.todo_id for node in todo_app.view.nodes] == [11]


async def test_delete_unknown_id_leaves_state(todo_app, fake_api):
    await todo_app.load()
    before = todo_app.store.state
    fake_api.requests.clear()

    assert await todo_app.remove_todo(500) is False

    assert fake_api.requests == []
    assert todo_app.store.state is before
    assert todo_app.alerts.message == INVALID_ID_MESSAGE
    assert len(todo_app.view.nodes) == 1


async def test_offline_actions_leave_state_and_view(todo_app, connectivity, fake_api):
    await todo_app.load()
    before = todo_app.store.state
    nodes = list(todo_app.view.nodes)
    connectivity.set_online(False)
    fake_api.requests.clear()

    assert await todo_app.submit_todo(1, "Wash car") is None
    assert await todo_app.toggle_todo(10) is None
    assert await todo_app.remove_todo(10) is False

    assert fake_api.requests == []
    assert todo_app.store.state is before
    assert todo_app.view.nodes == nodes
    assert todo_app.alerts.message == NO_CONNECTION_MESSAGE


async def test_offline_startup_shows_alert(todo_app, connectivity):
    connectivity.set_online(False)

    assert await todo_app.load() is False

    assert todo_app.alerts.message == NO_CONNECTION_MESSAGE
    assert todo_app.view.nodes == []


async def test_error_after_dismiss_is_shown_again(todo_app):
    await todo_app.load()
    await todo_app.remove_todo(500)
    todo_app.dismiss_alert()
    assert todo_app.alerts.visible is False

    await todo_app.submit_todo(1, "")

    assert todo_app.alerts.visible is True
    assert todo_app.alerts.message == MISSING_TITLE_MESSAGE


async def test_create_for_unloaded_user_leaves_state(todo_app, fake_api):
    await todo_app.load()
    before = todo_app.store.state

    assert await todo_app.submit_todo(5, "Wash car") is None

    assert "POST /todos" in fake_api.paths()
    assert todo_app.store.state is before
    assert todo_app.store.get_todo(11) is None
    assert [node.todo_id for node in todo_app.view.nodes] == [10]
    assert todo_app.alerts.message == "User 5 is not loaded"
    assert todo_app.view.draft_title == "Wash car"


async def test_startup_with_todo_of_unknown_user_loads_nothing(todo_app, fake_api):
    fake_api.todos = [{"id": 10, "userId": 7, "title": "Buy milk", "completed": False}]

    assert await todo_app.load() is False

    assert todo_app.store.loaded is False
    assert dict(todo_app.store.state.todos) == {}
    assert todo_app.view.nodes == []
    assert todo_app.alerts.message == "User 7 is not loaded"


async def test_failed_reload_keeps_previous_state(todo_app, fake_api):
    await todo_app.load()
    before = todo_app.store.state
    fake_api.todos = [{"id": 12, "userId": 7, "title": "Orphan", "completed": False}]

    assert await todo_app.load() is False

    assert todo_app.store.loaded is True
    assert todo_app.store.state is before
    assert [node.todo_id for node in todo_app.view.nodes] == [10]


@pytest.mark.parametrize("todo_ids, expected", [
    ([1, 2, 3], [3, 2, 1]),
    ([5], [5]),
    ([], []),
])
async def test_initial_order_is_most_recent_first(gateway, todo_ids, expected, fake_api):
    fake_api.todos = [
        {"id": todo_id, "userId": 1, "title": f"Task {todo_id}", "completed": False}
        for todo_id in todo_ids
    ]
    store = StateStore()
    todo_app = TodoApp(gateway, store, TodoListView(store), AlertChannel())

    await todo_app.load()

    assert [node.todo_id for node in todo_app.view.nodes] == expected
