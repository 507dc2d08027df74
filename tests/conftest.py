"""Shared test fixtures for TodoBoard."""

import json
from typing import Dict, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio

from app.services.alert_channel import AlertChannel
from app.services.connectivity import ConnectivityMonitor
from app.services.state_store import StateStore
from app.services.todo_app import TodoApp
from app.services.todo_gateway import TodoGateway, create_http_client
from app.views.renderer import TodoListView

BASE_URL = "https://todo-api.test"


class FakeTodoApi:
    """
    In-memory stand-in for the remote users/todos API.

    Like the real mock API it answers writes without checking much:
    POST echoes the body with a fresh id, PATCH merges the body,
    DELETE on /posts/{id} always succeeds.
    """

    def __init__(self, users: Optional[List[dict]] = None, todos: Optional[List[dict]] = None):
        self.users = users if users is not None else [
            {"id": 1, "name": "Ann", "username": "ann", "email": "ann@example.com"},
        ]
        self.todos = todos if todos is not None else [
            {"id": 10, "userId": 1, "title": "Buy milk", "completed": False},
        ]
        self.next_id = max((todo["id"] for todo in self.todos), default=0) + 1
        self.requests: List[httpx.Request] = []
        self.failures: Dict[Tuple[str, str], int] = {}
        self.unreachable = False

    def fail(self, method: str, path: str, status_code: int) -> None:
        self.failures[(method, path)] = status_code

    def paths(self) -> List[str]:
        return [f"{request.method} {request.url.path}" for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method, path = request.method, request.url.path

        if self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)

        if (method, path) in self.failures:
            return httpx.Response(self.failures[(method, path)])

        parts = path.strip("/").split("/")

        if method == "GET" and parts == ["users"]:
            return httpx.Response(200, json=self.users)
        if method == "GET" and parts == ["todos"]:
            return httpx.Response(200, json=self.todos)

        if method == "POST" and parts == ["todos"]:
            body = json.loads(request.content)
            created = {**body, "id": self.next_id}
            self.next_id += 1
            return httpx.Response(201, json=created)

        if method == "PATCH" and len(parts) == 2 and parts[0] == "todos":
            todo_id = int(parts[1])
            body = json.loads(request.content)
            current = next((todo for todo in self.todos if todo["id"] == todo_id), {"id": todo_id})
            updated = {**current, **body}
            self.todos = [updated if todo["id"] == todo_id else todo for todo in self.todos]
            return httpx.Response(200, json=updated)

        if method == "DELETE" and len(parts) == 2 and parts[0] == "posts":
            return httpx.Response(200, json={})

        return httpx.Response(404, json={})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_api() -> FakeTodoApi:
    return FakeTodoApi()


@pytest.fixture
def connectivity() -> ConnectivityMonitor:
    return ConnectivityMonitor(online=True)


@pytest_asyncio.fixture
async def http_client(fake_api):
    client = create_http_client(BASE_URL, transport=fake_api.transport())
    yield client
    await client.aclose()


@pytest.fixture
def gateway(http_client, connectivity) -> TodoGateway:
    return TodoGateway(http_client, connectivity, max_todo_id=200, delete_resource="posts")


@pytest.fixture
def todo_app(gateway) -> TodoApp:
    store = StateStore()
    return TodoApp(gateway, store, TodoListView(store), AlertChannel())
