"""
app/services/todo_gateway.py

Purpose: Remote todo API integration

- Fetches users and todos collections
- Creates todos, updates the completed flag, deletes todos
- Checks connectivity and input before any request
- Translates transport and HTTP failures into typed errors
"""

import httpx
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import (
    HttpError,
    InvalidIdError,
    MalformedResponseError,
    NetworkError,
    ValidationError,
)
from app.core.logging import get_logger
from app.models.todo import Todo
from app.services.connectivity import ConnectivityMonitor
from utils.constants import (
    ACTION_CREATE,
    ACTION_DELETE,
    ACTION_LOAD,
    ACTION_TOGGLE,
    JSON_HEADERS,
    MISSING_TITLE_MESSAGE,
    MISSING_USER_MESSAGE,
    TODOS_RESOURCE,
    UNREACHABLE_API_MESSAGE,
)
from utils.validation_utils import is_valid_todo_id, normalize_title

logger = get_logger(__name__)


class TodoGateway:
    """
    Thin client over the remote users/todos REST API.

    Every operation raises a TodoBoardError subclass on failure;
    catching and reporting is left to the caller.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        connectivity: ConnectivityMonitor,
        max_todo_id: int = 200,
        delete_resource: str = "posts"
    ):
        self._client = client
        self._connectivity = connectivity
        self._max_todo_id = max_todo_id
        self._delete_resource = delete_resource.strip("/")

    async def fetch_collection(self, resource: str) -> List[Dict[str, Any]]:
        """
        Fetches a whole collection, e.g. GET /users.

        Raises:
            NetworkError: If offline or the API is unreachable
            HttpError: On a non-success status
        """
        self._ensure_online()
        logger.info(f"Fetching /{resource}")

        response = await self._send("GET", f"/{resource}")
        self._raise_for_status(response, ACTION_LOAD)

        data = self._json(response)
        if not isinstance(data, list):
            raise MalformedResponseError(details={"resource": resource})
        logger.debug(f"Fetched {len(data)} records from /{resource}")
        return data

    async def create_todo(self, user_id: Optional[int], title: Optional[str]) -> Todo:
        """
        Creates a todo owned by user_id. The server assigns the id.

        Raises:
            NetworkError: If offline or the API is unreachable
            ValidationError: If the title is blank or no user is selected
            HttpError: On a non-success status
        """
        self._ensure_online()

        title = normalize_title(title)
        if not title:
            raise ValidationError(MISSING_TITLE_MESSAGE)
        if not user_id or user_id < 1:
            raise ValidationError(MISSING_USER_MESSAGE)

        payload = {
            "userId": user_id,
            "title": title,
            "completed": False
        }
        logger.info(f"Creating todo for user {user_id}")

        response = await self._send("POST", f"/{TODOS_RESOURCE}", json=payload)
        self._raise_for_status(response, ACTION_CREATE)

        return self._parse_todo(response)

    async def set_completed(self, todo_id: int, completed: bool) -> Todo:
        """
        Sets the completed flag of a todo via PATCH /todos/{id}.

        Raises:
            NetworkError: If offline or the API is unreachable
            InvalidIdError: If the id is outside the stored range
            HttpError: On a non-success status
        """
        self._ensure_online()
        self._ensure_valid_id(todo_id)

        logger.info(f"Setting todo {todo_id} completed={completed}")

        response = await self._send(
            "PATCH",
            f"/{TODOS_RESOURCE}/{todo_id}",
            json={"completed": completed}
        )
        self._raise_for_status(response, ACTION_TOGGLE)

        return self._parse_todo(response)

    async def delete_todo(self, todo_id: int) -> bool:
        """
        Deletes a todo via DELETE /{delete_resource}/{id}.

        Returns:
            True once the API acknowledged the delete

        Raises:
            NetworkError: If offline or the API is unreachable
            InvalidIdError: If the id is outside the stored range
            HttpError: On a non-success status
        """
        self._ensure_online()
        self._ensure_valid_id(todo_id)

        logger.info(f"Deleting todo {todo_id} via /{self._delete_resource}")

        response = await self._send("DELETE", f"/{self._delete_resource}/{todo_id}")
        self._raise_for_status(response, ACTION_DELETE)

        return True

    def _ensure_online(self) -> None:
        if not self._connectivity.is_online():
            raise NetworkError()

    def _ensure_valid_id(self, todo_id: int) -> None:
        if not is_valid_todo_id(todo_id, self._max_todo_id):
            raise InvalidIdError(details={"todo_id": todo_id, "max_todo_id": self._max_todo_id})

    async def _send(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> httpx.Response:
        headers = JSON_HEADERS if json is not None else None
        try:
            return await self._client.request(method, path, json=json, headers=headers)
        except httpx.RequestError as e:
            logger.error(f"Network error on {method} {path}: {e}")
            raise NetworkError(UNREACHABLE_API_MESSAGE, details={"method": method, "path": path})

    @staticmethod
    def _raise_for_status(response: httpx.Response, action: str) -> None:
        if response.is_success:
            return
        logger.error(f"Todo API returned {response.status_code} while {action}")
        raise HttpError(response.status_code, response.reason_phrase, action=action)

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            logger.error(f"Todo API returned a non-JSON body for {response.request.url.path}")
            raise MalformedResponseError(details={"path": response.request.url.path})

    def _parse_todo(self, response: httpx.Response) -> Todo:
        try:
            return Todo.model_validate(self._json(response))
        except PydanticValidationError as e:
            logger.error(f"Todo API returned an invalid todo: {e}")
            raise MalformedResponseError(details={"path": response.request.url.path})


def create_http_client(base_url: str, timeout: Optional[float] = None, **kwargs) -> httpx.AsyncClient:
    """
    Builds the shared AsyncClient for the todo API.
    timeout=None waits indefinitely, matching the no-timeout contract.
    """
    return httpx.AsyncClient(base_url=base_url, timeout=timeout, follow_redirects=True, **kwargs)
