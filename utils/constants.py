"""
utils/constants.py

Purpose: Centralized static content

- All user-facing messages
- Remote API resource names
- Labels used by the page

(Prevents hardcoding across the codebase)
"""

# ============================================================
# REMOTE API RESOURCES
# ============================================================

USERS_RESOURCE = "users"
TODOS_RESOURCE = "todos"

JSON_HEADERS = {
    "Content-type": "application/json; charset=UTF-8",
}

# ============================================================
# ALERT MESSAGES
# ============================================================

NO_CONNECTION_MESSAGE = "No internet connection."

UNREACHABLE_API_MESSAGE = "Unable to reach the todo server. Please try again."

INVALID_ID_MESSAGE = (
    "Action not possible. A todo with this id does not exist on the server, "
    "it only exists on this page."
)

MISSING_TITLE_MESSAGE = "Write the text of the task to add it."

MISSING_USER_MESSAGE = "Select a user."

TODO_NOT_LOADED_MESSAGE = "Todo {todo_id} is not on the list."

MALFORMED_DATA_MESSAGE = "The server returned data in an unexpected format."

# ============================================================
# HTTP ERROR ACTIONS
# (rendered as "Error while {action}: {status} - {reason}.")
# ============================================================

ACTION_LOAD = "loading data"
ACTION_CREATE = "adding the task"
ACTION_TOGGLE = "updating the task status"
ACTION_DELETE = "deleting the task"

# ============================================================
# PAGE LABELS
# ============================================================

PAGE_TITLE = "Todo list"
USER_PLACEHOLDER_LABEL = "Select user"
NEW_TODO_PLACEHOLDER = "New todo"
ADD_BUTTON_LABEL = "Add todo"
ALERT_BUTTON_LABEL = "OK"
RELOAD_BUTTON_LABEL = "Reload"
