"""
utils/validation_utils.py

Purpose: Input validation

- New todo text normalization
- User selection parsing
- Todo id parsing and range guard
"""

from typing import Optional, Union


def normalize_title(title: Optional[str]) -> str:
    """
    Strips surrounding whitespace from a todo title.

    Args:
        title: Raw text from the form (may be None)

    Returns:
        Cleaned title, empty string if nothing usable was given
    """
    if not title:
        return ""
    return title.strip()


def parse_user_id(value: Union[str, int, None]) -> int:
    """
    Parses the value of the user select control.
    The placeholder option and anything non-numeric map to 0.
    """
    if value is None or value == "":
        return 0
    try:
        user_id = int(value)
    except (TypeError, ValueError):
        return 0
    return user_id if user_id > 0 else 0


def is_valid_todo_id(todo_id: int, max_todo_id: int) -> bool:
    """
    Checks that a todo id lies within the range the API stores.

    The mock API answers success for any id but only keeps 1..max_todo_id,
    so mutations outside that range would silently do nothing.
    """
    return 1 <= todo_id <= max_todo_id


def parse_todo_id(value: Union[str, int, None]) -> Optional[int]:
    """
    Parses a todo id taken from a form action path.
    Returns None when the value is not an integer.
    """
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
