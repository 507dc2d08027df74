"""
app/views/page.py

Purpose: Full HTML document for the todo page

- Alert region (hidden or visible with message)
- Container blurred and inert while the alert is visible
- New-todo form with the user select
- Todo list built from the view's nodes
"""

from html import escape

from app.services.alert_channel import AlertChannel
from app.views.renderer import TodoListView
from utils.constants import (
    ADD_BUTTON_LABEL,
    ALERT_BUTTON_LABEL,
    NEW_TODO_PLACEHOLDER,
    PAGE_TITLE,
    RELOAD_BUTTON_LABEL,
    USER_PLACEHOLDER_LABEL,
)


def render_alert(alert: AlertChannel) -> str:
    state_class = "" if alert.visible else " close"
    return f"""
    <div id="alert" class="alert{state_class}" role="alert">
        <p id="message">{escape(alert.message)}</p>
        <form method="post" action="/alert/dismiss">
            <button id="alertBtn" type="submit">{ALERT_BUTTON_LABEL}</button>
        </form>
    </div>"""


def render_form(view: TodoListView) -> str:
    placeholder_selected = " selected" if not view.selected_user_id else ""
    options = [f'<option value=""{placeholder_selected} disabled>{USER_PLACEHOLDER_LABEL}</option>']
    for option in view.user_options:
        selected = " selected" if option.value == view.selected_user_id else ""
        options.append(f'<option value="{option.value}"{selected}>{escape(option.label)}</option>')

    return f"""
        <form method="post" action="/todos" id="new-todo-form">
            <select name="user_id" id="user-todo">
                {"".join(options)}
            </select>
            <input type="text" name="title" id="new-todo" placeholder="{NEW_TODO_PLACEHOLDER}" value="{escape(view.draft_title)}">
            <button type="submit">{ADD_BUTTON_LABEL}</button>
        </form>"""


def render_page(view: TodoListView, alert: AlertChannel) -> str:
    """Renders the whole page from the view model and alert state."""
    container_attrs = ' style="filter: blur(2px); pointer-events: none;"' if alert.visible else ""
    items = "\n".join(node.html for node in view.nodes)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{PAGE_TITLE}</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            max-width: 640px;
            margin: 40px auto;
            padding: 0 20px;
        }}

        .alert {{
            position: fixed;
            top: 30%;
            left: 50%;
            transform: translateX(-50%);
            background: #fff;
            border: 1px solid #e55;
            border-radius: 8px;
            padding: 20px;
            z-index: 10;
        }}

        .alert.close {{
            display: none;
        }}

        .todo-item {{
            display: flex;
            align-items: center;
            gap: 8px;
            padding: 6px 0;
        }}

        .todo-item form {{
            margin: 0;
        }}

        .removeBtn {{
            border: none;
            background: none;
            cursor: pointer;
            color: #c33;
        }}
    </style>
</head>
<body>
    {render_alert(alert)}
    <div class="container"{container_attrs}>
        <h1>{PAGE_TITLE}</h1>
        {render_form(view)}
        <ul id="todo-list">
{items}
        </ul>
        <form method="post" action="/reload">
            <button type="submit">{RELOAD_BUTTON_LABEL}</button>
        </form>
    </div>
</body>
</html>"""
