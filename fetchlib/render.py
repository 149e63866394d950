from typing import Any, Dict, Iterable, List, Optional

from bs4 import BeautifulSoup


PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head><title>Users</title></head>
<body>
<p id="error-message"></p>
<ul id="users-list"></ul>
</body>
</html>
"""


def new_document(html: str = PAGE_TEMPLATE) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _records(user_data: Any) -> Iterable[Dict[str, Any]]:
    # reqres wraps lists as {"data": [...]}; a single user as {"data": {...}}
    if isinstance(user_data, dict):
        user_data = user_data.get("data") or []
    if isinstance(user_data, dict):
        return [user_data]
    return user_data


def render_users(user_data: Any, document: Optional[BeautifulSoup] = None) -> BeautifulSoup:
    """Replace the contents of ``#users-list`` with one ``<li>`` per user."""
    if document is None:
        document = new_document()
    if not user_data:
        return document

    users_list = document.select_one("#users-list")
    if users_list is None:
        raise ValueError("document has no #users-list element")
    users_list.clear()

    for user in _records(user_data):
        li = document.new_tag("li")
        p = document.new_tag("p")
        p.string = f"{user.get('first_name', '')} {user.get('last_name', '')}".strip()
        img = document.new_tag("img", src=user.get("avatar", ""))
        li.append(p)
        li.append(img)
        users_list.append(li)
    return document


def render_error(document: BeautifulSoup, message: str) -> BeautifulSoup:
    slot = document.select_one("#error-message")
    if slot is None:
        raise ValueError("document has no #error-message element")
    slot.string = message
    return document


def render_joke(joke: Dict[str, Any]) -> List[str]:
    if not joke:
        return []
    if "setup" in joke:
        return [joke["setup"], joke.get("delivery", "")]
    return [joke.get("joke", "")]
