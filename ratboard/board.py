"""
Client-side board: application state, persisted flags and the render contract.

This mirrors the script served by ``ratboard.pages`` so the two rendering
paths can be exercised without a browser:

- the title is always escaped
- the description is escaped when ``safe_render`` is on and inserted as raw
  markup when it is off (the DOM-XSS sink)

State lives in a ``BoardState`` loaded from ``LocalStorage`` and is only
changed through the ``BoardClient`` actions.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from markupsafe import Markup

from .client import ApiUnavailable
from .schemas import is_valid_username

logger = logging.getLogger(__name__)

ORDER = ("todo", "doing", "done")

TOKEN_KEY = "token"
SAFE_RENDER_KEY = "safeRender"

CARD = Markup(
    '<div class="task" data-id="{id}" data-status="{status}">'
    '<div class="title">{title}</div>'
    '<div class="desc">{description}</div>'
    '<div class="bar">'
    '<button class="ghost" data-move="-1">&larr;</button>'
    '<button class="ghost" data-move="1">&rarr;</button>'
    "</div>"
    "</div>"
)


class LocalStorage:
    """String key/value store, kept in a JSON file when a path is given."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path else None
        self._items: dict[str, str] = {}
        if self.path and self.path.exists():
            self._items = json.loads(self.path.read_text(encoding="utf-8"))

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)
        self._flush()

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
        self._flush()

    def _flush(self) -> None:
        if self.path:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self._items), encoding="utf-8")


@dataclass
class BoardState:
    current_user: str | None = None
    safe_render: bool = False
    tasks: list[dict] = field(default_factory=list)
    message: str = ""
    message_is_error: bool = False

    @classmethod
    def from_storage(cls, storage: LocalStorage) -> BoardState:
        return cls(
            current_user=storage.get_item(TOKEN_KEY),
            safe_render=storage.get_item(SAFE_RENDER_KEY) == "1",
        )


@dataclass
class BoardView:
    columns: dict[str, list[Markup]]

    def html(self) -> Markup:
        parts = [
            Markup('<div class="column" id="col-{0}">{1}</div>').format(status, Markup("").join(cards))
            for status, cards in self.columns.items()
        ]
        return Markup("").join(parts)


def next_status(status: str, direction: int) -> str | None:
    """Adjacent status in todo -> doing -> done, or None past either end."""
    if status not in ORDER:
        return None
    idx = ORDER.index(status) + direction
    if idx < 0 or idx >= len(ORDER):
        return None
    return ORDER[idx]


def render_card(task: dict, safe_render: bool) -> Markup:
    description = task.get("description") or ""
    if not safe_render:
        # ❌ VULNERABLE: description goes in as live markup
        description = Markup(description)
    return CARD.format(
        id=task.get("id", ""),
        status=task.get("status", ""),
        title=task.get("title", ""),
        description=description,
    )


def render_columns(tasks: list[dict], safe_render: bool) -> BoardView:
    columns: dict[str, list[Markup]] = {s: [] for s in ORDER}
    for task in tasks:
        columns.get(task.get("status"), columns["todo"]).append(render_card(task, safe_render))
    return BoardView(columns)


class BoardClient:
    """
    Drives the API the way the page does.

    Requests are fired one per action and never cancelled or de-duplicated,
    so two quick toggles can land their list responses out of order.
    """

    def __init__(self, api, storage: LocalStorage | None = None) -> None:
        self.api = api
        self.storage = storage if storage is not None else LocalStorage()
        self.state = BoardState.from_storage(self.storage)

    # ----- plumbing -----

    def _say(self, text: str, error: bool = False) -> None:
        self.state.message = text
        self.state.message_is_error = error

    def _call(self, method: str, path: str, **kwargs) -> tuple[int, dict] | None:
        try:
            return self.api.request(method, path, **kwargs)
        except ApiUnavailable:
            self._say("Network error", error=True)
            return None

    # ----- actions -----

    def start(self) -> None:
        """Page load: repaint straight away when an identity was persisted."""
        if self.state.current_user:
            self.refresh()

    def login(self, username: str, password: str, vulnerable: bool = False) -> bool:
        username = username.strip()
        if not is_valid_username(username):
            self._say("Bad username", error=True)
            return False

        path = "/api/login-vulnerable" if vulnerable else "/api/login"
        result = self._call("POST", path, json={"username": username, "password": password})
        if result is None:
            return False
        status, data = result
        if status != 200:
            self._say(data.get("message") or "Login failed", error=True)
            return False

        self.state.current_user = data.get("token") or username
        self.storage.set_item(TOKEN_KEY, self.state.current_user)
        self._say(data.get("message", ""))
        logger.debug("Logged in as %s", self.state.current_user)
        self.refresh()
        return True

    def logout(self) -> None:
        self.storage.remove_item(TOKEN_KEY)
        self.state.current_user = None
        self.state.tasks = []
        self._say("")

    def refresh(self) -> None:
        if not self.state.current_user:
            return
        result = self._call("GET", "/api/tasks", params={"username": self.state.current_user})
        if result is None:
            return
        status, data = result
        if status != 200:
            self._say(data.get("message") or "Could not load tasks", error=True)
            return
        self.state.tasks = list(data.get("tasks") or [])

    def add_task(self, title: str, description: str = "", status: str = "todo") -> dict | None:
        payload = {
            "username": self.state.current_user,
            "title": title.strip(),
            "description": description,
            "status": status,
        }
        if not payload["title"]:
            self._say("Title required", error=True)
            return None

        result = self._call("POST", "/api/tasks", json=payload)
        if result is None:
            return None
        code, data = result
        if code != 201:
            self._say(data.get("message") or "Error", error=True)
            return None

        task = data["task"]
        self.state.tasks.insert(0, task)
        self._say("Saved")
        return task

    def move(self, task: dict, direction: int) -> bool:
        target = next_status(task.get("status"), direction)
        if target is None:
            return False

        result = self._call("PATCH", f"/api/tasks/{task['id']}", json={"status": target})
        if result is None:
            return False
        code, data = result
        if code != 200:
            self._say(data.get("message") or "Update failed", error=True)
        self.refresh()
        return code == 200

    def toggle_safe_render(self) -> bool:
        self.state.safe_render = not self.state.safe_render
        self.storage.set_item(SAFE_RENDER_KEY, "1" if self.state.safe_render else "0")
        self.refresh()
        return self.state.safe_render

    def render(self) -> BoardView:
        return render_columns(self.state.tasks, self.state.safe_render)
