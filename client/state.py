"""
Process-wide client state: the signed-in user, their token and the display
theme. Persisted to a small JSON file under fixed keys.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

KEY_USER = "user"
KEY_TOKEN = "token"
KEY_THEME = "theme"

THEMES = ("light", "dark")
DEFAULT_THEME = "light"


class LocalStore:
    """JSON key/value file. Reads never raise; a bad file reads as empty."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def read(self) -> dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write then rename so a crash never leaves a half-written file
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".state-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise


class AppState:
    def __init__(
        self,
        store: LocalStore | None = None,
        user: dict[str, Any] | None = None,
        token: str | None = None,
        theme: str = DEFAULT_THEME,
    ):
        self.store = store
        self.user = user
        self.token = token
        self.theme = theme

    @classmethod
    def load(cls, store: LocalStore) -> "AppState":
        """Hydrate from `store`; anything missing or malformed falls back to defaults."""
        data = store.read()

        user = data.get(KEY_USER)
        token = data.get(KEY_TOKEN)
        if not isinstance(user, dict) or not isinstance(token, str) or not token:
            # A session is the user and token together or nothing
            user, token = None, None

        theme = data.get(KEY_THEME)
        if theme not in THEMES:
            theme = DEFAULT_THEME

        return cls(store=store, user=user, token=token, theme=theme)

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def sign_in(self, user: dict[str, Any], token: str) -> None:
        self.user = user
        self.token = token
        self.save()

    def sign_out(self) -> None:
        self.user = None
        self.token = None
        self.save()

    def toggle_theme(self) -> str:
        self.theme = "dark" if self.theme == "light" else "light"
        self.save()
        return self.theme

    def save(self) -> None:
        if self.store is None:
            return
        self.store.write({KEY_USER: self.user, KEY_TOKEN: self.token, KEY_THEME: self.theme})
