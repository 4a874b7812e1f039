"""File-based session store for the roster and configuration."""

import json
from datetime import datetime
from pathlib import Path

from ..config import SESSION_DIR, SESSION_FILE, default_config
from ..roster import Roster


class SessionError(Exception):
    """Raised when a session file exists but cannot be read."""


class SessionStore:
    """
    JSON file holding the working roster and configuration.

    Each CLI command loads the session, applies its edit, saves it back
    and recomputes. Only inputs are stored; adjusted scores are always
    derived on demand.

    Usage:
        store = SessionStore(".score_normalizer/session.json")

        session = store.load()
        if session is None:
            store.save(Roster.sample(), default_config())
    """

    def __init__(self, path: str | Path | None = None):
        """
        Initialize store.

        Args:
            path: Session file path (default: .score_normalizer/session.json).
        """
        self.path = Path(path) if path else Path(SESSION_DIR) / SESSION_FILE

    def exists(self) -> bool:
        """Return True if a session file is present."""
        return self.path.exists()

    def load(self) -> dict | None:
        """
        Load the saved session.

        Returns:
            Dict with 'roster' (Roster), 'config' (dict) and 'saved_at',
            or None if there is no session.

        Raises:
            SessionError: If the file exists but cannot be parsed.
        """
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            config = default_config()
            config.update(data.get("config", {}))
            return {
                "roster": Roster.from_dict(data["roster"]),
                "config": config,
                "saved_at": datetime.fromisoformat(data["saved_at"]),
            }

        except (json.JSONDecodeError, KeyError, ValueError, TypeError, AttributeError) as e:
            # Left on disk so the user can repair it
            raise SessionError(f"Session file is unreadable: {self.path} ({e})") from e

    def save(self, roster: Roster, config: dict) -> None:
        """
        Write roster and configuration to the session file.

        Args:
            roster: Current student roster.
            config: Current configuration values.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)

        session_data = {
            "saved_at": datetime.now().isoformat(),
            "config": config,
            "roster": roster.to_dict(),
        }

        self.path.write_text(
            json.dumps(session_data, indent=2, default=str),
            encoding="utf-8"
        )

    def clear(self) -> bool:
        """
        Delete the session file.

        Returns:
            True if deleted, False if not found.
        """
        if self.path.exists():
            self.path.unlink()
            return True
        return False
