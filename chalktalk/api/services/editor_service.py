"""
Service layer for the editor API.

Holds the single editing session shared by all requests. Sync FastAPI
endpoints run in a thread pool, so access goes through a lock.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Generator, Optional

from chalktalk.config import get_config
from chalktalk.session import EditorSession
from chalktalk.storage import PlaybookStore

logger = logging.getLogger(__name__)


class EditorSessionManager:
    """Owns the process-wide editing session."""

    def __init__(self):
        self._session: Optional[EditorSession] = None
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._session is not None

    def _open(self) -> EditorSession:
        config = get_config()
        store = PlaybookStore(config.store_path, default_playbook_name=config.default_playbook_name)
        logger.info(f"Opening editor session from {store.path}")
        return EditorSession.open(store)

    @contextmanager
    def session(self) -> Generator[EditorSession, None, None]:
        """Exclusive access to the session, opening it on first use."""
        with self._lock:
            if self._session is None:
                self._session = self._open()
            yield self._session

    def set_session(self, session: Optional[EditorSession]) -> None:
        """Replace the session (None closes it). Useful for testing."""
        with self._lock:
            self._session = session


# Global session manager instance
editor_session_manager = EditorSessionManager()
