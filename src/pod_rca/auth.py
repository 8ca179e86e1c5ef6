"""Service account bearer token shared by the HTTP backends."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from pod_rca.config import DEFAULT_TOKEN_PATH

logger = logging.getLogger(__name__)


class TokenProvider:
    """Reads the service account token once and hands out the cached header value.

    The first read wins: a missing or unreadable file caches an empty token,
    and later calls never touch the filesystem again.
    """

    def __init__(self, token_path: Path | str = DEFAULT_TOKEN_PATH) -> None:
        self.token_path = Path(token_path)
        self._token: str | None = None
        self._lock = threading.Lock()

    def get_token(self) -> str:
        """Return the Authorization header value ("Bearer <token>" or "")."""
        if self._token is not None:
            return self._token
        with self._lock:
            if self._token is None:
                self._token = self._read()
        return self._token

    def _read(self) -> str:
        if not self.token_path.exists():
            logger.warning("Service account token file not found at %s. Using empty token.", self.token_path)
            return ""
        try:
            token = self.token_path.read_text(encoding="utf-8").strip()
        except OSError:
            logger.exception("Failed to read service account token")
            return ""
        logger.info("Service account token loaded successfully.")
        return f"Bearer {token}" if token else ""
