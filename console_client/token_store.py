"""
Session storage for the console client.

A "remembered" session is written to a JSON file so it survives restarts;
otherwise it lives only as long as the TokenStore object.
"""
import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_FILE = Path.home() / '.queencell' / 'session.json'


class TokenStore:

    def __init__(self, path: Optional[os.PathLike] = None):
        self.path = Path(path or os.getenv('CONSOLE_TOKEN_FILE') or DEFAULT_TOKEN_FILE)
        self._session: Optional[Dict] = None

    @property
    def access_token(self) -> Optional[str]:
        session = self.load()
        return session.get('access_token') if session else None

    @property
    def refresh_token(self) -> Optional[str]:
        session = self.load()
        return session.get('refresh_token') if session else None

    @property
    def user(self) -> Optional[Dict]:
        session = self.load()
        return session.get('user') if session else None

    def save(self, access_token: str, refresh_token: Optional[str], user: Dict, remember: bool = False):
        self._session = {
            'access_token': access_token,
            'refresh_token': refresh_token,
            'user': user,
        }
        if remember:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self._session))
            self.path.chmod(0o600)
        elif self.path.exists():
            # A non-remembered login replaces any earlier remembered one
            self.path.unlink()

    def load(self) -> Optional[Dict]:
        if self._session is None and self.path.exists():
            try:
                self._session = json.loads(self.path.read_text())
            except (OSError, ValueError) as e:
                logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
                self.path.unlink(missing_ok=True)
        return self._session

    def clear(self):
        self._session = None
        self.path.unlink(missing_ok=True)
