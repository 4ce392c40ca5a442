"""
Per-client anonymous like token, created once and reused.

The token only de-duplicates likes from one client. It is not a login and
is never sent as, or mixed with, the session token.
"""
import json
import logging
import os
import random
import string
import time
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path.home() / ".promptgallery" / "client.json"
TOKEN_KEY = "promptgallery_user_id"
_ALPHABET = string.digits + string.ascii_lowercase


def generate_token():
    """``user_<epoch ms>_<9 base36 chars>``."""
    suffix = "".join(random.choice(_ALPHABET) for _ in range(9))
    return f"user_{int(time.time() * 1000)}_{suffix}"


class TokenStore:
    """Client-side key/value storage backed by a small JSON file."""

    def __init__(self, path=None):
        self.path = Path(path) if path else DEFAULT_STORE_PATH

    def _read(self):
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable client storage {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data):
        os.makedirs(self.path.parent, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)

    def load_or_create(self):
        data = self._read()
        token = data.get(TOKEN_KEY)
        if not token:
            token = generate_token()
            data[TOKEN_KEY] = token
            self._write(data)
        return token
