"""
Credential Management

CredentialStore holds the API key for the vision service in memory and is
passed explicitly to whatever needs it. CredentialFile is the persistence
side: it keeps keys on disk under a fixed name per provider so the CLI can
restore them on the next run.
"""

import json
import logging
from pathlib import Path
from typing import Callable, Optional


logger = logging.getLogger(__name__)

CredentialListener = Callable[[Optional[str]], None]

DEFAULT_CREDENTIALS_FILE = Path.home() / ".pixelmedic" / "credentials.json"


def credential_key(provider: str) -> str:
    """Fixed storage key for a provider's credential, e.g. 'gemini_api_key'"""
    return f"{provider}_api_key"


class CredentialStore:
    """
    In-memory holder of the current access credential.

    Replacing the credential affects only requests started afterwards.
    Listeners are told about every change; the analysis client uses this
    to clear a stale error message.

    Example:
        store = CredentialStore()
        store.set_credential("AIza...")
        assert store.is_configured()
    """

    def __init__(self, credential: Optional[str] = None):
        self._credential = credential
        self._listeners: list[CredentialListener] = []

    @property
    def credential(self) -> Optional[str]:
        return self._credential

    def is_configured(self) -> bool:
        """True iff a non-empty credential is held"""
        return self._credential is not None and len(self._credential) > 0

    def set_credential(self, value: str) -> None:
        """Store a new credential and notify listeners"""
        self._credential = value
        logger.debug("Credential updated (configured=%s)", self.is_configured())
        for listener in list(self._listeners):
            listener(value)

    def subscribe(self, listener: CredentialListener) -> None:
        self._listeners.append(listener)


class CredentialFile:
    """
    JSON file of persisted credentials keyed by :func:`credential_key`.

    The file is created on first save with owner-only permissions.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else DEFAULT_CREDENTIALS_FILE

    def load(self, key: str) -> Optional[str]:
        """
        Read a persisted credential.

        Returns:
            The stored value, or None if the file or key does not exist

        Raises:
            RuntimeError: If the file exists but is not a JSON object
        """
        data = self._read()
        value = data.get(key)
        return value if isinstance(value, str) and value else None

    def save(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        self.path.chmod(0o600)
        logger.info("Saved credential '%s' to %s", key, self.path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Credentials file is not valid JSON: {self.path}") from e

        if not isinstance(data, dict):
            raise RuntimeError(f"Credentials file must hold a JSON object: {self.path}")
        return data
