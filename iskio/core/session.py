import logging

from pydantic import ValidationError

from iskio.core.config import settings
from iskio.core.storage import JsonFileStore, KeyValueStore, MemoryStore
from iskio.models.auth import AuthUser

logger = logging.getLogger(__name__)

TOKEN_KEY = "iskio_auth_token"
USER_KEY = "iskio_auth_user"
REMEMBER_KEY = "iskio_auth_remember"


class AuthSession:
    """Bearer token and user profile, mirrored into one of two storage scopes.

    ``persistent`` survives restarts, ``transient`` lives as long as the process.
    Storage is read once in ``load``; afterwards this object is the source of
    truth and every write goes through to the backing scope.
    """

    def __init__(self, persistent: KeyValueStore, transient: KeyValueStore) -> None:
        self.persistent = persistent
        self.transient = transient
        self._token: str | None = None
        self._user: AuthUser | None = None
        self.load()

    @classmethod
    def default(cls) -> "AuthSession":
        return cls(JsonFileStore(settings.session_file), MemoryStore())

    def load(self) -> None:
        self._token = self.persistent.get(TOKEN_KEY) or self.transient.get(TOKEN_KEY)
        raw = self.persistent.get(USER_KEY) or self.transient.get(USER_KEY)
        self._user = _parse_user(raw)

    def _pick(self, persist: bool) -> tuple[KeyValueStore, KeyValueStore]:
        if persist:
            return self.persistent, self.transient
        return self.transient, self.persistent

    def get_access_token(self) -> str | None:
        return self._token

    def set_access_token(self, token: str | None, persist: bool = True) -> None:
        self._token = token
        if not token:
            self.persistent.remove(TOKEN_KEY)
            self.transient.remove(TOKEN_KEY)
            return
        target, other = self._pick(persist)
        target.set(TOKEN_KEY, token)
        other.remove(TOKEN_KEY)

    def is_persistent(self) -> bool:
        """True when the current token lives in the persistent scope."""
        return bool(self._token) and self.persistent.get(TOKEN_KEY) == self._token

    def get_stored_user(self) -> AuthUser | None:
        return self._user

    def set_stored_user(self, user: AuthUser | None, persist: bool = True) -> None:
        self._user = user
        if user is None:
            self.persistent.remove(USER_KEY)
            self.transient.remove(USER_KEY)
            return
        target, other = self._pick(persist)
        target.set(USER_KEY, user.model_dump_json())
        other.remove(USER_KEY)

    def get_remember_session(self) -> bool:
        return self.persistent.get(REMEMBER_KEY) == "true"

    def set_remember_session(self, remember: bool) -> None:
        self.persistent.set(REMEMBER_KEY, "true" if remember else "false")

    def clear_auth_storage(self) -> None:
        self.set_access_token(None)
        self.set_stored_user(None)
        self.persistent.remove(REMEMBER_KEY)


def _parse_user(raw: str | None) -> AuthUser | None:
    if not raw:
        return None
    try:
        return AuthUser.model_validate_json(raw)
    except ValidationError:
        logger.warning("Discarding unreadable stored user")
        return None
