"""Session credentials and the store interface the client reads them from."""

from typing import Protocol

from pydantic import AwareDatetime, BaseModel


class SessionCredential(BaseModel):
    """Tokens held for one authenticated session.

    The client only ever rewrites ``access_token`` and ``expiry_utc`` (on refresh).
    """

    access_token: str
    refresh_token: str
    expiry_utc: AwareDatetime
    creation_utc: AwareDatetime

    model_config = {"validate_assignment": True}


class SessionStore(Protocol):
    """Mapping from an opaque session key to its credential."""

    def get(self, key: str) -> SessionCredential | None: ...

    def set(self, key: str, credential: SessionCredential) -> None: ...

    def delete(self, key: str) -> bool: ...


class InMemorySessionStore:
    """Dict-backed :class:`SessionStore` for tests and single-process servers."""

    def __init__(self, sessions: dict[str, SessionCredential] | None = None) -> None:
        self._sessions: dict[str, SessionCredential] = dict(sessions or {})

    def get(self, key: str) -> SessionCredential | None:
        return self._sessions.get(key)

    def set(self, key: str, credential: SessionCredential) -> None:
        self._sessions[key] = credential

    def delete(self, key: str) -> bool:
        return self._sessions.pop(key, None) is not None

    def __contains__(self, key: object) -> bool:
        return key in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
