"""
In-process store for booth admin sessions.

Sessions live only in memory: restarting the process logs every booth admin
out. Handlers receive the store through a FastAPI dependency so tests can use
an isolated instance and a shared backend can be swapped in later.
"""
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, Protocol

from boothops.core.security import generate_admin_token
from boothops.core.utils import utc_now


@dataclass
class AdminSession:
    """One issued admin token and the identity it stands for."""

    token: str
    admin_id: int
    class_name: str
    is_super_admin: bool
    default_booth_id: Optional[int]
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        current = now or utc_now()
        return current >= self.expires_at

    def can_access(self, booth_id: int) -> bool:
        """Super admins reach every booth; class admins only their own."""
        if self.is_super_admin:
            return True
        return self.default_booth_id is not None and self.default_booth_id == booth_id


class SessionStore(Protocol):
    """Storage contract for admin sessions."""

    def get(self, token: str) -> Optional[AdminSession]:
        ...

    def put(self, session: AdminSession) -> None:
        ...

    def remove(self, token: str) -> bool:
        ...

    def invalidate_where(self, predicate: Callable[[AdminSession], bool]) -> int:
        ...

    def purge_expired(self, now: Optional[datetime] = None) -> int:
        ...


class InMemorySessionStore:
    """
    Thread-safe dictionary of token -> AdminSession.

    Uses threading.RLock so the store works from both sync code and async
    FastAPI endpoints.
    """

    def __init__(self):
        self._sessions: Dict[str, AdminSession] = {}
        self._lock = threading.RLock()

    def get(self, token: str) -> Optional[AdminSession]:
        with self._lock:
            return self._sessions.get(token)

    def put(self, session: AdminSession) -> None:
        with self._lock:
            self._sessions[session.token] = session

    def remove(self, token: str) -> bool:
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def invalidate_where(self, predicate: Callable[[AdminSession], bool]) -> int:
        """Remove every session matching predicate; returns how many were removed."""
        with self._lock:
            doomed = [token for token, session in self._sessions.items() if predicate(session)]
            for token in doomed:
                del self._sessions[token]
            return len(doomed)

    def purge_expired(self, now: Optional[datetime] = None) -> int:
        current = now or utc_now()
        return self.invalidate_where(lambda session: session.is_expired(current))

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


def new_session(
    admin_id: int,
    class_name: str,
    is_super_admin: bool,
    default_booth_id: Optional[int],
    ttl: timedelta,
    now: Optional[datetime] = None,
) -> AdminSession:
    """Build a fresh session with a random token."""
    created = now or utc_now()
    return AdminSession(
        token=generate_admin_token(),
        admin_id=admin_id,
        class_name=class_name,
        is_super_admin=is_super_admin,
        default_booth_id=default_booth_id,
        created_at=created,
        expires_at=created + ttl,
    )
