"""Booth admin directory and session issuing."""
from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy.orm import Session

from boothops.db.models import BoothAdmin
from boothops.core.config import Settings, settings as default_settings
from boothops.core.errors import (
    AuthenticationError,
    ForbiddenError,
    InvalidRequestError,
    NotFoundError,
)
from boothops.core.logging_config import get_logger
from boothops.core.security import is_superadmin_class, verify_booth_pin
from boothops.core.sessions import AdminSession, SessionStore, new_session
from boothops.core.utils import utc_now
from boothops.services.booths import get_booth_by_class_name

logger = get_logger(__name__)


def find_booth_admin(db: Session, class_name: str, password: str) -> Optional[BoothAdmin]:
    """Return the admin whose class name and PIN both match exactly, else None."""
    admin = db.query(BoothAdmin).filter(BoothAdmin.class_name == class_name).first()
    if admin and verify_booth_pin(password, admin.password):
        return admin
    return None


def issue_session(
    db: Session,
    store: SessionStore,
    admin: BoothAdmin,
    config: Settings = None,
    now: Optional[datetime] = None,
) -> AdminSession:
    """Create and store a session for a successfully authenticated admin."""
    config = config or default_settings
    booth = get_booth_by_class_name(db, admin.class_name)
    session = new_session(
        admin_id=admin.id,
        class_name=admin.class_name,
        is_super_admin=is_superadmin_class(admin.class_name, config.SUPERADMIN_CLASS_NAME),
        default_booth_id=booth.id if booth else None,
        ttl=timedelta(hours=config.ADMIN_TOKEN_TTL_HOURS),
        now=now,
    )
    store.put(session)
    return session


def login(
    db: Session,
    store: SessionStore,
    class_name: Optional[str],
    password: Optional[str],
    config: Settings = None,
) -> AdminSession:
    """
    Authenticate a booth admin and issue a token.

    Raises:
        InvalidRequestError: MISSING_CREDENTIALS if either field is empty
        AuthenticationError: INVALID_CREDENTIALS if no admin matches; the
            class name is compared as sent, without trimming
    """
    if not class_name or not password:
        raise InvalidRequestError("MISSING_CREDENTIALS")

    admin = find_booth_admin(db, class_name, password)
    if not admin:
        logger.warning("booth_admin_login_failed", class_name=class_name)
        raise AuthenticationError("INVALID_CREDENTIALS")

    session = issue_session(db, store, admin, config)
    logger.info(
        "booth_admin_login",
        admin_id=session.admin_id,
        class_name=session.class_name,
        is_super_admin=session.is_super_admin,
        booth_id=session.default_booth_id,
    )
    return session


def authenticate(store: SessionStore, token: Optional[str], now: Optional[datetime] = None) -> AdminSession:
    """
    Resolve a bearer token to its live session.

    Raises:
        AuthenticationError: UNAUTHORIZED if the token is unknown,
                             EXPIRED if it is past its TTL (the session is dropped)
    """
    if not token:
        raise AuthenticationError("UNAUTHORIZED")
    session = store.get(token)
    if session is None:
        raise AuthenticationError("UNAUTHORIZED")
    if session.is_expired(now or utc_now()):
        store.remove(token)
        raise AuthenticationError("EXPIRED")
    return session


def logout(store: SessionStore, token: str) -> bool:
    return store.remove(token)


def ensure_super_admin(session: AdminSession) -> None:
    if not session.is_super_admin:
        raise ForbiddenError()


def ensure_booth_access(session: AdminSession, booth_id: int) -> None:
    """All booth-scoped operations call this before touching the usage ledger."""
    if not session.can_access(booth_id):
        raise ForbiddenError()


def set_booth_admin_password(
    db: Session,
    store: SessionStore,
    class_name: str,
    new_password: Optional[str],
    config: Settings = None,
) -> int:
    """
    Set a booth's PIN and force everyone logged in as that class to log in again.

    The super admin cannot change its own password through this path.

    Returns:
        Number of sessions invalidated

    Raises:
        InvalidRequestError: MISSING_PASSWORD, CANNOT_CHANGE_SUPERADMIN
        NotFoundError: NOT_FOUND if no booth uses class_name
    """
    config = config or default_settings
    if not new_password or not new_password.strip():
        raise InvalidRequestError("MISSING_PASSWORD")
    if is_superadmin_class(class_name, config.SUPERADMIN_CLASS_NAME):
        raise InvalidRequestError("CANNOT_CHANGE_SUPERADMIN")
    if get_booth_by_class_name(db, class_name) is None:
        raise NotFoundError()

    try:
        admin = db.query(BoothAdmin).filter(BoothAdmin.class_name == class_name).first()
        if admin:
            admin.password = new_password
        else:
            db.add(BoothAdmin(class_name=class_name, password=new_password))
        db.commit()
    except Exception:
        db.rollback()
        raise

    invalidated = store.invalidate_where(lambda session: session.class_name == class_name)
    logger.info("booth_admin_password_changed", class_name=class_name)
    logger.info("booth_sessions_invalidated", class_name=class_name, count=invalidated)
    return invalidated
