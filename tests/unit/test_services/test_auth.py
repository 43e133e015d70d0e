"""Unit tests for booth admin login and sessions."""
import pytest
from datetime import timedelta

from boothops.core.config import settings
from boothops.core.errors import (
    AuthenticationError,
    ForbiddenError,
    InvalidRequestError,
    NotFoundError,
)
from boothops.core.utils import utc_now
from boothops.db.models import BoothAdmin
from boothops.services.auth import (
    authenticate,
    ensure_booth_access,
    ensure_super_admin,
    login,
    logout,
    set_booth_admin_password,
)


@pytest.mark.unit
class TestLogin:
    """Test credential checks and session issuing."""

    def test_booth_admin_login(self, db_session, session_store):
        session = login(db_session, session_store, "1-1", "0000", settings)

        assert session.class_name == "1-1"
        assert session.is_super_admin is False
        assert session.default_booth_id == 1
        assert len(session.token) == 48
        assert session_store.get(session.token) is session

    def test_session_expires_after_twelve_hours(self, db_session, session_store):
        session = login(db_session, session_store, "2-1", "0000", settings)

        assert session.expires_at - session.created_at == timedelta(hours=12)

    def test_super_admin_login(self, db_session, session_store):
        session = login(
            db_session, session_store, settings.SUPERADMIN_CLASS_NAME, settings.SUPERADMIN_PASSWORD, settings
        )

        assert session.is_super_admin is True
        assert session.default_booth_id is None

    def test_wrong_pin(self, db_session, session_store):
        with pytest.raises(AuthenticationError) as exc_info:
            login(db_session, session_store, "1-1", "1234", settings)

        assert exc_info.value.code == "INVALID_CREDENTIALS"
        assert len(session_store) == 0

    def test_unknown_class(self, db_session, session_store):
        with pytest.raises(AuthenticationError, match="INVALID_CREDENTIALS"):
            login(db_session, session_store, "9-9", "0000", settings)

    def test_comparison_is_exact(self, db_session, session_store):
        with pytest.raises(AuthenticationError):
            login(db_session, session_store, "1-1", "0000 ", settings)

    @pytest.mark.parametrize("class_name", [" 1-1", "1-1 ", "1 - 1"])
    def test_class_name_is_not_trimmed(self, db_session, session_store, class_name):
        with pytest.raises(AuthenticationError, match="INVALID_CREDENTIALS"):
            login(db_session, session_store, class_name, "0000", settings)

        assert len(session_store) == 0

    @pytest.mark.parametrize("class_name,password", [("", "0000"), ("1-1", ""), (None, "0000"), ("1-1", None)])
    def test_missing_credentials(self, db_session, session_store, class_name, password):
        with pytest.raises(InvalidRequestError) as exc_info:
            login(db_session, session_store, class_name, password, settings)

        assert exc_info.value.code == "MISSING_CREDENTIALS"

    def test_each_login_gets_a_new_token(self, db_session, session_store):
        first = login(db_session, session_store, "1-1", "0000", settings)
        second = login(db_session, session_store, "1-1", "0000", settings)

        assert first.token != second.token
        assert len(session_store) == 2


@pytest.mark.unit
class TestAuthenticate:
    """Test token resolution."""

    def test_valid_token(self, db_session, session_store):
        session = login(db_session, session_store, "1-1", "0000", settings)

        assert authenticate(session_store, session.token) is session

    @pytest.mark.parametrize("token", [None, "", "not-a-token"])
    def test_unknown_token(self, session_store, token):
        with pytest.raises(AuthenticationError) as exc_info:
            authenticate(session_store, token)

        assert exc_info.value.code == "UNAUTHORIZED"
        assert exc_info.value.status_code == 401

    def test_expired_token(self, db_session, session_store):
        session = login(db_session, session_store, "1-1", "0000", settings)

        with pytest.raises(AuthenticationError) as exc_info:
            authenticate(session_store, session.token, now=utc_now() + timedelta(hours=12, seconds=1))

        assert exc_info.value.code == "EXPIRED"
        assert session_store.get(session.token) is None

    def test_logout(self, db_session, session_store):
        session = login(db_session, session_store, "1-1", "0000", settings)

        assert logout(session_store, session.token) is True
        with pytest.raises(AuthenticationError, match="UNAUTHORIZED"):
            authenticate(session_store, session.token)


@pytest.mark.unit
class TestAccess:
    """Test booth scoping."""

    def test_booth_admin_reaches_own_booth_only(self, db_session, session_store):
        session = login(db_session, session_store, "1-1", "0000", settings)

        ensure_booth_access(session, 1)
        with pytest.raises(ForbiddenError) as exc_info:
            ensure_booth_access(session, 2)
        assert exc_info.value.to_dict() == {"error": "FORBIDDEN"}

    def test_super_admin_reaches_every_booth(self, db_session, session_store):
        session = login(
            db_session, session_store, settings.SUPERADMIN_CLASS_NAME, settings.SUPERADMIN_PASSWORD, settings
        )

        for booth_id in range(1, 8):
            ensure_booth_access(session, booth_id)
        ensure_super_admin(session)

    def test_booth_admin_is_not_super_admin(self, db_session, session_store):
        session = login(db_session, session_store, "1-1", "0000", settings)

        with pytest.raises(ForbiddenError):
            ensure_super_admin(session)


@pytest.mark.unit
class TestSetBoothAdminPassword:
    """Test PIN changes."""

    def test_change_invalidates_sessions_of_that_class(self, db_session, session_store):
        old = login(db_session, session_store, "1-1", "0000", settings)
        other = login(db_session, session_store, "1-2", "0000", settings)

        invalidated = set_booth_admin_password(db_session, session_store, "1-1", "4321", settings)

        assert invalidated == 1
        with pytest.raises(AuthenticationError):
            authenticate(session_store, old.token)
        assert authenticate(session_store, other.token) is other

    def test_old_pin_fails_new_pin_works(self, db_session, session_store):
        set_booth_admin_password(db_session, session_store, "1-1", "4321", settings)

        with pytest.raises(AuthenticationError):
            login(db_session, session_store, "1-1", "0000", settings)
        assert login(db_session, session_store, "1-1", "4321", settings).default_booth_id == 1

    def test_creates_missing_admin(self, db_session, session_store):
        db_session.query(BoothAdmin).filter(BoothAdmin.class_name == "3-3").delete()
        db_session.commit()

        set_booth_admin_password(db_session, session_store, "3-3", "7777", settings)

        assert login(db_session, session_store, "3-3", "7777", settings).class_name == "3-3"

    @pytest.mark.parametrize("password", [None, "", "   "])
    def test_missing_password(self, db_session, session_store, password):
        with pytest.raises(InvalidRequestError, match="MISSING_PASSWORD"):
            set_booth_admin_password(db_session, session_store, "1-1", password, settings)

    def test_cannot_change_super_admin(self, db_session, session_store):
        with pytest.raises(InvalidRequestError, match="CANNOT_CHANGE_SUPERADMIN"):
            set_booth_admin_password(db_session, session_store, settings.SUPERADMIN_CLASS_NAME, "x", settings)

    def test_unknown_booth(self, db_session, session_store):
        with pytest.raises(NotFoundError):
            set_booth_admin_password(db_session, session_store, "9-9", "1234", settings)
