"""Integration tests for super admin operations."""
import pytest
from urllib.parse import quote

from boothops.core.config import settings
from boothops.db.models import BoothUsage


@pytest.mark.integration
class TestDashboard:
    """Test GET /admin/booth-ops/dashboard."""

    def test_dashboard(self, client, super_headers):
        client.post("/api/booths/1/use", json={"studentId": 1}, headers=super_headers)
        client.post("/api/booths/3/use", json={"studentId": 1}, headers=super_headers)

        response = client.get("/api/admin/booth-ops/dashboard", headers=super_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["totalStudents"] == 143
        assert data["totalUsage"] == 2
        assert data["uniqueStudents"] == 1
        assert len(data["booths"]) == 7
        assert data["booths"][0]["totalUsage"] == 1
        assert data["booths"][0]["uniqueStudents"] == 1
        assert data["booths"][1]["lastUsedAt"] is None
        assert data["topStudents"][0]["student_id"] == 1
        assert data["topStudents"][0]["count"] == 2
        assert len(data["recent"]) == 2

    def test_booth_admin_is_forbidden(self, client, booth_headers):
        response = client.get("/api/admin/booth-ops/dashboard", headers=booth_headers)

        assert response.status_code == 403
        assert response.json() == {"error": "FORBIDDEN"}

    def test_requires_token(self, client):
        assert client.get("/api/admin/booth-ops/dashboard").status_code == 401


@pytest.mark.integration
class TestReset:
    """Test POST /admin/booth-ops/reset."""

    def test_reset(self, client, super_headers, db_session):
        usage_id = client.post(
            "/api/booths/1/use", json={"studentId": 1}, headers=super_headers
        ).json()["recentEntry"]["id"]
        client.post("/api/booths/1/use", json={"studentId": 2}, headers=super_headers)
        client.post(f"/api/booths/1/use/{usage_id}/void", json={}, headers=super_headers)

        response = client.post("/api/admin/booth-ops/reset", headers=super_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "deletedUsages": 1, "deletedVoids": 1}
        assert db_session.query(BoothUsage).count() == 0

    def test_booth_admin_cannot_reset(self, client, booth_headers):
        assert client.post("/api/admin/booth-ops/reset", headers=booth_headers).status_code == 403


@pytest.mark.integration
class TestPasswordChange:
    """Test PUT /admin/booth-ops/booth-admins/{className}/password."""

    def test_password_change_scenario(self, client, super_headers, booth_headers):
        response = client.put(
            "/api/admin/booth-ops/booth-admins/1-1/password",
            json={"password": "4321"},
            headers=super_headers,
        )
        assert response.status_code == 200
        assert response.json()["success"] is True

        # Token issued before the change is rejected
        response = client.get("/api/booths/1/usages/summary", headers=booth_headers)
        assert response.status_code == 401

        # Old PIN fails, new PIN works
        old = client.post("/api/admin/booth-login", json={"className": "1-1", "password": "0000"})
        assert old.status_code == 401
        new = client.post("/api/admin/booth-login", json={"className": "1-1", "password": "4321"})
        assert new.status_code == 200
        assert new.json()["boothId"] == 1

    def test_other_booths_keep_their_sessions(self, client, super_headers, login_as):
        other = login_as("2-1", "0000")

        client.put(
            "/api/admin/booth-ops/booth-admins/1-1/password",
            json={"password": "4321"},
            headers=super_headers,
        )

        response = client.get("/api/admin/booth-ops/me", headers={"x-admin-token": other["token"]})
        assert response.status_code == 200

    @pytest.mark.parametrize("body", [{}, {"password": ""}, None])
    def test_missing_password(self, client, super_headers, body):
        response = client.put(
            "/api/admin/booth-ops/booth-admins/1-1/password",
            json=body,
            headers=super_headers,
        )

        assert response.status_code == 400
        assert response.json() == {"error": "MISSING_PASSWORD"}

    def test_cannot_change_super_admin(self, client, super_headers):
        response = client.put(
            f"/api/admin/booth-ops/booth-admins/{quote(settings.SUPERADMIN_CLASS_NAME)}/password",
            json={"password": "x"},
            headers=super_headers,
        )

        assert response.status_code == 400
        assert response.json() == {"error": "CANNOT_CHANGE_SUPERADMIN"}

    def test_unknown_booth(self, client, super_headers):
        response = client.put(
            "/api/admin/booth-ops/booth-admins/9-9/password",
            json={"password": "1234"},
            headers=super_headers,
        )

        assert response.status_code == 404
        assert response.json() == {"error": "NOT_FOUND"}

    def test_booth_admin_cannot_change_passwords(self, client, booth_headers):
        response = client.put(
            "/api/admin/booth-ops/booth-admins/1-2/password",
            json={"password": "1234"},
            headers=booth_headers,
        )

        assert response.status_code == 403
