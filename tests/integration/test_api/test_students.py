"""Integration tests for the roster and roster import."""
import pytest

from boothops.db.models import BoothUsage, Student


@pytest.mark.integration
class TestRosterLookup:
    """Test GET /students."""

    def test_requires_token(self, client):
        response = client.get("/api/students")

        assert response.status_code == 401
        assert response.json() == {"error": "UNAUTHORIZED"}

    def test_list_students(self, client, booth_headers):
        response = client.get("/api/students", headers=booth_headers)

        assert response.status_code == 200
        students = response.json()
        assert len(students) == 143
        assert set(students[0]) == {"id", "grade", "class_no", "student_no", "name"}

    def test_filters(self, client, booth_headers):
        response = client.get("/api/students", params={"grade": 2, "class_no": 1}, headers=booth_headers)

        assert len(response.json()) == 20

    def test_search(self, client, booth_headers, db_session):
        db_session.add(Student(grade=3, class_no=3, student_no=40, name="Chris Jung"))
        db_session.commit()

        response = client.get("/api/students", params={"search": "chris"}, headers=booth_headers)

        assert [s["name"] for s in response.json()] == ["Chris Jung"]

    @pytest.mark.parametrize("term", ["_", "%"])
    def test_search_wildcards_match_literally(self, client, booth_headers, term):
        response = client.get("/api/students", params={"search": term}, headers=booth_headers)

        assert response.status_code == 200
        assert response.json() == []

    def test_invalid_filter(self, client, booth_headers):
        response = client.get("/api/students", params={"grade": "first"}, headers=booth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_REQUEST"


@pytest.mark.integration
class TestRosterImport:
    """Test the roster template, stats and import endpoints."""

    def test_template(self, client):
        response = client.get("/api/admin/students/template")

        assert response.status_code == 200
        assert response.json() == {
            "filename": "students_template.csv",
            "csv": "grade,class_no,student_no,name\n1,1,1,홍길동\n",
        }

    def test_stats(self, client):
        response = client.get("/api/admin/students/stats")

        assert response.json() == {"totalStudents": 143}

    def test_merge_import(self, client):
        response = client.post(
            "/api/admin/students/import",
            json={"csvText": "학년,반,번호,이름\n1,1,1,새이름\n4,1,1,신입생\n", "mode": "merge"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["inserted"] == 1
        assert data["updated"] == 1
        assert data["deleted"] == 0
        assert data["usageReset"] is False
        assert data["totalStudents"] == 144
        assert data["parsed"] == {"rows": 2, "errors": 0}
        assert data["errors"] == []

    def test_default_mode_is_merge(self, client):
        response = client.post(
            "/api/admin/students/import",
            json={"csvText": "grade,class_no,student_no,name\n1,1,1,Kim\n"},
        )

        assert response.json()["mode"] == "merge"
        assert response.json()["totalStudents"] == 143

    def test_replace_blocked_by_usage(self, client, booth_headers, db_session):
        client.post("/api/booths/1/use", json={"studentId": 1}, headers=booth_headers)

        response = client.post(
            "/api/admin/students/import",
            json={"csvText": "grade,class_no,student_no,name\n1,1,1,Kim\n", "mode": "replace"},
        )

        assert response.status_code == 409
        assert response.json() == {"error": "HAS_USAGE_DATA"}
        assert db_session.query(Student).count() == 143

    def test_replace_with_usage_reset(self, client, booth_headers, db_session):
        client.post("/api/booths/1/use", json={"studentId": 1}, headers=booth_headers)

        response = client.post(
            "/api/admin/students/import",
            json={
                "csvText": "grade,class_no,student_no,name\n1,1,1,Kim\n1,1,2,Lee\n",
                "mode": "replace",
                "resetBoothUsage": True,
            },
        )

        assert response.status_code == 200
        assert response.json()["usageReset"] is True
        assert response.json()["deleted"] == 143
        assert response.json()["totalStudents"] == 2
        assert db_session.query(BoothUsage).count() == 0

    @pytest.mark.parametrize("body", [{}, {"csvText": ""}, None])
    def test_missing_csv(self, client, body):
        response = client.post("/api/admin/students/import", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "MISSING_CSV"}

    def test_invalid_header(self, client):
        response = client.post(
            "/api/admin/students/import",
            json={"csvText": "grade,class,name\n1,1,Kim\n"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "INVALID_HEADER", "missing": ["student_no"]}

    def test_unclosed_quote(self, client, db_session):
        csv_text = 'grade,class_no,student_no,name\n1,1,1,"홍길동\n' + "1,1,2,x\n" * 20000

        response = client.post(
            "/api/admin/students/import",
            json={"csvText": csv_text, "mode": "merge"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_CSV"
        assert db_session.query(Student).count() == 143

    def test_invalid_mode(self, client):
        response = client.post(
            "/api/admin/students/import",
            json={"csvText": "grade,class_no,student_no,name\n1,1,1,Kim\n", "mode": "append"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_MODE"

    def test_no_valid_rows(self, client):
        response = client.post(
            "/api/admin/students/import",
            json={"csvText": "grade,class_no,student_no,name\n-1,1,1,Kim\n", "mode": "replace"},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "NO_VALID_ROWS"
        assert data["parsed"] == {"rows": 0, "errors": 1}
        assert data["errors"][0]["line"] == 2
