"""Unit tests for roster queries."""
import pytest

from boothops.db.models import Student
from boothops.services.roster import count_students, get_student, list_students


@pytest.mark.unit
class TestRoster:
    """Test roster search and filters."""

    def test_seeded_roster_size(self, db_session):
        assert count_students(db_session) == 143

    def test_list_is_ordered(self, db_session):
        students = list_students(db_session)

        keys = [(s.grade, s.class_no, s.student_no) for s in students]
        assert keys == sorted(keys)
        assert len(keys) == 143

    def test_filter_by_class(self, db_session):
        students = list_students(db_session, grade=1, class_no=1)

        assert len(students) == 21
        assert [s.student_no for s in students] == list(range(1, 22))

    def test_filter_by_grade(self, db_session):
        assert len(list_students(db_session, grade=3)) == 61

    def test_search_by_student_no(self, db_session):
        students = list_students(db_session, search="21")

        assert {(s.grade, s.class_no) for s in students} == {(1, 1), (1, 2), (3, 2)}

    def test_search_by_name_is_case_insensitive(self, db_session):
        db_session.add(Student(grade=1, class_no=1, student_no=50, name="Alice Park"))
        db_session.commit()

        for term in ("alice", "ALI", " Park "):
            names = [s.name for s in list_students(db_session, search=term)]
            assert names == ["Alice Park"]

    @pytest.mark.parametrize("term", ["_", "%", "\\"])
    def test_search_wildcards_match_nothing_in_seed(self, db_session, term):
        assert list_students(db_session, search=term) == []

    def test_search_wildcards_match_literally(self, db_session):
        db_session.add(Student(grade=3, class_no=3, student_no=40, name="kim_100%"))
        db_session.add(Student(grade=3, class_no=3, student_no=41, name="kimx100x"))
        db_session.commit()

        assert [s.name for s in list_students(db_session, search="_100%")] == ["kim_100%"]

    def test_search_and_filter_combined(self, db_session):
        student = get_student(db_session, 1)

        students = list_students(db_session, search=student.name, grade=1, class_no=1)

        assert student in students
        assert all(s.grade == 1 and s.class_no == 1 for s in students)

    def test_get_unknown_student(self, db_session):
        assert get_student(db_session, 9999) is None
