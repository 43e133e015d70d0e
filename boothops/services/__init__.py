from .auth import (
    authenticate,
    ensure_booth_access,
    ensure_super_admin,
    login,
    logout,
    set_booth_admin_password,
)
from .booths import get_booth, get_booth_by_class_name, list_booths
from .roster import count_students, get_student, list_students
from .stats import get_booth_summary, get_dashboard, reset_all_usage
from .student_import import get_template, import_students
from .usage import check_in, void_usage

__all__ = [
    "authenticate",
    "ensure_booth_access",
    "ensure_super_admin",
    "login",
    "logout",
    "set_booth_admin_password",
    "get_booth",
    "get_booth_by_class_name",
    "list_booths",
    "count_students",
    "get_student",
    "list_students",
    "get_booth_summary",
    "get_dashboard",
    "reset_all_usage",
    "get_template",
    "import_students",
    "check_in",
    "void_usage",
]
