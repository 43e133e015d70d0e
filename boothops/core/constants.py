"""Application constants.

This module contains magic strings and numbers used throughout the application.
Centralizing these values makes them easier to maintain and modify.
"""

# Usage cap
# A student may use any single booth at most this many times
MAX_USAGE_PER_BOOTH = 3

# Void window
# A check-in can be reversed for this long after it was recorded (2 minutes).
# Overridable through Settings.VOID_WINDOW_SECONDS
VOID_WINDOW_SECONDS = 120

# Admin sessions
# Tokens are random hex strings (TOKEN_BYTES bytes of entropy) valid for 12 hours
ADMIN_TOKEN_TTL_HOURS = 12
ADMIN_TOKEN_BYTES = 24
ADMIN_TOKEN_HEADER = "x-admin-token"
ADMIN_TOKEN_QUERY_PARAM = "token"

# Super admin
# Reserved class name of the cross-booth identity; never used by a booth
SUPERADMIN_CLASS_NAME = "통합관리자"

# Summary sizes
RECENT_USAGE_LIMIT = 20
TOP_CLASSES_LIMIT = 3
DASHBOARD_RECENT_LIMIT = 50
DASHBOARD_TOP_STUDENTS_LIMIT = 20

# Student import
IMPORT_MODE_REPLACE = "replace"
IMPORT_MODE_MERGE = "merge"
IMPORT_MODES = (IMPORT_MODE_REPLACE, IMPORT_MODE_MERGE)
MAX_IMPORT_ERRORS = 50
STUDENT_TEMPLATE_FILENAME = "students_template.csv"
STUDENT_TEMPLATE_CSV = "grade,class_no,student_no,name\n1,1,1,홍길동\n"
