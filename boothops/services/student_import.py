"""
Student roster CSV import.

The header row is matched against English and Korean aliases for the four
required columns. Rows are validated one by one: bad rows are reported and
skipped, and the import only fails outright when no row is usable. The
reconciliation with the stored roster (replace or merge) is one transaction.
"""
import csv
import io
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from boothops.db.models import Student
from boothops.core.constants import (
    IMPORT_MODE_MERGE,
    IMPORT_MODE_REPLACE,
    IMPORT_MODES,
    MAX_IMPORT_ERRORS,
    STUDENT_TEMPLATE_CSV,
    STUDENT_TEMPLATE_FILENAME,
)
from boothops.core.errors import BusinessRuleError, InvalidRequestError
from boothops.core.logging_config import get_logger
from boothops.core.sanitization import validate_csv_size
from boothops.services.roster import count_students
from boothops.services.stats import clear_usage_ledgers
from boothops.services.usage import has_any_usage

logger = get_logger(__name__)

ROSTER_FIELDS = ("grade", "class_no", "student_no", "name")

# Normalized header label -> logical field
HEADER_ALIASES: Dict[str, Tuple[str, ...]] = {
    "grade": ("grade", "gradelevel", "year", "학년"),
    "class_no": ("classno", "class", "classnum", "classnumber", "반", "학급"),
    "student_no": (
        "studentno", "studentnum", "studentnumber", "number", "num", "no",
        "번호", "출석번호", "학생번호",
    ),
    "name": ("name", "studentname", "fullname", "이름", "성명", "학생명", "학생이름"),
}

_HEADER_STRIP = re.compile(r"[\s\-_]+")


@dataclass(frozen=True)
class RosterRow:
    grade: int
    class_no: int
    student_no: int
    name: str

    @property
    def key(self) -> Tuple[int, int, int]:
        return (self.grade, self.class_no, self.student_no)


@dataclass
class ParsedRoster:
    rows: List[RosterRow] = field(default_factory=list)
    errors: List[Dict] = field(default_factory=list)


def normalize_header(label: str) -> str:
    """Strip BOM and surrounding space, lowercase, drop whitespace, hyphens and underscores."""
    return _HEADER_STRIP.sub("", label.replace("\ufeff", "").strip().lower())


def resolve_headers(header: Sequence[str]) -> Dict[str, int]:
    """
    Map each logical roster field to its column index.

    Raises:
        InvalidRequestError: INVALID_HEADER listing the fields that could not be found
    """
    lookup = {alias: name for name, aliases in HEADER_ALIASES.items() for alias in aliases}
    columns: Dict[str, int] = {}
    for index, label in enumerate(header):
        logical = lookup.get(normalize_header(label))
        if logical and logical not in columns:
            columns[logical] = index

    missing = [name for name in ROSTER_FIELDS if name not in columns]
    if missing:
        raise InvalidRequestError("INVALID_HEADER", missing=missing)
    return columns


def _parse_positive_int(value: str) -> Optional[int]:
    try:
        number = int(value.strip())
    except (AttributeError, ValueError):
        return None
    return number if number > 0 else None


def _row_error(line: int, code: str, message: str) -> Dict:
    return {"line": line, "error": code, "message": message}


def parse_roster_csv(csv_text: str) -> ParsedRoster:
    """
    Parse roster CSV text into validated rows plus per-row errors.

    Quoted fields are honoured. When the name is the last column, surplus
    unquoted fragments are joined back into the name with commas. Blank lines
    are skipped; reported line numbers count the header as line 1.

    Raises:
        InvalidRequestError: INVALID_HEADER when there is no usable header row,
            INVALID_CSV when the text cannot be tokenized (e.g. an unclosed
            quote running past the field size limit)
    """
    reader = csv.reader(io.StringIO(csv_text))
    try:
        return _parse_records(reader)
    except csv.Error as e:
        raise InvalidRequestError("INVALID_CSV", line=reader.line_num, message=str(e))


def _parse_records(reader) -> ParsedRoster:
    header = None
    for record in reader:
        if any(cell.strip() for cell in record):
            header = record
            break
    if header is None:
        raise InvalidRequestError("INVALID_HEADER", missing=list(ROSTER_FIELDS))

    columns = resolve_headers(header)
    name_index = columns["name"]
    name_is_last = name_index == len(header) - 1

    parsed = ParsedRoster()
    seen = set()
    for record in reader:
        line = reader.line_num
        if not any(cell.strip() for cell in record):
            continue

        if name_is_last and len(record) > len(header):
            record = record[:name_index] + [",".join(record[name_index:])]

        if len(record) <= max(columns.values()):
            parsed.errors.append(_row_error(line, "INVALID_ROW", "missing columns"))
            continue

        grade = _parse_positive_int(record[columns["grade"]])
        class_no = _parse_positive_int(record[columns["class_no"]])
        student_no = _parse_positive_int(record[columns["student_no"]])
        name = record[name_index].strip()

        if grade is None or class_no is None or student_no is None:
            parsed.errors.append(_row_error(
                line, "INVALID_ROW", "grade, class_no and student_no must be positive integers"
            ))
            continue
        if not name:
            parsed.errors.append(_row_error(line, "INVALID_ROW", "name is empty"))
            continue

        row = RosterRow(grade=grade, class_no=class_no, student_no=student_no, name=name)
        if row.key in seen:
            parsed.errors.append(_row_error(
                line, "DUPLICATE_ROW", f"duplicate student {grade}-{class_no}-{student_no}"
            ))
            continue
        seen.add(row.key)
        parsed.rows.append(row)

    return parsed


def _replace_roster(db: Session, rows: List[RosterRow], reset_booth_usage: bool) -> Dict[str, int]:
    usage_reset = False
    if reset_booth_usage:
        clear_usage_ledgers(db)
        usage_reset = True
    elif has_any_usage(db):
        raise BusinessRuleError("HAS_USAGE_DATA", status_code=409)

    deleted = db.query(Student).delete(synchronize_session="fetch")
    db.add_all([
        Student(grade=row.grade, class_no=row.class_no, student_no=row.student_no, name=row.name)
        for row in rows
    ])
    return {"inserted": len(rows), "updated": 0, "deleted": deleted, "usageReset": usage_reset}


def _merge_roster(db: Session, rows: List[RosterRow]) -> Dict[str, int]:
    existing = {
        (student.grade, student.class_no, student.student_no): student
        for student in db.query(Student).all()
    }
    inserted = updated = 0
    for row in rows:
        student = existing.get(row.key)
        if student is None:
            db.add(Student(grade=row.grade, class_no=row.class_no, student_no=row.student_no, name=row.name))
            inserted += 1
        elif student.name != row.name:
            student.name = row.name
            updated += 1
    return {"inserted": inserted, "updated": updated, "deleted": 0, "usageReset": False}


def import_students(
    db: Session,
    csv_text: Optional[str],
    mode: Optional[str] = IMPORT_MODE_MERGE,
    reset_booth_usage: bool = False,
) -> Dict:
    """
    Import a roster CSV in replace or merge mode.

    replace: delete every student and insert the parsed rows. Refused with
        HAS_USAGE_DATA while usages exist unless reset_booth_usage is set, in
        which case both usage ledgers are cleared in the same transaction.
    merge: insert unknown (grade, class_no, student_no) triples and correct
        names of known ones; never deletes. reset_booth_usage is ignored.

    Returns:
        Import report with success, mode, inserted, updated, deleted,
        totalStudents, usageReset, parsed {rows, errors} and the first
        MAX_IMPORT_ERRORS row errors

    Raises:
        InvalidRequestError: MISSING_CSV, INVALID_CSV, INVALID_MODE,
                             INVALID_HEADER, NO_VALID_ROWS
        BusinessRuleError: HAS_USAGE_DATA (409)
    """
    if not csv_text or not csv_text.strip():
        raise InvalidRequestError("MISSING_CSV")
    try:
        validate_csv_size(csv_text)
    except ValueError as e:
        raise InvalidRequestError("INVALID_CSV", message=str(e))

    mode = mode or IMPORT_MODE_MERGE
    if mode not in IMPORT_MODES:
        raise InvalidRequestError("INVALID_MODE", allowed=list(IMPORT_MODES))

    parsed = parse_roster_csv(csv_text)
    summary = {"rows": len(parsed.rows), "errors": len(parsed.errors)}
    if not parsed.rows:
        raise InvalidRequestError(
            "NO_VALID_ROWS",
            parsed=summary,
            errors=parsed.errors[:MAX_IMPORT_ERRORS],
        )

    try:
        if mode == IMPORT_MODE_REPLACE:
            counts = _replace_roster(db, parsed.rows, reset_booth_usage)
        else:
            counts = _merge_roster(db, parsed.rows)
        db.flush()
        total_students = count_students(db)
        db.commit()
    except BusinessRuleError:
        db.rollback()
        logger.warning("student_import_rejected", mode=mode, reason="HAS_USAGE_DATA")
        raise
    except Exception:
        db.rollback()
        raise

    logger.info(
        "student_import_completed",
        mode=mode,
        total_students=total_students,
        skipped=len(parsed.errors),
        **counts,
    )
    return {
        "success": True,
        "mode": mode,
        "inserted": counts["inserted"],
        "updated": counts["updated"],
        "deleted": counts["deleted"],
        "usageReset": counts["usageReset"],
        "totalStudents": total_students,
        "parsed": summary,
        "errors": parsed.errors[:MAX_IMPORT_ERRORS],
    }


def get_template() -> Dict[str, str]:
    """CSV template with the canonical header and one example row."""
    return {"filename": STUDENT_TEMPLATE_FILENAME, "csv": STUDENT_TEMPLATE_CSV}
