import csv
import json
from io import StringIO
from pathlib import Path

from app.models.course import Course
from app.schemas.course import CourseIn


def course_from_dict(data: dict) -> Course:
    return CourseIn.model_validate(data).to_course()


def load_curriculum(source: str | Path | list[dict]) -> list[Course]:
    """Load courses from a JSON file path, a JSON string or decoded records."""
    if isinstance(source, list):
        records = source
    elif isinstance(source, Path) or (isinstance(source, str) and not source.lstrip().startswith("[")):
        records = json.loads(Path(source).read_text(encoding="utf-8"))
    else:
        records = json.loads(source)
    return [course_from_dict(row) for row in records]


def parse_curriculum_csv(content: str) -> list[Course]:
    reader = csv.DictReader(StringIO(content))
    courses = []
    for row in reader:
        code = row.get("code") or row.get("course_code")
        if not code or not code.strip():
            continue
        courses.append(
            course_from_dict(
                {
                    "code": code.strip(),
                    "name": row.get("name") or row.get("title") or "",
                    "group": row.get("group") or "",
                    "credits": _to_int(row.get("credits")),
                    "is_required": _to_bool(row.get("is_required"), default=True),
                    "expected_semester": _to_int(row.get("expected_semester")) or 1,
                    "difficulty": _to_int(row.get("difficulty")) or 1,
                    "is_practical": _to_bool(row.get("is_practical")),
                    "prerequisites": _split_codes(row.get("prerequisites")),
                    "corequisites": _split_codes(row.get("corequisites")),
                    "equivalents": _split_codes(row.get("equivalents")),
                }
            )
        )
    return courses


def _to_int(value: str | None) -> int | None:
    if value is None or not str(value).strip():
        return None
    try:
        return int(float(value))
    except ValueError:
        return None


def _to_bool(value: str | None, default: bool = False) -> bool:
    if value is None or not str(value).strip():
        return default
    return str(value).strip().lower() in {"true", "1", "yes"}


def _split_codes(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(";") if part.strip()]
