"""Build exercise groups and sections from preview HTML or program JSON."""

import json
import re
from typing import Any, Optional

from kahunas_cli.extractors import (
    parse_body_parts,
    parse_media,
    parse_number,
    parse_text,
)
from kahunas_cli.html_blocks import (
    extract_attribute,
    extract_data_attributes,
    extract_table_block,
    find_start_tags,
)
from kahunas_cli.models import (
    TotalVolumeSet,
    WorkoutExerciseGroup,
    WorkoutExerciseSummary,
    WorkoutSectionSummary,
)

SUPERSET_PATTERN = re.compile(r"superset", re.IGNORECASE)
EXERCISE_ROW_PATTERN = re.compile(r"<tr\b[^>]*\bdata-exercise_name\s*=[^>]*>", re.IGNORECASE)

# (source keys, section type, label) in display order.
SECTION_LAYOUT = (
    (("warmup", "warm_up"), "warm_up", "Warm Up"),
    (("workout", "exercises"), "workout", "Workout"),
    (("cooldown", "cool_down"), "workout", "Cooldown"),
)

NAME_KEYS = ("exercise_name", "name")
NESTED_NAME_KEYS = ("name", "exercise_name", "title")
UUID_KEYS = ("exercise_uuid",)
NESTED_UUID_KEYS = ("exercise_uuid", "uuid")
SETS_KEYS = ("sets",)
REPS_KEYS = ("reps",)
REST_KEYS = ("rest_period", "rest_seconds", "rest")
TIME_KEYS = ("time_period", "time_seconds", "duration")
NOTES_KEYS = ("notes", "note")
SEQUENCE_KEYS = ("number", "sequence", "exercise_number")
BODY_PART_KEYS = ("bodypart", "body_parts", "body_part")
MEDIA_KEYS = ("media",)


def build_exercise(**fields: Any) -> WorkoutExerciseSummary:
    """Create an exercise, leaving absent fields unset."""
    return WorkoutExerciseSummary(**{key: value for key, value in fields.items() if value is not None})


def _non_empty(values: list) -> Optional[list]:
    return values or None


# HTML rows


def exercise_from_row(tag: str) -> Optional[WorkoutExerciseSummary]:
    """Build an exercise from a <tr data-exercise_name=...> opening tag."""
    data = extract_data_attributes(tag)
    name = parse_text(data.get("exercise_name"))
    if not name:
        return None
    return build_exercise(
        name=name,
        uuid=parse_text(data.get("exercise_uuid")),
        sets=parse_number(data.get("sets")),
        reps=parse_text(data.get("reps")),
        rest_seconds=parse_number(data.get("rest_period")),
        time_seconds=parse_number(data.get("time_period")),
        notes=parse_text(data.get("notes")),
        sequence=parse_number(data.get("number")),
        body_parts=_non_empty(parse_body_parts(data.get("bodypart"))),
        media=_non_empty(parse_media(data.get("media"))),
    )


def find_superset_ranges(html: str) -> list[tuple[int, int]]:
    """Outermost <table> ranges whose content mentions "Superset"."""
    candidates = []
    for match in find_start_tags(html, "table"):
        block = extract_table_block(html, match.start())
        if SUPERSET_PATTERN.search(block):
            candidates.append((match.start(), match.start() + len(block)))

    def is_nested(candidate: tuple[int, int]) -> bool:
        start, end = candidate
        for other in candidates:
            if other is candidate:
                continue
            other_start, other_end = other
            if (
                other_start <= start
                and end <= other_end
                and other_end - other_start >= end - start
            ):
                return True
        return False

    return [candidate for candidate in candidates if not is_nested(candidate)]


def build_groups_from_html(html: str) -> list[WorkoutExerciseGroup]:
    """Group exercise rows into supersets and straight sets, in document order."""
    ranges = find_superset_ranges(html)
    superset_rows: dict[tuple[int, int], list[WorkoutExerciseSummary]] = {span: [] for span in ranges}
    positioned: list[tuple[int, WorkoutExerciseGroup]] = []

    for match in EXERCISE_ROW_PATTERN.finditer(html):
        tag = match.group(0)
        exercise = exercise_from_row(tag)
        if exercise is None:
            continue
        offset = match.start()
        span = next((span for span in ranges if span[0] <= offset < span[1]), None)
        if span is not None:
            superset_rows[span].append(exercise)
            continue
        row_class = extract_attribute(tag, "class") or ""
        if "subrow" in row_class.lower():
            continue
        positioned.append((offset, WorkoutExerciseGroup(type="straight", exercises=[exercise])))

    for span, exercises in superset_rows.items():
        if exercises:
            positioned.append(
                (span[0], WorkoutExerciseGroup(type="superset", label="Superset", exercises=exercises))
            )

    positioned.sort(key=lambda item: item[0])
    return [group for _, group in positioned]


# JSON records


def _nested_exercise(record: dict) -> Optional[dict]:
    nested = record.get("exercise")
    return nested if isinstance(nested, dict) else None


def looks_like_exercise_record(record: Any) -> bool:
    """Whether a JSON object describes an exercise rather than some wrapper."""
    if not isinstance(record, dict):
        return False
    if isinstance(record.get("exercise_name"), str) or isinstance(record.get("exercise_uuid"), str):
        return True
    if isinstance(record.get("name"), str) and ("sets" in record or "reps" in record):
        return True
    nested = _nested_exercise(record)
    if nested is None:
        return False
    return any(isinstance(nested.get(key), str) for key in ("exercise_name", "exercise_uuid", "name", "title"))


def _resolve(record: dict, keys: tuple[str, ...], nested_keys: Optional[tuple[str, ...]] = None) -> Any:
    for key in keys:
        if record.get(key) not in (None, ""):
            return record[key]
    nested = _nested_exercise(record)
    if nested is None:
        return None
    for key in nested_keys or keys:
        if nested.get(key) not in (None, ""):
            return nested[key]
    return None


def exercise_from_record(record: Any) -> Optional[WorkoutExerciseSummary]:
    """Build an exercise from an API exercise object."""
    if not looks_like_exercise_record(record):
        return None
    name = parse_text(_resolve(record, NAME_KEYS, NESTED_NAME_KEYS))
    if not name:
        return None
    return build_exercise(
        name=name,
        uuid=parse_text(_resolve(record, UUID_KEYS, NESTED_UUID_KEYS)),
        sets=parse_number(_resolve(record, SETS_KEYS)),
        reps=parse_text(_resolve(record, REPS_KEYS)),
        rest_seconds=parse_number(_resolve(record, REST_KEYS)),
        time_seconds=parse_number(_resolve(record, TIME_KEYS)),
        notes=parse_text(_resolve(record, NOTES_KEYS)),
        sequence=parse_number(_resolve(record, SEQUENCE_KEYS)),
        body_parts=_non_empty(parse_body_parts(_resolve(record, BODY_PART_KEYS))),
        media=_non_empty(parse_media(_resolve(record, MEDIA_KEYS))),
    )


def wrap_exercises(exercises: list[WorkoutExerciseSummary]) -> list[WorkoutExerciseGroup]:
    """Sort by sequence (missing last, stable) and wrap each as a straight group."""
    ordered = sorted(
        exercises,
        key=lambda exercise: (exercise.sequence is None, exercise.sequence or 0),
    )
    return [WorkoutExerciseGroup(type="straight", exercises=[exercise]) for exercise in ordered]


def _as_list(value: Any) -> list:
    if isinstance(value, list):
        return value
    if isinstance(value, str) and value.strip().startswith("["):
        try:
            decoded = json.loads(value)
        except json.JSONDecodeError:
            return []
        return decoded if isinstance(decoded, list) else []
    return []


def _first_list(record: dict, keys: tuple[str, ...]) -> list:
    for key in keys:
        values = _as_list(record.get(key))
        if values:
            return values
    return []


def _groups_from_exercise_list(entries: list) -> list[WorkoutExerciseGroup]:
    groups = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        if "list" not in entry:
            exercise = exercise_from_record(entry)
            if exercise:
                groups.append(WorkoutExerciseGroup(type="straight", exercises=[exercise]))
            continue
        exercises = [
            exercise for exercise in (exercise_from_record(item) for item in _as_list(entry["list"])) if exercise
        ]
        if not exercises:
            continue
        group_type = parse_text(entry.get("type")) or ""
        if "superset" in group_type.lower():
            groups.append(WorkoutExerciseGroup(type="superset", label="Superset", exercises=exercises))
        else:
            groups.extend(WorkoutExerciseGroup(type="straight", exercises=[exercise]) for exercise in exercises)
    return groups


def extract_sections_from_exercise_list(record: Any) -> list[WorkoutSectionSummary]:
    """Sections from exercise_list.{warmup,workout,cooldown} group arrays."""
    if not isinstance(record, dict):
        return []
    exercise_list = record.get("exercise_list")
    if isinstance(exercise_list, str):
        try:
            exercise_list = json.loads(exercise_list)
        except json.JSONDecodeError:
            return []
    if not isinstance(exercise_list, dict):
        return []
    sections = []
    for keys, section_type, label in SECTION_LAYOUT:
        groups = _groups_from_exercise_list(_first_list(exercise_list, keys))
        if groups:
            sections.append(WorkoutSectionSummary(type=section_type, label=label, groups=groups))
    return sections


def extract_sections(record: Any) -> list[WorkoutSectionSummary]:
    """Sections of one program-day record; exercise_list wins over flat keys."""
    sections = extract_sections_from_exercise_list(record)
    if sections or not isinstance(record, dict):
        return sections
    for keys, section_type, label in SECTION_LAYOUT:
        exercises = [
            exercise
            for exercise in (exercise_from_record(item) for item in _first_list(record, keys))
            if exercise
        ]
        if exercises:
            sections.append(
                WorkoutSectionSummary(type=section_type, label=label, groups=wrap_exercises(exercises))
            )
    return sections


def summarize_total_volume(sections: list[WorkoutSectionSummary]) -> list[TotalVolumeSet]:
    """Sum body-part volumes across a day, in first-seen order."""
    totals: dict[str, float] = {}
    for section in sections:
        for group in section.groups:
            for exercise in group.exercises:
                for body_part in exercise.body_parts or []:
                    if body_part.volume is None:
                        continue
                    totals[body_part.name] = totals.get(body_part.name, 0) + body_part.volume
    return [
        TotalVolumeSet(body_part=name, sets=parse_number(float(total)))
        for name, total in totals.items()
    ]
