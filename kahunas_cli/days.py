"""Match calendar events to the training day of a program."""

from collections import deque
from typing import Any, Callable, Iterator, Optional

from kahunas_cli.exercises import extract_sections, summarize_total_volume
from kahunas_cli.extractors import parse_index, parse_text
from kahunas_cli.models import WorkoutDaySummary

# Checked in this order on events and on program-day nodes.
DAY_INDEX_FIELDS = (
    "day_index",
    "workout_day_index",
    "day",
    "workout_day",
    "day_number",
    "workout_day_number",
)
DAY_LABEL_FIELDS = ("title", "name", "day_name", "label")
WORKOUT_NODE_FIELDS = ("workout_uuid", "workout", "uuid")
MAX_DEPTH = 64


def breadth_first(root: Any, max_depth: int = MAX_DEPTH) -> Iterator[tuple[Any, Optional[int]]]:
    """Yield (node, position in containing list) breadth-first.

    Tolerates cycles through a visited set and caps the depth.
    """
    queue = deque([(root, None, 0)])
    visited: set[int] = set()
    while queue:
        node, position, depth = queue.popleft()
        if isinstance(node, (dict, list)):
            if id(node) in visited:
                continue
            visited.add(id(node))
        yield node, position
        if depth >= max_depth:
            continue
        if isinstance(node, dict):
            queue.extend((value, None, depth + 1) for value in node.values())
        elif isinstance(node, list):
            queue.extend((value, index, depth + 1) for index, value in enumerate(node))


def read_day_index(record: dict) -> Optional[int]:
    """0-based day index from the first populated index field.

    *_number fields count from 1 on the platform and are shifted down.
    """
    for field in DAY_INDEX_FIELDS:
        index = parse_index(record.get(field))
        if index is None:
            continue
        if field.endswith("_number"):
            if index < 1:
                continue
            return index - 1
        return index
    return None


def _same_id(left: Any, right: Any) -> bool:
    if isinstance(left, bool) or isinstance(right, bool) or left is None or right is None:
        return False
    if isinstance(left, (dict, list)) or isinstance(right, (dict, list)):
        return False
    return str(left).strip() == str(right).strip() and str(left).strip() != ""


def _find_day_index_by(program: Any, predicate: Callable[[dict], bool]) -> Optional[int]:
    for node, position in breadth_first(program):
        if isinstance(node, dict) and predicate(node):
            index = read_day_index(node)
            if index is not None:
                return index
            if position is not None:
                return position
    return None


def resolve_workout_event_day_index(event: Any, program: Any) -> Optional[int]:
    """Day index an event refers to, or None.

    Tries explicit index fields, then the workout uuid, the workout-day uuid
    and the workout-day id looked up in the program tree.
    """
    if not isinstance(event, dict):
        return None

    index = read_day_index(event)
    if index is not None:
        return index
    if program is None or isinstance(program, str):
        return None

    workout = event.get("workout") or event.get("workout_uuid")
    if isinstance(workout, str) and workout:
        index = _find_day_index_by(
            program,
            lambda node: any(_same_id(node.get(field), workout) for field in WORKOUT_NODE_FIELDS),
        )
        if index is not None:
            return index

    day_uuid = event.get("workout_day_uuid")
    if isinstance(day_uuid, str) and day_uuid:
        index = _find_day_index_by(program, lambda node: _same_id(node.get("uuid"), day_uuid))
        if index is not None:
            return index

    day_id = event.get("workout_day_id", event.get("day_id"))
    if day_id is not None:
        index = _find_day_index_by(program, lambda node: _same_id(node.get("id"), day_id))
        if index is not None:
            return index

    return None


def summarize_workout_program_days(program: Any) -> list[WorkoutDaySummary]:
    """Every node in a program payload that carries exercises, as a day."""
    if program is None or isinstance(program, str):
        return []

    days = []
    queue = deque([(program, None, 0)])
    visited: set[int] = set()
    while queue:
        node, position, depth = queue.popleft()
        if not isinstance(node, (dict, list)) or id(node) in visited:
            continue
        visited.add(id(node))

        if isinstance(node, dict):
            sections = extract_sections(node)
            if sections:
                index = read_day_index(node)
                if index is None:
                    index = position if position is not None else len(days)
                label = next(
                    (parse_text(node.get(field)) for field in DAY_LABEL_FIELDS if parse_text(node.get(field))),
                    None,
                )
                days.append(
                    WorkoutDaySummary(
                        day_index=index,
                        day_label=label or f"Day {index + 1}",
                        total_volume_sets=summarize_total_volume(sections),
                        sections=sections,
                    )
                )
                continue
            children = [(value, None) for value in node.values()]
        else:
            children = [(value, child_index) for child_index, value in enumerate(node)]

        if depth < MAX_DEPTH:
            queue.extend((child, child_position, depth + 1) for child, child_position in children)

    return days


def normalize_day_label(value: str) -> str:
    return value.strip().lower()


def match_program_day(
    days: list[WorkoutDaySummary],
    day_index: Optional[int] = None,
    title: Optional[str] = None,
) -> Optional[WorkoutDaySummary]:
    """Pick the day for an event; ambiguous matches give None."""
    if not days:
        return None

    if day_index is not None:
        for day in days:
            if day.day_index == day_index:
                return day

    normalized = normalize_day_label(title) if isinstance(title, str) else ""
    if normalized:
        labelled = [(day, normalize_day_label(day.day_label)) for day in days if day.day_label]
        exact = [day for day, label in labelled if label == normalized]
        if len(exact) == 1:
            return exact[0]
        partial = [
            day for day, label in labelled if label and (label in normalized or normalized in label)
        ]
        if len(partial) == 1:
            return partial[0]

    if len(days) == 1:
        return days[0]
    return None
