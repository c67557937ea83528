"""Workout program list helpers."""

from typing import Any, Optional

from kahunas_cli.extractors import parse_text
from kahunas_cli.models import WorkoutPlan

PLAN_KEYS = ("workout_plan", "workout_plans", "workout_program", "workout_programs")


def _int_or_none(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


def map_workout_plan(entry: Any) -> Optional[WorkoutPlan]:
    """Build a plan from an API object carrying a uuid and a title or name."""
    if not isinstance(entry, dict):
        return None
    uuid = entry.get("uuid") if isinstance(entry.get("uuid"), str) else None
    title = parse_text(entry.get("title")) if isinstance(entry.get("title"), str) else None
    if title is None and isinstance(entry.get("name"), str):
        title = parse_text(entry.get("name"))
    if not uuid or not title:
        return None
    return WorkoutPlan(
        uuid=uuid,
        title=title,
        updated_at_utc=_int_or_none(entry.get("updated_at_utc")),
        created_at_utc=_int_or_none(entry.get("created_at_utc")),
        days=_int_or_none(entry.get("days")),
    )


def find_workout_plans_deep(payload: Any) -> list[WorkoutPlan]:
    """Search any payload for plan-shaped objects, unique by uuid."""
    plans: list[WorkoutPlan] = []
    seen: set[str] = set()

    def record(plan: Optional[WorkoutPlan]) -> bool:
        if plan is None:
            return False
        if plan.uuid not in seen:
            seen.add(plan.uuid)
            plans.append(plan)
        return True

    def visit(value: Any, depth: int) -> None:
        if depth > 32:
            return
        if isinstance(value, list):
            found = False
            for entry in value:
                found = record(map_workout_plan(entry)) or found
            if found:
                return
            for entry in value:
                visit(entry, depth + 1)
        elif isinstance(value, dict):
            record(map_workout_plan(value))
            for entry in value.values():
                visit(entry, depth + 1)

    visit(payload, 0)
    return plans


def extract_workout_plans(payload: Any) -> list[WorkoutPlan]:
    """Plans from a workout program list response."""
    if not isinstance(payload, dict):
        return []
    data = payload.get("data")
    if not isinstance(data, dict):
        return find_workout_plans_deep(payload)

    plans = []
    for key in PLAN_KEYS:
        value = data.get(key)
        entries = value if isinstance(value, list) else [value]
        for entry in entries:
            plan = map_workout_plan(entry)
            if plan:
                plans.append(plan)
    return plans or find_workout_plans_deep(payload)


def merge_workout_plans(primary: list[WorkoutPlan], secondary: list[WorkoutPlan]) -> list[WorkoutPlan]:
    """Concatenate plan lists, keeping the first plan seen per uuid."""
    merged = []
    seen: set[str] = set()
    for plan in [*primary, *secondary]:
        if plan.uuid in seen:
            continue
        seen.add(plan.uuid)
        merged.append(plan)
    return merged


def pick_latest_workout(plans: list[WorkoutPlan]) -> Optional[WorkoutPlan]:
    """Most recently updated (or created) plan."""
    if not plans:
        return None
    return max(
        plans,
        key=lambda plan: plan.updated_at_utc if plan.updated_at_utc is not None else (plan.created_at_utc or 0),
    )


def format_workout_summary(plan: WorkoutPlan) -> str:
    days = f" - {plan.days} days" if plan.days else ""
    return f"{plan.title or 'Untitled'}{days} ({plan.uuid or 'unknown'})"


def build_workout_plan_index(plans: list[WorkoutPlan]) -> dict[str, WorkoutPlan]:
    return {plan.uuid: plan for plan in plans}
