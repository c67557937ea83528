"""Calendar event formatting: attach programs and workout days to events."""

import logging
import re
from typing import Any, Optional

from kahunas_cli.dates import parse_iso
from kahunas_cli.days import (
    breadth_first,
    match_program_day,
    resolve_workout_event_day_index,
    summarize_workout_program_days,
)
from kahunas_cli.extractors import parse_number, parse_text
from kahunas_cli.models import (
    PreviewHtmlMatch,
    ProgramSummary,
    WorkoutDaySummary,
    WorkoutEventFilters,
    WorkoutEventInfo,
    WorkoutEventsOutput,
    WorkoutEventSummary,
)
from kahunas_cli.preview import parse_workout_day_preview

logger = logging.getLogger(__name__)

PREVIEW_MARKERS = ("workoutdays_data", "preview_day_content", "table_workout")
DATE_PREFIX = re.compile(r"^(\d{4}-\d{2}-\d{2})")

WorkoutEvent = dict[str, Any]


def filter_workout_events(
    payload: Any,
    program: Optional[str] = None,
    workout: Optional[str] = None,
) -> list[WorkoutEvent]:
    """Keep calendar entries that are objects and match the given filters."""
    if not isinstance(payload, list):
        return []
    events = []
    for entry in payload:
        if not isinstance(entry, dict):
            continue
        if program and entry.get("program") != program:
            continue
        if workout and entry.get("workout") != workout:
            continue
        events.append(entry)
    return events


def _start_timestamp(event: WorkoutEvent) -> float:
    start = event.get("start")
    parsed = parse_iso(start) if isinstance(start, str) else None
    if parsed is None:
        return 0.0
    try:
        return parsed.timestamp()
    except (OverflowError, OSError):
        return 0.0


def sort_workout_events(events: list[WorkoutEvent]) -> list[WorkoutEvent]:
    """Sort events by start time, oldest first."""
    return sorted(events, key=_start_timestamp)


def enrich_workout_events(events: list[WorkoutEvent], program_details: dict[str, Any]) -> list[WorkoutEvent]:
    """Copy events with their raw program payload under program_details."""
    enriched = []
    for entry in events:
        if not isinstance(entry, dict):
            enriched.append(entry)
            continue
        program_uuid = entry.get("program")
        program = program_details.get(program_uuid) if isinstance(program_uuid, str) else None
        enriched.append({**entry, "program_details": program})
    return enriched


def find_workout_preview_html(value: Any) -> Optional[str]:
    """First string, breadth-first, that looks like day-preview markup."""
    for node, _ in breadth_first(value):
        if isinstance(node, str) and any(marker in node for marker in PREVIEW_MARKERS):
            return node
    return None


def find_workout_preview_html_match(event: Any, program: Any = None) -> Optional[PreviewHtmlMatch]:
    """Preview HTML from the event, else from its program."""
    html = find_workout_preview_html(event)
    if html is not None:
        return PreviewHtmlMatch(html=html, source="event")
    if program is not None:
        html = find_workout_preview_html(program)
        if html is not None:
            return PreviewHtmlMatch(html=html, source="program")
    return None


def _event_info(event: WorkoutEvent) -> WorkoutEventInfo:
    event_id = event.get("id")
    if isinstance(event_id, bool) or not isinstance(event_id, (int, str)):
        event_id = None
    return WorkoutEventInfo(
        id=event_id,
        start=event.get("start") if isinstance(event.get("start"), str) else None,
        end=event.get("end") if isinstance(event.get("end"), str) else None,
        title=event.get("title") if isinstance(event.get("title"), str) else None,
    )


def _program_summary(program_uuid: Optional[str], program: Any) -> Optional[ProgramSummary]:
    if not program_uuid:
        return None
    if isinstance(program, dict):
        title = parse_text(program.get("title")) or parse_text(program.get("name"))
        if title:
            return ProgramSummary(uuid=program_uuid, title=title)
    return ProgramSummary(uuid=program_uuid)


def derive_workout_day(program: Any, day_index: Optional[int], title: Optional[str]) -> Optional[WorkoutDaySummary]:
    """Workout day from structured program JSON."""
    days = summarize_workout_program_days(program)
    return match_program_day(days, day_index, title)


def summarize_workout_event(event: WorkoutEvent, program_details_by_uuid: dict[str, Any]) -> WorkoutEventSummary:
    """Build the summary of a single calendar event."""
    program_uuid = event.get("program") if isinstance(event.get("program"), str) else None
    program = program_details_by_uuid.get(program_uuid) if program_uuid else None

    day_index = resolve_workout_event_day_index(event, program)
    match = find_workout_preview_html_match(event, program)

    workout_day = None
    if match is not None:
        workout_day = parse_workout_day_preview(match.html, day_index)
    if workout_day is None:
        workout_day = derive_workout_day(program, day_index, event.get("title"))

    logger.debug(
        "event=%s program=%s day_index=%s preview=%s resolved=%s",
        event.get("id"),
        program_uuid,
        day_index,
        match.source if match else "not_found",
        workout_day is not None,
    )
    return WorkoutEventSummary(
        event=_event_info(event),
        program=_program_summary(program_uuid, program),
        workout_day=workout_day,
    )


def format_workout_events_output(
    events: list[WorkoutEvent],
    program_details_by_uuid: Optional[dict[str, Any]],
    timezone: str,
    program: Optional[str] = None,
    workout: Optional[str] = None,
) -> WorkoutEventsOutput:
    """Summarize calendar events with their programs and workout days.

    Args:
        events: Calendar entries as returned by the calendar endpoint
        program_details_by_uuid: Program payload (JSON object or preview HTML) per program uuid
        timezone: Timezone the calendar was fetched in
        program: Only keep events of this program uuid
        workout: Only keep events of this workout uuid

    Returns:
        The formatted output, one summary per kept event
    """
    if not isinstance(events, list):
        raise TypeError(f"events must be a list, got {type(events).__name__}")
    details = program_details_by_uuid if isinstance(program_details_by_uuid, dict) else {}

    summaries = [
        summarize_workout_event(event, details) for event in filter_workout_events(events, program, workout)
    ]
    return WorkoutEventsOutput(
        source="calendar",
        timezone=timezone,
        filters=WorkoutEventFilters(program=program, workout=workout),
        events=summaries,
    )


def _performed_on(start: str) -> str:
    match = DATE_PREFIX.match(start)
    return match.group(1) if match else start


def _annotate_day(day: WorkoutDaySummary, start: Optional[str]) -> WorkoutDaySummary:
    position = 0
    sections = []
    for section in day.sections:
        groups = []
        for group in section.groups:
            exercises = []
            for exercise in group.exercises:
                position += 1
                sequence = parse_number(exercise.sequence)
                if sequence is None or not float(sequence).is_integer():
                    sequence = position
                update: dict[str, Any] = {"order": int(sequence)}
                if start:
                    update["performed_at"] = start
                    update["performed_on"] = _performed_on(start)
                exercises.append(exercise.model_copy(update=update, deep=True))
            groups.append(group.model_copy(update={"exercises": exercises}))
        sections.append(section.model_copy(update={"groups": groups}))
    return day.model_copy(update={"sections": sections}, deep=True)


def annotate_workout_event_summaries(events: list[WorkoutEventSummary]) -> list[WorkoutEventSummary]:
    """Stamp exercise order and performed date on copies of the summaries."""
    annotated = []
    for entry in events:
        if entry.workout_day is None:
            annotated.append(entry.model_copy())
            continue
        day = _annotate_day(entry.workout_day, entry.event.start)
        annotated.append(entry.model_copy(update={"workout_day": day}))
    return annotated
