"""Kahunas CLI - Python client for Kahunas coaching check-ins and workouts."""

from kahunas_cli.client import KahunasClient
from kahunas_cli.errors import ConfigError, KahunasClientError, KahunasError
from kahunas_cli.events import annotate_workout_event_summaries, format_workout_events_output
from kahunas_cli.models import (
    WorkoutDaySummary,
    WorkoutEventsOutput,
    WorkoutEventSummary,
    WorkoutExerciseGroup,
    WorkoutExerciseSummary,
    WorkoutPlan,
    WorkoutSectionSummary,
)

__version__ = "0.1.0"
__all__ = [
    "KahunasClient",
    "KahunasError",
    "KahunasClientError",
    "ConfigError",
    "annotate_workout_event_summaries",
    "format_workout_events_output",
    "WorkoutDaySummary",
    "WorkoutEventsOutput",
    "WorkoutEventSummary",
    "WorkoutExerciseGroup",
    "WorkoutExerciseSummary",
    "WorkoutPlan",
    "WorkoutSectionSummary",
]
