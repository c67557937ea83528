"""Data models for Kahunas workout data."""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field

Number = Union[int, float]


class BodyPartVolume(BaseModel):
    """Body part trained by an exercise, with its set volume."""

    name: str
    volume: Optional[Number] = Field(default=None, description="Sets credited to this body part")


class WorkoutMedia(BaseModel):
    """Video or image attached to an exercise."""

    url: str
    type: Optional[str] = None
    thumbnail: Optional[str] = None


class TotalVolumeSet(BaseModel):
    """Total sets per body part for a training day."""

    body_part: str
    sets: Number


class WorkoutExerciseSummary(BaseModel):
    """A single exercise inside a group."""

    name: str
    uuid: Optional[str] = None
    order: Optional[int] = Field(default=None, description="Final 1-based position")
    sets: Optional[Number] = None
    reps: Optional[str] = None
    rest_seconds: Optional[Number] = None
    time_seconds: Optional[Number] = None
    notes: Optional[str] = None
    sequence: Optional[Number] = Field(default=None, description="Raw order hint from the source")
    performed_at: Optional[str] = None
    performed_on: Optional[str] = None
    body_parts: Optional[list[BodyPartVolume]] = None
    media: Optional[list[WorkoutMedia]] = None


class WorkoutExerciseGroup(BaseModel):
    """Straight set (one exercise) or superset (exercises sharing a set)."""

    type: Literal["straight", "superset"]
    label: Optional[str] = None
    exercises: list[WorkoutExerciseSummary] = Field(default_factory=list)


class WorkoutSectionSummary(BaseModel):
    """Warm-up, workout or cooldown block of a day.

    Cooldown sections carry type "workout" and the label "Cooldown".
    """

    type: Literal["warm_up", "workout"]
    label: str
    groups: list[WorkoutExerciseGroup] = Field(default_factory=list)


class WorkoutDaySummary(BaseModel):
    """One training day of a program."""

    day_index: Optional[int] = Field(default=None, description="0-based day index")
    day_label: Optional[str] = None
    total_volume_sets: list[TotalVolumeSet] = Field(default_factory=list)
    sections: list[WorkoutSectionSummary] = Field(default_factory=list)


class WorkoutEventInfo(BaseModel):
    """Projection of a calendar event."""

    id: Optional[Union[int, str]] = None
    start: Optional[str] = None
    end: Optional[str] = None
    title: Optional[str] = None


class ProgramSummary(BaseModel):
    """Program referenced by a calendar event."""

    uuid: str
    title: Optional[str] = None


class WorkoutEventSummary(BaseModel):
    """Calendar event enriched with its program and workout day."""

    event: WorkoutEventInfo
    program: Optional[ProgramSummary] = None
    workout_day: Optional[WorkoutDaySummary] = None


class WorkoutEventFilters(BaseModel):
    """Filters applied when formatting events."""

    program: Optional[str] = None
    workout: Optional[str] = None


class WorkoutEventsOutput(BaseModel):
    """Formatted calendar output."""

    source: Literal["calendar"] = "calendar"
    timezone: str
    filters: WorkoutEventFilters
    events: list[WorkoutEventSummary] = Field(default_factory=list)


class PreviewHtmlMatch(BaseModel):
    """Embedded day-preview HTML and where it was found."""

    html: str
    source: Literal["event", "program"]


class WorkoutPlan(BaseModel):
    """Workout program as listed by the API."""

    uuid: str
    title: str
    updated_at_utc: Optional[int] = None
    created_at_utc: Optional[int] = None
    days: Optional[int] = None


class ApiResponse(BaseModel):
    """Raw HTTP response with its decoded JSON body, if any."""

    ok: bool
    status: int
    text: str
    json_data: Optional[Any] = None
