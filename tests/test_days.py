"""Tests for program-day resolution."""

from kahunas_cli.days import (
    breadth_first,
    match_program_day,
    read_day_index,
    resolve_workout_event_day_index,
    summarize_workout_program_days,
)
from kahunas_cli.models import WorkoutDaySummary


class TestReadDayIndex:
    """Test explicit day index fields."""

    def test_field_priority(self):
        assert read_day_index({"day": 4, "day_index": 2}) == 2
        assert read_day_index({"workout_day_index": "3"}) == 3

    def test_number_fields_are_one_based(self):
        assert read_day_index({"day_number": 2}) == 1
        assert read_day_index({"workout_day_number": "1"}) == 0
        assert read_day_index({"day_number": 0}) is None

    def test_invalid_values_are_skipped(self):
        assert read_day_index({"day_index": "abc", "day": 1}) == 1
        assert read_day_index({"day_index": -1}) is None
        assert read_day_index({}) is None


class TestBreadthFirst:
    def test_yields_list_positions(self):
        tree = {"days": [{"a": 1}, {"b": 2}]}

        positions = [position for node, position in breadth_first(tree) if isinstance(node, dict)]

        assert positions == [None, 0, 1]

    def test_survives_cycles(self):
        node: dict = {"name": "loop"}
        node["self"] = node

        assert sum(1 for item, _ in breadth_first(node) if item is node) == 1

    def test_depth_is_capped(self):
        deep: dict = {}
        current = deep
        for _ in range(100):
            current["child"] = {}
            current = current["child"]

        assert sum(1 for _ in breadth_first(deep, max_depth=5)) == 6


class TestResolveWorkoutEventDayIndex:
    """Test day index lookup for calendar events."""

    def test_explicit_event_fields(self):
        assert resolve_workout_event_day_index({"day_index": 1}, None) == 1
        assert resolve_workout_event_day_index({"workout_day_number": 3}, "<html>") == 2

    def test_no_program_means_no_lookup(self):
        assert resolve_workout_event_day_index({"workout": "w1"}, None) is None
        assert resolve_workout_event_day_index({"workout": "w1"}, "<div>preview</div>") is None

    def test_workout_uuid_matches_node_position(self):
        program = {"days": [{"uuid": "w0"}, {"uuid": "w1"}, {"uuid": "w2"}]}

        assert resolve_workout_event_day_index({"workout": "w2"}, program) == 2

    def test_workout_uuid_prefers_node_index_field(self):
        program = {"days": [{"workout_uuid": "w1", "day_number": 5}]}

        assert resolve_workout_event_day_index({"workout": "w1"}, program) == 4

    def test_workout_day_uuid(self):
        program = {"days": [{"uuid": "d0"}, {"uuid": "d1"}]}

        assert resolve_workout_event_day_index({"workout_day_uuid": "d1"}, program) == 1

    def test_workout_day_id_compares_as_string(self):
        program = {"days": [{"id": 10}, {"id": 11}]}

        assert resolve_workout_event_day_index({"workout_day_id": "11"}, program) == 1
        assert resolve_workout_event_day_index({"day_id": 10}, program) == 0

    def test_unmatched(self):
        program = {"days": [{"uuid": "d0"}]}

        assert resolve_workout_event_day_index({"workout": "other"}, program) is None
        assert resolve_workout_event_day_index("not an event", program) is None


class TestSummarizeWorkoutProgramDays:
    """Test day extraction from program JSON."""

    def test_days_with_number_fields(self, posterior_program):
        days = summarize_workout_program_days(posterior_program)

        assert [(day.day_index, day.day_label) for day in days] == [
            (0, "Day 1: Anterior"),
            (1, "Day 2: Posterior"),
        ]
        assert days[1].sections[0].groups[0].exercises[0].name == "Deadlift"

    def test_position_and_default_label(self):
        program = {"workout_days": [{"workout": [{"exercise_name": "Row"}]}, {"workout": [{"exercise_name": "Squat"}]}]}

        days = summarize_workout_program_days(program)

        assert [(day.day_index, day.day_label) for day in days] == [(0, "Day 1"), (1, "Day 2")]

    def test_day_nodes_are_not_descended(self):
        """Exercise records inside a day do not become days themselves."""
        program = {"days": [{"title": "Push", "exercises": [{"exercise_name": "Press", "workout": [{"exercise_name": "x"}]}]}]}

        assert len(summarize_workout_program_days(program)) == 1

    def test_non_structured_programs(self):
        assert summarize_workout_program_days(None) == []
        assert summarize_workout_program_days("<div>preview</div>") == []
        assert summarize_workout_program_days({"title": "Empty"}) == []


class TestMatchProgramDay:
    """Test picking a day for an event."""

    def days(self) -> list[WorkoutDaySummary]:
        return [
            WorkoutDaySummary(day_index=0, day_label="Upper A"),
            WorkoutDaySummary(day_index=1, day_label="Lower"),
            WorkoutDaySummary(day_index=2, day_label="Upper B"),
        ]

    def test_index_match(self):
        assert match_program_day(self.days(), 2, "Lower").day_label == "Upper B"

    def test_exact_title(self):
        assert match_program_day(self.days(), None, "  lower ").day_index == 1

    def test_unique_substring(self):
        assert match_program_day(self.days(), None, "Upper B - heavy").day_index == 2

    def test_ambiguous_substring_is_none(self):
        assert match_program_day(self.days(), None, "upper") is None

    def test_single_day_fallback(self):
        only = [WorkoutDaySummary(day_index=0, day_label="Full Body")]

        assert match_program_day(only, 5, "Anything") is only[0]

    def test_no_days(self):
        assert match_program_day([], 0, "Upper") is None
