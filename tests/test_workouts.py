"""Tests for workout plan list helpers."""

from kahunas_cli.models import WorkoutPlan
from kahunas_cli.workouts import (
    build_workout_plan_index,
    extract_workout_plans,
    find_workout_plans_deep,
    format_workout_summary,
    merge_workout_plans,
    pick_latest_workout,
)


class TestExtractWorkoutPlans:
    """Test plan extraction from list responses."""

    def test_reads_workout_plan_list(self):
        payload = {
            "data": {
                "workout_plan": [
                    {"uuid": "a", "title": "Alpha", "updated_at_utc": 10, "days": 3},
                    {"uuid": "b", "name": "Beta"},
                    {"title": "No uuid"},
                ]
            }
        }

        plans = extract_workout_plans(payload)

        assert [(plan.uuid, plan.title) for plan in plans] == [("a", "Alpha"), ("b", "Beta")]
        assert plans[0].days == 3
        assert plans[0].updated_at_utc == 10

    def test_single_plan_object(self):
        payload = {"data": {"workout_program": {"uuid": "c", "title": "Gamma"}}}

        assert [plan.uuid for plan in extract_workout_plans(payload)] == ["c"]

    def test_deep_search_fallback(self):
        payload = {"result": {"items": [{"uuid": "d", "title": "Delta"}, {"uuid": "d", "title": "Dup"}]}}

        assert [plan.title for plan in extract_workout_plans(payload)] == ["Delta"]

    def test_deep_search_stops_at_plan_lists(self):
        payload = [{"uuid": "e", "title": "Echo", "children": [{"uuid": "f", "title": "Nested"}]}]

        assert [plan.uuid for plan in find_workout_plans_deep(payload)] == ["e"]

    def test_invalid_payload(self):
        assert extract_workout_plans(None) == []
        assert extract_workout_plans("text") == []


class TestPlanHelpers:
    """Test merging, picking and formatting plans."""

    def test_merge_keeps_first_seen(self):
        primary = [WorkoutPlan(uuid="a", title="API")]
        secondary = [WorkoutPlan(uuid="a", title="Cache"), WorkoutPlan(uuid="b", title="Cached only")]

        merged = merge_workout_plans(primary, secondary)

        assert [(plan.uuid, plan.title) for plan in merged] == [("a", "API"), ("b", "Cached only")]

    def test_pick_latest(self):
        plans = [
            WorkoutPlan(uuid="old", title="Old", updated_at_utc=100),
            WorkoutPlan(uuid="created", title="Created", created_at_utc=150),
            WorkoutPlan(uuid="new", title="New", updated_at_utc=200),
        ]

        assert pick_latest_workout(plans).uuid == "new"
        assert pick_latest_workout([]) is None

    def test_format_summary(self):
        assert format_workout_summary(WorkoutPlan(uuid="a", title="Alpha", days=3)) == "Alpha - 3 days (a)"
        assert format_workout_summary(WorkoutPlan(uuid="b", title="Beta")) == "Beta (b)"

    def test_index(self):
        plans = [WorkoutPlan(uuid="a", title="Alpha"), WorkoutPlan(uuid="b", title="Beta")]

        assert build_workout_plan_index(plans)["b"].title == "Beta"
