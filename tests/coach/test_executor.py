"""Tests for coach/executor.py: tool dispatch to the plan store and the run result."""

from datetime import date
from unittest.mock import Mock

import pytest

from sport_coach.api.model import CoachResult, RiskFlag
from sport_coach.coach.executor import ToolExecutor
from tests.conftest import make_plan, make_snapshot


@pytest.fixture
def executor(plan_store):
    return ToolExecutor(plan_store, today=lambda: date(2026, 2, 11))


def create_args(**overrides):
    args = {
        "goal": "Build Fitness",
        "plan": "Mon: Rest\nTue: Easy 8km",
        "summary": "Keep it steady",
        "plannedLoad": 240,
    }
    args.update(overrides)
    return args


class TestCreateWeekPlan:
    def test_creates_plan_for_current_week(self, executor, plan_store):
        snapshot = make_snapshot()

        ack, result = executor.execute("create_week_plan", create_args(), snapshot, CoachResult.initial(snapshot))

        assert ack == "Plan created: plan-2026-w07"
        assert result.plan.plan_id == "plan-2026-w07"
        assert result.plan.status == "Planned"
        assert result.actions == ("create_week_plan",)
        assert plan_store.create_calls == [{
            "week_start": "2026-02-09",
            "goal": "Build Fitness",
            "plan": "Mon: Rest\nTue: Easy 8km",
            "summary": "Keep it steady",
            "planned_load": 240,
            "week_focus": None,
            "daily_note": None,
        }]

    def test_identity_ignores_plan_body(self, executor):
        snapshot = make_snapshot()
        result = CoachResult.initial(snapshot)

        _, first = executor.execute("create_week_plan", create_args(plan="Mon: Rest"), snapshot, result)
        _, second = executor.execute("create_week_plan", create_args(plan="Mon: Long run 20km"), snapshot, result)

        assert first.plan.plan_id == second.plan.plan_id == "plan-2026-w07"
        assert first.plan.plan != second.plan.plan

    def test_passes_optional_fields(self, executor, plan_store):
        snapshot = make_snapshot()
        executor.execute(
            "create_week_plan",
            create_args(weekFocus="Hills", dailyNote="Easy 40min, quick feet"),
            snapshot,
            CoachResult.initial(snapshot),
        )

        call = plan_store.create_calls[0]
        assert call["week_focus"] == "Hills"
        assert call["daily_note"] == "Easy 40min, quick feet"


class TestUpdateWeekPlan:
    def test_updates_existing_plan(self, executor, plan_store):
        existing = make_plan()
        snapshot = make_snapshot(current_week_plan=existing)

        ack, result = executor.execute(
            "update_week_plan",
            {"weekFocus": "Recovery", "plan": "Mon: Rest", "summary": "Tired legs"},
            snapshot,
            CoachResult.initial(snapshot),
        )

        assert ack == f"Plan updated: {existing.plan_id}"
        assert result.plan.plan == "Mon: Rest"
        assert result.plan.week_focus == "Recovery"
        assert plan_store.update_calls[0]["page_id"] == "page-1"
        assert plan_store.update_calls[0]["week_start"] == existing.week_start
        assert plan_store.update_calls[0]["planned_load"] is None

    def test_no_current_plan_leaves_result_unchanged(self, executor, plan_store):
        snapshot = make_snapshot(current_week_plan=None)
        before = CoachResult.initial(snapshot)

        ack, after = executor.execute(
            "update_week_plan",
            {"weekFocus": "x", "plan": "Mon: Rest", "summary": "y"},
            snapshot,
            before,
        )

        assert ack == "No current week plan to update. Use create_week_plan to create one."
        assert after is before
        assert after.plan is None
        assert plan_store.update_calls == []


class TestRiskAndNote:
    def test_flag_risk_appends(self, executor):
        snapshot = make_snapshot()
        start = CoachResult.initial(snapshot).with_risk(RiskFlag("volume_spike", "earlier", "low"))

        ack, result = executor.execute(
            "flag_risk",
            {"risk": "high_fatigue", "message": "TSB -28", "severity": "high"},
            snapshot,
            start,
        )

        assert ack == "Risk flagged: high_fatigue (high)"
        assert [r.message for r in result.risks] == ["earlier", "TSB -28"]
        assert result.plan is start.plan
        assert start.risks == (RiskFlag("volume_spike", "earlier", "low"),)

    def test_add_note_appends(self, executor):
        snapshot = make_snapshot(current_week_plan=make_plan())
        start = CoachResult.initial(snapshot)

        ack, result = executor.execute("add_note", {"note": "Great long run"}, snapshot, start)

        assert ack == "Note recorded."
        assert result.notes == ("Great long run",)
        assert result.plan == start.plan


class TestRecoverable:
    def test_unknown_tool(self, executor):
        snapshot = make_snapshot()
        before = CoachResult.initial(snapshot)

        ack, after = executor.execute("bogus_tool", {"x": 1}, snapshot, before)

        assert ack.startswith("Unknown tool: bogus_tool.")
        assert "create_week_plan" in ack
        assert after is before

    @pytest.mark.parametrize("name,arguments,problem", [
        ("create_week_plan", {"plan": "p", "summary": "s", "plannedLoad": 100}, "missing required field 'goal'"),
        ("create_week_plan", create_args(goal="Go Fast"), "field 'goal' must be one of"),
        ("create_week_plan", create_args(plannedLoad="lots"), "field 'plannedLoad' must be a number"),
        ("flag_risk", {"risk": "boredom", "message": "m", "severity": "low"}, "field 'risk' must be one of"),
        ("flag_risk", {"risk": "overreaching", "message": "m", "severity": "extreme"}, "field 'severity' must be one of"),
        ("add_note", {}, "missing required field 'note'"),
    ])
    def test_malformed_invocation_has_no_side_effect(self, executor, plan_store, name, arguments, problem):
        snapshot = make_snapshot()
        before = CoachResult.initial(snapshot)

        ack, after = executor.execute(name, arguments, snapshot, before)

        assert ack.startswith(f"Invalid arguments for {name}:")
        assert problem in ack
        assert after is before
        assert plan_store.create_calls == []

    def test_store_failure_propagates_to_loop(self):
        store = Mock()
        store.create_plan.side_effect = ConnectionError("timeout")
        executor = ToolExecutor(store, today=lambda: date(2026, 2, 11))
        snapshot = make_snapshot()

        with pytest.raises(ConnectionError):
            executor.execute("create_week_plan", create_args(), snapshot, CoachResult.initial(snapshot))
