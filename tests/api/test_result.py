"""Tests for api/model.py: the immutable result accumulator and domain types."""

import dataclasses

import pytest

from sport_coach.api.model import CoachResult, CompactActivity, RiskFlag, Wellness
from tests.conftest import make_plan, make_snapshot


def test_wellness_balance():
    assert Wellness(ctl=40, atl=55).tsb == -15


def test_initial_carries_current_plan():
    plan = make_plan()
    assert CoachResult.initial(make_snapshot(current_week_plan=plan)).plan is plan
    assert CoachResult.initial(make_snapshot()).plan is None


def test_with_methods_return_new_values():
    start = CoachResult()
    risk = RiskFlag("overreaching", "Too many hard days", "medium")

    updated = start.with_risk(risk).with_note("n1").with_note("n2").with_action("add_note")

    assert start.risks == () and start.notes == () and start.actions == ()
    assert updated.risks == (risk,)
    assert updated.notes == ("n1", "n2")
    assert updated.actions == ("add_note",)


def test_result_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        CoachResult().plan = make_plan()


def test_commentary_concatenates():
    result = CoachResult().with_commentary("Hello. ").with_commentary("").with_commentary("Bye.")
    assert result.raw_response == "Hello. Bye."


def test_usage_tolerates_missing_counts():
    result = CoachResult().with_usage(10, None).with_usage(5, 3)
    assert (result.input_tokens, result.output_tokens) == (15, 3)


def test_to_dict():
    result = CoachResult(
        plan=make_plan(),
        risks=(RiskFlag("volume_spike", "Up 25%", "high"),),
        notes=("ok",),
        raw_response="text",
        actions=("flag_risk",),
        turns=2,
    )

    d = result.to_dict()

    assert d["plan"]["plan_id"] == "plan-2026-w07"
    assert d["risks"] == [{"risk": "volume_spike", "message": "Up 25%", "severity": "high"}]
    assert d["notes"] == ["ok"]
    assert d["response"] == "text"
    assert d["turns"] == 2
    assert d["usage"] == {"input_tokens": 0, "output_tokens": 0}


def test_compact_activity_to_dict_drops_empty():
    a = CompactActivity(date="2026-02-10", type="Run", duration_min=40, distance_km=7.5)
    assert a.to_dict() == {"date": "2026-02-10", "type": "Run", "duration_min": 40, "distance_km": 7.5}

