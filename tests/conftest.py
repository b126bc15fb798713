"""
Shared pytest fixtures for sport coach testing.
"""
import pytest
from types import SimpleNamespace
from unittest.mock import Mock, patch

from sport_coach.api.model import (
    AthleteProfile,
    CoachInput,
    CompactActivity,
    RaceGoal,
    WeekPlan,
    Wellness,
)
from sport_coach.utils import plan_id_for_week, week_title


def get_tool_result_text(result):
    """Extract text from tool result.

    FastMCP call_tool returns a tuple (list_of_TextContent, metadata_dict).
    This helper extracts the text from the first TextContent item.
    """
    # Handle tuple return: (content_list, metadata)
    if isinstance(result, tuple) and len(result) > 0:
        result = result[0]
    if isinstance(result, list) and len(result) > 0:
        if hasattr(result[0], 'text'):
            return result[0].text
    return str(result)


def make_plan(week_start="2026-02-09", plan="Mon: Rest\nTue: Easy 8km Z2", **overrides):
    """A WeekPlan as the plan store would return it."""
    fields = dict(
        id="page-1",
        plan_id=plan_id_for_week(week_start),
        title=week_title(week_start),
        week_start=week_start,
        status="Planned",
        goal="Build Fitness",
        plan=plan,
        week_focus="Aerobic base",
        summary="Steady build",
        planned_load=250,
        generated_by_ai=True,
        last_updated="2026-02-09T06:00:00+00:00",
    )
    fields.update(overrides)
    return WeekPlan(**fields)


def make_snapshot(current_week_plan=None, question=None, ctl=40, atl=55, activities=(), **overrides):
    """A CoachInput with sensible defaults."""
    fields = dict(
        athlete=AthleteProfile(age=38, max_hr=185, lthr=170, weight=72.5),
        wellness=Wellness(ctl=ctl, atl=atl, resting_hr=48),
        recent_activities=tuple(activities),
        current_week_plan=current_week_plan,
        race_goal=RaceGoal(date="2026-04-19", event="HalfMarathon", target_time="1:45:00"),
        week_number=7,
        total_weeks=16,
        question=question,
    )
    fields.update(overrides)
    return CoachInput(**fields)


def make_activity(date="2026-02-10", type="Run", **overrides):
    fields = dict(date=date, type=type, duration_min=45, distance_km=8.2, avg_hr=142, load=55)
    fields.update(overrides)
    return CompactActivity(**fields)


class FakePlanStore:
    """In-memory stand-in for PlanStore; derives identity from week_start like the real one."""

    def __init__(self):
        self.pages = {}
        self.create_calls = []
        self.update_calls = []

    def create_plan(self, week_start, goal, plan, summary, planned_load=None, week_focus=None, daily_note=None):
        self.create_calls.append(dict(
            week_start=week_start, goal=goal, plan=plan, summary=summary,
            planned_load=planned_load, week_focus=week_focus, daily_note=daily_note,
        ))
        plan_id = plan_id_for_week(week_start)
        existing = self.pages.get(plan_id)
        record = make_plan(
            week_start=week_start,
            plan=plan,
            id=existing.id if existing else f"page-{len(self.pages) + 1}",
            goal=goal,
            summary=summary,
            planned_load=planned_load,
            week_focus=week_focus,
            daily_note=daily_note,
        )
        self.pages[plan_id] = record
        return record

    def update_plan(self, page_id, week_start, plan=None, summary=None, planned_load=None,
                    week_focus=None, daily_note=None):
        self.update_calls.append(dict(
            page_id=page_id, week_start=week_start, plan=plan, summary=summary,
            planned_load=planned_load, week_focus=week_focus, daily_note=daily_note,
        ))
        return make_plan(
            week_start=week_start,
            id=page_id,
            plan=plan,
            summary=summary,
            week_focus=week_focus,
            planned_load=planned_load if planned_load is not None else 250,
            daily_note=daily_note,
            last_updated="2026-02-11T07:00:00+00:00",
        )


def text_block(text):
    return SimpleNamespace(type="text", text=text)


def tool_use_block(id, name, input):
    return SimpleNamespace(type="tool_use", id=id, name=name, input=input)


def model_response(*blocks, input_tokens=100, output_tokens=50, stop_reason=None):
    """A Messages API response as returned by anthropic's client."""
    if stop_reason is None:
        stop_reason = "tool_use" if any(b.type == "tool_use" for b in blocks) else "end_turn"
    return SimpleNamespace(
        content=list(blocks),
        usage=SimpleNamespace(input_tokens=input_tokens, output_tokens=output_tokens),
        stop_reason=stop_reason,
    )


@pytest.fixture
def plan_store():
    return FakePlanStore()


@pytest.fixture
def mock_model_client():
    """Anthropic client double; set messages.create.side_effect per test."""
    client = Mock()
    client.messages.create = Mock()
    return client


@pytest.fixture
def mock_intervals_client():
    """Intervals.icu client double with the real athlete path layout."""
    client = Mock()
    client.athlete_id = "i12345"
    client.athlete_path = lambda suffix="": f"athlete/i12345/{suffix}" if suffix else "athlete/i12345"
    client.make_request = Mock()
    return client


@pytest.fixture
def mock_collaborators(mock_intervals_client):
    """Collaborators double handed to runner / MCP tools."""
    collaborators = Mock()
    collaborators.intervals = mock_intervals_client
    collaborators.plan_store = Mock()
    collaborators.coach = Mock()
    return collaborators


@pytest.fixture
def mock_get_collaborators(mock_collaborators):
    """Patch client_factory.get_collaborators where the MCP tools look it up."""
    with patch("sport_coach.coach_tools.get_collaborators", Mock(return_value=mock_collaborators)) as fn:
        yield fn
