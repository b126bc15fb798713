"""
Check-in runner: the top-level entry point shared by all surfaces.

Gathers the input snapshot from the activity source and the plan store,
runs the coach, and returns the result. Upstream failures propagate to
the surface that asked for the run.

Also hosts the connectivity checks behind `python -m sport_coach check`.
"""

import logging
import time
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, List, Optional, Tuple

from sport_coach.api.activities import get_compact_activities
from sport_coach.api.model import CoachInput, CoachResult, RaceGoal, Wellness
from sport_coach.api.plans import PlanStore
from sport_coach.api.profile import get_athlete_profile
from sport_coach.api.status import get_wellness
from sport_coach.client_factory import Collaborators, get_collaborators
from sport_coach.config import Config
from sport_coach.sdk.client import IntervalsClient
from sport_coach.sdk.types import TrainingGoal
from sport_coach.utils import get_week_start, plan_id_for_week, training_week_number

logger = logging.getLogger(__name__)


def get_latest_wellness(client: IntervalsClient, today: date) -> Wellness:
    """Today's wellness, else yesterday's, else an all-zero record."""
    for day in (today, today - timedelta(days=1)):
        wellness = get_wellness(client, day)
        if wellness is not None:
            return wellness
    logger.warning("No wellness data for %s or the day before, using zeros", today)
    return Wellness(ctl=0, atl=0)


def build_snapshot(
    intervals: IntervalsClient,
    plan_store: PlanStore,
    config: Config,
    question: Optional[str] = None,
    today: Optional[date] = None,
) -> CoachInput:
    """Fetch everything the coach needs for one check-in."""
    today = today or date.today()
    oldest = today - timedelta(days=config.history_days)

    logger.info("Fetching athlete data since %s", oldest)
    athlete = get_athlete_profile(intervals, today=today, lthr_override=config.lthr_override)
    activities = get_compact_activities(intervals, oldest)
    wellness = get_latest_wellness(intervals, today)
    current_plan = plan_store.get_current_week_plan(today)
    athlete_state = plan_store.get_athlete_state()

    logger.info(
        "Snapshot: %d activities, CTL=%.1f ATL=%.1f TSB=%.1f, plan=%s",
        len(activities), wellness.ctl, wellness.atl, wellness.tsb,
        current_plan.plan_id if current_plan else "none",
    )

    race = config.race
    return CoachInput(
        athlete=athlete,
        wellness=wellness,
        recent_activities=tuple(activities),
        current_week_plan=current_plan,
        race_goal=RaceGoal(date=race.date, event=race.event, target_time=race.target_time),
        week_number=training_week_number(race.date, race.total_weeks, today),
        total_weeks=race.total_weeks,
        athlete_state=athlete_state,
        question=(question or "").strip() or None,
    )


def run_check_in(
    question: Optional[str] = None,
    collaborators: Optional[Collaborators] = None,
    today: Optional[date] = None,
) -> CoachResult:
    """Run one coaching check-in, optionally answering a question."""
    collaborators = collaborators or get_collaborators()
    started = time.monotonic()

    snapshot = build_snapshot(
        collaborators.intervals,
        collaborators.plan_store,
        collaborators.config,
        question=question,
        today=today,
    )
    result = collaborators.coach.run(snapshot)

    logger.info(
        "Check-in completed in %.1fs: %d turn(s), %d risk(s), %d note(s)",
        time.monotonic() - started, result.turns, len(result.risks), len(result.notes),
    )
    return result


# Week the connectivity check writes to. Far in the past so it never
# clobbers a real plan; reruns overwrite the same page.
CHECK_WEEK_START = "2000-01-03"


@dataclass(frozen=True)
class CheckResult:
    name: str
    passed: bool
    message: str


def _run_check(name: str, check: Callable[[], Tuple[bool, str]]) -> CheckResult:
    try:
        passed, message = check()
    except Exception as e:
        logger.debug("Check %r raised", name, exc_info=True)
        return CheckResult(name, False, str(e))
    return CheckResult(name, passed, message)


def run_connectivity_checks(
    collaborators: Optional[Collaborators] = None,
    today: Optional[date] = None,
) -> List[CheckResult]:
    """Exercise every upstream the coach depends on, without calling the model.

    Reads the athlete profile, recent activities and today's wellness from
    Intervals.icu, looks up this week's plan and the athlete-state page in
    Notion, then writes a plan for CHECK_WEEK_START and reads it back.
    A failing check never stops the others.
    """
    collaborators = collaborators or get_collaborators()
    today = today or date.today()
    intervals = collaborators.intervals
    plan_store = collaborators.plan_store
    config = collaborators.config

    def athlete_profile():
        athlete = get_athlete_profile(intervals, today=today, lthr_override=config.lthr_override)
        if athlete.age > 0 and athlete.max_hr > 0 and athlete.lthr > 0:
            return True, f"age={athlete.age}, maxHR={athlete.max_hr}, LTHR={athlete.lthr}, weight={athlete.weight}kg"
        return False, "Missing required fields (age, maxHR, or LTHR)"

    def activities():
        found = get_compact_activities(intervals, today - timedelta(days=config.history_days))
        return True, f"Found {len(found)} activities in last {config.history_days} days"

    def wellness():
        day = get_wellness(intervals, today)
        if day is None:
            return False, "No wellness data for today"
        return True, f"CTL={day.ctl:.1f}, ATL={day.atl:.1f}, TSB={day.tsb:.1f}"

    def current_plan():
        plan_id = plan_id_for_week(get_week_start(today))
        plan = plan_store.get_plan_by_plan_id(plan_id)
        if plan is None:
            return True, f"No plan exists for {plan_id} (this is OK)"
        return True, f'Found plan "{plan.title}" ({plan.status}, {plan.goal})'

    def athlete_state():
        state = plan_store.get_athlete_state()
        if not state:
            return True, "No athlete state page configured or page is empty"
        return True, f"Loaded {len(state)} chars from the athlete state page"

    def create_and_fetch():
        created = plan_store.create_plan(
            CHECK_WEEK_START,
            goal=TrainingGoal.RECOVERY.value,
            plan="Mon: Test\nTue: Test\nWed: Test",
            summary="Automated connectivity check",
            planned_load=50,
        )
        fetched = plan_store.get_plan_by_plan_id(created.plan_id)
        if fetched is None:
            return False, "Plan was created but could not be fetched back"
        if "T" not in fetched.last_updated:
            return False, f"lastUpdated has no time component: {fetched.last_updated!r}"
        return True, f"Created plan {created.plan_id}, lastUpdated={fetched.last_updated}"

    return [
        _run_check("Intervals.icu: Athlete Profile", athlete_profile),
        _run_check("Intervals.icu: Activities", activities),
        _run_check("Intervals.icu: Wellness", wellness),
        _run_check("Notion: Current Week Plan", current_plan),
        _run_check("Notion: Athlete State", athlete_state),
        _run_check("Notion: Create & Fetch Plan", create_and_fetch),
    ]
