"""
Coach tools for the MCP server.

Lets an MCP client (another assistant, an IDE) trigger a check-in or read
the athlete's current plan and recent training.
"""

import json
import logging
from datetime import date, timedelta

from sport_coach.api.activities import get_compact_activities
from sport_coach.client_factory import get_collaborators
from sport_coach.runner import get_latest_wellness, run_check_in

logger = logging.getLogger(__name__)


def register_tools(app):
    """Register coach tools with the MCP app."""

    @app.tool()
    async def coach_check_in(question: str = None) -> str:
        """
        Run a coaching check-in.

        The coach reviews recent training and fitness, creates or adjusts
        this week's plan, flags risks, and records notes. If a question is
        given, the coach also answers it.

        Args:
            question: Optional message for the coach (e.g. "Should I run today?")

        Returns:
            JSON with the response text, the current plan, risks, notes, and actions taken
        """
        try:
            result = run_check_in(question)
        except Exception as e:
            logger.error(f"Check-in failed: {e}")
            return json.dumps({"success": False, "error": str(e)}, indent=2)
        return json.dumps({"success": True, **result.to_dict()}, indent=2)

    @app.tool()
    async def get_week_plan() -> str:
        """
        Get this week's training plan.

        Returns:
            JSON with the plan, or {"plan": null} when none exists yet
        """
        try:
            plan = get_collaborators().plan_store.get_current_week_plan()
        except Exception as e:
            return json.dumps({"success": False, "error": str(e)}, indent=2)
        return json.dumps({"plan": plan.to_dict() if plan else None}, indent=2)

    @app.tool()
    async def get_recent_training(days: int = 30) -> str:
        """
        Get recent activities and current fitness.

        Args:
            days: How many days of history to include (default: 30, max: 90)

        Returns:
            JSON with fitness (ctl, atl, tsb) and compact activities, oldest first
        """
        today = date.today()
        days = max(1, min(days, 90))
        try:
            intervals = get_collaborators().intervals
            activities = get_compact_activities(intervals, today - timedelta(days=days))
            wellness = get_latest_wellness(intervals, today)
        except Exception as e:
            return json.dumps({"success": False, "error": str(e)}, indent=2)

        return json.dumps({
            "fitness": {
                "ctl": wellness.ctl,
                "atl": wellness.atl,
                "tsb": wellness.tsb,
                "resting_hr": wellness.resting_hr,
            },
            "count": len(activities),
            "activities": [a.to_dict() for a in activities],
        }, indent=2)

    return app
