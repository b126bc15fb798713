"""
Tool executor: performs one side-effecting action per tool invocation.

`execute` never mutates its inputs: it returns an acknowledgment for the
model plus a new CoachResult. Unknown tools, malformed arguments, and
updates without a current plan are reported back as text; only failures
of the plan store itself propagate (the loop catches those).
"""

import logging
from datetime import date
from typing import Any, Callable, Dict, Mapping, Tuple

from sport_coach.api.model import CoachInput, CoachResult, RiskFlag
from sport_coach.coach.tools import (
    ADD_NOTE,
    COACH_TOOLS,
    CREATE_WEEK_PLAN,
    FLAG_RISK,
    UPDATE_WEEK_PLAN,
    ToolRegistry,
)
from sport_coach.utils import get_week_start

logger = logging.getLogger(__name__)


class NoCurrentPlanError(LookupError):
    """update_week_plan was called but the week has no plan."""


class ToolExecutor:
    """Dispatches tool invocations to the plan store and the run result."""

    def __init__(
        self,
        plan_store,
        registry: ToolRegistry = COACH_TOOLS,
        today: Callable[[], date] = date.today,
    ):
        self._store = plan_store
        self._registry = registry
        self._today = today
        self._handlers: Dict[str, Callable] = {
            CREATE_WEEK_PLAN: self._create_week_plan,
            UPDATE_WEEK_PLAN: self._update_week_plan,
            FLAG_RISK: self._flag_risk,
            ADD_NOTE: self._add_note,
        }

    def execute(
        self,
        name: str,
        arguments: Mapping[str, Any],
        snapshot: CoachInput,
        result: CoachResult,
    ) -> Tuple[str, CoachResult]:
        """Run one tool. Returns (acknowledgment text, updated result)."""
        handler = self._handlers.get(name)
        if handler is None or name not in self._registry:
            logger.warning("Unknown tool: %s", name)
            return f"Unknown tool: {name}. Available tools: {', '.join(self._registry.names)}", result

        problems = self._registry.check_arguments(name, arguments)
        if problems:
            logger.warning("Malformed %s call: %s", name, "; ".join(problems))
            return f"Invalid arguments for {name}: {'; '.join(problems)}. Nothing was changed.", result

        logger.debug("Executing %s with %s", name, dict(arguments))
        try:
            ack, updated = handler(arguments, snapshot, result)
        except NoCurrentPlanError as e:
            logger.info("No existing plan to update")
            return str(e), result
        return ack, updated.with_action(name)

    # ── Handlers ─────────────────────────────────────────────────────────

    def _create_week_plan(self, args, snapshot: CoachInput, result: CoachResult):
        week_start = get_week_start(self._today())
        if args.get("weekFocus"):
            logger.info("Creating week plan, focus: %s", args["weekFocus"])

        plan = self._store.create_plan(
            week_start=week_start,
            goal=args["goal"],
            plan=args["plan"],
            summary=args["summary"],
            planned_load=args.get("plannedLoad"),
            week_focus=args.get("weekFocus"),
            daily_note=args.get("dailyNote"),
        )
        logger.info("Created plan: %s", plan.plan_id)
        return f"Plan created: {plan.plan_id}", result.with_plan(plan)

    def _update_week_plan(self, args, snapshot: CoachInput, result: CoachResult):
        current = snapshot.current_week_plan
        if current is None:
            raise NoCurrentPlanError(
                "No current week plan to update. Use create_week_plan to create one."
            )

        if args.get("weekFocus"):
            logger.info("Updating week plan, focus: %s", args["weekFocus"])

        plan = self._store.update_plan(
            current.id,
            week_start=current.week_start or get_week_start(self._today()),
            plan=args.get("plan"),
            summary=args.get("summary"),
            planned_load=args.get("plannedLoad"),
            week_focus=args.get("weekFocus"),
            daily_note=args.get("dailyNote"),
        )
        logger.info("Updated plan: %s", plan.plan_id)
        return f"Plan updated: {plan.plan_id}", result.with_plan(plan)

    def _flag_risk(self, args, snapshot: CoachInput, result: CoachResult):
        risk = RiskFlag(risk=args["risk"], message=args["message"], severity=args["severity"])
        logger.info("RISK FLAGGED: [%s] %s - %s", risk.severity.upper(), risk.risk, risk.message)
        return f"Risk flagged: {risk.risk} ({risk.severity})", result.with_risk(risk)

    def _add_note(self, args, snapshot: CoachInput, result: CoachResult):
        note = args["note"]
        logger.info("Note: %s", note)
        return "Note recorded.", result.with_note(note)
