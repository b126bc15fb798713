"""
Domain types for the coach.

Everything is a frozen dataclass: the input snapshot is built once per
check-in and never mutated, and the run result is threaded through the
loop by replacement (`with_*` methods return new values).
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class AthleteProfile:
    """Physiology the prompt is built around."""
    age: int
    max_hr: int
    lthr: int
    weight: float


@dataclass(frozen=True)
class Wellness:
    """Fitness metrics for one day. tsb (form) is derived, never stored."""
    ctl: float
    atl: float
    resting_hr: Optional[int] = None
    weight: Optional[float] = None

    @property
    def tsb(self) -> float:
        return self.ctl - self.atl


@dataclass(frozen=True)
class CompactActivity:
    """One activity, reduced to what the model needs."""
    date: str
    type: str
    duration_min: int
    distance_km: Optional[float] = None
    avg_hr: Optional[float] = None
    load: Optional[float] = None
    feel: Optional[int] = None
    rpe: Optional[int] = None
    intervals: Tuple[str, ...] = ()
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict without empty fields."""
        d = {
            "date": self.date,
            "type": self.type,
            "duration_min": self.duration_min,
            "distance_km": self.distance_km,
            "avg_hr": self.avg_hr,
            "load": self.load,
            "feel": self.feel,
            "rpe": self.rpe,
            "intervals": list(self.intervals) or None,
            "notes": self.notes,
        }
        return {k: v for k, v in d.items() if v is not None}


@dataclass(frozen=True)
class RaceGoal:
    date: str
    event: str
    target_time: Optional[str] = None


@dataclass(frozen=True)
class WeekPlan:
    """A persisted week plan. `id` is the store's page id, `plan_id` the derived identity."""
    id: str
    plan_id: str
    title: str
    week_start: str
    status: str
    goal: str
    plan: str
    week_focus: Optional[str] = None
    daily_note: Optional[str] = None
    summary: Optional[str] = None
    planned_load: Optional[float] = None
    actual_load: Optional[float] = None
    generated_by_ai: bool = False
    last_updated: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "plan_id": self.plan_id,
            "title": self.title,
            "week_start": self.week_start,
            "status": self.status,
            "goal": self.goal,
            "week_focus": self.week_focus,
            "daily_note": self.daily_note,
            "plan": self.plan,
            "summary": self.summary,
            "planned_load": self.planned_load,
            "actual_load": self.actual_load,
            "generated_by_ai": self.generated_by_ai,
            "last_updated": self.last_updated,
        }


@dataclass(frozen=True)
class RiskFlag:
    risk: str
    message: str
    severity: str

    def to_dict(self) -> Dict[str, str]:
        return {"risk": self.risk, "message": self.message, "severity": self.severity}


@dataclass(frozen=True)
class CoachInput:
    """Immutable per-check-in context handed to the coach."""
    athlete: AthleteProfile
    wellness: Wellness
    recent_activities: Tuple[CompactActivity, ...]
    current_week_plan: Optional[WeekPlan]
    race_goal: RaceGoal
    week_number: int
    total_weeks: int
    athlete_state: Optional[str] = None
    question: Optional[str] = None


@dataclass(frozen=True)
class ToolInvocation:
    """A tool call emitted by the model; consumed exactly once."""
    id: str
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CoachResult:
    """Accumulator threaded through the orchestration loop.

    Risks and notes are append-only; the plan is replaced wholesale.
    """
    plan: Optional[WeekPlan] = None
    risks: Tuple[RiskFlag, ...] = ()
    notes: Tuple[str, ...] = ()
    raw_response: str = ""
    actions: Tuple[str, ...] = ()
    turns: int = 0
    input_tokens: int = 0
    output_tokens: int = 0

    @classmethod
    def initial(cls, snapshot: CoachInput) -> "CoachResult":
        return cls(plan=snapshot.current_week_plan)

    def with_plan(self, plan: WeekPlan) -> "CoachResult":
        return replace(self, plan=plan)

    def with_risk(self, risk: RiskFlag) -> "CoachResult":
        return replace(self, risks=self.risks + (risk,))

    def with_note(self, note: str) -> "CoachResult":
        return replace(self, notes=self.notes + (note,))

    def with_commentary(self, text: str) -> "CoachResult":
        if not text:
            return self
        return replace(self, raw_response=self.raw_response + text)

    def with_action(self, name: str) -> "CoachResult":
        return replace(self, actions=self.actions + (name,))

    def with_usage(self, input_tokens: int, output_tokens: int) -> "CoachResult":
        return replace(
            self,
            input_tokens=self.input_tokens + (input_tokens or 0),
            output_tokens=self.output_tokens + (output_tokens or 0),
        )

    def with_turns(self, turns: int) -> "CoachResult":
        return replace(self, turns=turns)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "plan": self.plan.to_dict() if self.plan else None,
            "risks": [r.to_dict() for r in self.risks],
            "notes": list(self.notes),
            "response": self.raw_response,
            "actions": list(self.actions),
            "turns": self.turns,
            "usage": {"input_tokens": self.input_tokens, "output_tokens": self.output_tokens},
        }
