"""
Prompt builder: pure functions from a CoachInput to prompt text.

The system prompt embeds today's date and the current fitness balance, so it
is rebuilt on every check-in rather than cached.
"""

from collections import OrderedDict
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

from sport_coach.api.model import CoachInput, CompactActivity
from sport_coach.utils import days_until, get_week_start, parse_date

# (name, lower bound as fraction of LTHR, upper bound)
HR_ZONE_BANDS = (
    ("Zone 1 (Recovery)", None, 0.81),
    ("Zone 2 (Aerobic)", 0.81, 0.90),
    ("Zone 3 (Tempo)", 0.90, 0.95),
    ("Zone 4 (Threshold)", 0.95, 1.00),
    ("Zone 5 (VO2max)", 1.00, None),
)

TECHNIQUE_CUES = (
    "Quick, light feet: aim for a cadence around 170-180 spm on easy runs",
    "Run tall: slight forward lean from the ankles, not the waist",
    "Relaxed shoulders and hands; arms swing forward and back, not across",
    "Land under your hips instead of reaching out with the heel",
    "Breathe rhythmically and stay conversational in Zone 2",
    "Drive the knee forward on strides and hill repeats",
)

TSB_RECOVERY_THRESHOLD = -20
MAX_WEEKLY_VOLUME_INCREASE = "10-12%"
DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def hr_zones(lthr: int) -> List[Tuple[str, Optional[int], Optional[int]]]:
    """Heart-rate zones in bpm derived from lactate-threshold HR."""
    return [
        (
            name,
            round(lthr * low) if low is not None else None,
            round(lthr * high) if high is not None else None,
        )
        for name, low, high in HR_ZONE_BANDS
    ]


def technique_cue(week_number: int) -> str:
    """Technique cue of the week, rotating through TECHNIQUE_CUES."""
    return TECHNIQUE_CUES[(max(week_number, 1) - 1) % len(TECHNIQUE_CUES)]


def _format_zone(name: str, low: Optional[int], high: Optional[int]) -> str:
    if low is None:
        return f"- {name}: < {high} bpm"
    if high is None:
        return f"- {name}: > {low} bpm"
    return f"- {name}: {low}-{high} bpm"


def _taper_guidance(days_to_race: int) -> str:
    weeks_out = days_to_race // 7
    if days_to_race < 0:
        return "The race is behind us: plan recovery and easy running before the next block."
    if weeks_out == 0:
        return "RACE WEEK: short sharp sessions only, keep legs fresh, no new stimuli."
    if weeks_out == 1:
        return "One week to race: cut volume by about 40%, keep a little intensity."
    if weeks_out == 2:
        return "Two weeks to race: start the taper, reduce volume by 20-30%."
    return "No taper yet: build progressively."


def build_system_prompt(snapshot: CoachInput, today: Optional[date] = None) -> str:
    """System prompt: athlete, race, fitness, zones, and the coaching policy."""
    today = today or date.today()
    athlete = snapshot.athlete
    race = snapshot.race_goal
    wellness = snapshot.wellness
    days_to_race = days_until(race.date, today)

    fitness_lines = [
        f"- CTL (Fitness): {wellness.ctl:.1f}",
        f"- ATL (Fatigue): {wellness.atl:.1f}",
        f"- TSB (Form): {wellness.tsb:.1f}",
    ]
    if wellness.resting_hr:
        fitness_lines.append(f"- Resting HR: {wellness.resting_hr} bpm")
    if wellness.weight:
        fitness_lines.append(f"- Current weight: {wellness.weight} kg")

    zones = "\n".join(_format_zone(*z) for z in hr_zones(athlete.lthr))

    sections = [
        f"You are an experienced running coach helping an athlete prepare for a {race.event} race.\n"
        f"Today is {today:%A} {today.isoformat()}.",

        "## Athlete Profile\n"
        f"- Age: {athlete.age}\n"
        f"- Max HR: {athlete.max_hr} bpm\n"
        f"- Lactate Threshold HR: {athlete.lthr} bpm\n"
        f"- Weight: {athlete.weight} kg",

        "## Race Goal\n"
        f"- Event: {race.event}\n"
        f"- Date: {race.date} ({days_to_race} days away)\n"
        f"- Target: {race.target_time or 'Complete the race'}\n"
        f"- Week {snapshot.week_number} of {snapshot.total_weeks} in the training block",

        "## Current Fitness Status\n" + "\n".join(fitness_lines),
    ]

    if snapshot.athlete_state:
        sections.append("## Athlete Notes (maintained by the athlete)\n" + snapshot.athlete_state.strip())

    sections.extend([
        "## Training Philosophy\n"
        f"1. **Injury Prevention First**: Never increase weekly running volume by more than "
        f"{MAX_WEEKLY_VOLUME_INCREASE} week-over-week\n"
        "2. **Polarized Training**: About 80% of running time easy (Zone 1-2), at most 2 quality "
        "sessions per week (Zone 4-5)\n"
        "3. **Progressive Overload**: Build for 3 weeks, then take a lighter recovery week; "
        "add either volume or intensity in a week, never both\n"
        "4. **Cross-Training Counts**: Cycling and gym work add to fatigue (ATL) but not "
        "run-specific fitness\n"
        f"5. **Listen to the Body**: If TSB is below {TSB_RECOVERY_THRESHOLD}, prioritize recovery; "
        "low feel or high RPE on easy days is a warning sign\n"
        f"6. **Taper**: {_taper_guidance(days_to_race)}",

        f"## HR Zones (based on LTHR {athlete.lthr})\n{zones}",

        "## Technique Cue of the Week\n"
        f"{technique_cue(snapshot.week_number)}. Mention it in the daily note when it fits.",

        "## Plan Format\n"
        "When creating or updating plans, use this format for each day:\n"
        + "\n".join(f"{d}: [workout description]" for d in DAY_NAMES) + "\n\n"
        "Include specific details: distance/duration, intensity (HR zone or pace), and any intervals.\n"
        'For rest days, simply write "Rest" or suggest active recovery.',

        "## Your Task\n"
        "Analyze the athlete's recent training and current status. Then:\n"
        "1. If no plan exists for this week, create one using create_week_plan\n"
        "2. If a plan exists, evaluate if adjustments are needed based on actual training vs planned, "
        "and use update_week_plan only when something should change\n"
        "3. Flag any injury risks using flag_risk if you see concerning patterns\n"
        "4. Add coaching notes using add_note for important observations\n\n"
        "Be specific, practical, and prioritize the athlete's long-term health over short-term gains.",
    ])

    if snapshot.question:
        sections.append(
            "## Conversation\n"
            "The athlete sent you a message (at the end of the user message). Answer it directly "
            "and conversationally in plain text, in a few short paragraphs suitable for a chat app. "
            "Use the tools as well when the question calls for a plan change, a risk, or a note; "
            "otherwise just answer."
        )

    return "\n\n".join(sections)


def group_by_week(
    activities: Sequence[CompactActivity],
) -> "OrderedDict[str, List[CompactActivity]]":
    """Group activities by Monday week start, oldest week first."""
    weeks: Dict[str, List[CompactActivity]] = {}
    for activity in sorted(activities, key=lambda a: a.date):
        weeks.setdefault(get_week_start(activity.date), []).append(activity)
    return OrderedDict(sorted(weeks.items()))


def week_label(week_start: str, today: Optional[date] = None) -> str:
    """"This Week", "Last Week", or "N Weeks Ago" relative to today."""
    current = parse_date(get_week_start(today or date.today()))
    weeks_back = (current - parse_date(week_start)).days // 7
    if weeks_back <= 0:
        return "This Week"
    if weeks_back == 1:
        return "Last Week"
    return f"{weeks_back} Weeks Ago"


def format_activity(a: CompactActivity) -> str:
    """One line per activity."""
    line = f"{a.date} | {a.type} | {a.duration_min}min"
    if a.distance_km:
        line += f" | {a.distance_km}km"
    if a.avg_hr:
        line += f" | {round(a.avg_hr)}bpm avg"
    if a.load:
        line += f" | {round(a.load)} TSS"
    if a.feel:
        line += f" | feel:{a.feel}/5"
    if a.rpe:
        line += f" | RPE:{a.rpe}/10"
    if a.intervals:
        line += f" | intervals: {', '.join(a.intervals)}"
    if a.notes:
        line += f' | "{a.notes}"'
    return line


def _week_header(week_start: str, activities: List[CompactActivity], today: date) -> str:
    start = parse_date(week_start)
    end = start + timedelta(days=6)
    distance = sum(a.distance_km or 0 for a in activities)
    load = sum(a.load or 0 for a in activities)
    return (
        f"### {week_label(week_start, today)} ({start:%d.%m} - {end:%d.%m}): "
        f"{len(activities)} activities | {distance:.1f} km | {round(load)} TSS"
    )


def build_user_message(snapshot: CoachInput, today: Optional[date] = None) -> str:
    """User message: weekly activity history, the current plan, and any question."""
    today = today or date.today()

    weeks = group_by_week(snapshot.recent_activities)
    if weeks:
        blocks = []
        for week_start, activities in weeks.items():
            lines = [_week_header(week_start, activities, today)]
            lines.extend(format_activity(a) for a in activities)
            blocks.append("\n".join(lines))
        history = "\n\n".join(blocks)
    else:
        history = "No activities recorded."

    message = f"## Recent Activities (by week)\n{history}\n\n"

    plan = snapshot.current_week_plan
    if plan:
        message += (
            f"## Current Week Plan\n"
            f"Status: {plan.status}\n"
            f"Goal: {plan.goal}\n"
        )
        if plan.week_focus:
            message += f"Focus: {plan.week_focus}\n"
        load = plan.planned_load if plan.planned_load is not None else "not set"
        message += f"Planned Load: {load} TSS\n\n"
        message += f"Plan:\n{plan.plan}\n\n"
        if plan.summary:
            message += f"Previous notes: {plan.summary}\n\n"
        message += "Please review the current plan and training progress. Adjust if needed."
    else:
        message += "No plan exists for this week yet. Please create a training plan."

    if snapshot.question:
        message += f"\n\n## Athlete's Message\n{snapshot.question.strip()}"

    return message
