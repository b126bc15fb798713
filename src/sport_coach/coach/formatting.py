"""
Result formatting for chat and console output.
"""

from sport_coach.api.model import CoachResult

EMPTY_RESPONSE = "All good! Let me know if you have any other questions."


def format_coach_response(result: CoachResult) -> str:
    """Render commentary, plan summary, risks, and notes as chat text."""
    response = ""

    if result.raw_response:
        response += result.raw_response.strip() + "\n\n"

    if result.plan:
        plan = result.plan
        response += f"📋 *{plan.title}*\n"
        response += f"Goal: {plan.goal}\n"
        if plan.planned_load:
            response += f"Load: {plan.planned_load:g} TSS\n"
        response += "\n"
        if plan.week_focus:
            response += f"{plan.week_focus}\n\n"

    if result.risks:
        response += "⚠️ *Risks Flagged*\n"
        for risk in result.risks:
            response += f"• [{risk.severity}] {risk.message}\n"
        response += "\n"

    if result.notes:
        response += "📝 *Notes*\n"
        for note in result.notes:
            response += f"• {note}\n"

    if not response.strip():
        return EMPTY_RESPONSE
    return response.strip()
