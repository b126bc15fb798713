"""
Plan store: the durable week plans.

Week plans live in a Notion database, one page per week, keyed by the
identity derived from the week start (`plan-<year>-w<week>`). Callers
never choose the identity: create and update both derive it here.

Concurrent writers for the same week are not serialized; the last write wins.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from sport_coach.api.model import WeekPlan
from sport_coach.sdk import notion as sdk_notion
from sport_coach.sdk.notion import NotionClient
from sport_coach.sdk.types import NOTION_TEXT_LIMIT, PLAN_PROPERTIES, TEXT_BLOCK_TYPES, PlanStatus
from sport_coach.utils import get_week_start, now_iso, plan_id_for_week, to_date_string, week_title

logger = logging.getLogger(__name__)

P = PLAN_PROPERTIES


class PlanStore:
    """Week plan CRUD plus the athlete-state page, backed by Notion."""

    def __init__(
        self,
        notion: NotionClient,
        plans_db_id: str,
        athlete_state_page_id: Optional[str] = None,
        clock: Callable[[], str] = now_iso,
    ):
        self._notion = notion
        self._plans_db_id = plans_db_id
        self._athlete_state_page_id = athlete_state_page_id
        self._clock = clock

    def get_plan_by_plan_id(self, plan_id: str) -> Optional[WeekPlan]:
        """The plan page with this derived identity, or None."""
        pages = sdk_notion.query_database(
            self._notion,
            self._plans_db_id,
            filter={"property": P["plan_id"], "rich_text": {"equals": plan_id}},
            sorts=[{"property": P["last_updated"], "direction": "descending"}],
        )
        if not pages:
            return None
        if len(pages) > 1:
            logger.warning("Found %d pages for %s, using the most recently updated", len(pages), plan_id)
        return page_to_plan(pages[0])

    def get_current_week_plan(self, today=None) -> Optional[WeekPlan]:
        """The plan for the week containing `today`, or None."""
        return self.get_plan_by_plan_id(plan_id_for_week(get_week_start(today)))

    def create_plan(
        self,
        week_start: str,
        goal: str,
        plan: str,
        summary: str,
        planned_load: Optional[float] = None,
        week_focus: Optional[str] = None,
        daily_note: Optional[str] = None,
    ) -> WeekPlan:
        """Create the plan for a week.

        Identity and title derive from `week_start`; status is Planned and
        the AI flag is set. If the week already has a page it is overwritten
        instead of duplicated.
        """
        week_start = to_date_string(week_start)
        plan_id = plan_id_for_week(week_start)

        properties = {
            P["title"]: _title(week_title(week_start)),
            P["plan_id"]: _rich_text(plan_id),
            P["week_start"]: _date(week_start),
            P["status"]: _select(PlanStatus.PLANNED.value),
            P["goal"]: _select(goal),
            P["plan"]: _rich_text(plan),
            P["summary"]: _rich_text(summary),
            P["generated_by_ai"]: {"checkbox": True},
            P["last_updated"]: _date(self._clock()),
        }
        properties.update(_optional_properties(planned_load, week_focus, daily_note))

        existing = self.get_plan_by_plan_id(plan_id)
        if existing:
            logger.info("Plan %s already exists, overwriting page %s", plan_id, existing.id)
            page = sdk_notion.update_page(self._notion, existing.id, properties)
        else:
            page = sdk_notion.create_page(self._notion, self._plans_db_id, properties)
        return page_to_plan(page)

    def update_plan(
        self,
        page_id: str,
        week_start: str,
        plan: Optional[str] = None,
        summary: Optional[str] = None,
        planned_load: Optional[float] = None,
        week_focus: Optional[str] = None,
        daily_note: Optional[str] = None,
    ) -> WeekPlan:
        """Replace the supplied fields of an existing plan page."""
        properties = {
            P["title"]: _title(week_title(week_start)),
            P["last_updated"]: _date(self._clock()),
        }
        if plan is not None:
            properties[P["plan"]] = _rich_text(plan)
        if summary is not None:
            properties[P["summary"]] = _rich_text(summary)
        properties.update(_optional_properties(planned_load, week_focus, daily_note))

        page = sdk_notion.update_page(self._notion, page_id, properties)
        return page_to_plan(page)

    def get_athlete_state(self) -> Optional[str]:
        """Plain text of the athlete-state page, or None if unset or empty."""
        if not self._athlete_state_page_id:
            return None

        blocks = sdk_notion.get_block_children(self._notion, self._athlete_state_page_id)
        lines = []
        for block in blocks:
            block_type = block.get("type")
            if block_type not in TEXT_BLOCK_TYPES:
                continue
            text = _plain_text(block.get(block_type, {}).get("rich_text", []))
            if block_type.endswith("list_item") or block_type == "to_do":
                text = f"- {text}"
            elif block_type.startswith("heading_"):
                text = f"{'#' * int(block_type[-1])} {text}"
            lines.append(text)

        state = "\n".join(lines).strip()
        return state or None


# ── Notion property encoding ─────────────────────────────────────────────

def _chunks(text: str) -> List[str]:
    return [text[i:i + NOTION_TEXT_LIMIT] for i in range(0, len(text), NOTION_TEXT_LIMIT)]


def _rich_text(text: str) -> Dict[str, Any]:
    return {"rich_text": [{"type": "text", "text": {"content": c}} for c in _chunks(text or "")]}


def _title(text: str) -> Dict[str, Any]:
    return {"title": [{"type": "text", "text": {"content": text}}]}


def _select(name: str) -> Dict[str, Any]:
    return {"select": {"name": name}}


def _date(value: str) -> Dict[str, Any]:
    return {"date": {"start": value}}


def _optional_properties(planned_load, week_focus, daily_note) -> Dict[str, Any]:
    properties = {}
    if planned_load is not None:
        properties[P["planned_load"]] = {"number": planned_load}
    if week_focus is not None:
        properties[P["week_focus"]] = _rich_text(week_focus)
    if daily_note is not None:
        properties[P["daily_note"]] = _rich_text(daily_note)
    return properties


# ── Notion property decoding ─────────────────────────────────────────────

def _plain_text(segments: list) -> str:
    return "".join(
        s.get("plain_text") or s.get("text", {}).get("content", "")
        for s in segments or []
    )


def _read_text(props: dict, name: str) -> Optional[str]:
    prop = props.get(name) or {}
    segments = prop.get("rich_text", prop.get("title"))
    if segments is None:
        return None
    return _plain_text(segments) or None


def _read_select(props: dict, name: str) -> Optional[str]:
    select = (props.get(name) or {}).get("select")
    return select.get("name") if select else None


def _read_date(props: dict, name: str) -> Optional[str]:
    value = (props.get(name) or {}).get("date")
    return value.get("start") if value else None


def page_to_plan(page: Dict[str, Any]) -> WeekPlan:
    """Decode a Notion plan page into a WeekPlan."""
    props = page.get("properties", {})
    return WeekPlan(
        id=page.get("id", ""),
        plan_id=_read_text(props, P["plan_id"]) or "",
        title=_read_text(props, P["title"]) or "",
        week_start=_read_date(props, P["week_start"]) or "",
        status=_read_select(props, P["status"]) or PlanStatus.PLANNED.value,
        goal=_read_select(props, P["goal"]) or "",
        plan=_read_text(props, P["plan"]) or "",
        week_focus=_read_text(props, P["week_focus"]),
        daily_note=_read_text(props, P["daily_note"]),
        summary=_read_text(props, P["summary"]),
        planned_load=(props.get(P["planned_load"]) or {}).get("number"),
        actual_load=(props.get(P["actual_load"]) or {}).get("number"),
        generated_by_ai=bool((props.get(P["generated_by_ai"]) or {}).get("checkbox")),
        last_updated=_read_date(props, P["last_updated"]) or "",
    )
