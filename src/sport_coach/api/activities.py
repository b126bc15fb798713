"""
Activities: what has the athlete done?

Fetches recent sessions and compacts them for the model's context.
"""

from datetime import date
from typing import Any, Dict, Iterable, List, Union

from sport_coach.api.model import CompactActivity
from sport_coach.sdk import activities as sdk_activities
from sport_coach.sdk.client import IntervalsClient
from sport_coach.sdk.types import DEFAULT_ACTIVITY_TYPES, ActivityType


def get_compact_activities(
    client: IntervalsClient,
    oldest: Union[date, str],
    types: Iterable[str] = DEFAULT_ACTIVITY_TYPES,
) -> List[CompactActivity]:
    """Activities since `oldest`, filtered by type substring, oldest first.

    Activities without a start date are dropped.
    """
    raw = sdk_activities.get_activities(client, oldest)
    wanted = [t.lower() for t in types]
    filtered = [
        a for a in raw
        if any(t in (a.get("type") or "").lower() for t in wanted)
        and (a.get("start_date_local") or a.get("start_date"))
    ]
    compact = [to_compact(a) for a in filtered]
    return sorted(compact, key=lambda a: a.date)


def to_compact(activity: Dict[str, Any]) -> CompactActivity:
    """Reduce a raw Intervals.icu activity to a CompactActivity."""
    seconds = activity.get("moving_time") or activity.get("elapsed_time") or 0
    distance = activity.get("distance")
    start = activity.get("start_date_local") or activity.get("start_date") or ""

    return CompactActivity(
        date=start.split("T")[0],
        type=_compact_type(activity.get("type")),
        duration_min=round(seconds / 60),
        distance_km=round(distance / 1000, 2) if distance else None,
        avg_hr=activity.get("average_heartrate"),
        load=activity.get("icu_training_load"),
        feel=activity.get("feel"),
        rpe=activity.get("icu_rpe"),
        intervals=tuple(activity.get("interval_summary") or ()),
        notes=activity.get("description") or None,
    )


def _compact_type(raw_type) -> str:
    lower = (raw_type or "").lower()
    if "run" in lower:
        return ActivityType.RUN.value
    if "ride" in lower or "cycling" in lower:
        return ActivityType.RIDE.value
    if "weight" in lower:
        return ActivityType.WEIGHT_TRAINING.value
    return ActivityType.OTHER.value
