"""
Fitness status: how are you now?

Chronic/acute load and the derived balance from the daily wellness record.
"""

from datetime import date
from typing import Optional, Union

from sport_coach.api.model import Wellness
from sport_coach.sdk import wellness as sdk_wellness
from sport_coach.sdk.client import IntervalsClient


def get_wellness(client: IntervalsClient, day: Union[date, str]) -> Optional[Wellness]:
    """Wellness for a day, or None when the day has no record."""
    data = sdk_wellness.get_wellness(client, day)
    if data is None:
        return None

    return Wellness(
        ctl=data.get("ctl") or 0,
        atl=data.get("atl") or 0,
        resting_hr=data.get("restingHR"),
        weight=data.get("weight"),
    )
