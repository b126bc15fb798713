"""
Intervals.icu wellness SDK functions.
"""

from datetime import date
from typing import Any, Dict, Optional, Union

from sport_coach.sdk.client import IntervalsClient
from sport_coach.utils import to_date_string


def get_wellness(client: IntervalsClient, day: Union[date, str]) -> Optional[Dict[str, Any]]:
    """
    Get the wellness record for one day.

    GET athlete/{id}/wellness/{YYYY-MM-DD}

    Returns:
        {id, ctl, atl, restingHR, weight, ...}, or None when the day has no record (404)
    """
    return client.make_request(
        "GET",
        client.athlete_path(f"wellness/{to_date_string(day)}"),
        allow_not_found=True,
    )
