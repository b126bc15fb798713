"""
Intervals.icu activities SDK functions.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Union

from sport_coach.sdk.client import IntervalsClient
from sport_coach.utils import to_date_string


def get_activities(
    client: IntervalsClient,
    oldest: Union[date, str],
    newest: Optional[Union[date, str]] = None,
) -> List[Dict[str, Any]]:
    """
    List activities since a date.

    GET athlete/{id}/activities?oldest=YYYY-MM-DD

    Returns:
        [{id, start_date_local, type, name, moving_time, distance,
          average_heartrate, icu_training_load, feel, icu_rpe, interval_summary, ...}]
    """
    params = {"oldest": to_date_string(oldest)}
    if newest:
        params["newest"] = to_date_string(newest)

    data = client.make_request("GET", client.athlete_path("activities"), params=params)
    if not isinstance(data, list):
        return []
    return data
