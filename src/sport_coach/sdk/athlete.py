"""
Intervals.icu athlete SDK functions.
"""

from typing import Any, Dict

from sport_coach.sdk.client import IntervalsClient


def get_athlete(client: IntervalsClient) -> Dict[str, Any]:
    """
    Get the athlete record.

    GET athlete/{id}

    Returns:
        {id, icu_date_of_birth, icu_weight, sportSettings: [{types, max_hr, lthr, ...}], ...}
    """
    return client.make_request("GET", client.athlete_path()) or {}
