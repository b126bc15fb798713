"""
Athlete profile: who are you?

Age, weight, and heart-rate thresholds from the run sport settings.
"""

from datetime import date
from typing import Optional

from sport_coach.api.model import AthleteProfile
from sport_coach.sdk import athlete as sdk_athlete
from sport_coach.sdk.client import IntervalsClient
from sport_coach.utils import parse_date


def get_athlete_profile(
    client: IntervalsClient,
    today: Optional[date] = None,
    lthr_override: Optional[int] = None,
) -> AthleteProfile:
    """Athlete profile from the athlete record.

    Missing values come back as 0. `lthr_override` replaces the threshold
    heart rate from the sport settings when the athlete keeps a manual value.
    """
    data = sdk_athlete.get_athlete(client)
    run_settings = _run_settings(data.get("sportSettings") or [])

    return AthleteProfile(
        age=_age(data.get("icu_date_of_birth"), today or date.today()),
        max_hr=run_settings.get("max_hr") or 0,
        lthr=lthr_override or run_settings.get("lthr") or 0,
        weight=data.get("icu_weight") or 0,
    )


def _run_settings(sport_settings: list) -> dict:
    for settings in sport_settings:
        if "Run" in (settings.get("types") or []):
            return settings
    return {}


def _age(date_of_birth: Optional[str], today: date) -> int:
    if not date_of_birth:
        return 0
    born = parse_date(date_of_birth)
    had_birthday = (today.month, today.day) >= (born.month, born.day)
    return today.year - born.year - (0 if had_birthday else 1)
