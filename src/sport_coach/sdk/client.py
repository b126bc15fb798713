"""
Intervals.icu HTTP Client.

Handles HTTP transport, authentication, and error handling.
All endpoint-specific logic lives in the sibling modules (activities, athlete, wellness).
"""

import logging
from typing import Any, Dict, Optional

import requests

from sport_coach.sdk.types import INTERVALS_API_URL, INTERVALS_AUTH_USER

logger = logging.getLogger(__name__)


class IntervalsClient:
    """
    Intervals.icu HTTP transport.

    Handles Basic authentication and request/response parsing.
    Endpoint calls are in sibling modules (sdk.activities, sdk.athlete, sdk.wellness).
    """

    def __init__(
        self,
        athlete_id: str,
        api_key: str,
        base_url: str = INTERVALS_API_URL,
        timeout: float = 30,
    ):
        if not athlete_id or not api_key:
            raise ValueError("Intervals.icu athlete id and API key are required")

        self._athlete_id = athlete_id
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

        self._session = requests.Session()
        self._session.auth = (INTERVALS_AUTH_USER, api_key)
        self._session.headers.update({"Content-Type": "application/json"})

    @property
    def athlete_id(self) -> str:
        return self._athlete_id

    def athlete_path(self, suffix: str = "") -> str:
        """Endpoint path scoped to the configured athlete."""
        path = f"athlete/{self._athlete_id}"
        if suffix:
            path = f"{path}/{suffix.lstrip('/')}"
        return path

    def make_request(
        self,
        method: str,
        endpoint: str,
        params: Dict = None,
        json_data: Dict = None,
        allow_not_found: bool = False,
    ) -> Optional[Any]:
        """
        Make an authenticated API request.

        Args:
            method: HTTP method (GET/POST/PUT)
            endpoint: API endpoint path (e.g. "athlete/i123/activities")
            params: Query parameters
            json_data: JSON body data
            allow_not_found: Return None instead of raising on HTTP 404

        Returns:
            Parsed JSON response, or None for a tolerated 404

        Raises:
            requests.HTTPError: On any other non-success status
        """
        url = f"{self._base_url}/{endpoint}"
        logger.debug("Intervals.icu %s %s params=%s", method.upper(), endpoint, params)

        response = self._session.request(
            method.upper(),
            url,
            params=params,
            json=json_data,
            timeout=self._timeout,
        )

        if allow_not_found and response.status_code == 404:
            return None

        response.raise_for_status()
        return response.json()
