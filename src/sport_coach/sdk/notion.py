"""
Notion HTTP client and SDK functions.

The document store for week plans and the athlete-state page.
Each function maps 1:1 to a Notion endpoint; pagination is followed
until `has_more` is false.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from sport_coach.sdk.types import NOTION_API_URL, NOTION_VERSION

logger = logging.getLogger(__name__)


class NotionClient:
    """
    Notion REST transport.

    Handles bearer authentication, the version header, and response parsing.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = NOTION_API_URL,
        version: str = NOTION_VERSION,
        timeout: float = 30,
    ):
        if not api_key:
            raise ValueError("Notion API key is required")

        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

        self._session = requests.Session()
        self._session.headers.update({
            "Authorization": f"Bearer {api_key}",
            "Notion-Version": version,
            "Content-Type": "application/json",
        })

    def make_request(
        self,
        method: str,
        endpoint: str,
        params: Dict = None,
        json_data: Dict = None,
    ) -> Dict[str, Any]:
        """
        Make an authenticated API request.

        Args:
            method: HTTP method (GET/POST/PATCH)
            endpoint: API endpoint path (e.g. "pages")
            params: Query parameters
            json_data: JSON body data

        Returns:
            Parsed JSON response

        Raises:
            requests.HTTPError: If Notion returns a non-success status
        """
        url = f"{self._base_url}/{endpoint}"
        logger.debug("Notion %s %s", method.upper(), endpoint)

        response = self._session.request(
            method.upper(),
            url,
            params=params,
            json=json_data,
            timeout=self._timeout,
        )
        if not response.ok:
            logger.error("Notion API error %s: %s", response.status_code, response.text)
        response.raise_for_status()
        return response.json()


def query_database(
    client: NotionClient,
    database_id: str,
    filter: Optional[Dict] = None,
    sorts: Optional[List[Dict]] = None,
    page_size: int = 100,
) -> List[Dict[str, Any]]:
    """
    Query all pages of a database matching a filter.

    POST databases/{id}/query

    Returns:
        List of page objects
    """
    body: Dict[str, Any] = {"page_size": page_size}
    if filter:
        body["filter"] = filter
    if sorts:
        body["sorts"] = sorts

    results: List[Dict[str, Any]] = []
    while True:
        data = client.make_request("POST", f"databases/{database_id}/query", json_data=body)
        results.extend(data.get("results", []))
        if not data.get("has_more") or not data.get("next_cursor"):
            return results
        body["start_cursor"] = data["next_cursor"]


def create_page(client: NotionClient, database_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a page in a database.

    POST pages

    Returns:
        The created page object
    """
    return client.make_request(
        "POST",
        "pages",
        json_data={"parent": {"database_id": database_id}, "properties": properties},
    )


def update_page(client: NotionClient, page_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
    """
    Update properties of a page.

    PATCH pages/{id}

    Returns:
        The updated page object
    """
    return client.make_request("PATCH", f"pages/{page_id}", json_data={"properties": properties})


def get_block_children(client: NotionClient, block_id: str, page_size: int = 100) -> List[Dict[str, Any]]:
    """
    List all child blocks of a block or page.

    GET blocks/{id}/children

    Returns:
        List of block objects
    """
    params: Dict[str, Any] = {"page_size": page_size}
    blocks: List[Dict[str, Any]] = []
    while True:
        data = client.make_request("GET", f"blocks/{block_id}/children", params=params)
        blocks.extend(data.get("results", []))
        if not data.get("has_more") or not data.get("next_cursor"):
            return blocks
        params["start_cursor"] = data["next_cursor"]
