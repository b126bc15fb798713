"""
Telegram Bot API client and SDK functions.

Just enough of the Bot API to long-poll for messages and reply.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from sport_coach.sdk.types import TELEGRAM_API_URL, TELEGRAM_MESSAGE_LIMIT

logger = logging.getLogger(__name__)


class TelegramClient:
    """
    Telegram Bot API transport.

    Every Bot API method is a POST to /bot<token>/<method> returning
    {"ok": bool, "result": ..., "description": ...}.
    """

    def __init__(self, bot_token: str, base_url: str = TELEGRAM_API_URL, timeout: float = 30):
        if not bot_token:
            raise ValueError("Telegram bot token is required")

        self._base_url = f"{base_url.rstrip('/')}/bot{bot_token}"
        self._timeout = timeout
        self._session = requests.Session()

    def make_request(self, method: str, json_data: Dict = None, timeout: float = None) -> Any:
        """
        Call a Bot API method.

        Args:
            method: Bot API method name (e.g. "sendMessage")
            json_data: Method parameters
            timeout: Transport timeout override (long polling needs more than the default)

        Returns:
            The "result" field of the response

        Raises:
            requests.HTTPError: On a non-success HTTP status
            ValueError: If Telegram answers ok=false
        """
        response = self._session.post(
            f"{self._base_url}/{method}",
            json=json_data or {},
            timeout=timeout or self._timeout,
        )
        if not response.ok:
            logger.error("Telegram API error %s: %s", response.status_code, response.text)
        response.raise_for_status()

        data = response.json()
        if not data.get("ok"):
            raise ValueError(f"Telegram API error: {data.get('description', 'Unknown error')}")
        return data.get("result")


def split_message(text: str, limit: int = TELEGRAM_MESSAGE_LIMIT) -> List[str]:
    """Split text into chunks no longer than `limit`, preferring line breaks."""
    if len(text) <= limit:
        return [text]

    chunks = []
    current = ""
    for line in text.splitlines(keepends=True):
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]
        if len(current) + len(line) > limit:
            chunks.append(current)
            current = ""
        current += line
    if current:
        chunks.append(current)
    return chunks


def send_message(
    client: TelegramClient,
    chat_id: str,
    text: str,
    parse_mode: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Send a text message, split into several when over the length limit.

    POST sendMessage

    Returns:
        The sent message objects
    """
    sent = []
    for chunk in split_message(text):
        body: Dict[str, Any] = {"chat_id": chat_id, "text": chunk}
        if parse_mode:
            body["parse_mode"] = parse_mode
        sent.append(client.make_request("sendMessage", body))
    return sent


def send_chat_action(client: TelegramClient, chat_id: str, action: str = "typing") -> bool:
    """
    Show a chat action (typing indicator).

    POST sendChatAction
    """
    return bool(client.make_request("sendChatAction", {"chat_id": chat_id, "action": action}))


def get_updates(client: TelegramClient, offset: Optional[int] = None, timeout: int = 30) -> List[Dict[str, Any]]:
    """
    Long-poll for new updates.

    POST getUpdates

    Returns:
        [{update_id, message: {chat: {id}, text, ...}}, ...]
    """
    body: Dict[str, Any] = {"timeout": timeout, "allowed_updates": ["message"]}
    if offset is not None:
        body["offset"] = offset
    return client.make_request("getUpdates", body, timeout=timeout + 10) or []


def get_me(client: TelegramClient) -> Dict[str, Any]:
    """
    Get the bot's own user record.

    POST getMe
    """
    return client.make_request("getMe")
