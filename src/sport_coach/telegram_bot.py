"""
Telegram chat bot: long-polling conversational surface.

Every text message from the allow-listed chat becomes a check-in with the
message as the athlete's question; the formatted result is sent back.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

from sport_coach.api.model import CoachResult
from sport_coach.coach.formatting import format_coach_response
from sport_coach.sdk import telegram as sdk_telegram
from sport_coach.sdk.telegram import TelegramClient

logger = logging.getLogger(__name__)

PRIVATE_BOT_REPLY = "Sorry, this bot is private."
TEXT_ONLY_REPLY = "Sorry, I can only process text messages."
ERROR_REPLY = "❌ Sorry, something went wrong. Please try again.\n\nError: {error}"

WELCOME_TEXT = (
    "👋 Welcome to Sport Coach!\n\n"
    "I'm your AI running coach. Ask me anything about your training!\n\n"
    "Your Chat ID: {chat_id}\n"
    "Add this to your .env file as TELEGRAM_CHAT_ID\n\n"
    "Examples:\n"
    '- "What\'s today\'s workout?"\n'
    '- "How\'s my fitness looking?"\n'
    '- "Should I run today? I\'m feeling tired"\n'
    '- "Can you create this week\'s plan?"\n\n'
    "Just ask naturally - no commands needed!"
)


def notify_result(telegram: TelegramClient, chat_id: str, result: CoachResult) -> None:
    """Send a formatted check-in result to a chat."""
    sdk_telegram.send_message(telegram, chat_id, format_coach_response(result))


class CoachBot:
    """Routes Telegram messages to the coach and replies with the result."""

    def __init__(
        self,
        telegram: TelegramClient,
        allowed_chat_id: Optional[str],
        handler: Callable[[str], CoachResult],
        poll_timeout: int = 30,
    ):
        self._telegram = telegram
        self._allowed_chat_id = str(allowed_chat_id) if allowed_chat_id else None
        self._handler = handler
        self._poll_timeout = poll_timeout
        self._offset: Optional[int] = None

        if self._allowed_chat_id is None:
            logger.warning(
                "TELEGRAM_CHAT_ID not set. Bot will respond to all messages (use for getting chat ID)"
            )

    def is_authorized(self, chat_id) -> bool:
        return self._allowed_chat_id is None or str(chat_id) == self._allowed_chat_id

    def reply(self, chat_id, text: str) -> None:
        sdk_telegram.send_message(self._telegram, str(chat_id), text)

    def handle_update(self, update: Dict[str, Any]) -> None:
        """Process one update from getUpdates."""
        message = update.get("message")
        if not message:
            return

        chat_id = (message.get("chat") or {}).get("id")
        if chat_id is None:
            return

        if not self.is_authorized(chat_id):
            logger.warning("Unauthorized access attempt from chat ID: %s", chat_id)
            self.reply(chat_id, PRIVATE_BOT_REPLY)
            return

        text = message.get("text")
        if not text:
            self.reply(chat_id, TEXT_ONLY_REPLY)
            return

        if text.startswith("/"):
            command = text.split()[0].split("@")[0]
            if command == "/start":
                self.reply(chat_id, WELCOME_TEXT.format(chat_id=chat_id))
            return

        self.handle_conversation(chat_id, text)

    def handle_conversation(self, chat_id, text: str) -> None:
        """Run a check-in with the message as the question and reply."""
        logger.info("Received message from chat %s: %r", chat_id, text)
        sdk_telegram.send_chat_action(self._telegram, str(chat_id), "typing")

        started = time.monotonic()
        try:
            result = self._handler(text)
        except Exception as e:
            logger.exception("Error handling message")
            self.reply(chat_id, ERROR_REPLY.format(error=e))
            return

        response = format_coach_response(result)
        logger.info(
            "Check-in completed in %.1fs, sending response (%d chars)",
            time.monotonic() - started, len(response),
        )
        self.reply(chat_id, response)

    def poll_once(self) -> int:
        """Fetch and process one batch of updates. Returns how many were processed."""
        updates = sdk_telegram.get_updates(self._telegram, offset=self._offset, timeout=self._poll_timeout)
        for update in updates:
            self._offset = update["update_id"] + 1
            try:
                self.handle_update(update)
            except Exception:
                logger.exception("Failed to process update %s", update.get("update_id"))
        return len(updates)

    def run_forever(self, retry_delay: float = 5.0) -> None:
        """Long-poll until interrupted."""
        me = sdk_telegram.get_me(self._telegram)
        logger.info("Bot @%s is running, ready to receive messages", me.get("username"))

        while True:
            try:
                self.poll_once()
            except KeyboardInterrupt:
                logger.info("Shutting down bot...")
                return
            except Exception:
                logger.exception("Polling failed, retrying in %.0fs", retry_delay)
                time.sleep(retry_delay)
