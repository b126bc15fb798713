"""Tests for sdk/telegram.py: Bot API transport and message splitting."""

from unittest.mock import Mock, patch

import pytest

from sport_coach.sdk import telegram as sdk_telegram
from sport_coach.sdk.telegram import TelegramClient, split_message


def api_response(payload, ok=True):
    response = Mock(ok=ok, status_code=200)
    response.json = Mock(return_value=payload)
    response.raise_for_status = Mock()
    return response


class TestTelegramClient:
    def test_requires_token(self):
        with pytest.raises(ValueError):
            TelegramClient("")

    def test_posts_to_method_url(self):
        client = TelegramClient("123:abc")
        with patch.object(client._session, "post", return_value=api_response({"ok": True, "result": {"id": 1}})) as mock_post:
            result = client.make_request("getMe")

        assert result == {"id": 1}
        assert mock_post.call_args.args[0] == "https://api.telegram.org/bot123:abc/getMe"

    def test_raises_when_not_ok(self):
        client = TelegramClient("123:abc")
        payload = {"ok": False, "description": "Bad Request: chat not found"}
        with patch.object(client._session, "post", return_value=api_response(payload)):
            with pytest.raises(ValueError, match="chat not found"):
                client.make_request("sendMessage", {"chat_id": "1", "text": "hi"})


class TestSplitMessage:
    def test_short_message_untouched(self):
        assert split_message("hello") == ["hello"]

    def test_splits_on_line_breaks(self):
        text = "a" * 6 + "\n" + "b" * 6 + "\n" + "c" * 3
        chunks = split_message(text, limit=10)
        assert chunks == ["aaaaaa\n", "bbbbbb\nccc"]
        assert "".join(chunks) == text

    def test_hard_splits_long_line(self):
        chunks = split_message("x" * 25, limit=10)
        assert chunks == ["x" * 10, "x" * 10, "x" * 5]

    def test_chunks_respect_limit(self):
        text = "\n".join(f"line {i} " + "z" * (i % 50) for i in range(400))
        chunks = split_message(text)
        assert all(len(c) <= 4096 for c in chunks)
        assert "".join(chunks) == text


class TestEndpoints:
    def test_send_message_chunks(self):
        client = Mock()
        client.make_request.return_value = {"message_id": 1}

        sent = sdk_telegram.send_message(client, "42", "y" * 5000)

        assert len(sent) == 2
        bodies = [c.args[1] for c in client.make_request.call_args_list]
        assert [len(b["text"]) for b in bodies] == [4096, 904]
        assert all(b["chat_id"] == "42" for b in bodies)
        assert "parse_mode" not in bodies[0]

    def test_send_message_parse_mode(self):
        client = Mock()
        sdk_telegram.send_message(client, "42", "*hi*", parse_mode="Markdown")
        assert client.make_request.call_args.args[1]["parse_mode"] == "Markdown"

    def test_send_chat_action(self):
        client = Mock()
        client.make_request.return_value = True
        assert sdk_telegram.send_chat_action(client, "42") is True
        client.make_request.assert_called_once_with("sendChatAction", {"chat_id": "42", "action": "typing"})

    def test_get_updates_long_poll(self):
        client = Mock()
        client.make_request.return_value = [{"update_id": 7}]

        updates = sdk_telegram.get_updates(client, offset=7, timeout=30)

        assert updates == [{"update_id": 7}]
        client.make_request.assert_called_once_with(
            "getUpdates",
            {"timeout": 30, "allowed_updates": ["message"], "offset": 7},
            timeout=40,
        )

    def test_get_updates_empty(self):
        client = Mock()
        client.make_request.return_value = None
        assert sdk_telegram.get_updates(client) == []
