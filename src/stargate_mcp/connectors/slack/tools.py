from __future__ import annotations

from typing import Annotated, Any

from pydantic import Field

from stargate_common.tooling import tool
from stargate_mcp.connectors.slack.client import SlackClient


def _channel_summary(ch: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": ch.get("id"),
        "name": ch.get("name"),
        "is_private": ch.get("is_private"),
        "topic": (ch.get("topic") or {}).get("value"),
        "purpose": (ch.get("purpose") or {}).get("value"),
        "num_members": ch.get("num_members"),
    }


def _message_summary(msg: dict[str, Any]) -> dict[str, Any]:
    return {
        "user": msg.get("user"),
        "text": msg.get("text"),
        "ts": msg.get("ts"),
        "thread_ts": msg.get("thread_ts"),
        "reply_count": msg.get("reply_count"),
    }


def _optional(**params: Any) -> dict[str, Any]:
    return {k: v for k, v in params.items() if v is not None}


class SlackTools:
    def __init__(self, client: SlackClient) -> None:
        self.client = client

    @tool("slack_list_channels", "List Slack channels you can access")
    def list_channels(
        self,
        limit: Annotated[int | None, Field(description="Max channels to return (default 100)")] = None,
        types: Annotated[
            str | None,
            Field(description="Comma-separated channel types: public_channel, private_channel, mpim, im"),
        ] = None,
    ) -> list[dict[str, Any]]:
        payload = self.client.call("conversations.list", _optional(limit=limit, types=types))
        return [_channel_summary(ch) for ch in payload.get("channels") or []]

    @tool("slack_send_message", "Send a message to a Slack channel")
    def send_message(
        self,
        channel: Annotated[str, Field(description="Channel ID to send the message to")],
        text: Annotated[str, Field(description="Message text")],
    ) -> str:
        payload = self.client.call("chat.postMessage", {"channel": channel, "text": text})
        return f"Message sent (ts: {(payload.get('message') or {}).get('ts')})"

    @tool("slack_read_messages", "Read recent messages from a Slack channel")
    def read_messages(
        self,
        channel: Annotated[str, Field(description="Channel ID to read messages from")],
        limit: Annotated[int | None, Field(description="Max messages to return (default 10)")] = None,
        oldest: Annotated[str | None, Field(description="Only messages after this Unix timestamp")] = None,
    ) -> list[dict[str, Any]]:
        params = {"channel": channel, **_optional(limit=limit, oldest=oldest)}
        payload = self.client.call("conversations.history", params)
        return [_message_summary(msg) for msg in payload.get("messages") or []]

    @tool("slack_reply_to_thread", "Reply to a message thread in Slack")
    def reply_to_thread(
        self,
        channel: Annotated[str, Field(description="Channel ID where the thread is")],
        thread_ts: Annotated[str, Field(description="Timestamp of the parent message to reply to")],
        text: Annotated[str, Field(description="Reply text")],
    ) -> str:
        payload = self.client.call("chat.postMessage", {"channel": channel, "thread_ts": thread_ts, "text": text})
        return f"Reply sent (ts: {(payload.get('message') or {}).get('ts')})"
