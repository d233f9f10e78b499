from __future__ import annotations

from typing import Iterable

REDACT_TOKEN = "***redacted***"


class StargateError(Exception):
    """Base class for every failure raised inside a tool handler."""


class MissingCredentialError(StargateError):
    def __init__(self, env_var: str) -> None:
        self.env_var = env_var
        super().__init__(f"{env_var} environment variable not set")


class UpstreamHTTPError(StargateError):
    """Non-2xx response from an upstream API. Carries the raw response body."""

    def __init__(self, service: str, status: int, body: str) -> None:
        self.service = service
        self.status = status
        self.body = body
        super().__init__(f"{service} error ({status}): {body}")


class SlackAPIError(StargateError):
    """HTTP 200 from Slack with `ok: false`."""

    def __init__(self, error: str | None) -> None:
        self.error = error
        super().__init__(f"Slack API error: {error}")


class GraphQLError(StargateError):
    def __init__(self, messages: Iterable[str]) -> None:
        self.messages = list(messages)
        super().__init__(f"GitHub GraphQL error: {', '.join(self.messages)}")


class ArgumentConflictError(StargateError, ValueError):
    """Mutually exclusive / jointly required optional arguments were violated."""
