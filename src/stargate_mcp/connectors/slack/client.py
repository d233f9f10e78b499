from __future__ import annotations

from typing import Any

from stargate_common.errors import MissingCredentialError, SlackAPIError
from stargate_config.credentials import CREDENTIAL_ENV_VARS, SLACK
from stargate_mcp.core_infrastructure.http_client import HttpClient

SLACK_BASE_URL = "https://slack.com/api"


class SlackClient:
    """Slack Web API. Every method is a POST with a flat JSON body."""

    def __init__(self, token: str | None, *, http: HttpClient | None = None, base_url: str = SLACK_BASE_URL) -> None:
        self._token = token
        self._http = http or HttpClient()
        self.base_url = base_url.rstrip("/")

    def call(self, method: str, body: dict[str, Any] | None = None) -> dict[str, Any]:
        if not self._token:
            raise MissingCredentialError(CREDENTIAL_ENV_VARS[SLACK])

        resp = self._http.request(
            "POST",
            f"{self.base_url}/{method}",
            service="Slack HTTP",
            headers={
                "Authorization": f"Bearer {self._token}",
                "Content-Type": "application/json",
            },
            json=body,
            error_text="reason",
        )
        payload = resp.json()
        # Slack reports failures with HTTP 200 and ok=false
        if not payload.get("ok"):
            raise SlackAPIError(payload.get("error"))
        return payload
