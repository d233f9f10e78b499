from __future__ import annotations

from typing import Any, Mapping

from stargate_common.errors import MissingCredentialError
from stargate_config.credentials import ASANA, CREDENTIAL_ENV_VARS
from stargate_mcp.core_infrastructure.http_client import HttpClient

ASANA_BASE_URL = "https://app.asana.com/api/1.0"


class AsanaClient:
    """Asana REST API. Request bodies travel under `data`; responses are unwrapped from it."""

    def __init__(self, token: str | None, *, http: HttpClient | None = None, base_url: str = ASANA_BASE_URL) -> None:
        self._token = token
        self._http = http or HttpClient()
        self.base_url = base_url.rstrip("/")

    def request(
        self,
        endpoint: str,
        method: str = "GET",
        *,
        params: Mapping[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        if not self._token:
            raise MissingCredentialError(CREDENTIAL_ENV_VARS[ASANA])

        resp = self._http.request(
            method,
            f"{self.base_url}{endpoint}",
            service="Asana API",
            headers={
                "Authorization": f"Bearer {self._token}",
                "Content-Type": "application/json",
            },
            params=params,
            json={"data": body} if body is not None else None,
        )
        return resp.json().get("data")
