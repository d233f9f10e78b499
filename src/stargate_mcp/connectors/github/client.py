from __future__ import annotations

from typing import Any

from stargate_common.errors import GraphQLError, MissingCredentialError
from stargate_config.credentials import CREDENTIAL_ENV_VARS, GITHUB
from stargate_mcp.core_infrastructure.http_client import HttpClient

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"
GITHUB_REST_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"


class GitHubClient:
    """
    GitHub has two URL families behind one token: the GraphQL endpoint
    (Projects V2) and the versioned REST API (issues, comments, sub-issues).
    """

    def __init__(
        self,
        token: str | None,
        *,
        http: HttpClient | None = None,
        graphql_url: str = GITHUB_GRAPHQL_URL,
        rest_url: str = GITHUB_REST_URL,
    ) -> None:
        self._token = token
        self._http = http or HttpClient()
        self.graphql_url = graphql_url
        self.rest_url = rest_url.rstrip("/")

    def _auth_headers(self) -> dict[str, str]:
        if not self._token:
            raise MissingCredentialError(CREDENTIAL_ENV_VARS[GITHUB])
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }

    def graphql(self, query: str, variables: dict[str, Any] | None = None) -> Any:
        resp = self._http.request(
            "POST",
            self.graphql_url,
            service="GitHub GraphQL HTTP",
            headers=self._auth_headers(),
            json={"query": query, "variables": variables},
        )
        payload = resp.json()
        errors = payload.get("errors")
        if errors:
            raise GraphQLError(str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors)
        return payload.get("data")

    def rest(self, endpoint: str, method: str = "GET", body: dict[str, Any] | None = None) -> Any:
        headers = self._auth_headers()
        headers["Accept"] = "application/vnd.github+json"
        headers["X-GitHub-Api-Version"] = GITHUB_API_VERSION

        resp = self._http.request(
            method,
            f"{self.rest_url}{endpoint}",
            service="GitHub REST API",
            headers=headers,
            json=body,
        )
        if resp.status_code == 204:
            return None
        return resp.json()
