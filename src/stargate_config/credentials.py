from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

ASANA = "asana"
SLACK = "slack"
GITHUB = "github"

# integration -> environment variable carrying its bearer token
CREDENTIAL_ENV_VARS: dict[str, str] = {
    ASANA: "ASANA_TOKEN",
    SLACK: "SLACK_TOKEN",
    GITHUB: "GITHUB_TOKEN",
}


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    v = value.strip()
    return v or None


@dataclass(frozen=True)
class Credentials:
    """
    Bearer tokens resolved once at startup.

    Presence is the only check; an expired or malformed token surfaces later
    as an upstream error from the integration's client.
    """

    asana_token: str | None = None
    slack_token: str | None = None
    github_token: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Credentials":
        env = os.environ if environ is None else environ
        return cls(
            asana_token=_clean(env.get(CREDENTIAL_ENV_VARS[ASANA])),
            slack_token=_clean(env.get(CREDENTIAL_ENV_VARS[SLACK])),
            github_token=_clean(env.get(CREDENTIAL_ENV_VARS[GITHUB])),
        )

    def token_for(self, integration: str) -> str | None:
        return {
            ASANA: self.asana_token,
            SLACK: self.slack_token,
            GITHUB: self.github_token,
        }[integration]

    def enabled(self) -> frozenset[str]:
        return frozenset(name for name in CREDENTIAL_ENV_VARS if self.token_for(name))
