"""
Upstream integrations. Each pairs a transport client with the tool handlers
built on it, and is gated by one credential.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from stargate_config.credentials import ASANA, GITHUB, SLACK
from stargate_mcp.connectors.asana import AsanaClient, AsanaTools
from stargate_mcp.connectors.github import GitHubClient, GitHubTools
from stargate_mcp.connectors.slack import SlackClient, SlackTools


@dataclass(frozen=True)
class Integration:
    name: str
    label: str
    make_client: Callable[[str], Any]
    make_tools: Callable[[Any], Any]


INTEGRATIONS: tuple[Integration, ...] = (
    Integration(ASANA, "Asana", AsanaClient, AsanaTools),
    Integration(SLACK, "Slack", SlackClient, SlackTools),
    Integration(GITHUB, "GitHub", GitHubClient, GitHubTools),
)
