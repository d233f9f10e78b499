from stargate_mcp.connectors.slack.client import SlackClient
from stargate_mcp.connectors.slack.tools import SlackTools

__all__ = ["SlackClient", "SlackTools"]
