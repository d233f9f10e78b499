from stargate_mcp.connectors.github.client import GitHubClient
from stargate_mcp.connectors.github.tools import GitHubTools

__all__ = ["GitHubClient", "GitHubTools"]
