from stargate_mcp.connectors.asana.client import AsanaClient
from stargate_mcp.connectors.asana.tools import AsanaTools

__all__ = ["AsanaClient", "AsanaTools"]
