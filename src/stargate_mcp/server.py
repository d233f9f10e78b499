from __future__ import annotations

import logging
import sys

from mcp.server.fastmcp import FastMCP

from stargate_config.credentials import Credentials
from stargate_config.settings import init_runtime, mcp_transport
from stargate_mcp import __version__
from stargate_mcp.registry import ToolRegistry, build_registry


logger = logging.getLogger(__name__)

SERVER_NAME = "stargate-mcp"


def build_server(registry: ToolRegistry) -> FastMCP:
    mcp = FastMCP(
        name=SERVER_NAME,
        instructions="Exposes Asana, Slack and GitHub Projects operations as tools. "
        "Only integrations with a configured token are available.",
    )
    # FastMCP has no constructor argument for the advertised server version.
    mcp._mcp_server.version = __version__
    registry.install(mcp)
    return mcp


def main() -> None:
    # Entry points (console_scripts) call main() directly, so we must perform
    # runtime initialization here (dotenv + logging).
    init_runtime()
    logger.info("Starting %s server %s...", SERVER_NAME, __version__)

    registry = build_registry(Credentials.from_env())
    mcp = build_server(registry)

    transport = mcp_transport()
    logger.info("%s server ready (%d tools, transport=%s)", SERVER_NAME, len(registry), transport)
    try:
        mcp.run(transport=transport)
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
