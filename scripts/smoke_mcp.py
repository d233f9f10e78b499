"""
Smoke script for MCP reachability (no upstream calls unless asked).

It performs:
 1) Spawns `python -m stargate_mcp` over stdio with the current environment
 2) Lists the tools the server exposes (depends on which *_TOKEN vars are set)
 3) Optionally calls one tool: STARGATE_SMOKE_TOOL + STARGATE_SMOKE_ARGS (JSON)
"""

from __future__ import annotations

import asyncio
import json
import os
import sys
from typing import Any

from mcp import ClientSession
from mcp.client.stdio import StdioServerParameters, stdio_client


def _pretty(text: str) -> str:
    s = text.strip()
    if s.startswith("{") or s.startswith("["):
        try:
            return json.dumps(json.loads(s), indent=2, ensure_ascii=False)
        except json.JSONDecodeError:
            return text
    return text


def _result_text(res: Any) -> str:
    return "".join(getattr(c, "text", "") for c in (getattr(res, "content", None) or []))


async def main() -> int:
    python_cmd = os.getenv("MCP_PYTHON") or sys.executable
    tool_name = os.getenv("STARGATE_SMOKE_TOOL")
    tool_args = json.loads(os.getenv("STARGATE_SMOKE_ARGS", "{}"))

    print(f"[smoke] Python: {python_cmd}")

    server = StdioServerParameters(
        command=python_cmd,
        args=["-m", "stargate_mcp"],
        env=dict(os.environ, MCP_TRANSPORT="stdio"),
    )

    async with stdio_client(server) as (read, write):
        async with ClientSession(read, write) as session:
            await session.initialize()

            tools = await session.list_tools()
            names = [t.name for t in tools.tools]
            print("\n[smoke] TOOLS:")
            for n in names:
                print(f" - {n}")
            if not names:
                print("[smoke] WARN: no tools enabled (set ASANA_TOKEN, SLACK_TOKEN or GITHUB_TOKEN)")
                return 1

            if not tool_name:
                return 0

            res = await session.call_tool(tool_name, tool_args)
            print(f"\n[smoke] CALL {tool_name}({tool_args}) isError={res.isError}:")
            print(_pretty(_result_text(res)))
            return 1 if res.isError else 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
