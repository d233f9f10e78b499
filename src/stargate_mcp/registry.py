from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Callable, Iterator, Mapping

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.tools import Tool

from stargate_common.tooling import InstrumentConfig, iter_tools, tool_boundary
from stargate_config.credentials import CREDENTIAL_ENV_VARS, Credentials
from stargate_mcp.connectors import INTEGRATIONS


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    integration: str
    # Envelope-returning handler (already wrapped by tool_boundary)
    handler: Callable[..., Any]

    @cached_property
    def input_schema(self) -> dict[str, Any]:
        """JSON schema FastMCP derives from the handler signature."""
        return Tool.from_function(self.handler, name=self.name, description=self.description).parameters


class DuplicateToolError(ValueError):
    pass


class ToolRegistry:
    """Name -> descriptor. Filled once at startup and read-only afterwards."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolDescriptor] = {}

    def register(self, descriptor: ToolDescriptor) -> None:
        if descriptor.name in self._tools:
            raise DuplicateToolError(f"Tool already registered: {descriptor.name}")
        self._tools[descriptor.name] = descriptor

    def get(self, name: str) -> ToolDescriptor:
        return self._tools[name]

    def names(self) -> list[str]:
        return list(self._tools)

    def integrations(self) -> set[str]:
        return {d.integration for d in self._tools.values()}

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def install(self, mcp: FastMCP) -> None:
        for d in self:
            mcp.add_tool(d.handler, name=d.name, description=d.description)


def register_handlers(registry: ToolRegistry, integration: str, handlers: Any) -> int:
    n = 0
    for spec, fn in iter_tools(handlers):
        registry.register(
            ToolDescriptor(
                name=spec.name,
                description=spec.description,
                integration=integration,
                handler=tool_boundary(InstrumentConfig(name=spec.name))(fn),
            )
        )
        n += 1
    return n


def build_registry(credentials: Credentials, *, clients: Mapping[str, Any] | None = None) -> ToolRegistry:
    """
    Register the tools of every integration whose credential is present.

    `clients` overrides the transport client per integration name (tests).
    """
    registry = ToolRegistry()
    enabled = credentials.enabled()

    for integration in INTEGRATIONS:
        if integration.name not in enabled:
            continue
        client = (clients or {}).get(integration.name)
        if client is None:
            client = integration.make_client(credentials.token_for(integration.name))
        n = register_handlers(registry, integration.name, integration.make_tools(client))
        logger.info("%s tools enabled (%d)", integration.label, n)

    if not len(registry):
        logger.warning(
            "No tools enabled. Set environment variables to enable integrations: %s",
            ", ".join(CREDENTIAL_ENV_VARS.values()),
        )

    return registry
