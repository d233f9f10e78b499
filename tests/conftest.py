from __future__ import annotations

import pytest

from stargate_common.tooling import iter_tools, tool_boundary, InstrumentConfig
from stargate_config.credentials import CREDENTIAL_ENV_VARS


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep telemetry inside tmp_path and real tokens out of every test."""
    monkeypatch.setenv("STARGATE_TELEMETRY_DIR", str(tmp_path / "telemetry"))
    monkeypatch.delenv("STARGATE_DISABLE_TELEMETRY", raising=False)
    for var in CREDENTIAL_ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def envelope_tools():
    """Map tool name -> envelope-returning handler for a handlers object."""

    def build(handlers) -> dict:
        return {spec.name: tool_boundary(InstrumentConfig(name=spec.name))(fn) for spec, fn in iter_tools(handlers)}

    return build
