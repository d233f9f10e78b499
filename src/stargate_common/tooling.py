from __future__ import annotations

import functools
import inspect
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Union

from mcp.types import CallToolResult, TextContent

from stargate_common.context import new_request_id, set_request_id
from stargate_common.telemetry import log_event


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result type shared by every tool handler
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Ok:
    text: str


@dataclass(frozen=True)
class Err:
    message: str


ToolResult = Union[Ok, Err]


def render(payload: Any) -> str:
    """Strings pass through verbatim; everything else is pretty-printed JSON."""
    if isinstance(payload, str):
        return payload
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


def to_envelope(result: ToolResult) -> CallToolResult:
    if isinstance(result, Ok):
        return CallToolResult(content=[TextContent(type="text", text=result.text)], isError=False)
    return CallToolResult(content=[TextContent(type="text", text=result.message)], isError=True)


_REDACTION_KEYS = {"authorization", "token", "access_token", "api_key", "apikey"}


def sanitize_args_for_log(args: dict | None) -> dict:
    """Remove obvious secrets from args (telemetry layer also redacts)."""
    out: dict[str, Any] = {}
    for k, v in (args or {}).items():
        out[str(k)] = "***redacted***" if str(k).lower() in _REDACTION_KEYS else v
    return out


def _bound_args(sig: inspect.Signature, args: tuple[Any, ...], kwargs: dict[str, Any]) -> dict[str, Any]:
    try:
        return dict(sig.bind_partial(*args, **kwargs).arguments)
    except TypeError:
        d: dict[str, Any] = dict(kwargs)
        if args:
            d["_args"] = list(args)
        return d


def invoke(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> ToolResult:
    """Run a handler and fold its outcome into a ToolResult. Never raises."""
    try:
        return Ok(render(fn(*args, **kwargs)))
    except Exception as e:
        return Err(f"Error: {e}")


@dataclass(frozen=True)
class InstrumentConfig:
    name: str
    kind: str = "tool"
    telemetry_file: str = "mcp-telemetry.jsonl"


def tool_boundary(cfg: InstrumentConfig):
    """
    Wrap a handler so it returns the MCP envelope instead of a raw payload.

    The wrapper keeps the handler's parameter list (annotations resolved) so
    FastMCP builds the input schema from it, and drops the return annotation
    so no structured output schema is inferred.
    """

    def decorator(fn: Callable[..., Any]):
        fn_sig = inspect.signature(fn, eval_str=True)

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any):
            corr_id = new_request_id()
            set_request_id(corr_id)

            t0 = time.perf_counter()
            result = invoke(fn, *args, **kwargs)
            ms = int((time.perf_counter() - t0) * 1000)

            args_for_log: dict[str, Any] = {"args": sanitize_args_for_log(_bound_args(fn_sig, args, kwargs))}
            ok = isinstance(result, Ok)
            if not ok:
                args_for_log["error"] = result.message
                logger.warning("Tool %s failed: %s", cfg.name, result.message)

            try:
                log_event(
                    cfg.kind,
                    cfg.name,
                    args_for_log,
                    ok=ok,
                    ms=ms,
                    corr_id=corr_id,
                    telemetry_file=cfg.telemetry_file,
                )
            except Exception:
                logger.warning("Telemetry write failed for %s", cfg.name, exc_info=True)
            return to_envelope(result)

        wrapper.__signature__ = fn_sig.replace(return_annotation=inspect.Signature.empty)  # type: ignore[attr-defined]
        # functools.wraps copies the handler's annotations; FastMCP must not see its return type.
        wrapper.__annotations__ = {k: v for k, v in wrapper.__annotations__.items() if k != "return"}
        return wrapper

    return decorator


# ---------------------------------------------------------------------------
# Handler declaration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str


def tool(name: str, description: str):
    """Mark a handler method as an MCP tool. Registration happens elsewhere."""

    def decorator(fn: Callable[..., Any]):
        fn.__tool_spec__ = ToolSpec(name=name, description=description)  # type: ignore[attr-defined]
        return fn

    return decorator


def iter_tools(handlers: Any) -> Iterator[tuple[ToolSpec, Callable[..., Any]]]:
    """Yield (spec, bound handler) for every @tool method, in declaration order."""
    for attr, member in vars(type(handlers)).items():
        spec = getattr(member, "__tool_spec__", None)
        if isinstance(spec, ToolSpec):
            yield spec, getattr(handlers, attr)
