from __future__ import annotations

import datetime as _dt
import json
import os
from typing import Any

from stargate_config.settings import telemetry_dir
from stargate_common.context import get_request_id
from stargate_common.errors import REDACT_TOKEN


_SECRET_KEYS = {"authorization", "access_token", "token", "api_key", "apikey"}


def telemetry_disabled() -> bool:
    return os.getenv("STARGATE_DISABLE_TELEMETRY", "0").strip().lower() in {"1", "true", "yes"}


def _redact_secrets(obj: Any) -> Any:
    if isinstance(obj, dict):
        out = {}
        for k, v in obj.items():
            if isinstance(k, str) and k.strip().lower() in _SECRET_KEYS:
                if isinstance(v, str) and v.strip().lower().startswith("bearer "):
                    out[k] = "Bearer " + REDACT_TOKEN
                else:
                    out[k] = REDACT_TOKEN
            else:
                out[k] = _redact_secrets(v)
        return out
    if isinstance(obj, list):
        return [_redact_secrets(x) for x in obj]
    return obj


def log_event(
    kind: str,
    name: str,
    args: dict | None = None,
    ok: bool = True,
    ms: int = 0,
    *,
    corr_id: str | None = None,
    telemetry_file: str = "mcp-telemetry.jsonl",
) -> None:
    """
    Append one JSONL telemetry record for a tool invocation.
    """
    if telemetry_disabled():
        return

    rid = get_request_id()
    payload = {} if args is None else dict(args)

    rec = {
        "ts": _dt.datetime.now(_dt.timezone.utc).isoformat().replace("+00:00", "Z"),
        "kind": kind,
        "name": name,
        "request_id": rid,
        "corr_id": corr_id or rid,
        "args": payload,
        "ok": bool(ok),
        "ms": int(ms),
    }

    safe = _redact_secrets(rec)
    d = telemetry_dir()
    d.mkdir(parents=True, exist_ok=True)
    with (d / telemetry_file).open("a", encoding="utf-8") as f:
        f.write(json.dumps(safe, ensure_ascii=False, default=str) + "\n")
