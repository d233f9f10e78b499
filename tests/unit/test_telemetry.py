import json

from stargate_common import telemetry
from stargate_common.context import get_request_id, set_request_id


def _records(tmp_path):
    p = tmp_path / "telemetry" / "mcp-telemetry.jsonl"
    return [json.loads(line) for line in p.read_text(encoding="utf-8").splitlines()]


def test_log_event_appends_redacted_jsonl(tmp_path):
    set_request_id("RID-1")
    telemetry.log_event(
        "tool",
        "slack_send_message",
        {"args": {"channel": "C1", "token": "xoxb-123", "authorization": "Bearer abc"}},
        ok=False,
        ms=12,
    )

    (rec,) = _records(tmp_path)
    assert rec["name"] == "slack_send_message"
    assert rec["ok"] is False
    assert rec["ms"] == 12
    assert rec["request_id"] == "RID-1"
    assert rec["corr_id"] == "RID-1"
    assert rec["args"]["args"]["channel"] == "C1"
    assert rec["args"]["args"]["token"] == "***redacted***"
    assert rec["args"]["args"]["authorization"] == "Bearer ***redacted***"


def test_log_event_respects_disable_flag(tmp_path, monkeypatch):
    monkeypatch.setenv("STARGATE_DISABLE_TELEMETRY", "1")
    telemetry.log_event("tool", "asana_get_task", {"args": {}})
    assert not (tmp_path / "telemetry" / "mcp-telemetry.jsonl").exists()


def test_set_request_id_ignores_empty():
    set_request_id("keep-me")
    set_request_id(None)
    assert get_request_id() == "keep-me"
