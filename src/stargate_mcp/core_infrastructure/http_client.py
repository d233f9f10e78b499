"""
Shared HTTP client for the upstream SaaS APIs.

- One attempt per call: no retry adapter is mounted.
- Non-2xx responses raise `UpstreamHTTPError` carrying status and raw body.
- Failures are logged here; callers decide how to surface them.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from typing import Any, Mapping

import requests
from requests import Response

from stargate_common.errors import UpstreamHTTPError
from stargate_config.settings import http_timeout


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpClientConfig:
    timeout: float | None = field(default_factory=http_timeout)
    user_agent: str = field(default_factory=lambda: os.getenv("STARGATE_HTTP_USER_AGENT", "stargate-mcp/1.0"))


class HttpClient:
    """A small wrapper around `requests.Session`."""

    def __init__(self, *, config: HttpClientConfig | None = None, session: requests.Session | None = None) -> None:
        self.config = config or HttpClientConfig()
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", self.config.user_agent)

    def request(
        self,
        method: str,
        url: str,
        *,
        service: str,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
        json: Any | None = None,
        error_text: str = "body",
    ) -> Response:
        """Perform an HTTP request; raise UpstreamHTTPError for non-2xx responses.

        `error_text` selects what the raised error carries: the raw response
        "body" or the HTTP "reason" phrase.
        """
        t0 = time.perf_counter()
        try:
            resp = self.session.request(
                method=method,
                url=url,
                headers=dict(headers) if headers else None,
                params=dict(params) if params else None,
                json=json,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            ms = int((time.perf_counter() - t0) * 1000)
            logger.warning("HTTP %s %s failed (ms=%s): %s", method.upper(), url, ms, str(e))
            raise

        ms = int((time.perf_counter() - t0) * 1000)
        if not resp.ok:
            logger.warning("HTTP %s %s failed (status=%s, ms=%s)", method.upper(), url, resp.status_code, ms)
            detail = resp.reason if error_text == "reason" else resp.text
            raise UpstreamHTTPError(service, resp.status_code, detail)

        logger.debug("HTTP %s %s -> %s (ms=%s)", method.upper(), url, resp.status_code, ms)
        return resp

