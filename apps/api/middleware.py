from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable

from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("apps.api.access")

STATE_FIELDS = ("selected_intent", "detected_service")


def json_logger_middleware() -> Callable:
    """Return an HTTP middleware that logs one JSON line per request.

    Captures method, path, status and latency_ms, plus the chat triage
    attributes a route left on request.state.
    """

    async def _middleware(request: Request, call_next: Callable[[Request], Any]) -> Response:
        start = time.perf_counter()
        status = 500
        try:
            response: Response = await call_next(request)
            status = response.status_code
            return response
        finally:
            payload = {
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "latency_ms": round((time.perf_counter() - start) * 1000.0, 2),
            }
            for k in STATE_FIELDS:
                if hasattr(request.state, k):
                    payload[k] = getattr(request.state, k)
            logger.info(json.dumps(payload, ensure_ascii=False))

    return _middleware
