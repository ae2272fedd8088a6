# lis_core/common/middleware.py
from __future__ import annotations

import logging
import time

from lis_core.common.api.exceptions import ensure_request_id

logger = logging.getLogger(__name__)


class RequestIdMiddleware:
    """
    Attaches request.request_id (honouring an incoming X-Request-Id) and echoes it
    back on the response. Emits one access line per API request.
    """

    HEADER = "X-Request-Id"
    LOGGED_PREFIXES = ("/api/v1/",)

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        incoming = request.headers.get(self.HEADER)
        if incoming:
            request.request_id = incoming[:64]
        rid = ensure_request_id(request)

        started = time.monotonic()
        response = self.get_response(request)
        response[self.HEADER] = rid

        if request.path.startswith(self.LOGGED_PREFIXES):
            elapsed_ms = (time.monotonic() - started) * 1000
            logger.info(
                "%s %s -> %s (%.1fms) request_id=%s",
                request.method,
                request.path,
                response.status_code,
                elapsed_ms,
                rid,
            )
        return response
