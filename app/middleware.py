# =============================================================================
# app/middleware.py - Request Body Size Limit
# =============================================================================
# Plain ASGI middleware that rejects request bodies over MAX_BODY_KB with
# 413 PAYLOAD_TOO_LARGE before any route parses them.
#
# The declared Content-Length is checked first; bodies without one
# (chunked transfer encoding) are counted as they stream in.
# =============================================================================

import logging

from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.exceptions import PayloadTooLargeError

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    """
    Usage:
        app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=200 * 1024)
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = self._declared_length(scope)
        if declared is not None and declared > self.max_body_bytes:
            await self._reject(scope, receive, send, declared)
            return

        # Read the body up front; the limit caps how much is held in memory
        messages: list[Message] = []
        size = 0
        while True:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request":
                break
            size += len(message.get("body", b""))
            if size > self.max_body_bytes:
                await self._reject(scope, receive, send, size)
                return
            if not message.get("more_body", False):
                break

        async def replay() -> Message:
            if messages:
                return messages.pop(0)
            return await receive()

        await self.app(scope, replay, send)

    @staticmethod
    def _declared_length(scope: Scope) -> int | None:
        for name, value in scope.get("headers", []):
            if name == b"content-length" and value.isdigit():
                return int(value)
        return None

    async def _reject(self, scope: Scope, receive: Receive, send: Send, size: int) -> None:
        exc = PayloadTooLargeError(size, self.max_body_bytes)
        logger.info(f"Rejected {scope['method']} {scope['path']}: body of at least {size} bytes")
        response = JSONResponse(status_code=exc.status_code, content=exc.to_dict())
        await response(scope, receive, send)
