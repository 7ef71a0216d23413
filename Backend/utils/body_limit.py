from fastapi import HTTPException
from fastapi.responses import JSONResponse
from fastapi.datastructures import Headers

TOO_LARGE = "Request entity too large"


class BodyTooLarge(HTTPException):
    def __init__(self):
        super().__init__(status_code=413, detail=TOO_LARGE)


class BodySizeLimitMiddleware:
    """
    Reject request bodies larger than max_body_bytes with 413.

    A declared Content-Length over the cap is refused before the app runs.
    Otherwise the bytes actually received are counted, so chunked uploads
    without a Content-Length are capped too.
    """

    def __init__(self, app, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_body_bytes:
            response = JSONResponse(status_code=413, content={"error": TOO_LARGE})
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    raise BodyTooLarge()
            return message

        await self.app(scope, limited_receive, send)
