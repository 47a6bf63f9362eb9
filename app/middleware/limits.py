from starlette.requests import Request
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.responses import JSONResponse
from app.core import config

class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        cl = request.headers.get("content-length")
        try:
            if cl is not None and int(cl) > config.max_body_bytes():
                return JSONResponse(status_code=413, content={"error": "Request body too large"})
        except ValueError:
            return JSONResponse(status_code=400, content={"error": "Bad Content-Length"})
        return await call_next(request)
