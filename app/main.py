import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from app.api.routes_lint import router as lint_router
from app.core.errors import LintError
from app.middleware.limits import BodySizeLimitMiddleware

log = logging.getLogger("app")

app = FastAPI(title="Writer Assistant")

app.add_middleware(BodySizeLimitMiddleware)

@app.exception_handler(LintError)
async def lint_error_handler(request: Request, exc: LintError):
    if exc.status_code >= 500:
        log.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.error)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())

@app.exception_handler(RequestValidationError)
async def bad_body_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})

@app.get("/health")
def health():
    return {"status": "ok"}

app.include_router(lint_router)
