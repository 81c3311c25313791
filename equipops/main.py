from __future__ import annotations

from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from equipops.api import permissions_router, work_orders_router
from equipops.core.i18n import get_locale_from_request, translate
from equipops.core.logging import configure_logging
from equipops.core.settings import settings

configure_logging()

app = FastAPI(title=settings.app_name, debug=settings.debug)


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        request_id = request.headers.get("x-request-id") or uuid4().hex
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()
        response.headers.setdefault("X-Request-ID", request_id)
        return response


class LocalizationMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        locale = get_locale_from_request(request)
        request.state.locale = locale
        response = await call_next(request)
        response.headers.setdefault("Content-Language", locale)
        return response


app.add_middleware(RequestContextMiddleware)
app.add_middleware(LocalizationMiddleware)

app.include_router(permissions_router.router)
app.include_router(work_orders_router.router)


@app.get("/healthz", tags=["system"])
async def health() -> dict:
    return {"status": "ok"}


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    locale = getattr(request.state, "locale", settings.default_locale)
    detail = exc.detail
    code = None
    if isinstance(detail, dict):
        code = detail.get("code")
        params = detail.get("params", {})
        template = detail.get("message")
        message = translate(locale, code or template or "", **params)
    elif isinstance(detail, str):
        code = detail
        message = translate(locale, detail)
    else:
        message = str(detail)
    body = {"detail": message}
    if code:
        body["code"] = code
    logger = structlog.get_logger()
    logger.warning(
        "http_exception",
        status=exc.status_code,
        code=code,
        detail=body.get("detail"),
        path=str(request.url),
    )
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)
