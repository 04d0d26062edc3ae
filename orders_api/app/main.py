"""FastAPI application exposing the order pricing engine."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_settings

from .middlewares.request_id import RequestIdMiddleware
from .obs.logging import configure_logging
from .pricing.errors import PricingError
from .routes_pricing import router as pricing_router
from .utils.responses import err, ok, pricing_error

settings = get_settings()
configure_logging(settings.log_level.upper())
logger = logging.getLogger("api")

app = FastAPI(title="Order Pricing API")
app.add_middleware(RequestIdMiddleware)

app.include_router(pricing_router, prefix="/pricing", tags=["Pricing"])


@app.exception_handler(PricingError)
async def pricing_error_handler(request: Request, exc: PricingError):
    logger.info(
        "pricing rule rejected: %s",
        exc.code,
        extra={"status": 400, "route": request.url.path},
    )
    return pricing_error(exc)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(
        exc.detail,
        extra={"status": exc.status_code, "route": request.url.path},
    )
    return JSONResponse(err(exc.status_code, exc.detail), status_code=exc.status_code)


@app.exception_handler(Exception)
async def general_error_handler(request: Request, exc: Exception):
    logger.exception(
        "unhandled_error", extra={"status": 500, "route": request.url.path}
    )
    return JSONResponse(err(500, "Internal Server Error"), status_code=500)


@app.get("/health")
async def health() -> dict:
    return ok({"status": "ok"})
