from typing import Any, Dict

from fastapi.responses import JSONResponse

from ..pricing.errors import PricingError


def ok(data: Any) -> Dict[str, Any]:
    """Return a success envelope."""
    return {"ok": True, "data": data}


def err(
    code: int | str,
    message: str,
    details: Dict[str, Any] | None = None,
    hint: str | None = None,
) -> Dict[str, Any]:
    """Return an error envelope."""
    from ..middlewares.request_id import request_id_ctx

    error: Dict[str, Any] = {"code": code, "message": message}
    if hint:
        error["hint"] = hint
    if details:
        error["details"] = details

    return {"ok": False, "request_id": request_id_ctx.get(None), "error": error}


def pricing_error(exc: PricingError, status_code: int = 400) -> JSONResponse:
    """Render a pricing rule failure as an error envelope."""
    details = None
    active = getattr(exc, "active_type", None)
    if active:
        details = {"active_type": active}
    body = err(exc.code, str(exc), details=details, hint=exc.hint)
    return JSONResponse(body, status_code=status_code)
