"""HTTP error mapping shared by every router.

Protean's FastAPI integration maps the framework's exceptions
(``ValidationError`` to 400, ``ObjectNotFoundError`` to 404 and so on). On top
of it the marketplace adds authorization failures, gateway rejections and any
context-specific exceptions, all rendered as ``{"error": ...}``.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from shared.session import NotAuthorized

ERROR_STATUS_CODES = {
    NotAuthorized: 403,
}


def register_error_handlers(app: FastAPI, extra_status_codes: dict | None = None) -> None:
    """Install JSON handlers on ``app`` for domain errors plus ``extra_status_codes``."""
    register_exception_handlers(app)

    async def http_error(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    app.add_exception_handler(HTTPException, http_error)

    for exc_class, status_code in {**ERROR_STATUS_CODES, **(extra_status_codes or {})}.items():

        async def domain_error(request: Request, exc: Exception, status_code=status_code):
            return JSONResponse(status_code=status_code, content={"error": getattr(exc, "message", None) or str(exc)})

        app.add_exception_handler(exc_class, domain_error)
