"""
Error translation for the HTTP layer.

Every error leaves the API with the same body shape:
    {"message": str, "errors": [...]}   (errors only for validation)

Mapping:
- request schema errors (body, path, query) -> 400
- FinanceValidationError                    -> 400
- NotFoundError                             -> 404
- ReferentialIntegrityError                 -> 409
- anything unexpected                       -> 500
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from finance_dashboard.api.dependencies import get_correlation_id
from finance_dashboard.services.storage import NotFoundError, ReferentialIntegrityError
from finance_dashboard.validation import FinanceValidationError


def _entity_from_path(request: Request) -> str:
    path = request.url.path
    if "/categories" in path:
        return "category"
    if "/transactions" in path:
        return "transaction"
    return "request"


def _schema_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    entity = _entity_from_path(request)
    errors = _schema_errors(exc)
    await request.app.state.audit_logger.log_validation_failed(
        entity_type=entity,
        issues=errors,
        correlation_id=get_correlation_id(request),
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": f"Invalid {entity} data", "errors": errors},
    )


async def finance_validation_handler(request: Request, exc: FinanceValidationError) -> JSONResponse:
    errors = [issue.model_dump() for issue in exc.issues]
    await request.app.state.audit_logger.log_validation_failed(
        entity_type=exc.entity_type,
        issues=errors,
        correlation_id=get_correlation_id(request),
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": str(exc), "errors": errors},
    )


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    await request.app.state.audit_logger.log_not_found(
        entity_type=exc.entity_type,
        entity_id=exc.entity_id,
        correlation_id=get_correlation_id(request),
    )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"message": str(exc)},
    )


async def referential_integrity_handler(
    request: Request,
    exc: ReferentialIntegrityError,
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"message": str(exc), "reason": exc.outcome.value},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    await request.app.state.audit_logger.log_error(
        error_type=type(exc).__name__,
        error_message=str(exc),
        details={"path": request.url.path, "method": request.method},
        correlation_id=get_correlation_id(request),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(FinanceValidationError, finance_validation_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ReferentialIntegrityError, referential_integrity_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
