import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from review_api.api.v1.customers import router as customers_router
from review_api.api.v1.reviews import router as reviews_router
from review_api.core.config import get_settings
from review_api.core.errors import ExternalApiError, ReviewApiError
from review_api.core.logging_config import setup_logging

settings = get_settings()
setup_logging(settings.log_level)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Review Sentiment API",
    version="1.0.0",
    docs_url="/docs" if settings.docs_enabled else None,
    openapi_url="/openapi.json" if settings.openapi_enabled else None,
)

if settings.cors_allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=settings.cors_allow_methods,
        allow_headers=["Content-Type", "Accept"],
    )

app.include_router(customers_router, tags=["customers"])
app.include_router(reviews_router, tags=["reviews"])


def _error_body(code: str, message: str) -> dict:
    return {"code": code, "message": message}


def _validation_error_code(errors: list[dict]) -> str:
    if any(err.get("type") == "enum" for err in errors):
        return "ENUM_VALUE_INVALID"
    if any((err.get("loc") or ("",))[0] == "body" for err in errors):
        return "REQUEST_BODY_INVALID"
    return "ARGUMENTS_INVALID"


def _validation_error_message(errors: list[dict]) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc") or ())
        parts.append(f"{loc}: {err.get('msg', 'invalid')}" if loc else str(err.get("msg", "invalid")))
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(ExternalApiError)
async def _external_api_error_handler(request: Request, exc: ExternalApiError):
    logger.warning(
        "External API failure on %s %s: upstream_status=%s",
        request.method,
        request.url.path,
        exc.external_status_code,
    )
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.code, exc.message))


@app.exception_handler(ReviewApiError)
async def _review_api_error_handler(request: Request, exc: ReviewApiError):
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.code, exc.message))


@app.exception_handler(RequestValidationError)
async def _request_validation_handler(request: Request, exc: RequestValidationError):
    errors = list(exc.errors())
    return JSONResponse(
        status_code=400,
        content=_error_body(_validation_error_code(errors), _validation_error_message(errors)),
    )


@app.exception_handler(StarletteHTTPException)
async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Hide internal details for 5xx unless explicitly enabled.
    if exc.status_code >= 500 and not settings.expose_error_details:
        return JSONResponse(status_code=exc.status_code, content=_error_body("INTERNAL_ERROR", "Internal error"))
    code = "ENTITY_NOT_FOUND" if exc.status_code == 404 else "ARGUMENTS_INVALID"
    return JSONResponse(status_code=exc.status_code, content=_error_body(code, str(exc.detail)))


@app.exception_handler(Exception)
async def _unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception")
    message = str(exc) if settings.expose_error_details else "Internal error"
    return JSONResponse(status_code=500, content=_error_body("INTERNAL_ERROR", message))


@app.get("/health")
async def health_check():
    return {"status": "ok"}
