"""
API error handling.

Decorators that translate domain exceptions into HTTPExceptions, and the
application-wide handlers that render every failure as `{"error": ...}`.

Dependencies: fastapi, knowledge_backend.core.exceptions
System role: Uniform error mapping for all routers
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from knowledge_backend.core.exceptions import (
    ConfigurationError,
    KnowledgeBaseError,
    SourceNotFoundError,
    StoreUnavailableError,
    UpstreamRateLimitedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _error_handler(store_status: int) -> Callable[[F], F]:
    """
    Build a decorator mapping domain exceptions to HTTP statuses.

    Args:
        store_status: Status used for StoreUnavailableError on this surface
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)

            except HTTPException:
                raise

            except ValidationError as e:
                logger.warning("Invalid request", extra={"error": str(e)})
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

            except SourceNotFoundError as e:
                logger.warning("Source not found", extra={"source_id": e.source_id})
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

            except UpstreamRateLimitedError as e:
                logger.warning("Upstream rate limit", extra={"error": str(e)})
                raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=e.message)

            except StoreUnavailableError as e:
                logger.error("Vector store unavailable", extra={"error": str(e)})
                raise HTTPException(status_code=store_status, detail=e.message)

            except ConfigurationError as e:
                logger.error("Configuration error", extra={"error": str(e)})
                raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)

            except KnowledgeBaseError as e:
                logger.error(f"{type(e).__name__}", extra={"error": str(e)})
                raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)

            except Exception as e:
                logger.exception("Unexpected failure", extra={"error": str(e)})
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=str(e) or "Internal server error",
                )

        return wrapper  # type: ignore

    return decorator


handle_chat_errors = _error_handler(status.HTTP_503_SERVICE_UNAVAILABLE)
handle_ingestion_errors = _error_handler(status.HTTP_500_INTERNAL_SERVER_ERROR)
handle_diagnostic_errors = _error_handler(status.HTTP_503_SERVICE_UNAVAILABLE)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        field = ".".join(str(p) for p in errors[0].get("loc", ()) if p != "body")
        message = f"{field}: {errors[0].get('msg')}" if field else str(errors[0].get("msg"))
    else:
        message = "Invalid request"
    logger.warning("Request validation failed", extra={"error": message})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Render every HTTP failure as {"error": message}; body validation errors become 400."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
