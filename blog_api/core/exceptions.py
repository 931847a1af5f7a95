"""Domain errors and their HTTP rendering."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BlogError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Bad request"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class PostNotFoundError(BlogError):
    """Raised for missing posts and for posts the viewer may not see."""

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Post not found"


class PostForbiddenError(BlogError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "You do not own this post"


def _field_name(loc: tuple) -> str:
    # ("body", "title") -> "title"; ("query", "page") -> "page"
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


async def blog_error_handler(request: Request, exc: BlogError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        errors.setdefault(_field_name(tuple(error.get("loc", ()))), []).append(error.get("msg", "Invalid value"))
    logger.debug("Validation failed on %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"message": "The given data was invalid.", "errors": errors},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BlogError, blog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
