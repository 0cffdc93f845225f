"""Global error handler middleware."""
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from account_monitor.schemas.common import ErrorDetail

logger = structlog.get_logger()


class AppException(Exception):
    def __init__(self, status_code: int, detail: str, error_type: str = "about:blank"):
        self.status_code = status_code
        self.detail = detail
        self.error_type = error_type


class EntityNotFound(AppException):
    """A requested record does not exist."""

    def __init__(self, entity: str, entity_id: object):
        super().__init__(404, f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


def _problem(status_code: int, title: str, detail: str, error_type: str = "about:blank") -> JSONResponse:
    body = ErrorDetail(type=error_type, title=title, status=status_code, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def setup_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(EntityNotFound)
    async def not_found_handler(_request: Request, exc: EntityNotFound) -> JSONResponse:
        logger.info("entity_not_found", entity=exc.entity, entity_id=str(exc.entity_id))
        return _problem(404, "Not Found", exc.detail, exc.error_type)

    @app.exception_handler(AppException)
    async def app_exception_handler(_request: Request, exc: AppException) -> JSONResponse:
        return _problem(exc.status_code, "Error", exc.detail, exc.error_type)

    @app.exception_handler(ValueError)
    async def value_error_handler(_request: Request, exc: ValueError) -> JSONResponse:
        return _problem(400, "Bad Request", str(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_exception", error=str(exc), exc_info=True)
        return _problem(500, "Internal Server Error", "An unexpected error occurred.")
