from typing import Any
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from framework.logging.logger import get_logger
from framework.response import ResponseModel
from framework.config import settings

logger = get_logger("exception_handler")

class BusinessException(Exception):
    """Expected failure reported in the response envelope, not as an HTTP error."""
    def __init__(self, message: str, status_code: int = 200, code: int = 400, detail: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.detail = detail

class ParentNotFoundError(BusinessException):
    """Child record referenced a parent that is missing or owned by someone else."""
    def __init__(self, message: str = "Parent not found or access denied"):
        super().__init__(message, code=400)

class RecordNotFoundError(BusinessException):
    """Absent and foreign records share this error so ids cannot be probed."""
    def __init__(self, entity: str):
        super().__init__(f"{entity} not found", code=404)

class AccessDeniedError(BusinessException):
    """Caller's role does not allow the operation."""
    def __init__(self, message: str = "Access denied"):
        super().__init__(message, code=403)

def _envelope(status_code: int, code: int, message: str, data: Any = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ResponseModel.fail(code=code, message=message, data=data))

def global_exception_handler(request: Request, exc: Exception):
    """Map any escaped exception onto the response envelope."""
    trace_id = getattr(request.state, "trace_id", "unknown")

    if isinstance(exc, BusinessException):
        logger.warning(f"Trace[{trace_id}] - {type(exc).__name__}: {exc.message}")
        return _envelope(exc.status_code, exc.code, exc.message, exc.detail)

    if isinstance(exc, RequestValidationError):
        logger.warning(f"Trace[{trace_id}] - ValidationError on {request.url.path}: {exc.errors()}")
        return _envelope(
            422, 422, "Invalid request parameters", jsonable_encoder(exc.errors())
        )

    if isinstance(exc, IntegrityError):
        # Unique or not-null constraint hit by a store write
        logger.error(f"Trace[{trace_id}] - IntegrityError: {exc.orig}")
        return _envelope(status.HTTP_200_OK, 409, "Record conflicts with existing data")

    if isinstance(exc, SQLAlchemyError):
        logger.critical(f"Trace[{trace_id}] - DatabaseError: {str(exc)}")
        return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, 500, "Store temporarily unavailable")

    logger.opt(exception=True).error(f"Trace[{trace_id}] - UncaughtException: {str(exc)}")
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        500,
        "System busy, please try again later",
        {"trace_id": trace_id} if settings.DEBUG else None,
    )
