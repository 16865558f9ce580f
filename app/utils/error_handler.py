"""
Error types and JSON error responses for the API
"""

import uuid
import logging
from typing import Any, Dict, List, Optional, Sequence, Union
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Order not found"
REDACTED_DB_MESSAGE = "A database error occurred"


class RequestRejected(Exception):
    """Request failed validation; carries field-level errors"""
    def __init__(self, errors: List[Dict[str, str]]):
        self.errors = errors
        super().__init__("; ".join(f"{e['field']}: {e['message']}" for e in errors))


class EmptyUpdateError(RequestRejected):
    """Partial update with no recognized order columns"""
    def __init__(self):
        super().__init__([{
            "field": "body",
            "message": "At least one order field must be provided",
            "location": "body",
        }])


class OrderNotFoundError(Exception):
    """A write statement matched no order row"""
    def __init__(self, ord_num: int):
        self.ord_num = ord_num
        super().__init__(f"Order {ord_num} not found")


class DatabaseError(Exception):
    """Custom exception for database-related errors"""
    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)


class ErrorHandler:
    """Turns exceptions into the API's JSON error bodies"""

    @staticmethod
    def field_name(loc: Sequence[Union[str, int]]) -> str:
        """Last named element of a pydantic error location, e.g. ('body', 'ORD_DATE') -> 'ORD_DATE'"""
        names = [part for part in loc[1:] if isinstance(part, str)]
        if names:
            return names[-1]
        return str(loc[0]) if loc else "request"

    @staticmethod
    def field_message(error: Dict[str, Any], field: str) -> str:
        error_type = error.get("type", "")
        if error_type == "missing":
            if field == "body":
                return "Request body is required"
            return f"{field} is required"
        if error_type == "value_error" and error.get("ctx", {}).get("error") is not None:
            return str(error["ctx"]["error"])
        if error_type == "json_invalid":
            return "Request body must be valid JSON"
        if error_type in ("int_parsing", "int_type", "int_from_float"):
            return f"{field} must be an integer"
        return error.get("msg", "Invalid value")

    @staticmethod
    def format_validation_errors(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, str]]:
        """Flatten pydantic errors into [{field, message, location}]"""
        formatted = []
        for error in errors:
            loc = tuple(error.get("loc", ()))
            field = ErrorHandler.field_name(loc)
            formatted.append({
                "field": field,
                "message": ErrorHandler.field_message(error, field),
                "location": str(loc[0]) if loc else "body",
            })
        return formatted

    @staticmethod
    def validation_response(errors: List[Dict[str, str]]) -> JSONResponse:
        return JSONResponse(status_code=400, content={"errors": errors})

    @staticmethod
    def database_error_response(error: DatabaseError, expose_details: bool) -> JSONResponse:
        message = error.message if expose_details else REDACTED_DB_MESSAGE
        return JSONResponse(status_code=500, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the 400/404/500 handlers used by every route"""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = ErrorHandler.format_validation_errors(exc.errors())
        logger.warning(f"Rejected {request.method} {request.url.path}: {len(errors)} validation error(s)")
        return ErrorHandler.validation_response(errors)

    @app.exception_handler(RequestRejected)
    async def request_rejected_handler(request: Request, exc: RequestRejected):
        logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
        return ErrorHandler.validation_response(exc.errors)

    @app.exception_handler(OrderNotFoundError)
    async def not_found_handler(request: Request, exc: OrderNotFoundError):
        logger.warning(f"{request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=404, content={"message": NOT_FOUND_MESSAGE})

    @app.exception_handler(DatabaseError)
    async def database_error_handler(request: Request, exc: DatabaseError):
        logger.error(f"Database error in {request.method} {request.url.path}: {exc.message}")
        expose = request.app.state.settings.expose_db_errors
        return ErrorHandler.database_error_response(exc, expose)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        error_id = str(uuid.uuid4())
        logger.error(
            f"Unhandled exception {error_id}: {type(exc).__name__} in {request.method} {request.url.path}",
            exc_info=exc
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "error_id": error_id}
        )
