"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the error kinds
raised by the services management layer. All of them are translated
centrally by app.api.error_handlers.

Usage:
    from app.utils.exceptions import NotFoundError, ValidationError
    raise NotFoundError("Service id 5 cannot be found.")
    raise ValidationError("No service id was received. Re-examine the request")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 서비스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a delete or reorder references a service id absent from the registry.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ValidationError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when the request data is invalid beyond what FastAPI validation catches
    (e.g. an empty id list on reorder).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ConfigurationError(HTTPException):
    """500 Internal Server Error 예외 — 레지스트리 구성 오류 시 사용.

    500 Internal Server Error exception.
    Raised when the service registry returns an absent collection.
    Not recoverable by the user.

    Args:
        detail: 오류 메시지 (Error message, default: "Invalid configuration")
    """

    def __init__(self, detail: str = "Invalid configuration") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
