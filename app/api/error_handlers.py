"""예외 핸들러 — 오류 로깅 및 ajax 요청용 JSON 변환.

Exception handlers — log every error and convert it to JSON for ajax requests.
Requests carrying x-requested-with: XMLHttpRequest get a structured JSON
error body. Other requests get the status code with an empty body, leaving
the error page to the hosting infrastructure.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from app.api.deps import AJAX_REQUEST_HEADER_NAME, is_ajax_request

logger = logging.getLogger(__name__)


def _error_body(exc: Exception, status_code: int, message: Any) -> dict[str, Any]:
    """JSON 오류 본문 생성 — Build the JSON error payload."""
    return {
        "error": {
            "type": type(exc).__name__,
            "message": message,
            "status": status_code,
        }
    }


def _resolve(request: Request, exc: Exception, status_code: int, message: Any) -> Response:
    """오류를 로깅하고 요청 종류에 따라 응답을 생성합니다.

    Log the error and build the response for it.

    Args:
        request: 들어온 요청 (Incoming request)
        exc: 발생한 예외 (Raised exception)
        status_code: 응답 상태 코드 (Response status code)
        message: 오류 메시지 또는 상세 (Error message or detail)

    Returns:
        Response: ajax면 JSON 본문, 아니면 빈 본문 (JSON body for ajax, empty otherwise)
    """
    logger.error("%s %s failed: %s", request.method, request.url.path, message, exc_info=exc)

    if is_ajax_request(request):
        logger.debug(
            "Handling exception %s for ajax request indicated by header %s",
            type(exc).__name__,
            AJAX_REQUEST_HEADER_NAME,
        )
        return JSONResponse(status_code=status_code, content=_error_body(exc, status_code, message))

    logger.debug(
        "Unable to resolve exception %s for request. Ajax request header %s not found.",
        type(exc).__name__,
        AJAX_REQUEST_HEADER_NAME,
    )
    return Response(status_code=status_code)


def register_error_handlers(app: FastAPI) -> None:
    """전역 예외 핸들러를 등록합니다 — Register global exception handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        return _resolve(request, exc, exc.status_code, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
        return _resolve(request, exc, 422, jsonable_encoder(exc.errors()))

    # 그 외 모든 예외 (레지스트리/DB 오류 등) — Any other error, e.g. registry or database failures
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        return _resolve(request, exc, 500, str(exc))
