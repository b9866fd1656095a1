"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures request/response data and ships structured events to Axiom.
Logs: endpoint, method, submitted form/JSON data, ajax flag, status code, error reason.
Sensitive fields (password, token, secret) are automatically masked.
"""

import json
import logging
import re
import time
from typing import Any
from urllib.parse import parse_qsl

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from axiom_py import Client as AxiomClient

from app.api.deps import is_ajax_request
from app.config import settings

logger = logging.getLogger(__name__)

# 마스킹 대상 필드 패턴 — Fields to mask in request bodies and query strings
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential|session)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


def _mask_dict(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask_dict(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask_dict(item, depth + 1) for item in data[:20]]
    return data


def _parse_body(content_type: str, body: bytes) -> Any:
    """요청 본문 파싱 — Parse a form or JSON request body for logging.

    Repeated form keys (e.g. id=3&id=1) are kept as lists.
    """
    if content_type.startswith("application/x-www-form-urlencoded"):
        parsed: dict[str, Any] = {}
        for key, value in parse_qsl(body.decode("utf-8")):
            if key in parsed:
                existing = parsed[key]
                parsed[key] = existing + [value] if isinstance(existing, list) else [existing, value]
            else:
                parsed[key] = value
        return parsed
    if content_type.startswith("multipart/form-data"):
        return "(multipart body)"
    return json.loads(body)


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs all requests and responses to Axiom.
    Captures: method, path, query params, request body, ajax flag, status code, error detail.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 제외 경로 스킵 — Skip excluded paths
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        # Axiom 미설정시 패스스루 — Pass through if Axiom not configured
        if not self._client:
            return await call_next(request)

        start_time = time.time()

        method = request.method
        path = request.url.path
        query_params = dict(request.query_params) if request.query_params else None

        # 요청 본문 읽기 — Read request body (POST only; admin writes are form posts)
        request_body: Any = None
        if method == "POST":
            try:
                body_bytes = await request.body()
                if body_bytes:
                    request_body = _mask_dict(
                        _parse_body(request.headers.get("content-type", ""), body_bytes)
                    )
            except (json.JSONDecodeError, UnicodeDecodeError):
                request_body = "(unparseable body)"

        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            # 에러 응답시 body에서 사유 추출 — Extract error detail from error responses
            # (ajax 요청만 JSON 본문을 가짐 — only ajax requests get a JSON body)
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

                if resp_body:
                    try:
                        error_data = json.loads(resp_body)
                        error_detail = str(error_data.get("error", {}).get("message", error_data))[:500]
                    except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
                        error_detail = resp_body.decode("utf-8", errors="replace")[:500]
                else:
                    error_detail = "(empty body)"

                # 소비한 body를 다시 응답으로 반환 — Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            duration_ms = round((time.time() - start_time) * 1000, 2)

            log_event: dict[str, Any] = {
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": duration_ms,
                "ajax": is_ajax_request(request),
            }
            if query_params:
                log_event["query_params"] = _mask_dict(query_params)
            if request_body is not None:
                log_event["request_body"] = request_body
            if error_detail:
                log_event["error"] = error_detail

            try:
                self._client.ingest_events(self._dataset, [log_event])
            except Exception as exc:  # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break request on log failure
                logger.warning("Axiom ingest failed: %s", exc)

        return response
