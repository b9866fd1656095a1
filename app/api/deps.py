"""FastAPI 의존성 주입 모듈 — 서비스 관리 협력자 구성.

FastAPI dependency injection module — Wiring for the services management layer.
Builds the ServicesManagementService with its registry and the configured
default service URL, and exposes helpers shared by routers and error handlers.
"""

from fastapi import Request

from app.config import settings
from app.repositories.registered_service_repository import registered_service_repository
from app.services.services_management_service import ServicesManagementService

# Ajax 요청 판별 헤더 — Header marking asynchronous (ajax) requests
AJAX_REQUEST_HEADER_NAME: str = "x-requested-with"
AJAX_REQUEST_HEADER_VALUE: str = "XMLHttpRequest"


def get_services_manager() -> ServicesManagementService:
    """서비스 관리 서비스를 생성합니다.

    Build the services management service with the database-backed
    registry and the configured default service URL.
    Tests override this dependency to inject a different registry or URL.

    Returns:
        ServicesManagementService: 요청별 서비스 인스턴스 (Per-request service instance)
    """
    return ServicesManagementService(
        registry=registered_service_repository,
        default_service_url=settings.DEFAULT_SERVICE_URL,
    )


def is_ajax_request(request: Request) -> bool:
    """요청이 ajax 요청인지 확인합니다.

    Return True when the request carries x-requested-with: XMLHttpRequest.
    Header names are case-insensitive; the value must match exactly.
    """
    return request.headers.get(AJAX_REQUEST_HEADER_NAME) == AJAX_REQUEST_HEADER_VALUE
