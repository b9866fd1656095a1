"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates all admin-facing endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - services: 등록 서비스 관리 (Registered service management, pages and JSON)
"""

from fastapi import APIRouter

from app.api.admin.services import router as services_router

admin_router: APIRouter = APIRouter()

# ---------------------------------------------------------------------------
# 라우터 등록 — Register routers
# ---------------------------------------------------------------------------
admin_router.include_router(services_router, tags=["Registered Services"])
