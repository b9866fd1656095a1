"""관리자 서비스 라우터 — 등록 서비스 관리 엔드포인트.

Admin Services Router — endpoints for registered service management.
Lists, deletes and reorders registered services and serves the manage,
logout and authorization failure pages. Every path is also reachable with
its historical ".html" suffix.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_services_manager
from app.database import get_db
from app.schemas.registered_service import DeleteServiceResponse, ServiceListResponse
from app.services.services_management_service import ServicesManagementService
from app.views import render

router: APIRouter = APIRouter()


@router.get("/authorizationFailure", response_class=HTMLResponse)
@router.get("/authorizationFailure.html", response_class=HTMLResponse, include_in_schema=False)
async def authorization_failure(
    manager: Annotated[ServicesManagementService, Depends(get_services_manager)],
) -> HTMLResponse:
    """권한 실패 페이지를 반환합니다.

    Return the authorization failure page.
    """
    return render(manager.authorization_failure_view())


@router.get("/logout", response_class=HTMLResponse)
@router.get("/logout.html", response_class=HTMLResponse, include_in_schema=False)
async def logout(
    request: Request,
    manager: Annotated[ServicesManagementService, Depends(get_services_manager)],
) -> HTMLResponse:
    """세션을 무효화하고 로그아웃 페이지를 반환합니다.

    Invalidate the session and return the logout page.
    """
    return render(manager.logout_view(request.session))


@router.post("/deleteRegisteredService", response_model=DeleteServiceResponse)
@router.post("/deleteRegisteredService.html", response_model=DeleteServiceResponse, include_in_schema=False)
async def delete_registered_service(
    service_id: Annotated[int, Form(alias="id")],
    db: Annotated[AsyncSession, Depends(get_db)],
    manager: Annotated[ServicesManagementService, Depends(get_services_manager)],
) -> DeleteServiceResponse:
    """등록 서비스를 삭제합니다.

    Delete a registered service by its id. The management application's
    own service is re-registered if the deletion removed it.
    """
    result: DeleteServiceResponse = await manager.delete_service(db, service_id)
    await db.commit()
    return result


@router.get("/manage", response_class=HTMLResponse)
@router.get("/manage.html", response_class=HTMLResponse, include_in_schema=False)
async def manage(
    db: Annotated[AsyncSession, Depends(get_db)],
    manager: Annotated[ServicesManagementService, Depends(get_services_manager)],
) -> HTMLResponse:
    """서비스 관리 페이지를 반환합니다.

    Return the manage page with the default service URL.
    """
    view = await manager.manage_view(db)
    await db.commit()
    return render(view)


@router.get("/getServices", response_model=ServiceListResponse)
@router.get("/getServices.html", response_model=ServiceListResponse, include_in_schema=False)
async def get_services(
    db: Annotated[AsyncSession, Depends(get_db)],
    manager: Annotated[ServicesManagementService, Depends(get_services_manager)],
) -> ServiceListResponse:
    """등록 서비스 목록을 조회합니다.

    List all registered services in evaluation order.
    """
    result: ServiceListResponse = await manager.list_services(db)
    await db.commit()
    return result


@router.post("/updateRegisteredServiceEvaluationOrder", status_code=200)
@router.post("/updateRegisteredServiceEvaluationOrder.html", status_code=200, include_in_schema=False)
async def update_registered_service_evaluation_order(
    db: Annotated[AsyncSession, Depends(get_db)],
    manager: Annotated[ServicesManagementService, Depends(get_services_manager)],
    service_ids: Annotated[list[int] | None, Form(alias="id")] = None,
) -> Response:
    """서비스 평가 순서를 갱신합니다.

    Update evaluation orders; the order of the submitted ids becomes
    the evaluation order of the services.
    """
    await manager.reorder_services(db, service_ids)
    await db.commit()
    return Response(status_code=200)
