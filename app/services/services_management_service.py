"""서비스 관리 서비스 — 등록 서비스 관리 비즈니스 로직.

Services Management Service — Business logic behind the admin endpoints.
Lists, deletes and reorders registered services, and keeps the
management application's own service registered so that admins can
never lock themselves out.
"""

import logging
from typing import Any, MutableMapping, Protocol, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.registered_service import RegisteredService
from app.schemas.registered_service import (
    DeleteServiceResponse,
    RegisteredServiceBean,
    ServiceListResponse,
    ViewModel,
)
from app.utils.exceptions import ConfigurationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# 기본 서비스 이름 — Name given to the auto-registered management app service
DEFAULT_SERVICE_NAME: str = "Services Management Web Application"


class ServiceRegistry(Protocol):
    """서비스 레지스트리 인터페이스 — 서비스 저장소 협력자.

    Service registry collaborator. Implemented by
    RegisteredServiceRepository; tests may provide an in-memory fake.
    """

    async def get_all_services(self, db: AsyncSession) -> Sequence[RegisteredService] | None: ...

    async def find_by_id(self, db: AsyncSession, service_id: int) -> RegisteredService | None: ...

    async def save(self, db: AsyncSession, db_obj: RegisteredService) -> RegisteredService: ...

    async def delete(self, db: AsyncSession, record_id: int) -> RegisteredService | None: ...

    async def matches(self, db: AsyncSession, service_url: str) -> bool: ...


class ServicesManagementService:
    """등록 서비스 관리 비즈니스 로직을 처리하는 서비스.

    Service handling registered service administration.
    Holds no state besides its injected registry and the default service URL;
    every call reads and writes through the registry.

    Attributes:
        registry: 서비스 레지스트리 (Service registry collaborator)
        default_service_url: 관리 앱 자신의 서비스 URL (The management app's own URL)
    """

    def __init__(self, registry: ServiceRegistry, default_service_url: str) -> None:
        self.registry: ServiceRegistry = registry
        self.default_service_url: str = default_service_url

    async def ensure_default_service_exists(self, db: AsyncSession) -> None:
        """기본 서비스가 등록되어 있는지 확인하고, 없으면 생성합니다.

        Make sure a registered service matches the default service URL,
        saving a new entry when none does. Performs no write when the
        condition already holds, so it is safe to call on every request.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)

        Raises:
            ConfigurationError: 레지스트리가 목록 대신 None을 반환할 때
                                (Registry returned None instead of a collection)
        """
        services = await self.registry.get_all_services(db)
        if services is None:
            raise ConfigurationError("Services cannot be empty")

        if not await self.registry.matches(db, self.default_service_url):
            logger.info("Registering default service %s", self.default_service_url)
            service: RegisteredService = RegisteredService(
                service_id=self.default_service_url,
                name=DEFAULT_SERVICE_NAME,
            )
            await self.registry.save(db, service)

    def logout_view(self, session: MutableMapping[str, Any]) -> ViewModel:
        """세션을 무효화하고 로그아웃 뷰를 반환합니다.

        Invalidate the caller's session and return the logout view.
        """
        logger.debug("Invalidating application session...")
        session.clear()
        return ViewModel(view_name="logout")

    def authorization_failure_view(self) -> ViewModel:
        """권한 실패 뷰를 반환합니다 — Return the authorization failure view."""
        return ViewModel(view_name="authorizationFailure")

    async def delete_service(
        self,
        db: AsyncSession,
        service_id: int,
    ) -> DeleteServiceResponse:
        """ID로 등록 서비스를 삭제합니다.

        Delete a registered service by id. The default service is
        re-registered afterwards if the deletion removed the last entry
        matching it.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            service_id: 삭제할 서비스 ID (Id of the service to delete)

        Returns:
            DeleteServiceResponse: 삭제된 서비스 이름 (Name of the deleted service)

        Raises:
            NotFoundError: 서비스를 찾을 수 없을 때 (Service not found)
        """
        deleted: RegisteredService | None = await self.registry.delete(db, service_id)
        if deleted is None:
            raise NotFoundError(f"Service id {service_id} cannot be found.")

        await self.ensure_default_service_exists(db)
        return DeleteServiceResponse(service_name=deleted.name)

    async def list_services(self, db: AsyncSession) -> ServiceListResponse:
        """등록 서비스 목록을 레지스트리 순서대로 반환합니다.

        List every registered service, in registry order.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)

        Returns:
            ServiceListResponse: 서비스 프로젝션 목록 (Service projections)
        """
        await self.ensure_default_service_exists(db)
        services = await self.registry.get_all_services(db) or []
        return ServiceListResponse(
            services=[RegisteredServiceBean.from_registered_service(s) for s in services]
        )

    async def manage_view(self, db: AsyncSession) -> ViewModel:
        """관리 페이지 뷰를 반환합니다.

        Return the manage view with the default service URL as context.
        """
        await self.ensure_default_service_exists(db)
        return ViewModel(
            view_name="manage",
            model={"defaultServiceUrl": self.default_service_url},
        )

    async def reorder_services(
        self,
        db: AsyncSession,
        service_ids: Sequence[int] | None,
    ) -> None:
        """서비스 평가 순서를 주어진 ID 순서대로 재배치합니다.

        Set each service's evaluation order to its 0-based position in
        service_ids, saving left to right. A missing id stops the loop;
        services before it have already been saved in this session.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            service_ids: 원하는 순서의 서비스 ID 목록 (Service ids in the desired order)

        Raises:
            ValidationError: ID 목록이 비어 있을 때 (Empty or missing id list)
            NotFoundError: 서비스를 찾을 수 없을 때 (Service not found)
        """
        if not service_ids:
            raise ValidationError("No service id was received. Re-examine the request")

        for index, service_id in enumerate(service_ids):
            service: RegisteredService | None = await self.registry.find_by_id(db, service_id)
            if service is None:
                raise NotFoundError(f"Service id {service_id} cannot be found.")
            service.evaluation_order = index
            await self.registry.save(db, service)
