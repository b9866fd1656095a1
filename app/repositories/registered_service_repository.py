"""등록 서비스 레포지토리 — 서비스 레지스트리 쿼리.

Registered Service Repository — the service registry backed by the database.
Extends BaseRepository with evaluation-order listing and URL matching.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.registered_service import RegisteredService
from app.repositories.base import BaseRepository


class RegisteredServiceRepository(BaseRepository[RegisteredService]):
    """registered_services 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the registered_services table.
    """

    def __init__(self) -> None:
        """RegisteredServiceRepository를 초기화합니다.

        Initialize the RegisteredServiceRepository with the RegisteredService model.
        """
        super().__init__(RegisteredService)

    async def get_all_services(
        self,
        db: AsyncSession,
    ) -> list[RegisteredService]:
        """모든 서비스를 평가 순서대로 조회합니다.

        Retrieve every registered service ordered by evaluation order, then id.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)

        Returns:
            list[RegisteredService]: 서비스 목록 (List of services)
        """
        services = await self.get_all(
            db, order_by=[RegisteredService.evaluation_order, RegisteredService.id]
        )
        return list(services)

    async def find_by_id(
        self,
        db: AsyncSession,
        service_id: int,
    ) -> RegisteredService | None:
        """숫자 ID로 서비스를 조회합니다.

        Find a registered service by its numeric id.
        """
        return await self.get_by_id(db, service_id)

    async def matches(
        self,
        db: AsyncSession,
        service_url: str,
    ) -> bool:
        """서비스 URL과 일치하는 등록 서비스가 있는지 확인합니다.

        Check whether any registered service matches the given URL.
        Patterns are regular expressions, so matching runs in Python
        over the ordered service list.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            service_url: 검사할 서비스 URL (Candidate service URL)

        Returns:
            bool: 일치하는 서비스 존재 여부 (Whether a matching service exists)
        """
        services: list[RegisteredService] = await self.get_all_services(db)
        return any(s.matches(service_url) for s in services)


# 싱글턴 인스턴스 — Singleton instance
registered_service_repository: RegisteredServiceRepository = RegisteredServiceRepository()
