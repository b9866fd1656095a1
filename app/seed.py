"""초기 데이터 시드 스크립트 — 관리 앱 기본 서비스 등록.

Seed script — Creates tables and registers the management application's own service.
Run this script once to bootstrap the database.

Usage:
    python -m app.seed

Creates:
    - registered_services 테이블 (registered_services table, if missing)
    - 1개 기본 서비스: DEFAULT_SERVICE_URL 패턴 (1 default service for DEFAULT_SERVICE_URL)
"""

import asyncio
import logging

from app.config import settings
from app.database import async_session, engine, Base
from app.models import RegisteredService  # noqa: F401 — register model with metadata
from app.repositories.registered_service_repository import registered_service_repository
from app.services.services_management_service import ServicesManagementService
from app.utils.logging import setup_logging

logger = logging.getLogger(__name__)


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with initial data.
    Creates tables if they don't exist, then registers the default service.

    Idempotent: 기본 서비스가 이미 있으면 아무것도 쓰지 않습니다
    (Writes nothing if the default service is already registered).
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    manager: ServicesManagementService = ServicesManagementService(
        registry=registered_service_repository,
        default_service_url=settings.DEFAULT_SERVICE_URL,
    )
    async with async_session() as db:
        await manager.ensure_default_service_exists(db)
        await db.commit()

    logger.info("Seed complete. Default service: %s", settings.DEFAULT_SERVICE_URL)


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    asyncio.run(seed())
