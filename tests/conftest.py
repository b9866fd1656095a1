"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh schema on a single shared in-memory connection.
FakeServiceRegistry lets service-level tests observe registry writes directly.
"""

from collections.abc import AsyncGenerator, Sequence

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.models.registered_service import RegisteredService

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

DEFAULT_URL: str = settings.DEFAULT_SERVICE_URL

AJAX_HEADERS: dict[str, str] = {"X-Requested-With": "XMLHttpRequest"}


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 스키마를 새로 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def server_error_client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """처리되지 않은 예외 후에도 응답을 돌려주는 클라이언트.

    Starlette re-raises unhandled errors after the 500 response is sent;
    this client returns that response instead of raising.
    """
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def add_service(
    db: AsyncSession,
    service_id: str,
    name: str,
    evaluation_order: int = 0,
) -> RegisteredService:
    """등록 서비스를 생성하고 커밋합니다."""
    svc = RegisteredService(service_id=service_id, name=name, evaluation_order=evaluation_order)
    db.add(svc)
    await db.commit()
    await db.refresh(svc)
    return svc


@pytest_asyncio.fixture
async def default_service(db: AsyncSession) -> RegisteredService:
    """관리 앱 기본 서비스를 생성합니다."""
    return await add_service(db, DEFAULT_URL, "Services Management Web Application")


@pytest_asyncio.fixture
async def services(db: AsyncSession, default_service) -> list[RegisteredService]:
    """기본 서비스 외에 3개의 서비스를 생성합니다."""
    result = [default_service]
    for order, (pattern, name) in enumerate([
        (r"https://app1\.example\.org/.*", "App One"),
        (r"https://app2\.example\.org/.*", "App Two"),
        (r"^(https?|imaps?)://.*", "Everything"),
    ], start=1):
        result.append(await add_service(db, pattern, name, order))
    return result


# ---------------------------------------------------------------------------
# 서비스 계층 테스트용 인메모리 레지스트리
# ---------------------------------------------------------------------------
class FakeServiceRegistry:
    """인메모리 서비스 레지스트리 — 저장/삭제 호출을 기록합니다.

    In-memory registry recording every save and delete call.
    """

    def __init__(self, entries: Sequence[RegisteredService] = (), return_none: bool = False) -> None:
        self.entries: list[RegisteredService] = list(entries)
        self.saves: list[RegisteredService] = []
        self.deletes: list[int] = []
        self.return_none = return_none
        self.fail_save_on: int | None = None
        self._next_id = max((e.id for e in self.entries), default=0) + 1

    async def get_all_services(self, db) -> list[RegisteredService] | None:
        if self.return_none:
            return None
        return sorted(self.entries, key=lambda s: (s.evaluation_order, s.id))

    async def find_by_id(self, db, service_id: int) -> RegisteredService | None:
        return next((e for e in self.entries if e.id == service_id), None)

    async def save(self, db, db_obj: RegisteredService) -> RegisteredService:
        if self.fail_save_on is not None and db_obj.id == self.fail_save_on:
            raise RuntimeError("registry unavailable")
        if db_obj.id is None:
            db_obj.id = self._next_id
            self._next_id += 1
            self.entries.append(db_obj)
        self.saves.append(db_obj)
        return db_obj

    async def delete(self, db, record_id: int) -> RegisteredService | None:
        self.deletes.append(record_id)
        found = await self.find_by_id(db, record_id)
        if found is not None:
            self.entries.remove(found)
        return found

    async def matches(self, db, service_url: str) -> bool:
        return any(e.matches(service_url) for e in self.entries)


def make_service(id: int, service_id: str, name: str, evaluation_order: int = 0) -> RegisteredService:
    """DB에 붙지 않은 서비스 인스턴스를 생성합니다."""
    return RegisteredService(id=id, service_id=service_id, name=name, evaluation_order=evaluation_order)


@pytest.fixture
def fake_registry() -> FakeServiceRegistry:
    return FakeServiceRegistry([
        make_service(1, DEFAULT_URL, "Services Management Web Application", 0),
        make_service(2, r"https://app1\.example\.org/.*", "App One", 1),
        make_service(5, r"https://app2\.example\.org/.*", "App Two", 2),
        make_service(9, r"https://app3\.example\.org/.*", "App Three", 3),
    ])
