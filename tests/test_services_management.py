"""서비스 관리 비즈니스 로직 테스트.

Services management service tests — default service invariant, delete,
list, reorder and views, run against an in-memory registry.
"""

import pytest

from app.services.services_management_service import (
    DEFAULT_SERVICE_NAME,
    ServicesManagementService,
)
from app.utils.exceptions import ConfigurationError, NotFoundError, ValidationError

from tests.conftest import DEFAULT_URL, FakeServiceRegistry, make_service


def _manager(registry: FakeServiceRegistry) -> ServicesManagementService:
    return ServicesManagementService(registry=registry, default_service_url=DEFAULT_URL)


class TestEnsureDefaultService:
    """기본 서비스 보장 테스트."""

    async def test_absent_collection_is_configuration_error(self):
        """레지스트리가 None을 반환하면 ConfigurationError."""
        registry = FakeServiceRegistry(return_none=True)
        with pytest.raises(ConfigurationError) as exc_info:
            await _manager(registry).ensure_default_service_exists(None)
        assert exc_info.value.status_code == 500
        assert registry.saves == []

    async def test_creates_default_service_when_missing(self):
        """빈 레지스트리에 기본 서비스 생성."""
        registry = FakeServiceRegistry()
        await _manager(registry).ensure_default_service_exists(None)

        assert len(registry.saves) == 1
        created = registry.saves[0]
        assert created.service_id == DEFAULT_URL
        assert created.name == DEFAULT_SERVICE_NAME
        assert len(registry.entries) == 1

    async def test_idempotent_when_default_exists(self, fake_registry):
        """두 번 호출해도 추가 쓰기 없음."""
        manager = _manager(fake_registry)
        await manager.ensure_default_service_exists(None)
        await manager.ensure_default_service_exists(None)
        assert fake_registry.saves == []

    async def test_second_call_after_creation_writes_nothing(self):
        """생성 후 재호출 시 추가 쓰기 없음."""
        registry = FakeServiceRegistry()
        manager = _manager(registry)
        await manager.ensure_default_service_exists(None)
        await manager.ensure_default_service_exists(None)
        assert len(registry.saves) == 1

    async def test_pattern_matching_default_url_is_enough(self):
        """정규식이 기본 URL과 일치하면 새로 만들지 않음."""
        registry = FakeServiceRegistry([make_service(1, r"https://.*", "All HTTPS")])
        await _manager(registry).ensure_default_service_exists(None)
        assert registry.saves == []


class TestDeleteService:
    """서비스 삭제 테스트."""

    async def test_delete_returns_service_name(self, fake_registry):
        """삭제 성공 시 서비스 이름 반환."""
        result = await _manager(fake_registry).delete_service(None, 5)
        assert result.service_name == "App Two"
        assert all(e.id != 5 for e in fake_registry.entries)
        assert fake_registry.saves == []

    async def test_delete_nonexistent_is_not_found(self, fake_registry):
        """존재하지 않는 ID 삭제 시 NotFoundError, 레지스트리 변경 없음."""
        before = [e.id for e in fake_registry.entries]
        with pytest.raises(NotFoundError) as exc_info:
            await _manager(fake_registry).delete_service(None, 404)
        assert exc_info.value.detail == "Service id 404 cannot be found."
        assert [e.id for e in fake_registry.entries] == before
        assert fake_registry.saves == []

    async def test_delete_default_service_recreates_it(self, fake_registry):
        """기본 서비스 삭제 후 다시 등록됨 (lock-out 방지)."""
        result = await _manager(fake_registry).delete_service(None, 1)
        assert result.service_name == DEFAULT_SERVICE_NAME
        assert any(e.service_id == DEFAULT_URL for e in fake_registry.entries)
        assert len(fake_registry.saves) == 1


class TestListServices:
    """서비스 목록 테스트."""

    async def test_list_projects_every_service(self, fake_registry):
        """목록 개수와 필드가 레지스트리와 일치."""
        result = await _manager(fake_registry).list_services(None)
        assert len(result.services) == len(fake_registry.entries)
        by_id = {e.id: e for e in fake_registry.entries}
        for bean in result.services:
            stored = by_id[bean.id]
            assert bean.service_id == stored.service_id
            assert bean.name == stored.name
            assert bean.evaluation_order == stored.evaluation_order

    async def test_list_keeps_registry_order(self, fake_registry):
        """레지스트리 순서 유지."""
        fake_registry.entries[3].evaluation_order = -1
        result = await _manager(fake_registry).list_services(None)
        assert [b.id for b in result.services] == [9, 1, 2, 5]

    async def test_list_on_empty_registry_includes_default(self):
        """빈 레지스트리 조회 시 기본 서비스 포함."""
        result = await _manager(FakeServiceRegistry()).list_services(None)
        assert [b.service_id for b in result.services] == [DEFAULT_URL]

    async def test_list_serializes_camel_case(self, fake_registry):
        """JSON 키는 camelCase."""
        result = await _manager(fake_registry).list_services(None)
        data = result.model_dump(by_alias=True)
        first = data["services"][0]
        assert {"id", "serviceId", "name", "evaluationOrder"} <= set(first)


class TestReorderServices:
    """평가 순서 재배치 테스트."""

    async def test_reorder_sets_positions(self, fake_registry):
        """[5, 2, 9] → 5:0, 2:1, 9:2."""
        await _manager(fake_registry).reorder_services(None, [5, 2, 9])
        orders = {e.id: e.evaluation_order for e in fake_registry.entries}
        assert orders[5] == 0
        assert orders[2] == 1
        assert orders[9] == 2
        assert [s.id for s in fake_registry.saves] == [5, 2, 9]

    @pytest.mark.parametrize("ids", [[], None])
    async def test_reorder_without_ids_is_validation_error(self, fake_registry, ids):
        """빈 목록은 ValidationError."""
        with pytest.raises(ValidationError):
            await _manager(fake_registry).reorder_services(None, ids)
        assert fake_registry.saves == []

    async def test_reorder_missing_id_stops_midway(self, fake_registry):
        """중간에 없는 ID가 있으면 앞의 항목만 갱신된 상태로 실패."""
        with pytest.raises(NotFoundError):
            await _manager(fake_registry).reorder_services(None, [9, 404, 2])
        orders = {e.id: e.evaluation_order for e in fake_registry.entries}
        assert orders[9] == 0
        assert orders[2] == 1  # 변경되지 않음 (untouched)
        assert [s.id for s in fake_registry.saves] == [9]

    async def test_reorder_registry_failure_propagates(self, fake_registry):
        """레지스트리 저장 실패는 그대로 전파."""
        fake_registry.fail_save_on = 2
        with pytest.raises(RuntimeError):
            await _manager(fake_registry).reorder_services(None, [5, 2, 9])
        assert [s.id for s in fake_registry.saves] == [5]


class TestViews:
    """뷰 모델 테스트."""

    async def test_manage_view(self, fake_registry):
        view = await _manager(fake_registry).manage_view(None)
        assert view.view_name == "manage"
        assert view.model == {"defaultServiceUrl": DEFAULT_URL}

    def test_logout_view_clears_session(self, fake_registry):
        session = {"user": "casuser", "roles": ["admin"]}
        view = _manager(fake_registry).logout_view(session)
        assert view.view_name == "logout"
        assert session == {}

    def test_authorization_failure_view(self, fake_registry):
        view = _manager(fake_registry).authorization_failure_view()
        assert view.view_name == "authorizationFailure"
        assert view.model == {}
