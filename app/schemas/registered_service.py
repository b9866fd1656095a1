"""등록 서비스 관련 Pydantic 응답 스키마 정의.

Registered service Pydantic response schema definitions.
JSON payloads use camelCase keys, which is what the management UI's
scripts read (serviceName, serviceId, evaluationOrder, ...).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.registered_service import RegisteredService


class _CamelModel(BaseModel):
    """camelCase 별칭 베이스 — Base model serializing fields with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisteredServiceBean(_CamelModel):
    """등록 서비스 공개 필드 프로젝션.

    Public-facing projection of a registered service.

    Attributes:
        id: 서비스 숫자 ID (Numeric service id)
        service_id: 서비스 URL 패턴 (Service URL pattern)
        name: 표시 이름 (Display name)
        description: 설명 (Description)
        theme: 테마 (Theme name)
        evaluation_order: 평가 순서 (Evaluation rank)
        enabled: 활성 여부 (Enabled flag)
        sso_enabled: SSO 참여 여부 (SSO participation flag)
        allowed_to_proxy: 프록시 허용 (Proxy flag)
        anonymous_access: 익명 접근 (Anonymous access flag)
    """

    id: int
    service_id: str
    name: str
    description: str | None = None
    theme: str | None = None
    evaluation_order: int = 0
    enabled: bool = True
    sso_enabled: bool = True
    allowed_to_proxy: bool = False
    anonymous_access: bool = False

    @classmethod
    def from_registered_service(cls, service: RegisteredService) -> "RegisteredServiceBean":
        """ORM 모델에서 프로젝션을 생성합니다.

        Build the projection from a RegisteredService row.
        """
        return cls(
            id=service.id,
            service_id=service.service_id,
            name=service.name,
            description=service.description,
            theme=service.theme,
            evaluation_order=service.evaluation_order,
            enabled=service.enabled,
            sso_enabled=service.sso_enabled,
            allowed_to_proxy=service.allowed_to_proxy,
            anonymous_access=service.anonymous_access,
        )


class ServiceListResponse(_CamelModel):
    """서비스 목록 응답 — {"services": [...]}."""

    services: list[RegisteredServiceBean]


class DeleteServiceResponse(_CamelModel):
    """서비스 삭제 응답 — {"serviceName": "..."}."""

    service_name: str


class ViewModel(BaseModel):
    """서버 측 뷰 모델 — 뷰 이름과 모델 데이터.

    Server-side view model: a view name plus the model rendered into it.

    Attributes:
        view_name: 뷰 식별자 (View identifier, e.g. "manage")
        model: 뷰에 전달할 데이터 (Data passed to the view)
    """

    view_name: str
    model: dict[str, Any] = Field(default_factory=dict)
