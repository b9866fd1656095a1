"""등록 서비스 SQLAlchemy ORM 모델 정의.

Registered service SQLAlchemy ORM model definition.
A registered service is a client application pattern that is allowed
to request authentication.

Tables:
    - registered_services: 등록된 서비스 패턴 (Registered service patterns)
"""

import re
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

_DEFAULTS: dict[str, Any] = {
    "evaluation_order": 0,
    "enabled": True,
    "sso_enabled": True,
    "allowed_to_proxy": False,
    "anonymous_access": False,
}


class RegisteredService(Base):
    """등록 서비스 모델 — 서비스 URL 패턴과 평가 순서.

    Registered service model — a service URL pattern with its evaluation rank.
    service_id is a regular expression matched case-insensitively against
    the whole candidate service URL.

    Attributes:
        id: 숫자 식별자 (Numeric identifier, auto-increment)
        service_id: 서비스 URL 정규식 패턴 (Service URL regex pattern)
        name: 표시 이름 (Human-readable name)
        description: 설명 (Description, optional)
        theme: UI 테마 이름 (Theme name, optional)
        evaluation_order: 평가 순서, 낮을수록 먼저 (Evaluation rank, lower first)
        enabled: 활성 여부 (Whether the service may use authentication)
        sso_enabled: SSO 참여 여부 (Whether the service participates in SSO)
        allowed_to_proxy: 프록시 허용 여부 (Whether proxying is allowed)
        anonymous_access: 익명 접근 여부 (Whether principal is anonymized)
        created_at: 생성 일시 UTC (Creation timestamp in UTC)
        updated_at: 수정 일시 UTC (Last update timestamp in UTC)
    """

    __tablename__ = "registered_services"

    # 서비스 숫자 식별자 — Numeric identifier used by every admin endpoint
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 서비스 URL 패턴 — Regex matched against incoming client service URLs
    service_id: Mapped[str] = mapped_column(String(1024), nullable=False)
    # 표시 이름 — Display name (max 255 chars, required)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    theme: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # 평가 순서 — Tie-break rank when several patterns match one URL
    evaluation_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sso_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    allowed_to_proxy: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    anonymous_access: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __init__(self, **kwargs: Any) -> None:
        # 컬럼 기본값을 생성 시점에 적용 — Apply column defaults before the first flush
        for key, value in _DEFAULTS.items():
            kwargs.setdefault(key, value)
        super().__init__(**kwargs)

    def matches(self, service_url: str) -> bool:
        """서비스 URL이 이 패턴과 일치하는지 확인합니다.

        Check whether a service URL is matched by this entry.
        Literal equality is checked first so that URLs containing regex
        metacharacters still match themselves. Invalid patterns never match.

        Args:
            service_url: 검사할 서비스 URL (Candidate service URL)

        Returns:
            bool: 일치 여부 (Whether the URL matches)
        """
        if not service_url or not self.service_id:
            return False
        if self.service_id == service_url:
            return True
        try:
            return re.fullmatch(self.service_id, service_url, re.IGNORECASE) is not None
        except re.error:
            return False
