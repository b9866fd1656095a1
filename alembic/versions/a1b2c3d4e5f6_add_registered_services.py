"""add_registered_services

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-18 10:00:00.000000

등록 서비스 테이블 생성: registered_services.
Add the registered service registry table: registered_services.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1b2c3d4e5f6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # registered_services — 서비스 URL 패턴과 평가 순서
    # Service URL patterns with their evaluation rank
    op.create_table(
        'registered_services',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('service_id', sa.String(1024), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('theme', sa.String(255), nullable=True),
        sa.Column('evaluation_order', sa.Integer(), server_default='0', nullable=False),
        sa.Column('enabled', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('sso_enabled', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('allowed_to_proxy', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('anonymous_access', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # 평가 순서 인덱스 — Listing is ordered by evaluation_order
    op.create_index('ix_registered_services_evaluation_order', 'registered_services', ['evaluation_order'])


def downgrade() -> None:
    op.drop_index('ix_registered_services_evaluation_order', table_name='registered_services')
    op.drop_table('registered_services')
