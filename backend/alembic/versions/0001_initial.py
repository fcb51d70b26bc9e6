"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision: str = '0001_initial'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')


def _id() -> sa.Column:
    return sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _fk(name: str, target: str, *, nullable: bool = False, ondelete: str = 'CASCADE') -> sa.Column:
    return sa.Column(name, sa.Uuid(as_uuid=True), sa.ForeignKey(target, ondelete=ondelete), nullable=nullable)


def upgrade() -> None:
    op.create_table(
        'users',
        _id(),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'roles',
        _id(),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_roles_name', 'roles', ['name'], unique=True)

    op.create_table(
        'permissions',
        _id(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_permissions_name', 'permissions', ['name'], unique=True)

    op.create_table(
        'user_roles',
        _id(),
        _fk('user_id', 'users.id'),
        _fk('role_id', 'roles.id'),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'role_id', name='uq_user_roles_user_role'),
    )
    op.create_index('ix_user_roles_user_id', 'user_roles', ['user_id'])
    op.create_index('ix_user_roles_role_id', 'user_roles', ['role_id'])

    op.create_table(
        'role_permissions',
        _id(),
        _fk('role_id', 'roles.id'),
        _fk('permission_id', 'permissions.id'),
        *_timestamps(),
        sa.UniqueConstraint('role_id', 'permission_id', name='uq_role_permissions_role_permission'),
    )
    op.create_index('ix_role_permissions_role_id', 'role_permissions', ['role_id'])

    op.create_table(
        'questions',
        _id(),
        sa.Column('question_text', sa.Text(), nullable=False),
        sa.Column('points', sa.Integer(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'question_options',
        _id(),
        _fk('question_id', 'questions.id'),
        sa.Column('option_text', sa.Text(), nullable=False),
        sa.Column('is_correct', sa.Boolean(), nullable=False),
        sa.Column('order_index', sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_question_options_question_id', 'question_options', ['question_id'])

    op.create_table(
        'tests',
        _id(),
        sa.Column('name', sa.String(200), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'test_questions',
        _id(),
        _fk('test_id', 'tests.id'),
        _fk('question_id', 'questions.id'),
        sa.Column('order_index', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('test_id', 'question_id', name='uq_test_questions_test_question'),
    )
    op.create_index('ix_test_questions_test_id', 'test_questions', ['test_id'])

    op.create_table(
        'test_sessions',
        _id(),
        _fk('user_id', 'users.id', nullable=True, ondelete='SET NULL'),
        _fk('test_id', 'tests.id'),
        sa.Column('status', sa.String(30), nullable=False),
        sa.Column('max_points', sa.Integer(), nullable=False),
        sa.Column('points_earned', sa.Integer(), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('expired_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "status in ('pending', 'in_progress', 'completed', 'cancelled', 'expired')",
            name='test_session_status_values',
        ),
    )
    op.create_index('ix_test_sessions_user_id', 'test_sessions', ['user_id'])
    op.create_index('ix_test_sessions_status', 'test_sessions', ['status'])

    op.create_table(
        'test_session_answers',
        _id(),
        _fk('session_id', 'test_sessions.id'),
        _fk('question_id', 'questions.id'),
        sa.Column('points', sa.Integer(), nullable=True),
        sa.Column('is_correct', sa.Boolean(), nullable=True),
        sa.Column('metadata', JSON_TYPE, nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('"order" > 0', name='test_session_answer_order_positive'),
    )
    op.create_index('ix_test_session_answers_session_id', 'test_session_answers', ['session_id'])


def downgrade() -> None:
    op.drop_table('test_session_answers')
    op.drop_table('test_sessions')
    op.drop_table('test_questions')
    op.drop_table('tests')
    op.drop_table('question_options')
    op.drop_table('questions')
    op.drop_table('role_permissions')
    op.drop_table('user_roles')
    op.drop_table('permissions')
    op.drop_table('roles')
    op.drop_table('users')
