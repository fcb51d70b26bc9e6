import os
from collections.abc import Callable, Generator
from uuid import UUID

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

TEST_DATABASE_URL = os.getenv('TEST_DATABASE_URL', 'sqlite+pysqlite:///:memory:')

os.environ.setdefault('DATABASE_URL', TEST_DATABASE_URL)
os.environ.setdefault('JWT_SECRET_KEY', 'test-access-secret-32-chars-min-0001')
os.environ.setdefault('APP_ENV', 'test')
os.environ.setdefault('CORS_ORIGINS', 'http://localhost:3000')

from app.core.security import create_access_token
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models.constants import DEFAULT_ROLE_PERMISSIONS, Permission, TestSessionStatus
from app.models.question import Question, QuestionOption
from app.models.rbac import PermissionRecord, Role, RolePermission, User, UserRole
from app.models.test_session import Test, TestQuestion, TestSession, TestSessionAnswer


if TEST_DATABASE_URL.startswith('sqlite'):
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
else:
    engine = create_engine(TEST_DATABASE_URL, pool_pre_ping=True)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture(autouse=True)
def setup_database() -> Generator[None, None, None]:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        _seed_roles(db)
        db.commit()
    finally:
        db.close()

    yield

    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    def _override_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_db

    with TestClient(app) as api_client:
        yield api_client

    app.dependency_overrides.clear()


def _seed_roles(db: Session) -> None:
    permissions = {}
    for permission in Permission:
        record = PermissionRecord(name=permission.value, description=permission.value.replace('_', ' ').lower())
        db.add(record)
        permissions[permission] = record
    db.flush()

    for role_name, granted in DEFAULT_ROLE_PERMISSIONS.items():
        role = Role(name=role_name, description=f'{role_name} access')
        db.add(role)
        db.flush()
        for permission in sorted(granted):
            db.add(RolePermission(role_id=role.id, permission_id=permissions[permission].id))
    db.flush()


@pytest.fixture()
def make_role(db_session: Session) -> Callable[..., Role]:
    def _make_role(name: str, permissions: list[Permission]) -> Role:
        records = {
            record.name: record
            for record in db_session.scalars(select(PermissionRecord)).all()
        }
        role = Role(name=name, description=f'{name} access')
        db_session.add(role)
        db_session.flush()
        for permission in permissions:
            db_session.add(RolePermission(role_id=role.id, permission_id=records[permission.value].id))
        db_session.commit()
        return role

    return _make_role


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    def _make_user(email: str, role_names: list[str] | None = None) -> User:
        user = User(email=email, full_name=email.split('@')[0].title(), is_active=True)
        db_session.add(user)
        db_session.flush()

        role_map = {role.name: role for role in db_session.scalars(select(Role)).all()}
        for role_name in role_names or []:
            db_session.add(UserRole(user_id=user.id, role_id=role_map[role_name].id))
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def make_question(db_session: Session) -> Callable[..., Question]:
    def _make_question(points: int, options: list[tuple[str, bool]]) -> Question:
        question = Question(question_text=f'Question worth {points}', points=points)
        db_session.add(question)
        db_session.flush()
        for index, (text, is_correct) in enumerate(options):
            db_session.add(
                QuestionOption(question_id=question.id, option_text=text, is_correct=is_correct, order_index=index)
            )
        db_session.commit()
        db_session.refresh(question)
        return question

    return _make_question


@pytest.fixture()
def make_test(db_session: Session) -> Callable[..., Test]:
    def _make_test(questions: list[Question], name: str = 'Certification exam') -> Test:
        test = Test(name=name)
        db_session.add(test)
        db_session.flush()
        for index, question in enumerate(questions):
            db_session.add(TestQuestion(test_id=test.id, question_id=question.id, order_index=index))
        db_session.commit()
        return test

    return _make_test


@pytest.fixture()
def make_session(db_session: Session) -> Callable[..., TestSession]:
    def _make_session(
        user_id: UUID | None,
        questions: list[Question],
        status: TestSessionStatus = TestSessionStatus.IN_PROGRESS,
    ) -> TestSession:
        test = Test(name='Certification exam')
        db_session.add(test)
        db_session.flush()

        session = TestSession(
            user_id=user_id,
            test_id=test.id,
            status=status.value,
            max_points=sum(question.points for question in questions),
        )
        db_session.add(session)
        db_session.flush()

        for index, question in enumerate(questions, start=1):
            db_session.add(TestSessionAnswer(session_id=session.id, question_id=question.id, order=index))
        db_session.commit()
        return session

    return _make_session


def option_id(question: Question, text: str) -> UUID:
    return next(option.id for option in question.options if option.option_text == text)


@pytest.fixture()
def option_of() -> Callable[[Question, str], UUID]:
    return option_id


def auth_header(user: User) -> dict[str, str]:
    return {'Authorization': f'Bearer {create_access_token(str(user.id))}'}


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    return auth_header
