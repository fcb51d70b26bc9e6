from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import Principal, require_permissions
from app.core.config import settings
from app.core.errors import UnauthorizedError
from app.db.session import get_db
from app.models.constants import Permission, TestSessionStatus
from app.schemas.common import PaginationMeta
from app.schemas.test_session import (
    QuestionResultOut,
    TestSessionCreate,
    TestSessionListResponse,
    TestSessionOut,
    TestSessionResultOut,
    TestSessionSubmit,
)
from app.services import result_service, scoring_service, test_session_service


router = APIRouter(prefix='/test-sessions', tags=['test-sessions'])


@router.get('', response_model=TestSessionListResponse)
def list_test_sessions(
    page: int = Query(default=1),
    limit: int = Query(default=settings.DEFAULT_PAGE_SIZE, le=settings.MAX_PAGE_SIZE),
    status_filter: list[TestSessionStatus] | None = Query(default=None, alias='status'),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permissions(Permission.SESSION_READ)),
) -> TestSessionListResponse:
    result = test_session_service.list_sessions(
        db,
        user_id=principal.user_id,
        is_admin_or_owner=principal.is_admin_or_owner,
        page=page,
        limit=limit,
        statuses=status_filter,
    )
    return TestSessionListResponse(
        items=[TestSessionOut.model_validate(item) for item in result.items],
        meta=PaginationMeta(
            page=result.current_page,
            page_size=result.page_size,
            total=result.total_items,
            total_pages=result.total_pages,
            has_next_page=result.has_next_page,
            has_prev_page=result.has_prev_page,
        ),
    )


@router.post('', response_model=TestSessionOut, status_code=status.HTTP_201_CREATED)
def create_test_session(
    payload: TestSessionCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permissions(Permission.SESSION_CREATE)),
) -> TestSessionOut:
    user_id = payload.user_id or principal.user_id
    if user_id != principal.user_id and not principal.is_admin_or_owner:
        raise UnauthorizedError('Not allowed to create a test session for another user')

    session = test_session_service.create_session(db, test_id=payload.test_id, user_id=user_id)
    return TestSessionOut.model_validate(session)


@router.get('/{session_id}', response_model=TestSessionOut)
def get_test_session(
    session_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permissions(Permission.SESSION_READ)),
) -> TestSessionOut:
    session = test_session_service.get_visible_session(
        db,
        session_id=session_id,
        user_id=principal.user_id,
        is_admin_or_owner=principal.is_admin_or_owner,
    )
    return TestSessionOut.model_validate(session)


@router.post('/{session_id}/start', response_model=TestSessionOut)
def start_test_session(
    session_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permissions(Permission.SESSION_UPDATE)),
) -> TestSessionOut:
    session = test_session_service.start_session(db, user_id=principal.user_id, session_id=session_id)
    return TestSessionOut.model_validate(session)


@router.post('/{session_id}/submit', response_model=TestSessionOut)
def submit_test_session(
    session_id: UUID,
    payload: TestSessionSubmit,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permissions(Permission.SESSION_UPDATE)),
) -> TestSessionOut:
    session = scoring_service.submit_session(
        db,
        user_id=principal.user_id,
        session_id=session_id,
        answers=payload.answers,
    )
    return TestSessionOut.model_validate(session)


@router.get('/{session_id}/result', response_model=TestSessionResultOut)
def get_test_session_result(
    session_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_permissions(Permission.SESSION_READ)),
) -> TestSessionResultOut:
    result = result_service.get_result(
        db,
        user_id=principal.user_id,
        session_id=session_id,
        is_admin_or_owner=principal.is_admin_or_owner,
    )
    return TestSessionResultOut(
        id=result.id,
        test_session=TestSessionOut.model_validate(result.test_session),
        questions=[QuestionResultOut.model_validate(item) for item in result.questions],
    )


@router.delete('/{session_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_test_session(
    session_id: UUID,
    db: Session = Depends(get_db),
    _: Principal = Depends(require_permissions(Permission.SESSION_DELETE)),
) -> None:
    test_session_service.delete_session(db, session_id=session_id)
