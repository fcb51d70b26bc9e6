from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import InvalidStateError, NotFoundError, UnauthorizedError
from app.models.constants import TestSessionStatus
from app.models.test_session import TestSession, TestSessionAnswer
from app.schemas.test_session import AnswerMetadata


@dataclass(frozen=True)
class QuestionResult:
    question_id: UUID
    is_correct: bool
    selected_options: list[str]


@dataclass(frozen=True)
class TestSessionResult:
    id: UUID
    test_session: TestSession
    questions: list[QuestionResult]


def get_result(db: Session, *, user_id: UUID, session_id: UUID, is_admin_or_owner: bool) -> TestSessionResult:
    session = db.scalar(select(TestSession).where(TestSession.id == session_id))
    if not session:
        raise NotFoundError('Test session not found')

    if not is_admin_or_owner and (session.user_id is None or session.user_id != user_id):
        raise UnauthorizedError('Unauthorized to view this test result')

    if session.status != TestSessionStatus.COMPLETED.value:
        raise InvalidStateError('Test session is not completed')

    rows = db.execute(
        select(TestSessionAnswer.question_id, TestSessionAnswer.is_correct, TestSessionAnswer.answer_metadata)
        .where(TestSessionAnswer.session_id == session.id)
        .order_by(TestSessionAnswer.order)
    ).all()

    questions = [
        QuestionResult(
            question_id=question_id,
            is_correct=bool(is_correct),
            selected_options=AnswerMetadata.from_stored(metadata).selected_options,
        )
        for question_id, is_correct, metadata in rows
    ]
    return TestSessionResult(id=session.id, test_session=session, questions=questions)
