"""
Submission and grading of test sessions.

A submission grades every blank answer of an in-progress session in a single
transaction: either all answers and the session total are written, or nothing is.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.core.errors import ConsistencyError, CountMismatchError, InvalidStateError, NotFoundError, ValidationError
from app.db.session import unit_of_work
from app.models.constants import TestSessionStatus
from app.models.question import Question, QuestionOption
from app.models.test_session import TestSession, TestSessionAnswer
from app.schemas.test_session import AnswerMetadata, SubmittedAnswer
from app.utils.collections import group_by, index_by, unique


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GradedAnswer:
    question_id: UUID
    is_correct: bool
    points: int
    selected_options: list[str]


def is_selection_correct(selected_option_ids: Iterable[UUID], correct_option_ids: set[UUID]) -> bool:
    selected = unique(selected_option_ids)
    # Equal size plus membership of every distinct selected id means the two sets are equal.
    return len(selected) == len(correct_option_ids) and all(option_id in correct_option_ids for option_id in selected)


def grade_answer(question: Question, options: list[QuestionOption], answer: SubmittedAnswer) -> GradedAnswer:
    selected_option_ids = unique(answer.selected_option_ids)
    correct_option_ids = {option.id for option in options if option.is_correct}
    is_correct = is_selection_correct(selected_option_ids, correct_option_ids)

    option_text_by_id = {option.id: option.option_text for option in options}
    selected_options = [
        option_text_by_id[option_id] for option_id in selected_option_ids if option_id in option_text_by_id
    ]

    return GradedAnswer(
        question_id=question.id,
        is_correct=is_correct,
        points=question.points if is_correct else 0,
        selected_options=selected_options,
    )


def _load_submittable_session(db: Session, *, user_id: UUID, session_id: UUID) -> TestSession:
    session = db.scalar(
        select(TestSession)
        .where(
            TestSession.id == session_id,
            TestSession.user_id == user_id,
            TestSession.status == TestSessionStatus.IN_PROGRESS.value,
        )
        .with_for_update()
    )
    if not session:
        raise NotFoundError('Test session not found or submit is not allowed')
    return session


def _grade_answers(db: Session, session: TestSession, answers: list[SubmittedAnswer]) -> list[GradedAnswer]:
    blank_question_ids = list(
        db.scalars(
            select(TestSessionAnswer.question_id).where(
                TestSessionAnswer.session_id == session.id,
                TestSessionAnswer.points.is_(None),
            )
        ).all()
    )
    if len(blank_question_ids) != len(answers):
        raise CountMismatchError(expected=len(blank_question_ids), received=len(answers))

    questions = index_by(
        db.scalars(select(Question).where(Question.id.in_(blank_question_ids))).all(),
        key=lambda question: question.id,
    )
    options_by_question = group_by(
        db.scalars(
            select(QuestionOption)
            .where(QuestionOption.question_id.in_(blank_question_ids))
            .order_by(QuestionOption.order_index)
        ).all(),
        key=lambda option: option.question_id,
    )

    graded: list[GradedAnswer] = []
    seen_question_ids: set[UUID] = set()
    for answer in answers:
        question = questions.get(answer.question_id)
        if question is None:
            raise ValidationError('Submitted answer does not match any expected question')
        if question.id in seen_question_ids:
            raise ValidationError('Question was answered more than once')
        seen_question_ids.add(question.id)
        graded.append(grade_answer(question, options_by_question.get(question.id, []), answer))
    return graded


def _persist_graded_answers(db: Session, session: TestSession, graded: list[GradedAnswer]) -> None:
    for answer in graded:
        result = db.execute(
            update(TestSessionAnswer)
            .where(
                TestSessionAnswer.session_id == session.id,
                TestSessionAnswer.question_id == answer.question_id,
            )
            .values(
                {
                    TestSessionAnswer.is_correct: answer.is_correct,
                    TestSessionAnswer.points: answer.points,
                    TestSessionAnswer.answer_metadata: AnswerMetadata(
                        selected_options=answer.selected_options
                    ).to_stored(),
                }
            )
        )
        if result.rowcount != 1:
            raise ConsistencyError(
                f'Expected to grade exactly one answer for question {answer.question_id}, updated {result.rowcount}'
            )


def _complete_session(db: Session, session: TestSession, total_points: int) -> None:
    # Conditional on the status still being in progress, so only one submission can complete it.
    result = db.execute(
        update(TestSession)
        .where(
            TestSession.id == session.id,
            TestSession.status == TestSessionStatus.IN_PROGRESS.value,
        )
        .values(
            status=TestSessionStatus.COMPLETED.value,
            completed_at=datetime.now(UTC),
            points_earned=total_points,
        )
    )
    if result.rowcount != 1:
        raise InvalidStateError('Test session was already submitted')


def submit_session(
    db: Session,
    *,
    user_id: UUID,
    session_id: UUID,
    answers: list[SubmittedAnswer],
) -> TestSession:
    try:
        with unit_of_work(db):
            session = _load_submittable_session(db, user_id=user_id, session_id=session_id)
            graded = _grade_answers(db, session, answers)
            _persist_graded_answers(db, session, graded)
            total_points = sum(answer.points for answer in graded)
            _complete_session(db, session, total_points)
    except Exception as exc:
        logger.warning('Submission of test session %s rolled back: %s', session_id, exc)
        raise

    db.refresh(session)
    logger.info(
        'Test session %s submitted by user %s: %s/%s points',
        session_id,
        user_id,
        session.points_earned,
        session.max_points,
    )
    return session
