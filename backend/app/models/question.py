import uuid

from sqlalchemy import Boolean, ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base
from app.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Question(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'questions'

    question_text: Mapped[str] = mapped_column(Text, nullable=False, default='')
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    options: Mapped[list['QuestionOption']] = relationship(
        back_populates='question',
        cascade='all, delete-orphan',
        order_by='QuestionOption.order_index',
    )


class QuestionOption(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'question_options'

    question_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('questions.id', ondelete='CASCADE'), nullable=False
    )
    option_text: Mapped[str] = mapped_column(Text, nullable=False)
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    question: Mapped['Question'] = relationship(back_populates='options')


Index('ix_question_options_question_id', QuestionOption.question_id)
