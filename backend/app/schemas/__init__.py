from app.schemas.common import BaseSchema, PaginatedResponse, PaginationMeta, TimestampedSchema
from app.schemas.test_session import (
    AnswerMetadata,
    QuestionResultOut,
    SubmittedAnswer,
    TestSessionCreate,
    TestSessionListResponse,
    TestSessionOut,
    TestSessionResultOut,
    TestSessionSubmit,
)

__all__ = [
    'AnswerMetadata',
    'BaseSchema',
    'PaginatedResponse',
    'PaginationMeta',
    'QuestionResultOut',
    'SubmittedAnswer',
    'TestSessionCreate',
    'TestSessionListResponse',
    'TestSessionOut',
    'TestSessionResultOut',
    'TestSessionSubmit',
    'TimestampedSchema',
]
