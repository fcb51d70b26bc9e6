"""
Service-level errors.

Each error is an ``HTTPException`` so endpoints can let it propagate and FastAPI
renders the status code and detail without extra handlers.
"""

from fastapi import HTTPException, status


class ServiceError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Request could not be processed'

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail)

    @property
    def message(self) -> str:
        return str(self.detail)


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found'


class UnauthorizedError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Insufficient permissions'


class InvalidStateError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource is not in a valid state for this operation'


class CountMismatchError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, *, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(f"Test answers don't match: needed {expected} answers, got {received}")


class ConsistencyError(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Stored data is inconsistent'


class ValidationError(ServiceError):
    status_code = 422
    default_detail = 'Invalid input'
