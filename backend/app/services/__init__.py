from app.services import (
    pagination,
    permission_service,
    result_service,
    scoring_service,
    test_session_service,
)

__all__ = [
    'pagination',
    'permission_service',
    'result_service',
    'scoring_service',
    'test_session_service',
]
