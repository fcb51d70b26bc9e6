from app.models.question import Question, QuestionOption
from app.models.rbac import PermissionRecord, Role, RolePermission, User, UserRole
from app.models.test_session import Test, TestQuestion, TestSession, TestSessionAnswer

__all__ = [
    'PermissionRecord',
    'Question',
    'QuestionOption',
    'Role',
    'RolePermission',
    'Test',
    'TestQuestion',
    'TestSession',
    'TestSessionAnswer',
    'User',
    'UserRole',
]
