from enum import StrEnum


class Permission(StrEnum):
    USER_CREATE = 'USER_CREATE'
    USER_READ = 'USER_READ'
    USER_UPDATE = 'USER_UPDATE'
    SESSION_CREATE = 'SESSION_CREATE'
    SESSION_READ = 'SESSION_READ'
    SESSION_UPDATE = 'SESSION_UPDATE'
    SESSION_DELETE = 'SESSION_DELETE'
    COLLECTION_CREATE = 'COLLECTION_CREATE'
    COLLECTION_READ = 'COLLECTION_READ'
    COLLECTION_UPDATE = 'COLLECTION_UPDATE'
    COLLECTION_DELETE = 'COLLECTION_DELETE'
    TEST_CREATE = 'TEST_CREATE'
    TEST_READ = 'TEST_READ'
    TEST_UPDATE = 'TEST_UPDATE'
    TEST_DELETE = 'TEST_DELETE'
    COURSE_CREATE = 'COURSE_CREATE'
    COURSE_READ = 'COURSE_READ'
    COURSE_UPDATE = 'COURSE_UPDATE'
    COURSE_DELETE = 'COURSE_DELETE'
    COURSE_SECTION_CREATE = 'COURSE_SECTION_CREATE'
    COURSE_SECTION_READ = 'COURSE_SECTION_READ'
    COURSE_SECTION_UPDATE = 'COURSE_SECTION_UPDATE'
    COURSE_SECTION_DELETE = 'COURSE_SECTION_DELETE'
    QUESTION_CREATE = 'QUESTION_CREATE'
    QUESTION_READ = 'QUESTION_READ'
    QUESTION_UPDATE = 'QUESTION_UPDATE'
    QUESTION_DELETE = 'QUESTION_DELETE'
    QUESTION_OPTION_CREATE = 'QUESTION_OPTION_CREATE'
    QUESTION_OPTION_READ = 'QUESTION_OPTION_READ'
    QUESTION_OPTION_UPDATE = 'QUESTION_OPTION_UPDATE'
    QUESTION_OPTION_DELETE = 'QUESTION_OPTION_DELETE'
    VIDEO_CREATE = 'VIDEO_CREATE'
    VIDEO_READ = 'VIDEO_READ'
    VIDEO_UPDATE = 'VIDEO_UPDATE'
    VIDEO_DELETE = 'VIDEO_DELETE'
    MEDIA_CREATE = 'MEDIA_CREATE'
    MEDIA_READ = 'MEDIA_READ'
    MEDIA_UPDATE = 'MEDIA_UPDATE'
    MEDIA_DELETE = 'MEDIA_DELETE'


class TestSessionStatus(StrEnum):
    PENDING = 'pending'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'
    EXPIRED = 'expired'


ALL_PERMISSIONS = frozenset(Permission)

ROLE_OWNER = 'owner'
ROLE_ADMIN = 'admin'
ROLE_USER = 'user'

ADMIN_ROLE_VALUES = frozenset({ROLE_OWNER, ROLE_ADMIN})

# The owner bundle enumerates every permission; there is no bypass flag.
DEFAULT_ROLE_PERMISSIONS: dict[str, frozenset[Permission]] = {
    ROLE_OWNER: ALL_PERMISSIONS,
    ROLE_ADMIN: ALL_PERMISSIONS,
    ROLE_USER: frozenset({Permission.SESSION_READ, Permission.SESSION_UPDATE}),
}
