"""API layer for authentication, courses, notifications, files, homework and discussions."""

from .auth_api import AuthAPI
from .course_api import CourseAPI
from .discussion_api import DiscussionAPI
from .file_api import FileAPI
from .homework_api import HomeworkAPI
from .notification_api import NotificationAPI

__all__ = ["AuthAPI", "CourseAPI", "NotificationAPI", "FileAPI", "HomeworkAPI", "DiscussionAPI"]
