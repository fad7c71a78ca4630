"""Client for the Tsinghua web-learning portal.

``LearnHelper`` is asynchronous; ``thu_learn_helper.blocking.LearnHelper``
offers the same operations as blocking calls.
"""

from .client import LearnHelper
from .models import (
    SEMESTER_FALL,
    SEMESTER_SPRING,
    SEMESTER_SUMMER,
    Attachment,
    Course,
    Discussion,
    File,
    Homework,
    HomeworkDetail,
    Notification,
    Question,
    semester_term,
)
from .utils.http_client import (
    AuthenticationError,
    LearnError,
    NetworkError,
    OperationError,
    ParseError,
    RequestTimeoutError,
)

__version__ = "0.3.0"

__all__ = [
    "LearnHelper",
    "SEMESTER_FALL",
    "SEMESTER_SPRING",
    "SEMESTER_SUMMER",
    "semester_term",
    "Course",
    "Notification",
    "File",
    "Attachment",
    "HomeworkDetail",
    "Homework",
    "Discussion",
    "Question",
    "LearnError",
    "NetworkError",
    "RequestTimeoutError",
    "AuthenticationError",
    "ParseError",
    "OperationError",
]
