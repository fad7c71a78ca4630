"""Data models for courses, notifications, files, homework and discussions."""

from .content_models import File, Notification
from .course_models import SEMESTER_FALL, SEMESTER_SPRING, SEMESTER_SUMMER, Course, semester_term
from .discussion_models import Discussion, Question
from .homework_models import Attachment, Homework, HomeworkDetail

__all__ = [
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
]
