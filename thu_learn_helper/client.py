"""Asynchronous entry point: one logged-in portal session and its query operations."""

from __future__ import annotations

from typing import List, Optional

from .api import AuthAPI, CourseAPI, DiscussionAPI, FileAPI, HomeworkAPI, NotificationAPI
from .models import Course, Discussion, File, Homework, Notification, Question
from .utils.http_client import FileUpload, HttpClient, ParseError
from .utils.urls import USER_AGENT


class LearnHelper:
    """A logged-in web-learning session.

    Obtain one with :meth:`login`; every query shares the session cookies of
    that login. Use it as an async context manager, or call :meth:`logout`
    (or :meth:`close`) when done.
    """

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client
        self._auth = AuthAPI(http_client)
        self._courses = CourseAPI(http_client)
        self._notifications = NotificationAPI(http_client)
        self._files = FileAPI(http_client)
        self._homework = HomeworkAPI(http_client)
        self._discussions = DiscussionAPI(http_client)

    @classmethod
    async def login(
        cls,
        username: str,
        password: str,
        *,
        timeout: float = 10,
        max_retries: int = 2,
        max_connections: int = 16,
        user_agent: str = USER_AGENT,
    ) -> "LearnHelper":
        http_client = HttpClient(
            timeout=timeout,
            max_retries=max_retries,
            max_connections=max_connections,
            user_agent=user_agent,
        )
        helper = cls(http_client)
        try:
            await helper._auth.login(username, password)
        except BaseException:
            await http_client.close()
            raise
        return helper

    @property
    def http_client(self) -> HttpClient:
        return self._client

    async def logout(self) -> None:
        try:
            await self._auth.logout()
        finally:
            await self.close()

    async def close(self) -> None:
        await self._client.close()

    async def semester_id_list(self) -> List[str]:
        return await self._courses.semester_id_list()

    async def current_semester(self) -> str:
        semesters = await self.semester_id_list()
        if not semesters:
            raise ParseError("the portal returned no semesters")
        return semesters[0]

    async def course_list(self, semester: str) -> List[Course]:
        return await self._courses.course_list(semester)

    async def notification_list(self, course: str) -> List[Notification]:
        return await self._notifications.notification_list(course)

    async def file_list(self, course: str) -> List[File]:
        return await self._files.file_list(course)

    async def download_file(self, file: File, dest_dir: str, filename: Optional[str] = None) -> str:
        return await self._files.download(file, dest_dir, filename)

    async def homework_list(self, course: str) -> List[Homework]:
        return await self._homework.homework_list(course)

    async def submit_homework(
        self,
        student_homework: str,
        content: str,
        file: Optional[FileUpload] = None,
    ) -> None:
        await self._homework.submit_homework(student_homework, content, file)

    async def discussion_list(self, course: str) -> List[Discussion]:
        return await self._discussions.discussion_list(course)

    async def question_list(self, course: str) -> List[Question]:
        return await self._discussions.question_list(course)

    async def reply_discussion(
        self,
        course: str,
        discussion: str,
        content: str,
        respondent_reply: Optional[str] = None,
        file: Optional[FileUpload] = None,
    ) -> None:
        await self._discussions.reply_discussion(course, discussion, content, respondent_reply, file)

    async def delete_discussion_reply(self, course: str, reply: str) -> None:
        await self._discussions.delete_discussion_reply(course, reply)

    async def __aenter__(self) -> "LearnHelper":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.close()
