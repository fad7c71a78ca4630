"""Blocking counterpart of :class:`thu_learn_helper.client.LearnHelper`.

Every method runs the matching coroutine of the asynchronous helper to
completion on an event loop owned by the blocking helper. The loop is reused
for the whole session because the underlying aiohttp session is bound to it.
Do not call these methods from inside a running event loop.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Coroutine, List, Optional, TypeVar

from .client import LearnHelper as AsyncLearnHelper
from .models import Course, Discussion, File, Homework, Notification, Question
from .utils.file_utils import ensure_directory
from .utils.http_client import FileUpload, LearnError, download_file_sync

T = TypeVar("T")


class LearnHelper:
    """Same as the asynchronous ``LearnHelper``, except that every call blocks."""

    def __init__(self, helper: AsyncLearnHelper, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._helper = helper
        self._loop = loop or asyncio.new_event_loop()

    @classmethod
    def login(cls, username: str, password: str, **options: Any) -> "LearnHelper":
        """Log in; ``options`` are passed on to the asynchronous ``LearnHelper.login``."""

        loop = asyncio.new_event_loop()
        try:
            helper = loop.run_until_complete(AsyncLearnHelper.login(username, password, **options))
        except BaseException:
            loop.close()
            raise
        return cls(helper, loop)

    @property
    def closed(self) -> bool:
        return self._loop.is_closed()

    def _run(self, coro: Coroutine[Any, Any, T]) -> T:
        if self._loop.is_closed():
            coro.close()
            raise LearnError("the blocking helper is already closed")
        return self._loop.run_until_complete(coro)

    def logout(self) -> None:
        try:
            self._run(self._helper.logout())
        finally:
            self.close()

    def close(self) -> None:
        if self._loop.is_closed():
            return
        try:
            self._loop.run_until_complete(self._helper.close())
        finally:
            self._loop.close()

    def semester_id_list(self) -> List[str]:
        return self._run(self._helper.semester_id_list())

    def current_semester(self) -> str:
        return self._run(self._helper.current_semester())

    def course_list(self, semester: str) -> List[Course]:
        return self._run(self._helper.course_list(semester))

    def notification_list(self, course: str) -> List[Notification]:
        return self._run(self._helper.notification_list(course))

    def file_list(self, course: str) -> List[File]:
        return self._run(self._helper.file_list(course))

    def download_file(self, file: File, dest_dir: str, filename: Optional[str] = None) -> str:
        """Stream ``file`` to ``dest_dir`` with requests, reusing the session cookies."""

        http_client = self._helper.http_client
        ensure_directory(dest_dir)
        dest_path = os.path.join(dest_dir, filename or file.filename)
        try:
            download_file_sync(
                file.download_url,
                dest_path,
                http_client.cookies(),
                timeout=http_client.timeout,
                user_agent=http_client.user_agent,
            )
        except Exception:
            if os.path.exists(dest_path):
                os.remove(dest_path)
            raise
        logging.info("Saved %s to %s", file.title, dest_path)
        return dest_path

    def homework_list(self, course: str) -> List[Homework]:
        return self._run(self._helper.homework_list(course))

    def submit_homework(self, student_homework: str, content: str, file: Optional[FileUpload] = None) -> None:
        self._run(self._helper.submit_homework(student_homework, content, file))

    def discussion_list(self, course: str) -> List[Discussion]:
        return self._run(self._helper.discussion_list(course))

    def question_list(self, course: str) -> List[Question]:
        return self._run(self._helper.question_list(course))

    def reply_discussion(
        self,
        course: str,
        discussion: str,
        content: str,
        respondent_reply: Optional[str] = None,
        file: Optional[FileUpload] = None,
    ) -> None:
        self._run(self._helper.reply_discussion(course, discussion, content, respondent_reply, file))

    def delete_discussion_reply(self, course: str, reply: str) -> None:
        self._run(self._helper.delete_discussion_reply(course, reply))

    def __enter__(self) -> "LearnHelper":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
