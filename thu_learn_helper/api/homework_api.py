"""API client for homework lists, homework details and submissions."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional

from ..models import Homework
from ..utils import urls
from ..utils.html_parsers import parse_homework_detail
from ..utils.http_client import FileUpload, HttpClient, ParseError
from .records import ensure_success, parse_records, unwrap


class HomeworkAPI:
    """Fetches the homework of a course, including the detail page of each one."""

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    async def homework_list(self, course: str) -> List[Homework]:
        """All homework of ``course``: not submitted first, then submitted, then graded."""

        try:
            groups = await asyncio.gather(*(self._fetch_group(build, course) for build in urls.HOMEWORK_LISTS))
        except Exception as exc:
            logging.error("Failed to fetch homework of course %s: %s", course, exc)
            raise
        return [homework for group in groups for homework in group]

    async def submit_homework(
        self,
        student_homework: str,
        content: str,
        file: Optional[FileUpload] = None,
    ) -> None:
        fields = {"zynr": content, "xszyid": student_homework, "isDeleted": "0"}
        files = None
        if file is None:
            fields["fileupload"] = "undefined"
        else:
            files = {"fileupload": file}
        try:
            reply = await self._client.post_multipart(urls.HOMEWORK_SUBMIT, fields, files)
        except Exception as exc:
            logging.error("Failed to submit homework %s: %s", student_homework, exc)
            raise
        ensure_success(reply, "failed to submit homework")
        logging.info("Submitted homework %s", student_homework)

    async def _fetch_group(self, build_url: Callable[[str], str], course: str) -> List[Homework]:
        data = await self._client.get_json(build_url(course))
        homeworks = parse_records(Homework, unwrap(data, "object", "aaData", what="homework list"), "homework")
        await asyncio.gather(*(self._fill_detail(homework) for homework in homeworks))
        return homeworks

    async def _fill_detail(self, homework: Homework) -> None:
        html = await self._client.get_text(homework.url)
        detail = parse_homework_detail(html)
        if detail is None:
            raise ParseError("invalid homework detail format")
        homework.detail = detail
