"""API client responsible for semesters and the course list."""

from __future__ import annotations

import asyncio
import logging
from typing import List

from ..models import Course
from ..utils import urls
from ..utils.http_client import HttpClient, ParseError
from .records import parse_records, unwrap


class CourseAPI:
    """Wraps the semester and course endpoints and exposes typed helpers."""

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    async def semester_id_list(self) -> List[str]:
        """Semester ids the student has courses in, current semester first."""

        try:
            data = await self._client.get_json(urls.SEMESTER_LIST)
        except Exception as exc:
            logging.error("Failed to fetch semester list: %s", exc)
            raise
        if not isinstance(data, list):
            raise ParseError("invalid semester list format")
        return [str(semester) for semester in data if semester is not None]

    async def course_list(self, semester: str) -> List[Course]:
        try:
            data = await self._client.get_json(urls.course_list(semester))
            courses = parse_records(Course, unwrap(data, "resultList", what="course list"), "course")
            await asyncio.gather(*(self._fill_time_location(course) for course in courses))
        except Exception as exc:
            logging.error("Failed to fetch courses of semester %s: %s", semester, exc)
            raise

        if not courses:
            logging.warning("No courses were returned for semester %s", semester)
        return courses

    async def _fill_time_location(self, course: Course) -> None:
        data = await self._client.get_json(urls.course_time_location(course.id))
        if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
            raise ParseError("invalid course time location format")
        course.time_location = data
