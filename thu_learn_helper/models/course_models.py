"""Models describing semesters and the courses a student is enrolled in."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ..utils import urls

SEMESTER_FALL = 1
SEMESTER_SPRING = 2
SEMESTER_SUMMER = 3


def semester_term(semester_id: str) -> int:
    """Return the term of a semester id such as ``"2019-2020-1"`` (see ``SEMESTER_*``)."""

    try:
        return int(semester_id.rsplit("-", 1)[1])
    except (IndexError, ValueError) as exc:
        raise ValueError(f"malformed semester id: {semester_id!r}") from exc


class Course(BaseModel):
    """A course the student takes in a given semester."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="wlkcid")
    name: str = Field(alias="kcm")
    english_name: str = Field(alias="ywkcm")
    teacher_name: str = Field(alias="jsm")
    # usually numeric, but not always
    teacher_number: str = Field(alias="jsh")
    course_number: str = Field(alias="kch")
    course_index: int = Field(alias="kxh")
    # filled by a second request; every course has at least one entry
    time_location: List[str] = Field(default_factory=list)

    @property
    def url(self) -> str:
        """Homepage of the course as seen in the browser."""

        return urls.course_page(self.id)
