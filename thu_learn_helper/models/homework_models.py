"""Models for homework assignments, their details and attachments."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils import converters, urls


class Attachment(BaseModel):
    """A downloadable attachment linked from a portal page."""

    name: str
    url: str


class HomeworkDetail(BaseModel):
    """Fields of a homework that only appear on its detail page."""

    description: str = ""
    attachment: Optional[Attachment] = None
    submit_attachment: Optional[Attachment] = None
    grade_attachment: Optional[Attachment] = None


class Homework(BaseModel):
    """A homework assignment together with the student's submission and grade."""

    model_config = ConfigDict(populate_by_name=True)

    course_id: str = Field(alias="wlkcid")
    id: str = Field(alias="zyid")
    student_homework_id: str = Field(alias="xszyid")
    title: str = Field(alias="bt")
    assign_time: datetime = Field(alias="kssjStr")
    deadline: datetime = Field(alias="jzsjStr")
    submit_time: Optional[datetime] = Field(default=None, alias="scsjStr")
    submit_content: Optional[str] = Field(default=None, alias="zynrStr")
    grade: Optional[float] = Field(default=None, alias="cj")
    grade_time: Optional[datetime] = Field(default=None, alias="pysjStr")
    grader_name: Optional[str] = Field(default=None, alias="jsm")
    grade_content: Optional[str] = Field(default=None, alias="pynr")
    detail: HomeworkDetail = Field(default_factory=HomeworkDetail)

    @field_validator("assign_time", "deadline", mode="before")
    @classmethod
    def _parse_times(cls, value):
        return converters.parse_date_time(value)

    @field_validator("submit_time", "grade_time", mode="before")
    @classmethod
    def _parse_optional_times(cls, value):
        return converters.optional_date_time(value)

    @field_validator("submit_content", "grader_name", "grade_content", mode="before")
    @classmethod
    def _drop_empty(cls, value):
        return converters.nonempty(value)

    @property
    def submitted(self) -> bool:
        return self.submit_time is not None

    @property
    def graded(self) -> bool:
        return self.grade_time is not None

    @property
    def url(self) -> str:
        """Detail page of the homework."""

        return urls.homework_detail(self.course_id, self.id, self.student_homework_id)

    @property
    def submit_page(self) -> str:
        """Page with the "submit homework" button."""

        return urls.homework_submit_page(self.course_id, self.student_homework_id)
