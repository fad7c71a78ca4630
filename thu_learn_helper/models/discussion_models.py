"""Models for the discussion and Q&A boards of a course."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils import converters, urls


class Discussion(BaseModel):
    """A thread on the discussion board.

    The publisher's own post counts as the first reply of the thread.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    course_id: Optional[str] = Field(default=None, alias="wlkcid")
    board_id: str = Field(alias="bqid")
    title: str = Field(alias="bt")
    publisher_name: str = Field(alias="fbrxm")
    publish_time: datetime = Field(alias="fbsj")
    last_replier_name: Optional[str] = Field(default=None, alias="zhhfrxm")
    last_reply_time: Optional[datetime] = Field(default=None, alias="zhhfsj")
    visit_count: int = Field(alias="djs")
    reply_count: int = Field(alias="hfcs")

    @field_validator("publish_time", mode="before")
    @classmethod
    def _parse_publish_time(cls, value):
        return converters.parse_date_time_seconds(value)

    @field_validator("last_reply_time", mode="before")
    @classmethod
    def _parse_last_reply_time(cls, value):
        return converters.optional_date_time_seconds(value)

    @field_validator("last_replier_name", mode="before")
    @classmethod
    def _drop_empty(cls, value):
        return converters.nonempty(value)

    @property
    def url(self) -> Optional[str]:
        if not self.course_id:
            return None
        return urls.discussion_page(self.course_id, self.id, self.board_id)


class Question(Discussion):
    """A thread on the Q&A board; same layout as a discussion."""
