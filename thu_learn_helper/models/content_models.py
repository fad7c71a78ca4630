"""Models for course notifications and course files."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils import converters, urls
from ..utils.file_utils import sanitize_filename


class Notification(BaseModel):
    """A notification posted to a course board."""

    model_config = ConfigDict(populate_by_name=True)

    course_id: str = Field(alias="wlkcid")
    id: str = Field(alias="ggid")
    title: str = Field(alias="bt")
    content: str = Field(default="", alias="ggnr")
    read: bool = Field(alias="sfyd")
    important: bool = Field(alias="sfqd")
    publish_time: datetime = Field(alias="fbsjStr")
    publisher: str = Field(alias="fbrxm")
    attachment_name: Optional[str] = Field(default=None, alias="fjmc")
    # resolved from the detail page when attachment_name is set
    attachment_url: Optional[str] = None

    @field_validator("content", mode="before")
    @classmethod
    def _decode_content(cls, value):
        return converters.decode_base64(value)

    @field_validator("read", mode="before")
    @classmethod
    def _parse_read(cls, value):
        return converters.yes_to_bool(value)

    @field_validator("important", mode="before")
    @classmethod
    def _parse_important(cls, value):
        return converters.one_to_bool(value)

    @field_validator("publish_time", mode="before")
    @classmethod
    def _parse_publish_time(cls, value):
        return converters.parse_date_time(value)

    @property
    def url(self) -> str:
        return urls.notification_detail(self.id, self.course_id)


class File(BaseModel):
    """A file the teacher uploaded to a course."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="wjid")
    title: str = Field(alias="bt")
    description: str = Field(default="", alias="ms")
    raw_size: int = Field(alias="wjdx")
    size: str = Field(alias="fileSize")
    upload_time: datetime = Field(alias="scsj")
    new: bool = Field(alias="isNew")
    important: bool = Field(alias="sfqd")
    visit_count: int = Field(alias="llcs")
    download_count: int = Field(alias="xzcs")
    file_type: str = Field(alias="wjlx")

    @field_validator("upload_time", mode="before")
    @classmethod
    def _parse_upload_time(cls, value):
        return converters.parse_date_time(value)

    @field_validator("new", "important", mode="before")
    @classmethod
    def _parse_flags(cls, value):
        return converters.int_to_bool(value)

    @field_validator("description", mode="before")
    @classmethod
    def _default_description(cls, value):
        return value or ""

    @property
    def download_url(self) -> str:
        """URL that starts the download; it needs the logged-in session cookies."""

        return urls.file_download(self.id)

    @property
    def filename(self) -> str:
        name = sanitize_filename(self.title, default=self.id)
        if self.file_type and not name.lower().endswith(f".{self.file_type.lower()}"):
            name = f"{name}.{self.file_type}"
        return name

    @property
    def filename_with_id(self) -> str:
        """Like ``filename`` but carrying the file id, for titles shared by several files."""

        stem, dot, extension = self.filename.rpartition(".")
        if not dot or not self.file_type:
            return f"{self.filename} ({self.id})"
        return f"{stem} ({self.id}).{extension}"
