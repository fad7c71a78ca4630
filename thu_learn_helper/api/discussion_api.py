"""API client for the discussion and Q&A boards."""

from __future__ import annotations

import json
import logging
from typing import List, Optional

from ..models import Discussion, Question
from ..utils import urls
from ..utils.http_client import FileUpload, HttpClient, RequestTimeoutError
from .records import ensure_success, parse_records, unwrap

DELETE_REPLY_TIMEOUT = 5


class DiscussionAPI:
    """Lists board threads and posts or deletes replies."""

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    async def discussion_list(self, course: str) -> List[Discussion]:
        try:
            data = await self._client.get_json(urls.discussion_list(course))
            return parse_records(
                Discussion,
                unwrap(data, "object", "resultsList", what="discussion list"),
                "discussion",
            )
        except Exception as exc:
            logging.error("Failed to fetch discussions of course %s: %s", course, exc)
            raise

    async def question_list(self, course: str) -> List[Question]:
        try:
            data = await self._client.get_json(urls.question_list(course))
            return parse_records(
                Question,
                unwrap(data, "object", "resultsList", what="question list"),
                "question",
            )
        except Exception as exc:
            logging.error("Failed to fetch questions of course %s: %s", course, exc)
            raise

    async def reply_discussion(
        self,
        course: str,
        discussion: str,
        content: str,
        respondent_reply: Optional[str] = None,
        file: Optional[FileUpload] = None,
    ) -> None:
        """Reply to a thread, or to one of its replies when ``respondent_reply`` is given."""

        fields = {"wlkcid": course, "tltid": discussion, "nr": content}
        files = None
        if file is None:
            fields["fileupload"] = "undefined"
        else:
            files = {"fileupload": file}
        if respondent_reply is not None:
            fields["fhhid"] = respondent_reply
            fields["_fhhid"] = respondent_reply
        try:
            reply = await self._client.post_multipart(urls.REPLY_DISCUSSION, fields, files)
        except Exception as exc:
            logging.error("Failed to reply to discussion %s: %s", discussion, exc)
            raise
        ensure_success(reply, "failed to reply discussion")

    async def delete_discussion_reply(self, course: str, reply: str) -> None:
        try:
            text = await self._client.post(urls.delete_discussion_reply(course, reply), timeout=DELETE_REPLY_TIMEOUT)
        except RequestTimeoutError:
            # the portal deletes the reply but often never answers
            logging.warning("Deleting reply %s timed out; assuming it was deleted", reply)
            return
        except Exception as exc:
            logging.error("Failed to delete reply %s: %s", reply, exc)
            raise
        ensure_success(_json_or_text(text), "failed to delete discussion reply")


def _json_or_text(text: str):
    try:
        return json.loads(text)
    except ValueError:
        return text
