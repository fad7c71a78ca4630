"""API client for course notifications."""

from __future__ import annotations

import asyncio
import logging
from typing import List

from ..models import Notification
from ..utils import urls
from ..utils.html_parsers import parse_notification_attachment
from ..utils.http_client import HttpClient, ParseError
from .records import parse_records, unwrap


class NotificationAPI:
    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    async def notification_list(self, course: str) -> List[Notification]:
        try:
            data = await self._client.get_json(urls.notification_list(course))
            notifications = parse_records(
                Notification,
                unwrap(data, "object", "aaData", what="notification list"),
                "notification",
            )
            await asyncio.gather(
                *(self._resolve_attachment(course, item) for item in notifications if item.attachment_name)
            )
        except Exception as exc:
            logging.error("Failed to fetch notifications of course %s: %s", course, exc)
            raise
        return notifications

    async def _resolve_attachment(self, course: str, notification: Notification) -> None:
        html = await self._client.get_text(urls.notification_detail(notification.id, course))
        attachment_url = parse_notification_attachment(html)
        if attachment_url is None:
            raise ParseError("invalid notification attachment format")
        notification.attachment_url = attachment_url
