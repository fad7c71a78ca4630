"""BeautifulSoup scrapers for the portal pages that have no JSON counterpart."""

from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup, Tag

from ..models.homework_models import Attachment, HomeworkDetail
from .urls import PREFIX

TICKET_PATTERN = re.compile(r'ticket=([^"]*)"')
DOWNLOAD_URL_MARKER = "downloadUrl="


def parse_login_ticket(text: str) -> Optional[str]:
    """Extract the roaming ticket from the login response (``...ticket=XXXX"...``)."""

    match = TICKET_PATTERN.search(text)
    if not match:
        return None
    return match.group(1)


def parse_notification_attachment(html: str) -> Optional[str]:
    """Return the absolute URL of the attachment link on a notification detail page."""

    soup = BeautifulSoup(html, "html.parser")
    link = soup.find("a", class_="ml-10", href=True)
    if not isinstance(link, Tag):
        return None
    return PREFIX + str(link["href"])


def _attachment_from_block(block: Optional[Tag]) -> Optional[Attachment]:
    if block is None:
        return None
    # only the first listed file of a block is exposed
    title = block.select_one(".ftitle")
    if title is None:
        return None
    link = title.find("a", href=True)
    if not isinstance(link, Tag):
        return None
    name = link.get_text(strip=True)
    href = str(link["href"])
    start = href.find(DOWNLOAD_URL_MARKER)
    if not name or start < 0:
        return None
    return Attachment(name=name, url=PREFIX + href[start + len(DOWNLOAD_URL_MARKER):])


def parse_homework_detail(html: str) -> Optional[HomeworkDetail]:
    """
    Parses a homework detail page.

    The page lists the attachment blocks in a fixed order: the homework's own
    attachment, an unused block, the submitted attachment and the grading
    attachment.

    Returns:
        The parsed detail, or ``None`` when the page has no description block.
    """
    soup = BeautifulSoup(html, "html.parser")
    description = soup.select_one("div.list.calendar.clearfix div.fl.right .c55")
    if description is None:
        return None

    blocks = soup.select("div.list.fujian.clearfix")

    def block(index: int) -> Optional[Tag]:
        return blocks[index] if index < len(blocks) else None

    return HomeworkDetail(
        description=description.decode_contents(),
        attachment=_attachment_from_block(block(0)),
        submit_attachment=_attachment_from_block(block(2)),
        grade_attachment=_attachment_from_block(block(3)),
    )
