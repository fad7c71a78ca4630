"""API client for listing and downloading course files."""

from __future__ import annotations

import logging
import os
from typing import List, Optional

from ..models import File
from ..utils import urls
from ..utils.file_utils import ensure_directory
from ..utils.http_client import HttpClient
from .records import parse_records, unwrap


class FileAPI:
    """Lists the files of a course and streams them to disk."""

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    async def file_list(self, course: str) -> List[File]:
        try:
            data = await self._client.get_json(urls.file_list(course))
            return parse_records(File, unwrap(data, "object", what="file list"), "file")
        except Exception as exc:
            logging.error("Failed to fetch files of course %s: %s", course, exc)
            raise

    async def download(self, file: File, dest_dir: str, filename: Optional[str] = None) -> str:
        """Download ``file`` into ``dest_dir`` and return the written path.

        ``filename`` defaults to ``file.filename``.
        """

        ensure_directory(dest_dir)
        dest_path = os.path.join(dest_dir, filename or file.filename)
        try:
            await self._client.download(file.download_url, dest_path)
        except Exception:
            if os.path.exists(dest_path):
                os.remove(dest_path)
            raise
        logging.info("Saved %s to %s", file.title, dest_path)
        return dest_path
