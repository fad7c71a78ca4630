"""Simple JSON-backed manifest to skip already downloaded course files."""

from __future__ import annotations

import json
import logging
import os
from typing import Dict

MANIFEST_NAME = ".download_manifest.json"


class DownloadManifest:
    def __init__(self, path: str) -> None:
        self.path = path
        self._data: Dict[str, str] = {}
        self.load()

    @classmethod
    def for_directory(cls, directory: str) -> "DownloadManifest":
        return cls(os.path.join(directory, MANIFEST_NAME))

    def load(self) -> None:
        if not os.path.exists(self.path):
            self._data = {}
            return
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                payload = json.load(handle)
            self._data = payload.get("files", {})
        except (json.JSONDecodeError, OSError) as exc:
            logging.warning("Ignoring unreadable manifest %s: %s", self.path, exc)
            self._data = {}

    def save(self) -> None:
        os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as handle:
            json.dump({"files": self._data}, handle, ensure_ascii=False, indent=2)

    def is_downloaded(self, file_id: str) -> bool:
        saved_path = self._data.get(file_id)
        return bool(saved_path) and os.path.exists(saved_path)

    def mark_downloaded(self, file_id: str, path: str) -> None:
        self._data[file_id] = path
        self.save()
