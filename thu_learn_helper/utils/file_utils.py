"""Filesystem helpers for preparing download folders and safe filenames."""

from __future__ import annotations

import os
import re
from pathlib import Path

INVALID_FILENAME_CHARS = re.compile(r"[\\/:*?\"<>|\r\n\t]")


def sanitize_filename(value: str, default: str = "file") -> str:
    """Removes characters that are invalid on most filesystems."""

    sanitized = INVALID_FILENAME_CHARS.sub("", value or "").strip().rstrip(".")
    return sanitized or default


def ensure_directory(path: str) -> str:
    """Creates a directory (and its parents) if needed."""

    Path(path).mkdir(parents=True, exist_ok=True)
    return path


def build_course_directory(base_output: str, semester: str, course_name: str) -> str:
    """Returns the folder where the files of one course are stored."""

    semester_folder = os.path.join(base_output, sanitize_filename(semester, default="semester"))
    course_folder = os.path.join(semester_folder, sanitize_filename(course_name, default="course"))
    return ensure_directory(course_folder)
