"""Utility helpers for HTTP, HTML scraping and filesystem operations."""

from .file_utils import build_course_directory, ensure_directory, sanitize_filename
from .http_client import (
    AuthenticationError,
    HttpClient,
    LearnError,
    NetworkError,
    OperationError,
    ParseError,
    RequestTimeoutError,
)

__all__ = [
    "HttpClient",
    "LearnError",
    "NetworkError",
    "RequestTimeoutError",
    "AuthenticationError",
    "ParseError",
    "OperationError",
    "ensure_directory",
    "sanitize_filename",
    "build_course_directory",
]
