"""Shared HTTP helpers for the web-learning portal."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import aiohttp
import requests

from .urls import USER_AGENT

DEFAULT_HEADERS: Dict[str, str] = {
    "user-agent": USER_AGENT,
    "accept": "*/*",
    "accept-language": "zh-CN,zh;q=0.9",
}

CHUNK_SIZE = 1 << 14

# (filename, content)
FileUpload = Tuple[str, bytes]


class LearnError(Exception):
    """Base class for every error reported by thu_learn_helper."""


class NetworkError(LearnError):
    """Raised when a request fails or the portal answers with an unexpected status."""


class RequestTimeoutError(NetworkError):
    """Raised when a request exceeds its timeout."""


class AuthenticationError(LearnError):
    """Raised when the portal rejects the credentials or the session."""


class ParseError(LearnError):
    """Raised when a portal response does not have the expected format."""


class OperationError(LearnError):
    """Raised when the portal refuses a write operation (submit, reply, delete)."""


def _check_status(status: int, url: str) -> None:
    if status in {401, 403}:
        logging.error("Authentication failed (status %s) for %s.", status, url)
        raise AuthenticationError(f"session rejected by the portal (status {status})")
    if status >= 400:
        raise NetworkError(f"unexpected status {status} from {url}")


class HttpClient:
    """Cookie-preserving aiohttp session with retries for idempotent requests."""

    def __init__(
        self,
        timeout: float = 10,
        max_retries: int = 2,
        max_connections: int = 16,
        user_agent: str = USER_AGENT,
    ) -> None:
        self.timeout = timeout
        self.max_retries = max_retries
        self.max_connections = max_connections
        self._headers = DEFAULT_HEADERS.copy()
        self._headers["user-agent"] = user_agent

        self._session: Optional[aiohttp.ClientSession] = None
        self._cookie_jar: Optional[aiohttp.CookieJar] = None
        self._lock: Optional[asyncio.Lock] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def user_agent(self) -> str:
        return self._headers["user-agent"]

    async def get_json(self, url: str) -> Any:
        """GET ``url`` and decode the body as JSON."""

        body = await self._send("GET", url, retries=self.max_retries)
        return self._decode_json(body, url)

    async def get_text(self, url: str) -> str:
        """GET ``url`` and return the body as text."""

        return await self._send("GET", url, retries=self.max_retries)

    async def post(self, url: str, timeout: Optional[float] = None) -> str:
        return await self._send("POST", url, timeout=timeout)

    async def post_form(self, url: str, data: Dict[str, str]) -> str:
        """POST an urlencoded form and return the body as text."""

        return await self._send("POST", url, data=data)

    async def post_multipart(
        self,
        url: str,
        fields: Dict[str, str],
        files: Optional[Dict[str, FileUpload]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """POST a multipart/form-data body and decode the JSON reply."""

        writer = aiohttp.MultipartWriter("form-data")
        for name, value in fields.items():
            part = writer.append(value)
            part.set_content_disposition("form-data", name=name)
        for name, (filename, content) in (files or {}).items():
            part = writer.append(content, {"Content-Type": "application/octet-stream"})
            part.set_content_disposition("form-data", name=name, filename=filename)
        body = await self._send("POST", url, timeout=timeout, data=writer)
        return self._decode_json(body, url)

    async def download(self, url: str, dest_path: str) -> None:
        """Stream the response body of ``url`` into ``dest_path``."""

        session = await self._get_session()
        try:
            async with session.get(url) as resp:
                _check_status(resp.status, url)
                with open(dest_path, "wb") as file_obj:
                    async for chunk in resp.content.iter_chunked(CHUNK_SIZE):
                        if chunk:
                            file_obj.write(chunk)
        except asyncio.TimeoutError as exc:
            logging.error("Download from %s timed out", url)
            raise RequestTimeoutError(f"download from {url} timed out") from exc
        except aiohttp.ClientError as exc:
            logging.error("Download from %s failed: %s", url, exc)
            raise NetworkError(f"download from {url} failed: {exc}") from exc

    def cookies(self) -> List[Dict[str, str]]:
        """Export the session cookies so other HTTP stacks can reuse the login."""

        if self._cookie_jar is None:
            return []
        return [
            {
                "name": morsel.key,
                "value": morsel.value,
                "domain": morsel["domain"],
                "path": morsel["path"] or "/",
            }
            for morsel in self._cookie_jar
        ]

    async def _send(self, method: str, url: str, retries: int = 0, timeout: Optional[float] = None, **kwargs: Any) -> str:
        session = await self._get_session()
        if timeout is not None:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout)

        attempt = 0
        while True:
            attempt += 1
            can_retry = attempt <= retries
            try:
                async with session.request(method, url, **kwargs) as resp:
                    if not (can_retry and resp.status >= 500):
                        _check_status(resp.status, url)
                        return self._decode_text(await resp.read(), resp.get_encoding(), url)
                    problem = f"status {resp.status}"
            except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
                if not can_retry:
                    logging.error("HTTP %s to %s failed: %s", method, url, exc)
                    if isinstance(exc, asyncio.TimeoutError):
                        raise RequestTimeoutError(f"{method} {url} timed out") from exc
                    raise NetworkError(f"{method} {url} failed: {exc}") from exc
                problem = str(exc) or type(exc).__name__
            logging.warning("HTTP %s to %s failed (attempt %s/%s): %s", method, url, attempt, retries + 1, problem)
            await asyncio.sleep(min(0.5 * attempt, 2))

    @staticmethod
    def _decode_text(body: bytes, encoding: str, url: str) -> str:
        try:
            return body.decode(encoding)
        except (UnicodeDecodeError, LookupError) as exc:
            logging.debug("Undecodable %s body from %s: %.200r", encoding, url, body)
            raise ParseError(f"response from {url} is not valid {encoding}") from exc

    @staticmethod
    def _decode_json(body: str, url: str) -> Any:
        try:
            return json.loads(body)
        except ValueError as exc:
            logging.debug("Non-JSON body from %s: %.200s", url, body)
            raise ParseError(f"invalid JSON returned by {url}") from exc

    async def _get_session(self) -> aiohttp.ClientSession:
        current_loop = asyncio.get_running_loop()
        if self._session:
            if self._session.closed or self._loop is not current_loop:
                await self._shutdown_session()

        if self._lock is None or self._loop is not current_loop:
            self._lock = asyncio.Lock()

        async with self._lock:
            if self._session and not self._session.closed:
                return self._session
            if self._cookie_jar is None:
                self._cookie_jar = aiohttp.CookieJar()
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                connector=aiohttp.TCPConnector(limit=self.max_connections),
                cookie_jar=self._cookie_jar,
                headers=self._headers.copy(),
            )
            self._loop = current_loop
        return self._session

    async def _shutdown_session(self) -> None:
        session, loop = self._session, self._loop
        self._session = None
        self._loop = None
        if session is None or session.closed:
            return
        if loop is not None and loop.is_closed():
            logging.debug("Dropping HTTP session bound to a closed event loop")
            return
        await session.close()

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        self._loop = None

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.close()


def download_file_sync(
    url: str,
    dest_path: str,
    cookies: List[Dict[str, str]],
    timeout: float = 10,
    user_agent: str = USER_AGENT,
) -> None:
    """Download ``url`` to disk with requests, reusing cookies exported by :class:`HttpClient`."""

    with requests.Session() as session:
        session.headers.update(DEFAULT_HEADERS)
        session.headers["user-agent"] = user_agent
        for cookie in cookies:
            session.cookies.set(
                cookie["name"],
                cookie["value"],
                domain=cookie.get("domain") or "",
                path=cookie.get("path") or "/",
            )
        try:
            with session.get(url, stream=True, timeout=timeout) as resp:
                _check_status(resp.status_code, url)
                with open(dest_path, "wb") as file_obj:
                    for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            file_obj.write(chunk)
        except requests.Timeout as exc:
            logging.error("Download from %s timed out", url)
            raise RequestTimeoutError(f"download from {url} timed out") from exc
        except requests.RequestException as exc:
            logging.error("Download from %s failed: %s", url, exc)
            raise NetworkError(f"download from {url} failed: {exc}") from exc
