"""Authentication against the university identity server."""

from __future__ import annotations

import logging

from ..utils import urls
from ..utils.html_parsers import parse_login_ticket
from ..utils.http_client import AuthenticationError, HttpClient


class AuthAPI:
    """Encapsulates the ticket based login and the logout."""

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    async def login(self, username: str, password: str) -> None:
        form = {"i_user": username, "i_pass": password, "atOnce": "true"}
        try:
            text = await self._client.post_form(urls.LOGIN, form)
            ticket = parse_login_ticket(text)
            if not ticket:
                raise AuthenticationError("failed to login")
            # roaming with the ticket sets the learn.tsinghua.edu.cn session cookies
            await self._client.post(urls.auth_roam(ticket))
        except AuthenticationError:
            logging.error("Login rejected for %s", username)
            raise
        except Exception as exc:
            logging.error("Login request failed: %s", exc)
            raise
        logging.info("Logged in as %s", username)

    async def logout(self) -> None:
        try:
            await self._client.post(urls.LOGOUT)
        except Exception as exc:
            logging.error("Logout failed: %s", exc)
            raise
        logging.info("Logged out")
