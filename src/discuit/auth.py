"""
Discuit session credentials.

The server issues two cookies, an anti-forgery token (``csrftoken``) and a
session id (``SID``). Both are echoed back on every later call, as the
``X-Csrf-Token`` header and in an explicit ``Cookie`` header.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from .types import CSRF_COOKIE, SESSION_COOKIE, Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginRequest:
    """Body of POST /api/_login."""

    username: str
    password: str

    def to_dict(self) -> dict[str, str]:
        return {"username": self.username, "password": self.password}


def build_auth_headers(session: Session) -> dict[str, str]:
    """Render the session's credentials as request headers."""
    return {
        "X-Csrf-Token": session.csrf_token,
        "Cookie": (
            f"{CSRF_COOKIE}={session.csrf_token}; "
            f"{SESSION_COOKIE}={session.session_id}"
        ),
    }


def extract_tokens(cookies: Mapping[str, str], session: Session) -> Session:
    """Return ``session`` updated with whichever credential cookies were set.

    Values are opaque and stored verbatim. A missing cookie keeps the
    previous value.
    """
    csrf_token: Optional[str] = cookies.get(CSRF_COOKIE)
    session_id: Optional[str] = cookies.get(SESSION_COOKIE)

    if csrf_token is not None:
        logger.debug("CSRF token: %s", mask(csrf_token))
    if session_id is not None:
        logger.debug("Session ID: %s", mask(session_id))

    return session.with_tokens(csrf_token=csrf_token, session_id=session_id)


def mask(token: str) -> str:
    """Shorten a credential for log output."""
    if len(token) <= 8:
        return "*" * len(token)
    return f"{token[:4]}...{token[-4:]}"
