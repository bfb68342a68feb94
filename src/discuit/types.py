"""
Shared types and configuration for the Discuit client.
"""

from dataclasses import dataclass, replace
from typing import Optional

from .models import User

DEFAULT_BASE_URL = "https://discuit.net"

USER_AGENT = "DiscuitClient"

DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "application/json, text/plain, */*",
}

CSRF_COOKIE = "csrftoken"
SESSION_COOKIE = "SID"

DEFAULT_SORT = "hot"

SORT_OPTIONS = ("hot", "activity", "new", "day", "week", "month", "year", "all")


@dataclass(frozen=True)
class Session:
    """Credentials issued by the server, plus the user they belong to."""

    csrf_token: str = ""
    session_id: str = ""
    authenticated_user: Optional[User] = None

    def with_tokens(
        self, csrf_token: Optional[str] = None, session_id: Optional[str] = None
    ) -> "Session":
        return replace(
            self,
            csrf_token=self.csrf_token if csrf_token is None else csrf_token,
            session_id=self.session_id if session_id is None else session_id,
        )

    def with_user(self, user: Optional[User]) -> "Session":
        return replace(self, authenticated_user=user)

    def to_dict(self) -> dict[str, object]:
        return {
            "csrf_token": self.csrf_token,
            "session_id": self.session_id,
            "authenticated_user": (
                self.authenticated_user.to_dict()
                if self.authenticated_user
                else None
            ),
        }
