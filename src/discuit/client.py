"""
Discuit API Client
Handshake, login/logout, users, feeds and posts.

A client holds one HTTP session and one set of credentials. It is not
safe to share between threads: run one call at a time per client, or
use one client per logical session.
"""

import argparse
import json
import logging
import os
import sys
import urllib.parse
from typing import Any, Callable, Optional

import requests

from .auth import LoginRequest, build_auth_headers, extract_tokens
from .errors import DecodeError, DiscuitError, TransportError
from .models import User
from .responses import (
    APIError,
    Cursor,
    FeedResponse,
    InitialResponse,
    PostFeedResponse,
    UserResponse,
    decode_api_error,
    decode_feed_response,
    decode_initial,
    decode_post_feed_response,
    decode_user_response,
)
from .types import (
    DEFAULT_BASE_URL,
    DEFAULT_HEADERS,
    DEFAULT_SORT,
    SORT_OPTIONS,
    Session,
)

logger = logging.getLogger(__name__)

Observer = Callable[[str, dict], None]


def _is_success(resp: requests.Response) -> bool:
    return 200 <= resp.status_code < 300


def _require_username(username: str) -> str:
    if not username:
        raise ValueError("username must not be empty")
    return urllib.parse.quote(username, safe="")


class DiscuitClient:
    """Discuit API client carrying CSRF and session cookies across calls."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        http: Optional[requests.Session] = None,
        observer: Optional[Observer] = None,
    ):
        self._base_url = base_url.rstrip("/")
        if http is None:
            http = requests.Session()
            http.headers.update(DEFAULT_HEADERS)
        self._http = http
        self._session = Session()
        self._observer = observer

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def session(self) -> Session:
        return self._session

    @property
    def csrf_token(self) -> str:
        return self._session.csrf_token

    @property
    def session_id(self) -> str:
        return self._session.session_id

    @property
    def user(self) -> Optional[User]:
        return self._session.authenticated_user

    @property
    def is_authenticated(self) -> bool:
        return self._session.authenticated_user is not None

    def _notify(self, event: str, **payload: Any) -> None:
        if self._observer is not None:
            self._observer(event, payload)

    def _transition(self, name: str, session: Session) -> None:
        self._session = session
        logger.info("Client %s.", name)
        self._notify("state", transition=name)

    def _request(
        self, method: str, path: str, auth: bool = True, **kwargs
    ) -> requests.Response:
        url = f"{self._base_url}{path}"
        headers = build_auth_headers(self._session) if auth else {}

        logger.info("%s %s", method, url)
        self._notify("request", method=method, url=url)
        try:
            resp = self._http.request(method, url, headers=headers, **kwargs)
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise TransportError(method, url, str(exc)) from exc

        logger.debug("%s %s -> HTTP %s", method, url, resp.status_code)
        self._notify("response", method=method, url=url, status=resp.status_code)
        return resp

    def _json(self, resp: requests.Response, target: str) -> Any:
        try:
            data = resp.json()
        except ValueError as exc:
            raise DecodeError(target, resp.text, "body is not JSON") from exc
        logger.debug("Response body: %s", data)
        return data

    def _decode(
        self,
        resp: requests.Response,
        decoder,
        target: str,
        check_status: bool = True,
    ):
        data = self._json(resp, target)
        if check_status and not _is_success(resp):
            decoder = decode_api_error
        try:
            return decoder(data)
        except DecodeError as exc:
            raise DecodeError(target, resp.text, str(exc)) from exc

    # ── Session lifecycle ─────────────────────────────────

    def reset(self) -> None:
        """Forget the CSRF token, session id and authenticated user.

        Cookies held by the HTTP session are dropped too, so the next
        handshake starts clean.
        """
        logger.info("Resetting client ...")
        self._http.cookies.clear()
        self._transition("reset", Session())

    def initialize(self) -> InitialResponse:
        """Fetch a CSRF token and session id from the handshake endpoint."""
        logger.info("Initializing client ...")
        resp = self._request("GET", "/api/_initial", auth=False)

        self._session = extract_tokens(resp.cookies, self._session)
        initial = self._decode(
            resp, decode_initial, "InitialResponse", check_status=False
        )

        session = self._session
        if initial.user is not None and session.session_id:
            session = session.with_user(initial.user)
        self._transition("initialized", session)
        return initial

    def login(self, username: str, password: str) -> UserResponse:
        """Log in. A rejected login leaves any existing session untouched."""
        _require_username(username)
        body = LoginRequest(username=username, password=password).to_dict()
        resp = self._request("POST", "/api/_login", json=body)

        result = self._decode(resp, decode_user_response, "UserResponse")
        if isinstance(result, APIError):
            logger.warning("Login as %s rejected: %s", username, result.message)
            return result

        session = extract_tokens(resp.cookies, self._session).with_user(result)
        self._transition("logged in", session)
        return result

    def logout(self) -> None:
        """Log out on the server, then clear local state.

        Without an authenticated user this is a no-op and no request is
        made. Once the exchange completes, its status is not checked.
        """
        if self._session.authenticated_user is None:
            logger.debug("Not logged in, nothing to do.")
            return

        try:
            resp = self._request(
                "POST", "/api/_login", params={"action": "logout"}
            )
            if not _is_success(resp):
                logger.warning("Logout returned HTTP %s", resp.status_code)
        finally:
            self.reset()

    # ── Users ─────────────────────────────────────────────

    def get_current_user(self) -> UserResponse:
        resp = self._request("GET", "/api/_user")
        return self._decode(resp, decode_user_response, "UserResponse")

    def get_user_by_username(self, username: str) -> UserResponse:
        path = f"/api/users/{_require_username(username)}"
        resp = self._request("GET", path)
        return self._decode(resp, decode_user_response, "UserResponse")

    # ── Feeds ─────────────────────────────────────────────

    def get_user_feed(self, username: str, next: Cursor = None) -> FeedResponse:
        path = f"/api/users/{_require_username(username)}/feed"
        params = {} if next is None else {"next": next}
        resp = self._request("GET", path, params=params)
        return self._decode(resp, decode_feed_response, "FeedResponse")

    # ── Posts ─────────────────────────────────────────────

    def get_posts(
        self,
        sort: Optional[str] = None,
        community: Optional[str] = None,
        next: Optional[str] = None,
    ) -> PostFeedResponse:
        """List posts, sorted ``hot`` unless told otherwise."""
        if sort is None:
            sort = DEFAULT_SORT
        if sort not in SORT_OPTIONS:
            raise ValueError(
                f"sort must be one of {', '.join(SORT_OPTIONS)}, got {sort!r}"
            )

        params: dict[str, object] = {"sort": sort}
        if community:
            params["community"] = community
        if next is not None:
            params["next"] = next

        resp = self._request("GET", "/api/posts", params=params)
        return self._decode(resp, decode_post_feed_response, "PostFeedResponse")


# ── CLI ───────────────────────────────────────────────────


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Discuit API client")
    parser.add_argument(
        "--base-url", default=os.environ.get("DISCUIT_BASE_URL", DEFAULT_BASE_URL)
    )
    parser.add_argument("--username", default=os.environ.get("DISCUIT_USERNAME"))
    parser.add_argument("--password", default=os.environ.get("DISCUIT_PASSWORD"))
    parser.add_argument("--verbose", "-v", action="store_true")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("initial")
    sub.add_parser("me")

    p = sub.add_parser("user")
    p.add_argument("name")

    p = sub.add_parser("feed")
    p.add_argument("name")
    p.add_argument("--next")

    p = sub.add_parser("posts")
    p.add_argument("--sort", choices=SORT_OPTIONS, default=DEFAULT_SORT)
    p.add_argument("--community")
    p.add_argument("--next")

    return parser


_DISPATCH = {
    "initial": lambda c, a, initial: initial,
    "me": lambda c, a, _: c.get_current_user(),
    "user": lambda c, a, _: c.get_user_by_username(a.name),
    "feed": lambda c, a, _: c.get_user_feed(a.name, a.next),
    "posts": lambda c, a, _: c.get_posts(a.sort, a.community, a.next),
}


def main() -> None:
    """CLI entry point for API operations."""
    args = _build_parser().parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    handler = _DISPATCH.get(args.command)
    if not handler:
        print("Unknown command", file=sys.stderr)
        sys.exit(1)

    client = DiscuitClient(args.base_url)
    try:
        initial = client.initialize()
        if args.username:
            login = client.login(args.username, args.password or "")
            if isinstance(login, APIError):
                json.dump(login.to_dict(), sys.stderr)
                print(file=sys.stderr)
                sys.exit(1)
        result = handler(client, args, initial)
        json.dump(result.to_dict(), sys.stdout, ensure_ascii=False, indent=2)
        print()
        if isinstance(result, APIError):
            sys.exit(1)
    except DiscuitError as exc:
        print(json.dumps(exc.to_dict(), default=str), file=sys.stderr)
        sys.exit(1)
    finally:
        if client.is_authenticated:
            client.logout()
