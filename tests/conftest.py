"""
Shared fixtures for discuit test suite.
"""

from unittest.mock import MagicMock

import pytest
from requests.cookies import cookiejar_from_dict

from discuit.client import DiscuitClient
from discuit.models import User

BASE_URL = "https://discuit.test"


# ── Token fixtures ───────────────────────────────────────────

@pytest.fixture
def csrf_token():
    return "csrf-4f1c9a7e2b"


@pytest.fixture
def session_id():
    return "sid-8d2e6b0a93"


# ── Payload fixtures ─────────────────────────────────────────

@pytest.fixture
def user_payload():
    """User object as returned by /api/_user and /api/users/{name}."""
    return {
        "id": "16d2e3a0b1c5e8f0a1b2c3d4",
        "username": "testuser",
        "email": None,
        "emailConfirmedAt": None,
        "aboutMe": "Hello there.",
        "points": 42,
        "isAdmin": False,
        "proPic": None,
        "badges": [{"id": 1, "badgeTitle": "supporter"}],
        "noPosts": 3,
        "noComments": 10,
        "createdAt": "2024-03-01T10:00:00Z",
        "isDeleted": False,
        "deletedAt": None,
        "upvoteNotificationsOff": False,
        "replyNotificationsOff": False,
        "homeFeed": "all",
        "rememberFeedSort": False,
        "embedsOff": False,
        "hideUserProfilePictures": False,
        "bannedAt": None,
        "isBanned": False,
        "notificationsNewCount": 0,
        "moddingList": None,
    }


@pytest.fixture
def user(user_payload):
    return User.model_validate(user_payload)


@pytest.fixture
def community_payload():
    return {
        "id": "17a0c0ffee0000000000abcd",
        "userId": "16d2e3a0b1c5e8f0a1b2c3d4",
        "name": "general",
        "nsfw": False,
        "about": "Anything goes.",
        "noMembers": 1200,
        "proPic": None,
        "bannerImage": None,
        "createdAt": "2023-07-12T08:30:00.123456789Z",
        "deletedAt": None,
        "isDefault": True,
        "userJoined": None,
        "userMod": None,
        "mods": [],
        "rules": [],
        "reportsDetails": None,
    }


@pytest.fixture
def post_payload(user_payload, community_payload):
    return {
        "id": "17b1d2e3f4a5b6c7d8e9f0a1",
        "type": "text",
        "publicId": "aB3dEf9h",
        "userId": user_payload["id"],
        "username": "testuser",
        "communityId": community_payload["id"],
        "communityName": "general",
        "title": "First post",
        "body": "Post body",
        "locked": False,
        "upvotes": 5,
        "downvotes": 1,
        "hotness": 1234,
        "noComments": 2,
        "createdAt": "2024-03-02T12:00:00Z",
        "editedAt": None,
        "lastActivityAt": "2024-03-02T13:00:00Z",
        "deleted": False,
        "author": user_payload,
        "community": community_payload,
    }


@pytest.fixture
def comment_payload(user_payload):
    return {
        "id": "17c2e3f4a5b6c7d8e9f0a1b2",
        "postId": "17b1d2e3f4a5b6c7d8e9f0a1",
        "postPublicId": "aB3dEf9h",
        "communityId": "17a0c0ffee0000000000abcd",
        "communityName": "general",
        "userId": user_payload["id"],
        "username": "testuser",
        "parentId": None,
        "depth": 0,
        "noReplies": 0,
        "body": "Nice post",
        "upvotes": 1,
        "downvotes": 0,
        "createdAt": "2024-03-02T12:30:00Z",
        "editedAt": None,
        "deletedAt": None,
        "author": user_payload,
    }


@pytest.fixture
def initial_payload(community_payload):
    """Response from /api/_initial for an anonymous visitor."""
    return {
        "reportReasons": [
            {"id": 1, "title": "Spam", "description": None},
            {"id": 2, "title": "Harassment", "description": "Targeted abuse."},
        ],
        "user": None,
        "lists": None,
        "communities": [community_payload],
        "noUsers": 5000,
        "bannedFrom": None,
        "vapidPublicKey": "BPk-vapid-public-key",
        "mutes": {"communityMutes": [], "userMutes": []},
    }


@pytest.fixture
def not_found_payload():
    return {"status": 404, "code": "user_not_found", "message": "User not found."}


@pytest.fixture
def bad_credentials_payload():
    return {
        "status": 401,
        "code": "invalid_credentials",
        "message": "Username and password do not match.",
    }


# ── Mock transport ───────────────────────────────────────────

@pytest.fixture
def make_response():
    """Build a fake requests.Response."""

    def _make(body=None, status=200, cookies=None, text=None):
        resp = MagicMock()
        resp.status_code = status
        resp.cookies = cookiejar_from_dict(cookies or {})
        if isinstance(body, Exception):
            resp.json.side_effect = body
        else:
            resp.json.return_value = body
        resp.text = text if text is not None else ""
        return resp

    return _make


@pytest.fixture
def http():
    """Stand-in for requests.Session."""
    return MagicMock()


@pytest.fixture
def client(http):
    return DiscuitClient(BASE_URL + "/", http=http)


@pytest.fixture
def logged_in_client(client, http, make_response, user_payload, csrf_token, session_id):
    http.request.return_value = make_response(
        user_payload, cookies={"csrftoken": csrf_token, "SID": session_id}
    )
    client.login("testuser", "hunter2")
    http.request.reset_mock()
    return client
