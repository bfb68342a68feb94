"""
Response envelopes and the decoders that turn raw JSON into them.

Discuit bodies carry no type tag: a user lookup answers with either a
User or an error object, a feed with either items or an error object.
Each decoder below tries a fixed list of candidate types in order and
takes the first one whose defining fields are all present and correctly
typed, then validates the whole document against it. A candidate is
never picked just because the others failed.
"""

from typing import Any, ClassVar, Optional, Sequence, Tuple, Type, Union

from pydantic import (
    Field,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from .errors import DecodeError
from .models import Comment, Community, List, Model, Mutes, Post, ReportReason, User

# None means there are no further pages. "" is a real cursor.
Cursor = Optional[Union[StrictStr, StrictInt]]

_CURSOR = TypeAdapter(Cursor)
_STRING_CURSOR = TypeAdapter(Optional[StrictStr])


class APIError(Model):
    """An error reported by the server. Returned as a value, never raised.

    The body looks like::

        {"status": 400, "code": "error_code", "message": "Human readable"}
    """

    REQUIRED: ClassVar[dict[str, type]] = {"status": int, "message": str}

    status: StrictInt
    message: StrictStr
    code: Optional[StrictStr] = None


class InitialResponse(Model):
    """Payload of the /api/_initial handshake."""

    REQUIRED: ClassVar[dict[str, type]] = {
        "reportReasons": list,
        "communities": list,
        "vapidPublicKey": str,
    }

    report_reasons: Tuple[ReportReason, ...]
    communities: Tuple[Community, ...]
    vapid_public_key: StrictStr
    user: Optional[User] = None
    lists: Optional[Tuple[List, ...]] = None
    no_users: StrictInt = 0
    banned_from: Optional[Tuple[Community, ...]] = None
    mutes: Mutes = Field(default_factory=Mutes)


class Feed(Model):
    """A page of a user's feed: posts and comments mixed."""

    REQUIRED: ClassVar[dict[str, type]] = {"feed": list}

    feed: Tuple[Union[Post, Comment], ...]
    next: Cursor = None

    @field_validator("feed", mode="before")
    @classmethod
    def _decode_items(cls, items: Any) -> Any:
        if not isinstance(items, list):
            return items
        return [decode_feed_item(item) for item in items]

    @property
    def has_more(self) -> bool:
        return self.next is not None


class PostFeed(Model):
    """A page of the /api/posts listing."""

    REQUIRED: ClassVar[dict[str, type]] = {"posts": list}

    posts: Tuple[Post, ...]
    next: Optional[StrictStr] = None

    @property
    def has_more(self) -> bool:
        return self.next is not None


UserResponse = Union[User, APIError]
FeedResponse = Union[Feed, APIError]
PostFeedResponse = Union[PostFeed, APIError]


def decode_cursor(value: Any, allow_int: bool = True) -> Cursor:
    """Decode a pagination cursor; JSON null means end of pagination."""
    adapter = _CURSOR if allow_int else _STRING_CURSOR
    try:
        return adapter.validate_python(value)
    except ValidationError as exc:
        raise DecodeError(
            "Cursor", value, f"unexpected cursor type {type(value).__name__}"
        ) from exc


def decode_one(
    data: Any, candidates: Sequence[Type[Model]], target: str
) -> Any:
    """Decode ``data`` as the first candidate whose defining fields match."""
    for candidate in candidates:
        if not candidate.matches(data):
            continue
        try:
            return candidate.model_validate(data)
        except ValidationError as exc:
            raise DecodeError(
                target, data, f"malformed {candidate.__name__}: {exc}"
            ) from exc
    raise DecodeError(target, data, "body matched no expected shape")


def decode_feed_item(data: Any) -> Union[Post, Comment]:
    return decode_one(data, (Post, Comment), "FeedItem")


def decode_initial(data: Any) -> InitialResponse:
    return decode_one(data, (InitialResponse,), "InitialResponse")


def decode_user_response(data: Any) -> UserResponse:
    return decode_one(data, (User, APIError), "UserResponse")


def decode_feed_response(data: Any) -> FeedResponse:
    return decode_one(data, (Feed, APIError), "FeedResponse")


def decode_post_feed_response(data: Any) -> PostFeedResponse:
    return decode_one(data, (PostFeed, APIError), "PostFeedResponse")


def decode_api_error(data: Any) -> APIError:
    return decode_one(data, (APIError,), "APIError")
