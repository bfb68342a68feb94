"""
Value objects returned by the Discuit API.

Every type is a frozen pydantic model read from the server's camelCase
JSON. ``REQUIRED`` lists the fields (and their JSON types) a document
must carry to count as that type at all; the full field types are then
enforced by validation.
"""

import re
from typing import Annotated, Any, ClassVar, Optional, Tuple

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
)
from pydantic.alias_generators import to_camel
from pydantic.functional_validators import BeforeValidator

_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")


def is_kind(value: Any, kind: type) -> bool:
    """isinstance() for JSON values, where booleans are not numbers."""
    if kind is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, kind)


def _trim_fraction(value: Any) -> Any:
    # The server sends nanoseconds; datetime stops at microseconds.
    if isinstance(value, str):
        return _EXCESS_FRACTION.sub(r"\1", value, count=1)
    return value


Timestamp = Annotated[AwareDatetime, BeforeValidator(_trim_fraction)]


class Model(BaseModel):
    """Shared config and behavior for the API value objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    REQUIRED: ClassVar[dict[str, type]] = {}

    @classmethod
    def matches(cls, data: Any) -> bool:
        """True when every defining field is present with the right JSON type."""
        if not isinstance(data, dict):
            return False
        return all(
            key in data and is_kind(data[key], kind)
            for key, kind in cls.REQUIRED.items()
        )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class Badge(Model):
    REQUIRED: ClassVar[dict[str, type]] = {"id": int}

    id: StrictInt
    badge_type: StrictStr = Field("", alias="badgeTitle")


class ImageCopy(Model):
    name: Optional[StrictStr] = None
    width: StrictInt = 0
    height: StrictInt = 0
    box_width: StrictInt = 0
    box_height: StrictInt = 0
    object_fit: StrictStr = ""
    format: StrictStr = ""
    url: StrictStr = ""


class Image(Model):
    REQUIRED: ClassVar[dict[str, type]] = {"id": str}

    id: StrictStr
    format: StrictStr = ""
    mimetype: StrictStr = ""
    width: StrictInt = 0
    height: StrictInt = 0
    size: StrictInt = 0
    average_color: StrictStr = ""
    url: StrictStr = ""
    copies: Tuple[ImageCopy, ...] = ()


class ReportReason(Model):
    REQUIRED: ClassVar[dict[str, type]] = {"id": int, "title": str}

    id: StrictInt
    title: StrictStr
    description: Optional[StrictStr] = None


class ReportDetails(Model):
    no_reports: StrictInt = 0
    no_post_reports: StrictInt = 0
    no_comment_reports: StrictInt = 0


class CommunityRule(Model):
    REQUIRED: ClassVar[dict[str, type]] = {"id": int, "rule": str}

    id: StrictInt
    rule: StrictStr
    description: Optional[StrictStr] = None
    community_id: StrictStr = ""
    z_index: StrictInt = 0
    created_by: StrictStr = ""
    created_at: Optional[Timestamp] = None


class User(Model):
    REQUIRED: ClassVar[dict[str, type]] = {"id": str, "username": str}

    id: StrictStr
    username: StrictStr
    email: Optional[StrictStr] = None
    email_confirmed_at: Optional[Timestamp] = None
    about_me: Optional[StrictStr] = None
    points: StrictInt = 0
    is_admin: StrictBool = False
    pro_pic: Optional[Image] = None
    badges: Tuple[Badge, ...] = ()
    no_posts: StrictInt = 0
    no_comments: StrictInt = 0
    created_at: Optional[Timestamp] = None
    deleted: StrictBool = Field(False, alias="isDeleted")
    deleted_at: Optional[Timestamp] = None
    upvote_notifications_off: StrictBool = False
    reply_notifications_off: StrictBool = False
    home_feed: StrictStr = ""
    remember_feed_sort: StrictBool = False
    embeds_off: StrictBool = False
    hide_user_profile_pictures: StrictBool = False
    banned_at: Optional[Timestamp] = None
    is_banned: StrictBool = False
    notifications_new_count: StrictInt = 0
    modding_list: Optional[Tuple["Community", ...]] = None


class Community(Model):
    REQUIRED: ClassVar[dict[str, type]] = {"id": str, "name": str}

    id: StrictStr
    name: StrictStr
    user_id: StrictStr = ""
    nsfw: StrictBool = False
    about: Optional[StrictStr] = None
    no_members: StrictInt = 0
    pro_pic: Optional[Image] = None
    banner_image: Optional[Image] = None
    created_at: Optional[Timestamp] = None
    deleted_at: Optional[Timestamp] = None
    is_default: Optional[StrictBool] = None
    user_joined: Optional[StrictBool] = None
    user_mod: Optional[StrictBool] = None
    mods: Optional[Tuple[User, ...]] = None
    rules: Optional[Tuple[CommunityRule, ...]] = None
    report_details: Optional[ReportDetails] = Field(None, alias="reportsDetails")


User.model_rebuild()


class Mute(Model):
    REQUIRED: ClassVar[dict[str, type]] = {"id": str, "type": str}

    id: StrictStr
    mute_type: StrictStr = Field(alias="type")
    muted_user_id: Optional[StrictStr] = None
    muted_community_id: Optional[StrictStr] = None
    created_at: Optional[Timestamp] = None
    muted_user: Optional[User] = None
    muted_community: Optional[Community] = None


class Mutes(Model):
    community_mutes: Optional[Tuple[Mute, ...]] = None
    user_mutes: Optional[Tuple[Mute, ...]] = None


class List(Model):
    """A user-curated list of posts and comments."""

    REQUIRED: ClassVar[dict[str, type]] = {"id": str, "name": str}

    id: StrictStr
    name: StrictStr
    user_id: StrictStr = ""
    username: StrictStr = ""
    display_name: StrictStr = ""
    description: Optional[StrictStr] = None
    public: StrictBool = False
    num_items: StrictInt = 0
    sort: StrictStr = ""
    created_at: Optional[Timestamp] = None
    last_updated_at: Optional[Timestamp] = None


class Post(Model):
    REQUIRED: ClassVar[dict[str, type]] = {
        "id": str,
        "publicId": str,
        "title": str,
    }

    id: StrictStr
    public_id: StrictStr
    title: StrictStr
    post_type: StrictStr = Field("text", alias="type")
    user_id: StrictStr = ""
    username: StrictStr = ""
    community_id: StrictStr = ""
    community_name: StrictStr = ""
    body: Optional[StrictStr] = None
    link: Optional[dict] = None
    image: Optional[Image] = None
    locked: StrictBool = False
    upvotes: StrictInt = 0
    downvotes: StrictInt = 0
    hotness: StrictInt = 0
    no_comments: StrictInt = 0
    user_voted: Optional[StrictBool] = None
    user_voted_up: Optional[StrictBool] = None
    created_at: Optional[Timestamp] = None
    edited_at: Optional[Timestamp] = None
    last_activity_at: Optional[Timestamp] = None
    deleted: StrictBool = False
    deleted_at: Optional[Timestamp] = None
    author: Optional[User] = None
    community: Optional[Community] = None


class Comment(Model):
    REQUIRED: ClassVar[dict[str, type]] = {
        "id": str,
        "postId": str,
        "depth": int,
    }

    id: StrictStr
    post_id: StrictStr
    depth: StrictInt
    post_public_id: StrictStr = ""
    community_id: StrictStr = ""
    community_name: StrictStr = ""
    user_id: StrictStr = ""
    username: StrictStr = ""
    parent_id: Optional[StrictStr] = None
    no_replies: StrictInt = 0
    body: StrictStr = ""
    upvotes: StrictInt = 0
    downvotes: StrictInt = 0
    user_voted: Optional[StrictBool] = None
    user_voted_up: Optional[StrictBool] = None
    created_at: Optional[Timestamp] = None
    edited_at: Optional[Timestamp] = None
    deleted_at: Optional[Timestamp] = None
    author: Optional[User] = None
