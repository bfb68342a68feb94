"""
discuit — typed client for the Discuit social platform API.
"""

from .client import DiscuitClient
from .errors import DecodeError, DiscuitError, TransportError
from .models import Comment, Community, Post, User
from .responses import APIError, Feed, InitialResponse, PostFeed
from .types import Session

__all__ = [
    "APIError",
    "Comment",
    "Community",
    "DecodeError",
    "DiscuitClient",
    "DiscuitError",
    "Feed",
    "InitialResponse",
    "Post",
    "PostFeed",
    "Session",
    "TransportError",
    "User",
]
__version__ = "0.1.0"
