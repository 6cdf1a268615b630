"""
Forum engine configuration.

`ForumConfig` is built once at startup and handed to the engine; it is
frozen afterwards.
"""
import enum
import hashlib
import re
from typing import Any, Awaitable, Callable, Mapping, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict


class MessageboardsOrder(str, enum.Enum):
    """How messageboards are listed."""
    POSITION = "position"                    # manual, new boards at the bottom
    LAST_POST_AT_DESC = "last_post_at_desc"  # most recent post first
    TOPICS_COUNT_DESC = "topics_count_desc"  # most topics first


def underscore(name: str) -> str:
    """`ForumUser` -> `forum_user`."""
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name).lower()


def default_user_path(user: Any, main_app: Mapping[str, Callable[..., str]]) -> str:
    """
    Link to a user's profile in the host application.

    Uses the host's `<user class>_path` helper when it exists, else `/users/<id>`.
    """
    helper = f"{underscore(type(user).__name__)}_path"
    if helper in main_app:
        return main_app[helper](user)
    return f"/users/{user.id}"


def gravatar_url(email: Optional[str], size: int = 128, default: str = "mm") -> str:
    digest = hashlib.md5((email or "").strip().lower().encode("utf-8")).hexdigest()
    return f"https://www.gravatar.com/avatar/{digest}?{urlencode({'s': size, 'd': default})}"


def default_avatar_url(user: Any) -> str:
    return gravatar_url(getattr(user, "email", None), 128, "mm")


class ForumConfig(BaseModel):
    """
    Settings the forum engine reads while serving requests.

    `current_user` is an async callable taking the request and returning the
    signed-in user or None.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    # Users
    user_class: type
    user_name_column: str = "username"
    user_display_name_method: Optional[str] = None
    user_path: Callable[[Any, Mapping[str, Callable[..., str]]], str] = default_user_path
    current_user: Callable[[Any], Awaitable[Any]]
    avatar_url: Callable[[Any], str] = default_avatar_url

    # Permissions
    moderator_column: str = "admin"
    admin_column: str = "admin"
    content_visible_while_pending_moderation: bool = True
    show_topic_followers: bool = False

    # Ordering and views
    messageboards_order: MessageboardsOrder = MessageboardsOrder.POSITION
    layout: str = "application"
