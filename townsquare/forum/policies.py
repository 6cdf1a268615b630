"""
Forum behaviour driven by `ForumConfig`: permissions, visibility and @mentions.
"""
import enum
import re
from typing import Any

from townsquare.forum.config import ForumConfig


class ModerationState(str, enum.Enum):
    PENDING_MODERATION = "pending_moderation"
    APPROVED = "approved"
    BLOCKED = "blocked"


def is_moderator(user: Any, config: ForumConfig) -> bool:
    if user is None:
        return False
    return bool(getattr(user, config.moderator_column, False))


def is_admin(user: Any, config: ForumConfig) -> bool:
    if user is None:
        return False
    return bool(getattr(user, config.admin_column, False))


def display_name(user: Any, config: ForumConfig) -> str:
    value = getattr(user, config.user_display_name_method or config.user_name_column)
    if callable(value):
        value = value()
    return str(value)


def initial_moderation_state(author: Any, config: ForumConfig) -> ModerationState:
    """Moderators post pre-approved; everyone else starts in the queue."""
    if is_moderator(author, config):
        return ModerationState.APPROVED
    return ModerationState.PENDING_MODERATION


def content_visible(state: ModerationState, viewer: Any, config: ForumConfig) -> bool:
    """
    Whether `viewer` (None when anonymous) may see content in `state`.

    Moderators see everything; blocked content is theirs alone.
    """
    state = ModerationState(state)
    if state is ModerationState.APPROVED:
        return True
    if is_moderator(viewer, config):
        return True
    if state is ModerationState.PENDING_MODERATION:
        return config.content_visible_while_pending_moderation
    return False


# @name or @"name with spaces"; not preceded by a word character (emails)
MENTION_RE = re.compile(r'(?<![\w@])@(?:"([^"]+)"|([\w.\-]+))')


def extract_mentions(text: str) -> list[str]:
    """Mentioned names in order of first appearance, without duplicates."""
    names: list[str] = []
    for quoted, bare in MENTION_RE.findall(text or ""):
        name = quoted.strip() if quoted else bare.rstrip(".")
        if name and name not in names:
            names.append(name)
    return names
