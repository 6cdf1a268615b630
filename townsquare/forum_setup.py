"""
Forum engine configuration for this application.
"""
from townsquare.config import settings
from townsquare.dependencies.auth import load_current_user
from townsquare.forum.config import ForumConfig, MessageboardsOrder, default_avatar_url, default_user_path
from townsquare.forum.engine import ForumEngine
from townsquare.models.user import User


def build_forum_config() -> ForumConfig:
    return ForumConfig(
        user_class=User,
        # Unique; @mentions and profile links resolve through it
        user_name_column="username",
        user_path=default_user_path,
        current_user=load_current_user,
        avatar_url=default_avatar_url,
        # Admins moderate
        moderator_column="admin",
        admin_column="admin",
        content_visible_while_pending_moderation=True,
        show_topic_followers=False,
        messageboards_order=MessageboardsOrder.POSITION,
        layout=settings.FORUM_LAYOUT,
    )


def build_forum_engine() -> ForumEngine:
    return ForumEngine(
        build_forum_config(),
        mount_path=settings.FORUM_MOUNT_PATH,
        base_url=settings.APP_URL,
    )
