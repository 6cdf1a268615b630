"""
Forum engine routes.

Handlers reach the engine (config and helpers) through `request.app.state`,
set when the engine builds its sub-application.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from townsquare.database import get_db
from townsquare.forum.policies import (
    content_visible,
    display_name,
    extract_mentions,
    initial_moderation_state,
    is_admin,
    is_moderator,
)
from townsquare.services.user_service import UserService

router = APIRouter(tags=["Forum"])

AUTOCOMPLETE_LIMIT = 10


class PostPreviewRequest(BaseModel):
    content: str


def get_engine(request: Request):
    """FastAPI dependency: the engine serving this request."""
    return request.app.state.forum_engine


def user_summary(engine, user) -> dict:
    return {
        "id": user.id,
        "name": display_name(user, engine.config),
        "avatar_url": engine.config.avatar_url(user),
        "path": engine.helpers["user_path"](user),
    }


@router.get("/")
async def forum(engine=Depends(get_engine)):
    """
    Messageboard index settings and navigation links.
    """
    helpers = engine.helpers
    links = {"messageboards": helpers["forum_path"]()}
    # Host routes reached through the forwarded helpers
    for label, helper in (("home", "root_path"), ("sign_in", "twitter_login_path"), ("sign_out", "logout_path")):
        if helper in helpers:
            links[label] = helpers[helper]()

    return {
        "layout": engine.config.layout,
        "messageboards_order": engine.config.messageboards_order.value,
        "show_topic_followers": engine.config.show_topic_followers,
        "links": links,
    }


@router.get("/users/{username}")
async def forum_user(username: str, engine=Depends(get_engine), db: AsyncSession = Depends(get_db)):
    """
    Redirect a forum user link to the host's profile page.
    """
    user = await UserService(db).get_by_column(engine.config.user_name_column, username)

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    return RedirectResponse(url=engine.helpers["user_path"](user), status_code=302)


@router.get("/me")
async def forum_viewer(request: Request, engine=Depends(get_engine)):
    """
    The signed-in viewer as the forum sees them.
    """
    user = await engine.current_user(request)

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please sign in first."
        )

    return {
        **user_summary(engine, user),
        "moderator": is_moderator(user, engine.config),
        "admin": is_admin(user, engine.config),
        "layout": engine.config.layout,
    }


@router.get("/autocomplete-users")
async def autocomplete_users(
    q: str = Query("", max_length=255),
    engine=Depends(get_engine),
    db: AsyncSession = Depends(get_db)
):
    """
    Users whose forum name starts with `q`, for @mention completion.
    """
    q = q.strip().lstrip("@")
    if not q:
        return {"results": []}

    users = await UserService(db).search_by_column_prefix(
        engine.config.user_name_column, q, limit=AUTOCOMPLETE_LIMIT
    )
    return {"results": [user_summary(engine, user) for user in users]}


@router.post("/posts/preview")
async def preview_post(
    body: PostPreviewRequest,
    request: Request,
    engine=Depends(get_engine),
    db: AsyncSession = Depends(get_db)
):
    """
    Resolve the @mentions in a draft post and report how it would be moderated.

    Names that match no user are returned separately. `visible_to_others` says
    whether an anonymous reader would see the post once submitted.
    """
    author = await engine.current_user(request)

    if author is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please sign in first."
        )

    state = initial_moderation_state(author, engine.config)
    service = UserService(db)
    mentioned, unknown = [], []

    for name in extract_mentions(body.content):
        user = await service.get_by_column(engine.config.user_name_column, name)
        if user is None:
            unknown.append(name)
        else:
            mentioned.append(user_summary(engine, user))

    return {
        "mentioned_users": mentioned,
        "unknown_names": unknown,
        "moderation_state": state.value,
        "visible_to_others": content_visible(state, None, engine.config),
    }
