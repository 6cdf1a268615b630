"""
Authentication routes for Twitter OAuth.

Every failure along the flow ends in `on_failure`, never in an error page.
"""
import httpx
import structlog
from authlib.integrations.starlette_client import OAuthError
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from townsquare.config import settings
from townsquare.database import get_db
from townsquare.dependencies.auth import AUTH_COOKIE, TokenPayload, get_current_user
from townsquare.oauth import VERIFY_CREDENTIALS_PARAMS, oauth, on_failure, twitter_user_info
from townsquare.services.jwt_service import JWTService
from townsquare.services.user_service import UserService

logger = structlog.get_logger()

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.get("/twitter")
async def twitter_login(request: Request):
    """
    Redirect user to Twitter's authorization page.
    """
    redirect_uri = str(request.url_for("twitter_callback"))
    try:
        return await oauth.twitter.authorize_redirect(request, redirect_uri)
    except (OAuthError, httpx.HTTPError) as e:
        logger.warning("twitter_request_token_failed", error=str(e))
        return on_failure(request)


@router.get("/twitter/callback")
async def twitter_callback(request: Request, db: AsyncSession = Depends(get_db)):
    """
    Handle the Twitter OAuth callback.

    This endpoint:
    1. Exchanges the request token for an access token
    2. Fetches the user's profile from verify_credentials
    3. Creates or refreshes the local user
    4. Sets the session cookie and redirects home
    """
    if "denied" in request.query_params:
        logger.warning("twitter_auth_denied")
        return on_failure(request)

    try:
        token = await oauth.twitter.authorize_access_token(request)
        response = await oauth.twitter.get(
            "account/verify_credentials.json",
            params=VERIFY_CREDENTIALS_PARAMS,
            token=token,
        )
        response.raise_for_status()
        profile = response.json()
    except (OAuthError, httpx.HTTPError) as e:
        logger.warning("twitter_auth_failed", error=str(e))
        return on_failure(request)

    info = twitter_user_info(profile)
    try:
        user = await UserService(db).upsert_from_twitter(info)
    except IntegrityError as e:
        # Twitter handles get reused; another local user may still hold this one
        await db.rollback()
        logger.warning("twitter_user_conflict", twitter_uid=info["uid"], username=info["nickname"], error=str(e.orig))
        return on_failure(request)

    logger.info("signed_in", provider="twitter", user_id=user.id, username=user.username)

    access_token = JWTService().create_token(
        user_id=user.id,
        username=user.username,
        admin=user.admin
    )

    response = RedirectResponse(url="/", status_code=302)
    response.set_cookie(
        key=AUTH_COOKIE,
        value=access_token,
        httponly=True,
        secure=settings.APP_URL.startswith("https://"),
        samesite="lax",
        max_age=settings.JWT_EXPIRATION_MINUTES * 60
    )
    return response


@router.get("/failure")
async def auth_failure(request: Request):
    """
    Landing route for failed sign-ins.
    """
    return on_failure(request)


@router.post("/logout")
async def logout():
    """
    Drop the session cookie.
    """
    response = RedirectResponse(url="/", status_code=302)
    response.delete_cookie(AUTH_COOKIE)
    return response


@router.get("/me")
async def me(current_user: TokenPayload = Depends(get_current_user)):
    """
    Get current user info from the session token.
    """
    return {
        "id": current_user.sub,
        "username": current_user.username,
        "admin": current_user.admin
    }
