"""
Twitter OAuth 1.0a configuration and client.

SECURITY: This module handles OAuth authentication.
"""
from authlib.integrations.starlette_client import OAuth
from starlette.responses import Response

from townsquare.config import settings

# Avatar handling for the auth info mapping
SECURE_IMAGE_URL = True
IMAGE_SIZE = "original"

# Sent on every authorization redirect: Twitter always asks for credentials
AUTHORIZE_PARAMS = {"force_login": "true"}

VERIFY_CREDENTIALS_PARAMS = {
    "include_entities": "false",
    "skip_status": "true",
    "include_email": "true",
}

# Create OAuth registry
oauth = OAuth()

# Credentials come straight from the environment; authlib reports missing ones
oauth.register(
    name="twitter",
    client_id=settings.TWITTER_KEY,
    client_secret=settings.TWITTER_SECRET,
    request_token_url="https://api.twitter.com/oauth/request_token",
    access_token_url="https://api.twitter.com/oauth/access_token",
    authorize_url="https://api.twitter.com/oauth/authenticate",
    authorize_params=AUTHORIZE_PARAMS,
    api_base_url="https://api.twitter.com/1.1/",
)


def on_failure(request) -> Response:
    """Every authentication failure ends in a plain redirect to the root."""
    return Response(content="302 Moved", status_code=302, headers={"Location": "/"})


def twitter_image_url(profile: dict, secure: bool = SECURE_IMAGE_URL, size: str = IMAGE_SIZE) -> str | None:
    """
    Pick the avatar URL from a Twitter profile and resize it.

    Twitter serves `..._normal.jpg` by default. `original` drops the suffix,
    `mini` and `bigger` swap it, any other size keeps the URL.
    """
    url = profile.get("profile_image_url_https" if secure else "profile_image_url")
    if not url:
        return url

    if size == "original":
        return url.replace("_normal", "", 1)
    if size in ("mini", "bigger"):
        return url.replace("normal", size, 1)
    return url


def twitter_user_info(profile: dict) -> dict:
    """
    Normalise a `verify_credentials` response into an auth info mapping.
    """
    screen_name = profile.get("screen_name")
    return {
        "uid": str(profile.get("id_str") or profile.get("id")),
        "nickname": screen_name,
        "name": profile.get("name"),
        "email": profile.get("email"),
        "location": profile.get("location"),
        "description": profile.get("description"),
        "image": twitter_image_url(profile),
        "urls": {
            "Website": profile.get("url"),
            "Twitter": f"https://twitter.com/{screen_name}" if screen_name else None,
        },
    }
