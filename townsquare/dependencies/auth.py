"""
Authentication dependencies for FastAPI.

The session token travels in the `auth-token` cookie set by the Twitter
callback; API clients may send it as a bearer token instead.
"""
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel

from townsquare.database import AsyncSessionLocal
from townsquare.models.user import User
from townsquare.services.jwt_service import JWTService
from townsquare.services.user_service import UserService

AUTH_COOKIE = "auth-token"

# Security scheme
security = HTTPBearer(auto_error=False)


class TokenPayload(BaseModel):
    """JWT token payload model."""
    sub: str      # user_id
    username: str
    admin: bool = False


def read_token(request: Request, credentials: HTTPAuthorizationCredentials | None = None) -> TokenPayload | None:
    """Decode the session token from the bearer header or the auth cookie."""
    token = credentials.credentials if credentials else request.cookies.get(AUTH_COOKIE)
    if not token:
        return None

    payload = JWTService().verify_token(token)
    if payload is None:
        return None

    return TokenPayload(**payload)


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security)
) -> TokenPayload:
    """
    Dependency that requires a valid session token.

    Returns token payload if valid, raises 401 if missing or invalid.
    """
    payload = read_token(request, credentials)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return payload


async def load_current_user(request: Request) -> User | None:
    """
    Current signed-in User, or None for anonymous requests.

    Handed to the forum engine as its current-user accessor.
    """
    payload = read_token(request)
    if payload is None:
        return None

    async with AsyncSessionLocal() as db:
        return await UserService(db).get_by_id(payload.sub)
