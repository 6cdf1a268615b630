"""
JWT session tokens issued after a successful Twitter sign-in.
"""
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from townsquare.config import settings


class JWTService:
    """Service for creating and verifying JWT tokens."""
    
    def create_token(self, user_id: str, username: str, admin: bool = False) -> str:
        """
        Create a JWT token identifying a signed-in user.
        
        Args:
            user_id: User's unique ID
            username: User's forum name
            admin: Whether the user carries the admin flag
            
        Returns:
            Encoded JWT token string
        """
        expires = datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
        
        payload = {
            "sub": user_id,
            "username": username,
            "admin": admin,
            "exp": expires
        }
        
        return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    
    def verify_token(self, token: str) -> dict | None:
        """
        Verify and decode a JWT token.
        
        Returns:
            Decoded payload dict or None if invalid or expired
        """
        try:
            return jwt.decode(
                token,
                settings.SECRET_KEY,
                algorithms=[settings.JWT_ALGORITHM]
            )
        except JWTError:
            return None
