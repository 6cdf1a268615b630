"""
User lookups and the Twitter sign-in upsert.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from townsquare.models.user import User


class UserService:
    """Service for reading and writing users."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: str) -> User | None:
        stmt = select(User).where(User.id == user_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_twitter_uid(self, twitter_uid: str) -> User | None:
        stmt = select(User).where(User.twitter_uid == twitter_uid)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_column(self, column: str, value: str) -> User | None:
        """
        Get a user by an arbitrary unique column.

        The forum engine looks users up by its configured name column,
        which is only known at runtime.

        Args:
            column: Column name on the users table
            value: Value to match exactly

        Returns:
            User or None if not found
        """
        stmt = select(User).where(getattr(User, column) == value)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def search_by_column_prefix(self, column: str, prefix: str, limit: int = 10) -> list[User]:
        """
        Find users whose `column` starts with `prefix`, ordered by that column.
        """
        attribute = getattr(User, column)
        stmt = (
            select(User)
            .where(attribute.startswith(prefix, autoescape=True))
            .order_by(attribute)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def upsert_from_twitter(self, info: dict) -> User:
        """
        Create or refresh the user behind a Twitter auth info mapping.

        Args:
            info: Normalised profile from `twitter_user_info`

        Returns:
            The created or updated User
        """
        user = await self.get_by_twitter_uid(info["uid"])

        if user is None:
            user = User(twitter_uid=info["uid"], username=info["nickname"])
            self.db.add(user)

        # Profile fields follow Twitter on every sign-in
        user.username = info["nickname"]
        user.name = info.get("name")
        user.avatar_url = info.get("image")
        if info.get("email"):
            user.email = info["email"]

        await self.db.commit()
        await self.db.refresh(user)
        return user
