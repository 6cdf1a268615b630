"""
Script to create all database tables.

Creates every table registered on the declarative base. Use Alembic for
anything beyond a fresh development database.
"""
import asyncio
import sys

from townsquare.database import engine
from townsquare.models.base import Base
from townsquare.models.user import User  # noqa: F401  registers the table


async def create_all_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("All tables created successfully!")


async def drop_all_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    print("All tables dropped!")


async def main(drop: bool = False):
    if drop:
        await drop_all_tables()
    print("Creating database tables...")
    await create_all_tables()
    await engine.dispose()
    print("Done!")


if __name__ == "__main__":
    asyncio.run(main(drop="--drop" in sys.argv))
