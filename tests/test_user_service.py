"""
Tests for townsquare/services/user_service.py.
"""
import pytest

from townsquare.models.user import User
from townsquare.services.user_service import UserService

INFO = {
    "uid": "1001",
    "nickname": "alice_new",
    "name": "Alice L.",
    "email": "alice@example.com",
    "image": "https://pbs.twimg.com/profile_images/1/avatar.jpg",
}


class TestUpsertFromTwitter:
    """Creating and refreshing users on sign-in."""

    @pytest.mark.asyncio
    async def test_creates_new_user(self, mock_db_session, make_result):
        mock_db_session.execute.return_value = make_result(None)

        user = await UserService(mock_db_session).upsert_from_twitter(INFO)

        mock_db_session.add.assert_called_once()
        added = mock_db_session.add.call_args.args[0]
        assert added is user
        assert isinstance(user, User)
        assert user.twitter_uid == "1001"
        assert user.username == "alice_new"
        assert user.avatar_url == INFO["image"]
        mock_db_session.commit.assert_awaited_once()
        mock_db_session.refresh.assert_awaited_once_with(user)

    @pytest.mark.asyncio
    async def test_refreshes_existing_user(self, mock_db_session, make_result, alice):
        mock_db_session.execute.return_value = make_result(alice)

        user = await UserService(mock_db_session).upsert_from_twitter({**INFO, "email": None})

        assert user is alice
        mock_db_session.add.assert_not_called()
        assert alice.username == "alice_new"
        assert alice.name == "Alice L."
        # Twitter withholds the email sometimes; keep the stored one
        assert alice.email == "Alice@Example.com"


class TestLookups:
    """Column-driven lookups used by the forum."""

    @pytest.mark.asyncio
    async def test_get_by_column(self, mock_db_session, make_result, alice):
        mock_db_session.execute.return_value = make_result(alice)

        user = await UserService(mock_db_session).get_by_column("username", "alice")

        assert user is alice
        statement = mock_db_session.execute.call_args.args[0]
        assert "users.username" in str(statement)

    @pytest.mark.asyncio
    async def test_search_by_column_prefix(self, mock_db_session, make_result, alice, admin_bob):
        mock_db_session.execute.return_value = make_result([alice, admin_bob])

        users = await UserService(mock_db_session).search_by_column_prefix("username", "a", limit=5)

        assert users == [alice, admin_bob]
        statement = str(mock_db_session.execute.call_args.args[0])
        assert "LIKE" in statement
        assert "LIMIT" in statement

    @pytest.mark.asyncio
    async def test_unknown_column(self, mock_db_session):
        with pytest.raises(AttributeError):
            await UserService(mock_db_session).get_by_column("nickname", "alice")
