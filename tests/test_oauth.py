"""
Tests for townsquare/oauth.py - Twitter registration, profile normalisation
and the failure redirect.
"""
from types import SimpleNamespace

from townsquare.oauth import (
    AUTHORIZE_PARAMS,
    oauth,
    on_failure,
    twitter_image_url,
    twitter_user_info,
)

PROFILE = {
    "id": 1234567,
    "id_str": "1234567",
    "screen_name": "jack",
    "name": "Jack",
    "email": "jack@example.com",
    "location": "San Francisco",
    "description": "just setting up",
    "url": "https://jack.example",
    "profile_image_url": "http://pbs.twimg.com/profile_images/1/avatar_normal.jpg",
    "profile_image_url_https": "https://pbs.twimg.com/profile_images/1/avatar_normal.jpg",
}


class TestFailureRedirect:
    """Authentication failures always redirect home."""

    def test_redirects_to_root(self):
        response = on_failure(SimpleNamespace(query_params={"denied": "x"}))

        assert response.status_code == 302
        assert response.headers["location"] == "/"
        assert response.body == b"302 Moved"

    def test_ignores_the_request(self):
        first = on_failure(None)
        second = on_failure(SimpleNamespace(url="/auth/twitter/callback?oauth_token=abc"))

        assert first.status_code == second.status_code == 302
        assert first.headers["location"] == second.headers["location"] == "/"


class TestTwitterRegistration:
    """The registered Twitter client."""

    def test_credentials_come_from_settings(self):
        client = oauth.create_client("twitter")

        assert client.client_id == "test-consumer-key"
        assert client.client_secret == "test-consumer-secret"

    def test_forces_login(self):
        client = oauth.create_client("twitter")

        assert client.authorize_params == AUTHORIZE_PARAMS == {"force_login": "true"}

    def test_uses_oauth1_endpoints(self):
        client = oauth.create_client("twitter")

        assert client.request_token_url == "https://api.twitter.com/oauth/request_token"
        assert client.authorize_url == "https://api.twitter.com/oauth/authenticate"


class TestTwitterImageUrl:
    """Avatar URL selection and sizing."""

    def test_original_size_over_https(self):
        assert twitter_image_url(PROFILE) == "https://pbs.twimg.com/profile_images/1/avatar.jpg"

    def test_insecure_url(self):
        url = twitter_image_url(PROFILE, secure=False, size="original")

        assert url == "http://pbs.twimg.com/profile_images/1/avatar.jpg"

    def test_mini_and_bigger(self):
        assert twitter_image_url(PROFILE, size="mini").endswith("avatar_mini.jpg")
        assert twitter_image_url(PROFILE, size="bigger").endswith("avatar_bigger.jpg")

    def test_unknown_size_keeps_url(self):
        assert twitter_image_url(PROFILE, size="huge") == PROFILE["profile_image_url_https"]

    def test_missing_image(self):
        assert twitter_image_url({}) is None


class TestTwitterUserInfo:
    """Normalised auth info."""

    def test_maps_profile_fields(self):
        info = twitter_user_info(PROFILE)

        assert info["uid"] == "1234567"
        assert info["nickname"] == "jack"
        assert info["name"] == "Jack"
        assert info["email"] == "jack@example.com"
        assert info["image"] == "https://pbs.twimg.com/profile_images/1/avatar.jpg"
        assert info["urls"] == {"Website": "https://jack.example", "Twitter": "https://twitter.com/jack"}

    def test_uid_falls_back_to_numeric_id(self):
        info = twitter_user_info({"id": 99, "screen_name": "nina"})

        assert info["uid"] == "99"
        assert info["email"] is None
