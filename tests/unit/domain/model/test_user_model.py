"""Tests for User model helpers."""

from datetime import datetime, timedelta
from uuid import uuid4

from agora.domain.model import User
from agora.domain.value import UserId

SIGNUP = datetime(2024, 1, 1)


def _user(**fields) -> User:
    values = {
        "id": UserId(uuid4()),
        "username": "alice",
        "email": "alice@example.org",
        "created_at": SIGNUP,
    }
    values.update(fields)
    return User(**values)


def test_full_email_with_realname():
    user = _user(realname="Alice Example")

    assert user.full_email == "Alice Example <alice@example.org>"


def test_full_email_without_realname():
    assert _user().full_email == "alice@example.org"


def test_realname_or_username():
    assert _user(realname="Alice Example").realname_or_username == "Alice Example"
    assert _user().realname_or_username == "alice"


def test_posts_per_day_is_truncated():
    user = _user(posts_count=10)

    assert user.posts_per_day(SIGNUP + timedelta(days=3)) == 3.33
    assert user.posts_per_day(SIGNUP + timedelta(days=3), precision=0) == 3.0


def test_posts_per_day_on_signup_day():
    user = _user(posts_count=4)

    assert user.posts_per_day(SIGNUP) == 4.0


def test_is_online():
    user = _user(last_active=SIGNUP)
    window = timedelta(minutes=15)

    assert user.is_online(SIGNUP + timedelta(minutes=10), window)
    assert not user.is_online(SIGNUP + timedelta(minutes=20), window)
    assert not _user().is_online(SIGNUP, window)
