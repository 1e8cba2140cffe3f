"""User model and service tests."""

import pytest
from sqlalchemy.exc import SQLAlchemyError

from microblog.exceptions import ValidationFailed
from microblog.models.micropost import Micropost
from microblog.models.relationship import Relationship
from microblog.models.user import User
from microblog.services import auth as auth_service
from microblog.services.auth import authenticate_user, create_user, get_user, get_user_by_email
from microblog.services.follows import FollowService
from microblog.services.microposts import MicropostService
from microblog.services.users import UserService


def test_create_valid_user(db, user_attrs):
    """Test that valid attributes create a retrievable user."""
    user = create_user(db, **user_attrs)
    assert user.id is not None
    assert get_user(db, user.id).email == "christian@example.com"


def test_create_invalid_user_writes_nothing(db, user_attrs):
    """Test that a rejected user leaves no row behind."""
    with pytest.raises(ValidationFailed) as exc_info:
        create_user(db, **{**user_attrs, "name": "a" * 51})
    assert exc_info.value.fields() == {"name"}
    assert db.query(User).count() == 0


def test_reject_duplicate_email(db, user_attrs):
    """Test that a second user with the same email is rejected."""
    create_user(db, **user_attrs)
    with pytest.raises(ValidationFailed) as exc_info:
        create_user(db, **user_attrs)
    assert exc_info.value.messages_for("email") == ["has already been taken"]
    assert db.query(User).count() == 1


def test_reject_duplicate_email_ignoring_case(db, user_attrs):
    """Test that email uniqueness ignores case."""
    create_user(db, **user_attrs)
    with pytest.raises(ValidationFailed) as exc_info:
        create_user(db, **{**user_attrs, "email": "CHRISTIAN@example.com"})
    assert exc_info.value.fields() == {"email"}


def test_duplicate_email_rejected_by_database(db, user_attrs, monkeypatch):
    """Test that the unique email index catches duplicates the pre-check misses."""
    create_user(db, **user_attrs)
    monkeypatch.setattr(auth_service, "email_taken", lambda *args, **kwargs: False)

    with pytest.raises(ValidationFailed) as exc_info:
        create_user(db, **{**user_attrs, "email": "CHRISTIAN@example.com"})

    assert exc_info.value.messages_for("email") == ["has already been taken"]
    assert db.query(User).count() == 1


def test_encrypted_password_is_set(db, user_attrs):
    """Test that the stored credential is set and is not the plaintext."""
    user = create_user(db, **user_attrs)
    assert user.encrypted_password
    assert user.encrypted_password != user_attrs["password"]


def test_has_password(db, user_attrs):
    """Test password matching against the stored credential."""
    user = create_user(db, **user_attrs)
    assert user.has_password("foobar") is True
    assert user.has_password("invalid") is False


def test_authenticate_wrong_password(db, user_attrs):
    """Test that a wrong password returns None."""
    create_user(db, **user_attrs)
    assert authenticate_user(db, user_attrs["email"], "wrongpass") is None


def test_authenticate_unknown_email(db, user_attrs):
    """Test that an unknown email returns None."""
    assert authenticate_user(db, "bar@foo.com", user_attrs["password"]) is None


def test_authenticate_match(db, user_attrs):
    """Test that matching credentials return the user."""
    user = create_user(db, **user_attrs)
    assert authenticate_user(db, user_attrs["email"], user_attrs["password"]) == user


def test_get_user_by_email_ignores_case(db, user_attrs):
    """Test email lookup is case-insensitive."""
    user = create_user(db, **user_attrs)
    assert get_user_by_email(db, "Christian@Example.com") == user


def test_not_admin_by_default(db, user_attrs):
    """Test that new users are not admins."""
    user = create_user(db, **user_attrs)
    assert user.admin is False


def test_toggle_admin(db, user_attrs):
    """Test that toggling admin flips and persists the flag."""
    user = create_user(db, **user_attrs)
    UserService(db).toggle_admin(user)
    db.expire_all()
    assert get_user(db, user.id).admin is True

    UserService(db).toggle_admin(user)
    assert user.admin is False


def test_update_user_profile(db, make_user):
    """Test updating name and email."""
    user = make_user()
    UserService(db).update_user(user, name="New Name", email="new@example.com")
    assert user.name == "New Name"
    assert user.email == "new@example.com"
    assert user.has_password("foobar")


def test_update_user_password(db, make_user):
    """Test that a supplied password replaces the credential."""
    user = make_user()
    UserService(db).update_user(user, password="newsecret", password_confirmation="newsecret")
    assert user.has_password("newsecret")
    assert not user.has_password("foobar")


def test_update_user_rejects_taken_email(db, make_user):
    """Test that an update cannot steal another user's email."""
    first = make_user(email="first@example.com")
    second = make_user()
    with pytest.raises(ValidationFailed) as exc_info:
        UserService(db).update_user(second, email="FIRST@example.com")
    assert exc_info.value.fields() == {"email"}
    db.refresh(second)
    assert second.email != first.email


def test_update_email_rejected_by_database(db, make_user, monkeypatch):
    """Test that the unique email index also guards profile updates."""
    make_user(email="first@example.com")
    second = make_user()
    monkeypatch.setattr("microblog.services.users.email_taken", lambda *args, **kwargs: False)

    with pytest.raises(ValidationFailed) as exc_info:
        UserService(db).update_user(second, email="First@example.com")

    assert exc_info.value.messages_for("email") == ["has already been taken"]
    db.refresh(second)
    assert second.email != "First@example.com"


def test_update_user_keeps_own_email(db, make_user):
    """Test that re-saving your own email is not a duplicate."""
    user = make_user(email="me@example.com")
    UserService(db).update_user(user, email="ME@example.com")
    assert user.email == "ME@example.com"


def test_list_users_paginates(db, make_user):
    """Test listing users by page."""
    users = [make_user() for _ in range(5)]
    service = UserService(db)
    assert service.list_users(page=1, per_page=2) == users[:2]
    assert service.list_users(page=3, per_page=2) == users[4:]


def test_destroy_user_removes_microposts(db, make_user):
    """Test that destroying a user deletes their microposts."""
    user = make_user()
    user_id = user.id
    service = MicropostService(db)
    ids = [service.create_micropost(user, text).id for text in ("one", "two")]

    UserService(db).destroy_user(user)

    for micropost_id in ids:
        assert service.get_micropost(micropost_id) is None
    assert get_user(db, user_id) is None


def test_destroy_user_removes_relationships_both_ways(db, make_user):
    """Test that destroying a user removes edges where they follow or are followed."""
    user = make_user()
    fan = make_user()
    idol = make_user()
    follows = FollowService(db)
    follows.follow(fan, user)
    follows.follow(user, idol)
    follows.follow(fan, idol)

    user_id = user.id
    UserService(db).destroy_user(user)

    assert get_user(db, user_id) is None
    remaining = db.query(Relationship).all()
    assert [(r.follower_id, r.followed_id) for r in remaining] == [(fan.id, idol.id)]
    assert follows.following(fan) == [idol]


def test_destroy_user_leaves_other_users_posts(db, make_user):
    """Test that only the destroyed user's posts go away."""
    user = make_user()
    other = make_user()
    service = MicropostService(db)
    service.create_micropost(user, "mine")
    kept = service.create_micropost(other, "theirs")

    UserService(db).destroy_user(user)

    assert db.query(Micropost).all() == [kept]


def test_destroy_user_rolls_back_on_failure(db, make_user, monkeypatch):
    """Test that a failed destroy leaves the user and their microposts in place."""
    user = make_user()
    user_id = user.id
    service = MicropostService(db)
    post_id = service.create_micropost(user, "Still here").id

    def failing_delete(instance):
        raise SQLAlchemyError("simulated failure")

    monkeypatch.setattr(db, "delete", failing_delete)
    with pytest.raises(SQLAlchemyError):
        UserService(db).destroy_user(user)
    monkeypatch.undo()

    assert get_user(db, user_id) is not None
    assert service.get_micropost(post_id) is not None
