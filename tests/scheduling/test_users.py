#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
import pytest
from pydantic import ValidationError

from confsched.scheduling.exceptions import (
    InvalidCredentialsError,
    UsernameTakenError,
)
from confsched.scheduling.users import (
    Attendee,
    Organizer,
    Speaker,
    UserAdapter,
    UserManager,
    UserRole,
    as_speaker,
)


def test_create_user_returns_role_variant(user_manager: UserManager):
    assert isinstance(user_manager.lookup_user_by_username("alice"), Speaker)
    assert isinstance(user_manager.lookup_user_by_username("carol"), Attendee)
    assert isinstance(user_manager.lookup_user_by_username("olivia"), Organizer)


def test_user_ids_are_unique(user_manager: UserManager):
    ids = [u.user_id for u in user_manager.users]
    assert len(set(ids)) == len(ids) == 5


def test_user_id_is_immutable(user_manager: UserManager):
    alice = user_manager.lookup_user_by_username("alice")
    with pytest.raises(ValidationError):
        alice.user_id = "something-else"


def test_username_taken(user_manager: UserManager):
    with pytest.raises(UsernameTakenError):
        user_manager.create_user("alice", "other-pw", UserRole.ATTENDEE)
    assert len(user_manager) == 5


def test_unknown_role(user_manager: UserManager):
    with pytest.raises(ValueError):
        user_manager.create_user("mallory", "pw", "admin")


def test_lookup_misses(user_manager: UserManager):
    assert user_manager.lookup_user_by_username("nobody") is None
    assert user_manager.get_user("not-an-id") is None


def test_get_user_by_id(user_manager: UserManager):
    bob = user_manager.lookup_user_by_username("bob")
    assert user_manager.get_user(bob.user_id) is bob


def test_list_speakers_in_registration_order(user_manager: UserManager):
    assert [s.username for s in user_manager.list_speakers()] == ["alice", "bob"]


def test_as_speaker(user_manager: UserManager):
    alice = user_manager.lookup_user_by_username("alice")
    carol = user_manager.lookup_user_by_username("carol")
    assert as_speaker(alice) is alice
    assert as_speaker(carol) is None
    assert as_speaker(None) is None


def test_authenticate(user_manager: UserManager):
    assert user_manager.authenticate("carol", "carol-pw").username == "carol"
    with pytest.raises(InvalidCredentialsError):
        user_manager.authenticate("carol", "wrong")
    with pytest.raises(InvalidCredentialsError):
        user_manager.authenticate("nobody", "carol-pw")


def test_find_speakers_fuzzy(user_manager: UserManager):
    matches = user_manager.find_speakers("alic")
    assert [s.username for s in matches] == ["alice"]


def test_find_speakers_ignores_other_roles(user_manager: UserManager):
    assert user_manager.find_speakers("carol") == []


def test_user_adapter_discriminates_on_role():
    user = UserAdapter.validate_python(
        {"user_id": "u-1", "username": "erin", "password": "pw", "role": "speaker"}
    )
    assert isinstance(user, Speaker)
    assert user.user_id == "u-1"
    assert user.events_speaking == {}
