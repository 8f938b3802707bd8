"""Tests for registration and login."""

import pytest

from classroom.core.accounts import AccountService, validate_email
from classroom.core.errors import AuthError, ConflictError, ValidationError


@pytest.fixture
def accounts(store):
    return AccountService(store)


class TestRegister:
    """Tests for AccountService.register."""

    def test_register_creates_user(self, accounts):
        user = accounts.register("alice", "pw1", "alice@example.com", grade_level=4)
        assert user.id == 1
        assert user.username == "alice"
        assert user.preferred_language == "en"
        assert user.created_at

    def test_duplicate_username(self, accounts):
        accounts.register("alice", "pw1", "alice@example.com")
        with pytest.raises(ConflictError, match="Username"):
            accounts.register("alice", "pw2", "other@example.com")

    def test_duplicate_email_case_insensitive(self, accounts):
        accounts.register("alice", "pw1", "alice@example.com")
        with pytest.raises(ConflictError, match="Email"):
            accounts.register("bob", "pw2", "ALICE@example.com")

    def test_invalid_email(self, accounts):
        with pytest.raises(ValidationError, match="email"):
            accounts.register("alice", "pw1", "not-an-email")

    def test_invalid_grade(self, accounts):
        with pytest.raises(ValidationError):
            accounts.register("alice", "pw1", "alice@example.com", grade_level=15)

    def test_empty_password(self, accounts):
        with pytest.raises(ValidationError):
            accounts.register("alice", "", "alice@example.com")


class TestLogin:
    """Tests for AccountService.login."""

    def test_login_matching_password(self, accounts):
        registered = accounts.register("alice", "pw1", "alice@example.com")
        assert accounts.login("alice", "pw1").id == registered.id

    def test_login_wrong_password(self, accounts):
        accounts.register("alice", "pw1", "alice@example.com")
        with pytest.raises(AuthError):
            accounts.login("alice", "wrong")

    def test_login_unknown_user(self, accounts):
        with pytest.raises(AuthError):
            accounts.login("nobody", "pw")


class TestValidateEmail:
    """Email format check."""

    @pytest.mark.parametrize("email", ["a@b.co", "first.last+tag@school.edu.in"])
    def test_valid(self, email):
        assert validate_email(email)

    @pytest.mark.parametrize("email", ["", "plain", "a@b", "@example.com"])
    def test_invalid(self, email):
        assert not validate_email(email)
