"""Tests for user service account operations."""

import pytest
from sqlmodel import Session

from app.core.password import verify_password
from app.exceptions import AlreadyExistsError, NotFoundError
from app.models.user import User, UserCreate, UserUpdate
from app.services import user as user_service

# Test data constants
TEST_USER_EMAIL = "carla@example.com"
TEST_USER_PASSWORD = "SecurePass123"
NONEXISTENT_ID = 99999


@pytest.fixture(name="sample_user_create")
def sample_user_create_fixture():
    return UserCreate(
        email=TEST_USER_EMAIL, full_name="Carla", password=TEST_USER_PASSWORD
    )


@pytest.fixture(name="created_user")
def created_user_fixture(session: Session, sample_user_create: UserCreate) -> User:
    """
    Create a user from the sample payload.

    Returns:
        User: The persisted user with `id_user` populated.
    """
    user = user_service.create_user(session, sample_user_create)
    assert user.id_user is not None
    return user


class TestCreateUser:
    def test_password_is_hashed(self, created_user: User):
        assert created_user.hashed_password != TEST_USER_PASSWORD
        assert verify_password(TEST_USER_PASSWORD, created_user.hashed_password)

    def test_email_is_lower_cased(self, session: Session):
        user = user_service.create_user(
            session,
            UserCreate(email="Diego@Example.COM", password=TEST_USER_PASSWORD),
        )
        assert user.email == "diego@example.com"

    def test_duplicate_email(self, session: Session, created_user: User):
        with pytest.raises(AlreadyExistsError) as exc_info:
            user_service.create_user(
                session,
                UserCreate(email=TEST_USER_EMAIL.upper(), password="another1"),
            )

        assert exc_info.value.field == "email"


class TestGetUser:
    def test_by_id(self, session: Session, created_user: User):
        assert user_service.get_user(session, created_user.id_user) == created_user

    def test_by_id_missing(self, session: Session):
        assert user_service.get_user(session, NONEXISTENT_ID) is None

    def test_by_email_case_insensitive(self, session: Session, created_user: User):
        found = user_service.get_user_by_email(session, " CARLA@example.com ")
        assert found is not None
        assert found.id_user == created_user.id_user


class TestUpdateUser:
    def test_update_full_name(self, session: Session, created_user: User):
        updated = user_service.update_user(
            session, created_user.id_user, UserUpdate(full_name="Carla Souza")
        )
        assert updated.full_name == "Carla Souza"
        assert verify_password(TEST_USER_PASSWORD, updated.hashed_password)

    def test_update_password(self, session: Session, created_user: User):
        updated = user_service.update_user(
            session, created_user.id_user, UserUpdate(password="brandnew")
        )
        assert verify_password("brandnew", updated.hashed_password)
        assert not verify_password(TEST_USER_PASSWORD, updated.hashed_password)

    def test_missing_user(self, session: Session):
        with pytest.raises(NotFoundError):
            user_service.update_user(session, NONEXISTENT_ID, UserUpdate(full_name="X"))
