"""Account operations: sign-up, lookup and profile updates."""

from sqlmodel import Session, select
from sqlalchemy.exc import IntegrityError

from app.models.user import User, UserCreate, UserUpdate
from app.core.password import get_password_hash
from app.exceptions import NotFoundError, AlreadyExistsError


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def create_user(session: Session, user_in: UserCreate) -> User:
    """
    Register a new account.

    The email is stored lower-cased so sign-in is case-insensitive, and only
    the Argon2 hash of the password is kept.

    Raises:
        AlreadyExistsError: If the email is already registered.
    """
    email = _normalize_email(str(user_in.email))
    if get_user_by_email(session, email):
        raise AlreadyExistsError("User", "email", email)

    db_user = User(
        email=email,
        full_name=user_in.full_name,
        hashed_password=get_password_hash(user_in.password),
    )
    session.add(db_user)
    try:
        session.commit()
    except IntegrityError:
        # Lost a race with a concurrent sign-up for the same email
        session.rollback()
        raise AlreadyExistsError("User", "email", email)
    session.refresh(db_user)
    return db_user


def get_user(session: Session, user_id: int) -> User | None:
    return session.get(User, user_id)


def get_user_by_email(session: Session, email: str) -> User | None:
    """Look up an account by email, ignoring case and surrounding spaces."""
    statement = select(User).where(User.email == _normalize_email(email))
    return session.exec(statement).first()


def update_user(session: Session, user_id: int, user_update: UserUpdate) -> User:
    """
    Apply a partial profile update.

    Only fields present in the request are written. A new `password` replaces
    the stored hash.

    Raises:
        NotFoundError: If the account no longer exists.
    """
    db_user = get_user(session, user_id)
    if not db_user:
        raise NotFoundError("User", user_id)

    changes = user_update.model_dump(exclude_unset=True)
    password = changes.pop("password", None)
    if password is not None:
        changes["hashed_password"] = get_password_hash(password)

    for key, value in changes.items():
        setattr(db_user, key, value)

    session.add(db_user)
    session.commit()
    session.refresh(db_user)
    return db_user
