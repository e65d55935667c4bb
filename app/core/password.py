"""Argon2 password hashing through pwdlib."""

from pwdlib import PasswordHash

password_hash = PasswordHash.recommended()

# Checked when the email is unknown so a miss costs as much as a hit
DUMMY_HASH = password_hash.hash("dummy-password-for-timing")


def get_password_hash(password: str) -> str:
    return password_hash.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return password_hash.verify(plain_password, hashed_password)


def verify_and_update_password(
    plain_password: str, hashed_password: str
) -> tuple[bool, str | None]:
    """
    Verify a password and report whether its hash should be upgraded.

    Returns:
        tuple[bool, str | None]: Whether the password matches, and a fresh hash
        when the stored one was made with outdated parameters (None otherwise).
    """
    return password_hash.verify_and_update(plain_password, hashed_password)
