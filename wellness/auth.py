"""Authentication helpers for the wellness portal."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog
from passlib.context import CryptContext

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from wellness.schemas import Account
    from wellness.store import RecordStore

logger = structlog.get_logger(__name__)

# Password hashing context using bcrypt; the work factor comes from settings
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def configure_password_hashing(rounds: int) -> None:
    """Set the bcrypt work factor used for new hashes."""

    pwd_context.update(bcrypt__rounds=rounds)


def hash_password(password: str) -> str:
    """Hash a plaintext password using a secure algorithm."""

    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify a plaintext password against a stored hash."""

    try:
        return pwd_context.verify(password, hashed)
    except (ValueError, TypeError):
        return False


def authenticate_account(
    store: "RecordStore", email: str, password: str
) -> Optional["Account"]:
    """Validate login credentials.

    Returns the matching account when the email is known and the password
    verifies, otherwise ``None``.  Unknown emails and wrong passwords are
    indistinguishable to the caller.
    """

    account = store.get_account_by_email(email)
    if account is None:
        logger.info("login_failed", reason="unknown_email")
        return None
    if not verify_password(password, account.password_hash):
        logger.info("login_failed", reason="bad_password", account_id=account.id)
        return None
    return account


__all__ = [
    "authenticate_account",
    "configure_password_hashing",
    "hash_password",
    "pwd_context",
    "verify_password",
]
