from datetime import datetime, timedelta, timezone

import jwt

from scheduling.core import config


def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
    """Issue a bearer token whose ``sub`` claim is the user id as a string."""
    expire_minutes = expires_minutes or config.JWT_EXPIRES_MINUTES
    issued_at = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    return jwt.decode(token, config.JWT_SECRET_KEY, algorithms=[config.JWT_ALGORITHM])


def decode_user_id(token: str) -> int:
    """Return the user id carried by ``token``.

    Raises ``jwt.PyJWTError`` for bad or expired tokens and ``ValueError``
    when the subject is not an integer id.
    """
    subject = decode_access_token(token).get("sub")
    if subject is None:
        raise ValueError("Token has no subject")
    return int(subject)
