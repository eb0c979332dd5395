"""Admin bearer token creation/validation and secret comparison.

Uses PyJWT for JWT operations. Tokens are time-boxed and carry no
revocation state: a token stays valid until its ``exp`` claim passes.
"""

import hmac
from datetime import UTC, datetime, timedelta

import jwt

ADMIN_SUBJECT = "admin"
ADMIN_TOKEN_TYPE = "admin"


def secrets_match(supplied: str, expected: str) -> bool:
    """Compare two secrets for exact equality in constant time.

    Args:
        supplied: The secret presented by the caller.
        expected: The configured secret.

    Returns:
        True if both strings are identical, False otherwise.
    """
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


def create_admin_token(
    secret_key: str,
    algorithm: str = "HS256",
    expires_hours: int = 24,
) -> str:
    """Create a signed admin JWT.

    Args:
        secret_key: Secret key for signing.
        algorithm: JWT signing algorithm.
        expires_hours: Token validity window in hours.

    Returns:
        The encoded JWT string.
    """
    now = datetime.now(UTC)
    payload = {
        "sub": ADMIN_SUBJECT,
        "type": ADMIN_TOKEN_TYPE,
        "iat": now,
        "exp": now + timedelta(hours=expires_hours),
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_token(
    token: str,
    secret_key: str,
    algorithm: str = "HS256",
) -> dict:
    """Decode and validate a JWT token.

    Args:
        token: The JWT string to decode.
        secret_key: Secret key used for signing.
        algorithm: JWT signing algorithm.

    Returns:
        The decoded token payload.

    Raises:
        jwt.ExpiredSignatureError: If the token has expired.
        jwt.InvalidTokenError: If the token is invalid.
    """
    return jwt.decode(token, secret_key, algorithms=[algorithm])
