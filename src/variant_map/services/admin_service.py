"""Admin gate service.

Exchanges the shared admin secret for a time-boxed bearer token, verifies
presented tokens, and performs the moderation writes those tokens unlock.
"""

import uuid

import jwt
from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from variant_map.core.config import Settings
from variant_map.core.errors import AuthError, NotFoundError, StoreError
from variant_map.core.security import ADMIN_TOKEN_TYPE, create_admin_token, decode_token, secrets_match
from variant_map.models.location import Location
from variant_map.models.submission import Submission
from variant_map.models.variant import Variant


def issue_credential(secret: str, settings: Settings) -> str:
    """Exchange the admin secret for a signed token.

    Args:
        secret: Secret supplied by the caller.
        settings: Application settings.

    Returns:
        Encoded JWT valid for ``settings.admin_token_expire_hours``.

    Raises:
        AuthError: If the secret does not match exactly.
    """
    if not secrets_match(secret, settings.admin_secret):
        logger.warning("Rejected admin credential request: invalid secret")
        msg = "Invalid admin secret"
        raise AuthError(msg)
    token = create_admin_token(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_hours=settings.admin_token_expire_hours,
    )
    logger.info("Issued admin credential")
    return token


def verify_credential(token: str, settings: Settings) -> dict:
    """Validate an admin token's signature, expiry and type.

    Args:
        token: Encoded JWT.
        settings: Application settings.

    Returns:
        The decoded payload.

    Raises:
        AuthError: If the token is malformed, expired, mis-signed, or not an admin token.
    """
    try:
        payload = decode_token(token, settings.jwt_secret_key, settings.jwt_algorithm)
    except jwt.ExpiredSignatureError as e:
        msg = "Admin token has expired"
        raise AuthError(msg) from e
    except jwt.InvalidTokenError as e:
        msg = "Invalid admin token"
        raise AuthError(msg) from e

    if payload.get("type") != ADMIN_TOKEN_TYPE:
        msg = "Token is not an admin token"
        raise AuthError(msg)
    return payload


async def _require_location(session: AsyncSession, location_id: uuid.UUID) -> Location:
    result = await session.execute(select(Location).where(Location.id == location_id).with_for_update())
    location = result.scalar_one_or_none()
    if location is None:
        msg = f"Location {location_id} not found"
        raise NotFoundError(msg)
    return location


async def delete_location(session: AsyncSession, location_id: uuid.UUID) -> None:
    """Delete a location with its variants and submissions in one transaction.

    Rows are removed in dependency order: variants, submissions, location.

    Raises:
        NotFoundError: If the location does not exist.
        StoreError: On database failure.
    """
    try:
        await _require_location(session, location_id)
        variants = await session.execute(delete(Variant).where(Variant.location_id == location_id))
        submissions = await session.execute(delete(Submission).where(Submission.location_id == location_id))
        await session.execute(delete(Location).where(Location.id == location_id))
        await session.commit()
    except NotFoundError:
        await session.rollback()
        raise
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Delete of location {location_id} failed: {e}")
        msg = "Failed to delete location"
        raise StoreError(msg) from e

    logger.info(
        f"Deleted location {location_id} with {variants.rowcount} variants and {submissions.rowcount} submissions"
    )


async def set_note(session: AsyncSession, location_id: uuid.UUID, note: str) -> None:
    """Store a free-text admin annotation on a location. No length bound.

    Raises:
        NotFoundError: If the location does not exist.
        StoreError: On database failure.
    """
    try:
        location = await _require_location(session, location_id)
        location.note = note
        await session.commit()
    except NotFoundError:
        await session.rollback()
        raise
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Note update for location {location_id} failed: {e}")
        msg = "Failed to update note"
        raise StoreError(msg) from e

    logger.info(f"Updated note on location {location_id}")
