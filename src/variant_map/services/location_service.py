"""Location reconciliation service.

Resolves submissions to locations by natural key, appends the submission log,
and reconciles each location's stored variant set against the requested one.
Also provides the public read paths (listing, detail, variant search).

Every mutating call runs as one transaction on the caller's session: it either
commits all of its writes or rolls all of them back.
"""

import math
import uuid
from collections import defaultdict
from collections.abc import Iterable
from datetime import UTC, datetime

from loguru import logger
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from variant_map.core.errors import ConflictError, NotFoundError, StoreError, ValidationError, VariantMapError
from variant_map.lib.reconciliation import VariantDiff, plan_variant_diff
from variant_map.models.location import Location
from variant_map.models.submission import Submission
from variant_map.models.variant import Variant

ANONYMOUS_REPORTER = "anonymous"
DEFAULT_VARIANT_SEARCH_LIMIT = 5
MAX_VARIANT_NAME_LENGTH = 255


def _require_text(field: str, value: str) -> None:
    if not value:
        msg = f"{field} is required"
        raise ValidationError(msg)


def _require_variant_names(names: Iterable[str]) -> frozenset[str]:
    requested = frozenset(names)
    if any(len(name) > MAX_VARIANT_NAME_LENGTH for name in requested):
        msg = f"Variant names must be at most {MAX_VARIANT_NAME_LENGTH} characters"
        raise ValidationError(msg)
    return requested


def _require_finite(latitude: float, longitude: float) -> None:
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        msg = f"Coordinates must be finite numbers, got ({latitude}, {longitude})"
        raise ValidationError(msg)


async def _find_by_natural_key(
    session: AsyncSession,
    *,
    name: str,
    address: str,
    latitude: float,
    longitude: float,
) -> Location | None:
    """Exact-match lookup on the natural key, locking the row if found."""
    result = await session.execute(
        select(Location)
        .where(
            Location.name == name,
            Location.address == address,
            Location.latitude == latitude,
            Location.longitude == longitude,
        )
        .with_for_update()
    )
    return result.scalar_one_or_none()


async def _lock_location(session: AsyncSession, location_id: uuid.UUID) -> Location | None:
    """Load a location by id with a row lock.

    Holding the parent row lock serializes variant diffs for that location.
    SQLite ignores FOR UPDATE; its database-level write lock gives the same order.
    """
    result = await session.execute(select(Location).where(Location.id == location_id).with_for_update())
    return result.scalar_one_or_none()


async def _create_location(
    session: AsyncSession,
    *,
    name: str,
    address: str,
    latitude: float,
    longitude: float,
) -> Location:
    """Insert a new location, flushing immediately so a key race surfaces here.

    Raises:
        ConflictError: If a concurrent transaction inserted the same natural key.
    """
    location = Location(name=name, address=address, latitude=latitude, longitude=longitude)
    session.add(location)
    try:
        await session.flush()
    except IntegrityError as e:
        msg = "A location with this name, address and coordinates already exists"
        raise ConflictError(msg) from e
    return location


async def stored_variant_names(session: AsyncSession, location_id: uuid.UUID) -> frozenset[str]:
    """Return the variant names currently stored for a location."""
    result = await session.execute(select(Variant.variant_name).where(Variant.location_id == location_id))
    return frozenset(result.scalars().all())


async def apply_variant_diff(
    session: AsyncSession,
    location_id: uuid.UUID,
    diff: VariantDiff,
    *,
    reporter: str,
    now: datetime,
) -> None:
    """Write a planned diff. Does not commit.

    Args:
        session: Database session with an open transaction.
        location_id: Owning location.
        diff: Planned writes.
        reporter: Identity recorded as reporter/confirmer.
        now: Timestamp recorded on inserted and reconfirmed rows.
    """
    if diff.is_empty:
        return

    if diff.to_add:
        session.add_all(
            Variant(
                location_id=location_id,
                variant_name=name,
                first_reported_by=reporter,
                first_reported_at=now,
                last_confirmed_by=reporter,
                last_confirmed_at=now,
                confirmation_count=1,
            )
            for name in sorted(diff.to_add)
        )

    if diff.to_reconfirm:
        # Increment in SQL so a concurrent reader-then-writer cannot lose a bump
        await session.execute(
            update(Variant)
            .where(
                Variant.location_id == location_id,
                Variant.variant_name.in_(sorted(diff.to_reconfirm)),
            )
            .values(
                last_confirmed_by=reporter,
                last_confirmed_at=now,
                confirmation_count=Variant.confirmation_count + 1,
            )
            .execution_options(synchronize_session="fetch")
        )

    if diff.to_remove:
        await session.execute(
            delete(Variant)
            .where(
                Variant.location_id == location_id,
                Variant.variant_name.in_(sorted(diff.to_remove)),
            )
            .execution_options(synchronize_session="fetch")
        )

    await session.flush()


async def _submit_once(
    session: AsyncSession,
    *,
    name: str,
    address: str,
    latitude: float,
    longitude: float,
    requested: frozenset[str],
    reporter: str,
) -> uuid.UUID:
    """One resolve-log-diff-commit pass of a submission.

    Raises:
        ConflictError: If the new location lost a natural-key race.
        StoreError: On any other database failure.
    """
    now = datetime.now(UTC)
    try:
        location = await _find_by_natural_key(
            session, name=name, address=address, latitude=latitude, longitude=longitude
        )
        is_update = location is not None
        if location is None:
            location = await _create_location(
                session, name=name, address=address, latitude=latitude, longitude=longitude
            )
        location_id = location.id

        session.add(
            Submission(
                location_id=location_id,
                submitted_by=reporter,
                submission_time=now,
                is_update=is_update,
                variants=sorted(requested),
            )
        )

        existing = await stored_variant_names(session, location_id)
        diff = plan_variant_diff(requested, existing, reconfirm=True)
        await apply_variant_diff(session, location_id, diff, reporter=reporter, now=now)
        await session.commit()
    except ConflictError:
        await session.rollback()
        raise
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Submission for location {name!r} failed: {e}")
        msg = "Failed to store submission"
        raise StoreError(msg) from e

    logger.info(
        f"{'Updated' if is_update else 'Created'} location {location_id} from submission: {diff.summary()}"
    )
    return location_id


async def submit_location(
    session: AsyncSession,
    *,
    name: str,
    address: str,
    latitude: float,
    longitude: float,
    variants: Iterable[str],
    reporter: str = ANONYMOUS_REPORTER,
) -> uuid.UUID:
    """Record a user submission and reconcile the location's variants.

    Finds the location whose natural key ``(name, address, latitude,
    longitude)`` matches exactly, creating it if absent. Appends a submission
    row with the full requested variant snapshot, then makes the stored
    variant set equal ``variants``: new names are inserted, repeated names are
    reconfirmed, missing names are deleted.

    A natural-key race with a concurrent submission is retried once as an
    update against the winning row.

    Args:
        session: Database session.
        name: Location display name.
        address: Location display address.
        latitude: Decimal degrees; must be finite.
        longitude: Decimal degrees; must be finite.
        variants: Requested variant names.
        reporter: Reporter identity stored in provenance fields.

    Returns:
        The resolved location id.

    Raises:
        ValidationError: On empty name/address, over-long variant names or
            non-finite coordinates.
        StoreError: If the store fails or the key race recurs.
    """
    _require_text("name", name)
    _require_text("address", address)
    _require_finite(latitude, longitude)
    requested = _require_variant_names(variants)

    kwargs = {
        "name": name,
        "address": address,
        "latitude": latitude,
        "longitude": longitude,
        "requested": requested,
        "reporter": reporter,
    }
    try:
        return await _submit_once(session, **kwargs)
    except ConflictError:
        logger.warning(f"Natural-key race creating location {name!r}; re-resolving as update")

    try:
        return await _submit_once(session, **kwargs)
    except ConflictError as e:
        msg = "Location could not be resolved after a repeated uniqueness conflict"
        raise StoreError(msg) from e


async def update_location(
    session: AsyncSession,
    location_id: uuid.UUID,
    *,
    name: str | None = None,
    address: str | None = None,
    coordinates: tuple[float, float] | None = None,
    variants: Iterable[str] | None = None,
    reporter: str = ANONYMOUS_REPORTER,
) -> VariantDiff | None:
    """Edit an existing location in place.

    ``name`` and ``address`` are overwritten only when supplied and non-empty;
    an empty string means "no change". ``coordinates`` is a ``(latitude,
    longitude)`` pair. When ``variants`` is supplied (an empty collection
    included) the stored set is made equal to it; names already stored are
    left as they are. No submission row is written.

    Args:
        session: Database session.
        location_id: Location to edit.
        name: New display name.
        address: New display address.
        coordinates: New ``(latitude, longitude)``.
        variants: Desired final variant set.
        reporter: Reporter identity stored on newly added variants.

    Returns:
        The applied VariantDiff, or None when ``variants`` was not supplied.

    Raises:
        ValidationError: On non-finite coordinates or over-long variant names.
        NotFoundError: If the location does not exist.
        ConflictError: If the edit collides with another location's natural key.
        StoreError: On any other database failure.
    """
    if coordinates is not None:
        _require_finite(*coordinates)
    if variants is not None:
        variants = _require_variant_names(variants)

    diff: VariantDiff | None = None
    try:
        location = await _lock_location(session, location_id)
        if location is None:
            msg = f"Location {location_id} not found"
            raise NotFoundError(msg)

        if name:
            location.name = name
        if address:
            location.address = address
        if coordinates is not None:
            location.latitude, location.longitude = coordinates

        if variants is not None:
            existing = await stored_variant_names(session, location_id)
            diff = plan_variant_diff(variants, existing, reconfirm=False)
            await apply_variant_diff(session, location_id, diff, reporter=reporter, now=datetime.now(UTC))

        await session.flush()
        await session.commit()
    except VariantMapError:
        await session.rollback()
        raise
    except IntegrityError as e:
        await session.rollback()
        msg = "Another location already has this name, address and coordinates"
        raise ConflictError(msg) from e
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Update of location {location_id} failed: {e}")
        msg = "Failed to update location"
        raise StoreError(msg) from e

    logger.info(f"Updated location {location_id}: {diff.summary() if diff else 'fields only'}")
    return diff


async def list_locations(session: AsyncSession) -> list[tuple[Location, list[Variant]]]:
    """Return every location with its variants, ordered by location name.

    Args:
        session: Database session.

    Returns:
        ``(location, variants)`` pairs; variants sorted by name.
    """
    locations = list((await session.execute(select(Location).order_by(Location.name, Location.id))).scalars().all())
    variants_result = await session.execute(
        select(Variant).order_by(Variant.variant_name).execution_options(populate_existing=True)
    )
    by_location: dict[uuid.UUID, list[Variant]] = defaultdict(list)
    for variant in variants_result.scalars().all():
        by_location[variant.location_id].append(variant)
    logger.info(f"Listed {len(locations)} locations")
    return [(location, by_location.get(location.id, [])) for location in locations]


async def get_location(session: AsyncSession, location_id: uuid.UUID) -> tuple[Location, list[Variant]]:
    """Return one location with its variants.

    Raises:
        NotFoundError: If the location does not exist.
    """
    location = (await session.execute(select(Location).where(Location.id == location_id))).scalar_one_or_none()
    if location is None:
        msg = f"Location {location_id} not found"
        raise NotFoundError(msg)
    result = await session.execute(
        select(Variant)
        .where(Variant.location_id == location_id)
        .order_by(Variant.variant_name)
        .execution_options(populate_existing=True)
    )
    return location, list(result.scalars().all())


async def list_submissions(session: AsyncSession, location_id: uuid.UUID) -> list[Submission]:
    """Return the submission history of a location, oldest first."""
    result = await session.execute(
        select(Submission)
        .where(Submission.location_id == location_id)
        .order_by(Submission.submission_time, Submission.id)
    )
    return list(result.scalars().all())


async def search_variants(
    session: AsyncSession,
    query: str,
    limit: int = DEFAULT_VARIANT_SEARCH_LIMIT,
) -> list[str]:
    """Suggest known variant names containing ``query`` (case-insensitive).

    Names are ranked by their highest confirmation count at any location.

    Args:
        session: Database session.
        query: Substring to look for; blank returns nothing.
        limit: Maximum number of names.

    Returns:
        Distinct variant names, most confirmed first.
    """
    if not query.strip():
        return []
    result = await session.execute(
        select(Variant.variant_name)
        .where(Variant.variant_name.icontains(query, autoescape=True))
        .group_by(Variant.variant_name)
        .order_by(func.max(Variant.confirmation_count).desc(), Variant.variant_name)
        .limit(limit)
    )
    return list(result.scalars().all())
