"""Set-based diff between a requested variant set and the stored one."""

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class VariantDiff:
    """Writes needed to make a location's stored variants equal ``requested``.

    Attributes:
        to_add: Names requested but not stored; inserted with count 1.
        to_reconfirm: Names both requested and stored; count bumped by one.
        to_remove: Names stored but no longer requested; deleted outright.
    """

    to_add: frozenset[str]
    to_reconfirm: frozenset[str]
    to_remove: frozenset[str]

    @property
    def is_empty(self) -> bool:
        return not (self.to_add or self.to_reconfirm or self.to_remove)

    def summary(self) -> dict[str, list[str]]:
        """Sorted, JSON-friendly view used in log lines and API responses."""
        return {
            "added": sorted(self.to_add),
            "reconfirmed": sorted(self.to_reconfirm),
            "removed": sorted(self.to_remove),
        }


def plan_variant_diff(
    requested: Iterable[str],
    existing: Iterable[str],
    *,
    reconfirm: bool,
) -> VariantDiff:
    """Compute the variant writes for one location.

    Names are compared by exact string equality: no trimming, no case folding.

    Args:
        requested: The desired final variant set.
        existing: Variant names currently stored for the location.
        reconfirm: Whether names present on both sides count as a fresh
            confirmation. True on the submit path, False on the edit path.

    Returns:
        The planned VariantDiff.
    """
    wanted = frozenset(requested)
    stored = frozenset(existing)
    return VariantDiff(
        to_add=wanted - stored,
        to_reconfirm=(wanted & stored) if reconfirm else frozenset(),
        to_remove=stored - wanted,
    )
