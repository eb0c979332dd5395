"""Location-variant reconciliation primitives.

Re-exports the pure diff planner so callers can import from
``variant_map.lib.reconciliation`` directly.
"""

from variant_map.lib.reconciliation.diff import VariantDiff, plan_variant_diff

__all__ = ["VariantDiff", "plan_variant_diff"]
