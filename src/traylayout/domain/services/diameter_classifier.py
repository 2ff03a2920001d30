"""Diameter classification into the eight bundle buckets."""

from __future__ import annotations

import math

from ..value_objects import DiameterBucket

__all__ = [
    "DIAMETER_THRESHOLDS_MM",
    "bucket_index",
    "classify_diameter",
]

# Inclusive upper bounds, ascending. Anything above the last value is 60+.
DIAMETER_THRESHOLDS_MM: tuple[tuple[float, DiameterBucket], ...] = (
    (8.0, DiameterBucket.RANGE_0_8),
    (15.0, DiameterBucket.RANGE_8_1_15),
    (21.0, DiameterBucket.RANGE_15_1_21),
    (30.0, DiameterBucket.RANGE_21_1_30),
    (40.0, DiameterBucket.RANGE_30_1_40),
    (45.0, DiameterBucket.RANGE_40_1_45),
    (60.0, DiameterBucket.RANGE_45_1_60),
)


def classify_diameter(diameter: float | None) -> DiameterBucket:
    """Map a cable diameter in mm to its bucket.

    Missing, NaN and non-positive diameters fall into the smallest bucket.

    Args:
        diameter: Cable outer diameter in mm.

    Returns:
        The bucket whose range contains the diameter.
    """
    if diameter is None:
        return DiameterBucket.RANGE_0_8
    try:
        value = float(diameter)
    except (TypeError, ValueError):
        return DiameterBucket.RANGE_0_8
    if math.isnan(value) or value <= 0:
        return DiameterBucket.RANGE_0_8

    for upper, bucket in DIAMETER_THRESHOLDS_MM:
        if value <= upper:
            return bucket
    return DiameterBucket.RANGE_60_PLUS


def bucket_index(diameter: float | None) -> int:
    """Ordinal of the bucket for a diameter (0 = smallest)."""
    return classify_diameter(diameter).index
