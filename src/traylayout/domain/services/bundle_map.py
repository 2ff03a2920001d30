"""Bundle map construction.

A bundle map groups the cables on a tray by category, then by diameter
bucket: ``{CableCategory: {DiameterBucket: (Cable, ...)}}``.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from ..value_objects import Cable, CableCategory, DiameterBucket
from .cable_classification import resolve_category
from .diameter_classifier import classify_diameter

logger = logging.getLogger(__name__)

__all__ = [
    "BundleMap",
    "build_bundle_map",
    "normalize_bundle_map",
]

BundleMap = dict[CableCategory, dict[DiameterBucket, tuple[Cable, ...]]]


def build_bundle_map(cables: Iterable[Cable]) -> BundleMap:
    """Group cables by category and diameter bucket.

    Cables without a resolvable category are left out. Cables keep their
    input order inside each bucket.
    """
    grouped: dict[CableCategory, dict[DiameterBucket, list[Cable]]] = {}
    skipped = 0
    for cable in cables:
        category = resolve_category(cable)
        if category is None:
            skipped += 1
            continue
        bucket = classify_diameter(cable.diameter)
        grouped.setdefault(category, {}).setdefault(bucket, []).append(cable)

    if skipped:
        logger.debug(f"Skipped {skipped} uncategorised cable(s) while building bundles")

    return {
        category: {bucket: tuple(items) for bucket, items in buckets.items()}
        for category, buckets in grouped.items()
    }


def normalize_bundle_map(
    raw: Mapping[str | CableCategory, Mapping[str | DiameterBucket, Sequence[Cable]]]
    | None,
) -> BundleMap:
    """Convert a loosely keyed bundle map to enum keys.

    Unknown categories or buckets and empty cable lists are dropped.
    Cables of the same category whose keys normalise to the same bucket
    are merged in encounter order.
    """
    normalized: BundleMap = {}
    if not raw:
        return normalized

    for category_key, buckets in raw.items():
        category = CableCategory.from_key(category_key)
        if category is None:
            logger.debug(f"Ignoring unknown bundle category {category_key!r}")
            continue
        for bucket_key, cables in (buckets or {}).items():
            bucket = DiameterBucket.from_key(bucket_key)
            if bucket is None:
                logger.debug(f"Ignoring unknown diameter bucket {bucket_key!r}")
                continue
            if not cables:
                continue
            category_buckets = normalized.setdefault(category, {})
            category_buckets[bucket] = category_buckets.get(bucket, ()) + tuple(cables)
    return normalized
