"""Phase rotation for three-phase cable groups.

Cables of a three-phase circuit are reordered in blocks of six so that the
phases do not sit in the same relative position along the tray.
"""

from __future__ import annotations

from typing import Sequence

from ..value_objects import Cable, CableCategory, CategoryLayoutConfig

__all__ = [
    "PHASE_BLOCK_SIZE",
    "apply_phase_rotation",
    "is_phase_rotation_eligible",
]

PHASE_BLOCK_SIZE = 6


def apply_phase_rotation(cables: Sequence[Cable]) -> list[Cable]:
    """Reorder diameter-sorted cables in blocks of six.

    Within each block the first half is rotated left by one and the second
    half is reversed: ``[a, b, c, d, e, f]`` becomes ``[b, c, a, f, e, d]``.
    A shorter last block follows the same rule.

    Args:
        cables: Cables sorted by descending diameter.

    Returns:
        The reordered list, or a copy of the input when nothing was produced.
    """
    half = PHASE_BLOCK_SIZE // 2
    rotated: list[Cable] = []
    for start in range(0, len(cables), PHASE_BLOCK_SIZE):
        block = list(cables[start : start + PHASE_BLOCK_SIZE])
        rotated.extend(block[1:half] + block[0:1])
        rotated.extend(reversed(block[half:]))
    return rotated if rotated else list(cables)


def is_phase_rotation_eligible(
    category: CableCategory,
    config: CategoryLayoutConfig,
    cables: Sequence[Cable],
) -> bool:
    """Whether a bundle should be laid out with phase rotation.

    Requires both trefoil and phase rotation to be enabled. MV bundles
    qualify whenever they are non-empty. Power and VFD bundles must hold a
    multiple of three cables that all share the first cable's route.
    Control cables never qualify.
    """
    if not (config.trefoil and config.phase_rotation) or not cables:
        return False

    match category:
        case CableCategory.MV:
            return True
        case CableCategory.POWER | CableCategory.VFD:
            if len(cables) % 3 != 0:
                return False
            route = cables[0].route_key
            return route is not None and all(c.route_key == route for c in cables)
        case CableCategory.CONTROL:
            return False
