# pinmap/cluster_style.py
# Marker size and count-label font per cluster size.
# Diameter and font share the same count breakpoints.

from typing import NamedTuple

SINGLE_PIN_DIAMETER = 32


class ClusterStyle(NamedTuple):
    tier: str
    diameter: int
    font_size: int


# (largest count in tier, style); counts past the last bound use LARGEST.
STYLE_TIERS = (
    (5, ClusterStyle("smallest", 38, 14)),
    (10, ClusterStyle("small", 44, 16)),
    (20, ClusterStyle("medium", 50, 18)),
    (50, ClusterStyle("large", 56, 20)),
)
LARGEST = ClusterStyle("largest", 62, 22)


def cluster_style(count: int) -> ClusterStyle:
    """Return the marker style for a cluster of ``count`` pins (count >= 2)."""
    if count < 2:
        raise ValueError(f"a cluster has at least 2 pins, got {count}")
    for upper, style in STYLE_TIERS:
        if count <= upper:
            return style
    return LARGEST
