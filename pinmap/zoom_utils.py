# pinmap/zoom_utils.py
# Zoom level from a viewport, and the zoom -> clustering radius table.
#
# Zoom follows web-map tile numbering: each halving of the visible longitude
# span is one step in. 0 = whole world, 20 = single building.

from __future__ import annotations

import math

from .logging_utils import get_logger
from .models import Viewport

log = get_logger(__name__)

WORLD_SPAN_DEG = 360.0
MIN_ZOOM = 0.0
MAX_ZOOM = 20.0

# Above this zoom nothing is clustered at all.
CUTOFF_ZOOM = 16.0

# (upper zoom bound, exclusive; radius in meters). Zoom past the last bound
# gets FLOOR_RADIUS_M. The 16-18 tier and the floor sit behind CUTOFF_ZOOM and
# are only reachable by calling clustering_radius_m directly.
RADIUS_TIERS_M = (
    (10.0, 5000.0),
    (12.0, 1000.0),
    (14.0, 300.0),
    (16.0, 100.0),
    (18.0, 30.0),
)
FLOOR_RADIUS_M = 0.0


def zoom_level(viewport: Viewport, max_zoom: float = MAX_ZOOM) -> float:
    """clamp(log2(360 / span_lon_deg), 0, max_zoom).

    A zero, negative or non-finite span counts as fully zoomed in.
    """
    span = viewport.span_lon_deg
    if viewport.is_degenerate:
        log.warning("degenerate viewport span_lon_deg=%r, using zoom %.1f", span, max_zoom)
        return float(max_zoom)
    zoom = math.log2(WORLD_SPAN_DEG / span)
    return min(max(zoom, MIN_ZOOM), float(max_zoom))


def span_for_zoom(zoom: float) -> float:
    """Longitude span (degrees) that maps back to ``zoom``."""
    return WORLD_SPAN_DEG / (2.0 ** zoom)


def clustering_radius_m(zoom: float, tiers=RADIUS_TIERS_M, floor: float = FLOOR_RADIUS_M) -> float:
    for below_zoom, radius in tiers:
        if zoom < below_zoom:
            return float(radius)
    return float(floor)


def should_cluster(zoom: float, cutoff: float = CUTOFF_ZOOM) -> bool:
    return zoom <= cutoff
