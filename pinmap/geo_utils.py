# pinmap/geo_utils.py
"""Great-circle distance, centroids and viewport filtering.

``haversine_m`` accepts scalars or numpy arrays, so the grouper can measure one
seed against every remaining pin in a single call.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

import numpy as np

from .models import Coordinate, Pin, Viewport

EARTH_R_M = 6_371_008.8


def haversine_m(lat1, lon1, lat2, lon2):
    lat1, lon1, lat2, lon2 = map(np.radians, (lat1, lon1, lat2, lon2))
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_R_M * c


def distance_m(a: Coordinate, b: Coordinate) -> float:
    return float(haversine_m(a.lat, a.lon, b.lat, b.lon))


def coords_array(pins: Sequence[Pin]) -> np.ndarray:
    """(n, 2) float array of [lat, lon] rows, in pin order."""
    if not pins:
        return np.empty((0, 2), dtype=float)
    return np.array([(p.coordinate.lat, p.coordinate.lon) for p in pins], dtype=float)


def centroid(coords: Iterable[Coordinate]) -> Coordinate:
    """Arithmetic mean of latitudes and longitudes.

    Flat-Earth average; fine for clusters a few km wide, wrong across the
    antimeridian or near the poles.
    """
    arr = np.asarray(list(coords), dtype=float)
    if arr.size == 0:
        raise ValueError("centroid of an empty coordinate set")
    lat, lon = arr.mean(axis=0)
    return Coordinate(float(lat), float(lon))


def visible_pins(pins: Iterable[Pin], viewport: Viewport, limit: Optional[int] = None) -> List[Pin]:
    """Pins inside ``viewport`` (see :meth:`Viewport.contains`), caller order kept."""
    out = []
    for pin in pins:
        if limit is not None and len(out) >= limit:
            break
        if viewport.contains(pin.coordinate):
            out.append(pin)
    return out
