# pinmap/cluster_utils.py
"""Greedy, seed-anchored pin clustering for the map view.

Usage (map screen, on every settled pan/zoom):

from pinmap.cluster_utils import cluster

items = cluster(pins, viewport)
# each item is a lone pin or a Cluster at its members' centroid

Grouping compares every candidate to the group's seed only, never to the
other members, so it is neither transitive nor complete-linkage. Results
depend on the order of ``pins``; no sorting is done here.
"""
from __future__ import annotations

import uuid
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from .config import ClusterSettings
from .geo_utils import centroid, coords_array, haversine_m
from .logging_utils import get_logger
from .models import Cluster, ClusterItem, Pin, Viewport
from .zoom_utils import clustering_radius_m, should_cluster, zoom_level

log = get_logger(__name__)

DEFAULT_SETTINGS = ClusterSettings()


def greedy_group(pins: Sequence[Pin], radius_m: float) -> List[List[Pin]]:
    """Partition ``pins`` into groups, seed by seed.

    The first unassigned pin becomes the seed; every later unassigned pin
    strictly closer than ``radius_m`` to that seed joins it. O(n^2) worst case,
    fine for the few hundred pins a screen shows.
    """
    coords = coords_array(pins)
    unassigned = np.arange(len(pins))
    groups: List[List[Pin]] = []

    while unassigned.size:
        seed, rest = unassigned[0], unassigned[1:]
        lat_s, lon_s = coords[seed]
        # one pass around the seed; NaN distances never match
        near = haversine_m(lat_s, lon_s, coords[rest, 0], coords[rest, 1]) < radius_m
        groups.append([pins[seed]] + [pins[j] for j in rest[near]])
        unassigned = rest[~near]

    return groups


def summarize_group(members: Sequence[Pin]) -> ClusterItem:
    if len(members) == 1:
        return ClusterItem.single(members[0])
    return ClusterItem.of_cluster(
        Cluster(
            id=f"cluster_{uuid.uuid4().hex}",
            coordinate=centroid(p.coordinate for p in members),
            members=tuple(members),
        )
    )


def cluster(pins: Sequence[Pin], viewport: Viewport, settings: Optional[ClusterSettings] = None) -> List[ClusterItem]:
    """Return map items for ``pins`` as seen through ``viewport``."""
    if not pins:
        return []
    settings = settings or DEFAULT_SETTINGS

    zoom = zoom_level(viewport, max_zoom=settings.max_zoom)
    if not should_cluster(zoom, settings.cutoff_zoom):
        log.debug("zoom %.2f above cutoff %.1f, %d single pins", zoom, settings.cutoff_zoom, len(pins))
        return [ClusterItem.single(p) for p in pins]

    radius = clustering_radius_m(zoom, settings.tier_table(), settings.floor_radius_m)
    items = [summarize_group(g) for g in greedy_group(pins, radius)]
    log.debug(
        "zoom %.2f radius %.0fm: %d pins -> %d items (%d clusters)",
        zoom, radius, len(pins), len(items), sum(1 for i in items if i.is_cluster),
    )
    return items


def items_to_frame(items: Sequence[ClusterItem]) -> pd.DataFrame:
    """One row per item: id, kind, Lat_DD, Lon_DD, cluster_size, is_visited."""
    rows = []
    for item in items:
        lat, lon = item.coordinate
        rows.append({
            "id": item.id,
            "kind": item.kind,
            "Lat_DD": float(lat),
            "Lon_DD": float(lon),
            "cluster_size": int(item.count),
            "is_visited": bool(item.is_visited),
        })
    return pd.DataFrame(rows, columns=["id", "kind", "Lat_DD", "Lon_DD", "cluster_size", "is_visited"])
