"""Zoom-adaptive map pin clustering."""

from .cluster_utils import cluster, greedy_group, items_to_frame, summarize_group
from .geo_utils import visible_pins
from .models import Cluster, ClusterItem, Coordinate, Pin, Viewport

__all__ = [
    "Cluster",
    "ClusterItem",
    "Coordinate",
    "Pin",
    "Viewport",
    "cluster",
    "greedy_group",
    "items_to_frame",
    "summarize_group",
    "visible_pins",
]
