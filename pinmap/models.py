# pinmap/models.py
"""Value types passed into and out of the clustering engine.

Everything here is immutable and created fresh per clustering call.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import NamedTuple, Optional, Tuple

SINGLE = "single"
CLUSTER = "cluster"


class Coordinate(NamedTuple):
    lat: float
    lon: float


@dataclass(frozen=True)
class Pin:
    """A point of interest. ``is_visited`` marks places already in the user's history."""

    id: str
    coordinate: Coordinate
    is_visited: bool = False


@dataclass(frozen=True)
class Viewport:
    """Visible map region: a center plus angular height/width in degrees."""

    center_lat: float
    center_lon: float
    span_lat_deg: float
    span_lon_deg: float

    @property
    def center(self) -> Coordinate:
        return Coordinate(self.center_lat, self.center_lon)

    def contains(self, coord: Coordinate) -> bool:
        """True if ``coord`` lies within center +/- one full span on both axes.

        The box is twice the visible area so pins just off screen stay loaded
        while panning.
        """
        lat, lon = coord
        return (
            self.center_lat - self.span_lat_deg <= lat <= self.center_lat + self.span_lat_deg
            and self.center_lon - self.span_lon_deg <= lon <= self.center_lon + self.span_lon_deg
        )

    def zoomed_in(self) -> "Viewport":
        return replace(self, span_lat_deg=self.span_lat_deg * 0.5, span_lon_deg=self.span_lon_deg * 0.5)

    def zoomed_out(self, max_span: float = 10.0) -> "Viewport":
        return replace(
            self,
            span_lat_deg=min(self.span_lat_deg * 2, max_span),
            span_lon_deg=min(self.span_lon_deg * 2, max_span),
        )

    @property
    def is_degenerate(self) -> bool:
        return not math.isfinite(self.span_lon_deg) or self.span_lon_deg <= 0


@dataclass(frozen=True)
class Cluster:
    """Two or more pins drawn as one marker at their centroid."""

    id: str
    coordinate: Coordinate
    members: Tuple[Pin, ...] = field(default_factory=tuple)

    @property
    def member_ids(self) -> Tuple[str, ...]:
        return tuple(p.id for p in self.members)

    @property
    def count(self) -> int:
        return len(self.members)

    @property
    def is_visited(self) -> bool:
        return any(p.is_visited for p in self.members)


@dataclass(frozen=True)
class ClusterItem:
    """One renderable map item: either a lone pin or a cluster.

    Build with :meth:`single` or :meth:`of_cluster`; ``id`` and ``coordinate``
    work the same for both kinds.
    """

    kind: str
    pin: Optional[Pin] = None
    cluster: Optional[Cluster] = None

    @classmethod
    def single(cls, pin: Pin) -> "ClusterItem":
        return cls(kind=SINGLE, pin=pin)

    @classmethod
    def of_cluster(cls, cluster: Cluster) -> "ClusterItem":
        return cls(kind=CLUSTER, cluster=cluster)

    @property
    def is_cluster(self) -> bool:
        return self.kind == CLUSTER

    @property
    def id(self) -> str:
        return self.cluster.id if self.is_cluster else self.pin.id

    @property
    def coordinate(self) -> Coordinate:
        return self.cluster.coordinate if self.is_cluster else self.pin.coordinate

    @property
    def count(self) -> int:
        return self.cluster.count if self.is_cluster else 1

    @property
    def is_visited(self) -> bool:
        return self.cluster.is_visited if self.is_cluster else self.pin.is_visited

    @property
    def pin_ids(self) -> Tuple[str, ...]:
        """Ids of the input pins this item stands for."""
        return self.cluster.member_ids if self.is_cluster else (self.pin.id,)
