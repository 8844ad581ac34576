import math

import pytest

from pinmap.models import Viewport
from pinmap.zoom_utils import (
    CUTOFF_ZOOM,
    MAX_ZOOM,
    clustering_radius_m,
    should_cluster,
    span_for_zoom,
    zoom_level,
)


def _vp(span_lon: float) -> Viewport:
    return Viewport(center_lat=40.0, center_lon=-74.0, span_lat_deg=abs(span_lon) or 1.0, span_lon_deg=span_lon)


def test_zoom_from_span() -> None:
    assert zoom_level(_vp(360.0)) == 0.0
    assert zoom_level(_vp(180.0)) == 1.0
    assert zoom_level(_vp(360.0 / 4096)) == 12.0


def test_zoom_clamped_to_range() -> None:
    assert zoom_level(_vp(720.0)) == 0.0
    assert zoom_level(_vp(1e-9)) == MAX_ZOOM


@pytest.mark.parametrize("span", [0.0, -1.0, math.nan, math.inf])
def test_degenerate_span_is_max_zoom(span: float, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING", logger="pinmap"):
        assert zoom_level(_vp(span)) == MAX_ZOOM
    assert "degenerate viewport" in caplog.text


def test_span_for_zoom_inverts_zoom_level() -> None:
    for z in (0.0, 3.5, 10.0, 16.0, 19.25):
        assert zoom_level(_vp(span_for_zoom(z))) == pytest.approx(z)


@pytest.mark.parametrize(
    "zoom,radius",
    [
        (0.0, 5000.0),
        (9.99, 5000.0),
        (10.0, 1000.0),
        (11.5, 1000.0),
        (12.0, 300.0),
        (13.9, 300.0),
        (14.0, 100.0),
        (15.99, 100.0),
    ],
)
def test_reachable_radius_tiers(zoom: float, radius: float) -> None:
    assert clustering_radius_m(zoom) == radius


def test_tiers_behind_cutoff_still_in_table() -> None:
    # unreachable through cluster() except at exactly the cutoff
    assert clustering_radius_m(16.0) == 30.0
    assert clustering_radius_m(17.9) == 30.0
    assert clustering_radius_m(18.0) == 0.0
    assert clustering_radius_m(20.0) == 0.0


def test_radius_for_viewport_tiers() -> None:
    assert clustering_radius_m(zoom_level(_vp(span_for_zoom(5)))) == 5000.0
    assert clustering_radius_m(zoom_level(_vp(span_for_zoom(11)))) == 1000.0
    assert clustering_radius_m(zoom_level(_vp(span_for_zoom(13)))) == 300.0
    assert clustering_radius_m(zoom_level(_vp(span_for_zoom(15)))) == 100.0


def test_should_cluster_cutoff() -> None:
    assert should_cluster(CUTOFF_ZOOM) is True
    assert should_cluster(16.01) is False
    assert should_cluster(0.0) is True


def test_custom_tier_table() -> None:
    tiers = ((5.0, 10.0), (8.0, 2.0))
    assert clustering_radius_m(4.0, tiers) == 10.0
    assert clustering_radius_m(7.0, tiers) == 2.0
    assert clustering_radius_m(9.0, tiers, floor=1.0) == 1.0
