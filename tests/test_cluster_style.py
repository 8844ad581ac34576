import pytest

from pinmap.cluster_style import LARGEST, cluster_style


@pytest.mark.parametrize(
    "count,tier,diameter,font",
    [
        (2, "smallest", 38, 14),
        (5, "smallest", 38, 14),
        (6, "small", 44, 16),
        (10, "small", 44, 16),
        (11, "medium", 50, 18),
        (20, "medium", 50, 18),
        (21, "large", 56, 20),
        (50, "large", 56, 20),
        (51, "largest", 62, 22),
        (5000, "largest", 62, 22),
    ],
)
def test_count_breakpoints(count: int, tier: str, diameter: int, font: int) -> None:
    style = cluster_style(count)
    assert (style.tier, style.diameter, style.font_size) == (tier, diameter, font)


def test_largest_tier_constant() -> None:
    assert cluster_style(51) is LARGEST


@pytest.mark.parametrize("count", [0, 1, -3])
def test_not_a_cluster(count: int) -> None:
    with pytest.raises(ValueError):
        cluster_style(count)
