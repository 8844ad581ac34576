# pinmap/plot_helpers.py
# Matplotlib drawing for clustered map items + lat/lon tick formatters.

from .cluster_style import SINGLE_PIN_DIAMETER, cluster_style

VISITED_COLOR = "#ff6666"
UNVISITED_COLOR = "#ff804d"
EDGE_COLOR = "#ffffff"


def dd_fmt_lon(x, pos): return f"{abs(x):.2f}°{'E' if x >= 0 else 'W'}"

def dd_fmt_lat(y, pos): return f"{abs(y):.2f}°{'N' if y >= 0 else 'S'}"


def _color(item):
    return VISITED_COLOR if item.is_visited else UNVISITED_COLOR


def draw_cluster_items(ax, items, transform=None, show_counts=True, scale=0.5, zorder=5):
    """Scatter singles and clusters onto ``ax``; clusters get their count as label.

    Marker area follows the cluster size tier. Returns the created artists
    (one PathCollection per non-empty kind, then the count Text objects).
    """
    extra = {"transform": transform} if transform is not None else {}
    singles = [i for i in items if not i.is_cluster]
    clusters = [i for i in items if i.is_cluster]
    artists = []

    if singles:
        artists.append(ax.scatter(
            [i.coordinate.lon for i in singles], [i.coordinate.lat for i in singles],
            s=(SINGLE_PIN_DIAMETER * scale) ** 2, c=[_color(i) for i in singles],
            edgecolors=EDGE_COLOR, linewidths=1.5, zorder=zorder, **extra,
        ))

    if clusters:
        styles = [cluster_style(i.count) for i in clusters]
        artists.append(ax.scatter(
            [i.coordinate.lon for i in clusters], [i.coordinate.lat for i in clusters],
            s=[(st.diameter * scale) ** 2 for st in styles], c=[_color(i) for i in clusters],
            edgecolors=EDGE_COLOR, linewidths=2.0, zorder=zorder + 1, **extra,
        ))
        if show_counts:
            for item, st in zip(clusters, styles):
                artists.append(ax.text(
                    item.coordinate.lon, item.coordinate.lat, str(item.count),
                    ha="center", va="center", color="white", fontweight="bold",
                    fontsize=st.font_size * scale, zorder=zorder + 2, clip_on=True, **extra,
                ))

    return artists
