# app.py - pinmap viewer:
# - Upload pins (CSV / XLSX, decimal degrees or DMS)
# - Pick a viewport (center + zoom) and watch clusters regroup
# - Cluster markers sized by count tier, visited pins in red
# Requires pinmap/ (cluster_utils, pin_loader, plot_helpers, zoom_utils, config)

import streamlit as st
import matplotlib.pyplot as plt
import cartopy.crs as ccrs
import cartopy.feature as cfeature
from matplotlib import ticker as mticker

from pinmap.cluster_utils import cluster, items_to_frame
from pinmap.config import load_config
from pinmap.errors import ConfigError, PinLoadError
from pinmap.geo_utils import visible_pins
from pinmap.logging_utils import configure_logging
from pinmap.models import Viewport
from pinmap.pin_loader import FORMATS, pins_from_frame, read_pin_table
from pinmap.plot_helpers import dd_fmt_lat, dd_fmt_lon, draw_cluster_items
from pinmap.zoom_utils import span_for_zoom, zoom_level

st.set_page_config(page_title="pinmap", page_icon="📍", layout="wide")

# ── helpers ─────────────────────────────────────────────────────────────────

def _find_col(cols, candidates):
    lower = {c.lower(): c for c in cols}
    for cand in candidates:
        if cand in lower:
            return lower[cand]
    return None


def _safe_extent(vp):
    lo = max(-179.999, vp.center_lon - vp.span_lon_deg / 2)
    hi = min(179.999, vp.center_lon + vp.span_lon_deg / 2)
    la = max(-89.9, vp.center_lat - vp.span_lat_deg / 2)
    lb = min(89.9, vp.center_lat + vp.span_lat_deg / 2)
    if hi <= lo: hi = lo + 0.0001
    if lb <= la: lb = la + 0.0001
    return (lo, hi, la, lb)


try:
    cfg = load_config()
except ConfigError as e:
    st.error(f"❌ Invalid configuration: {e}"); st.stop()
configure_logging(cfg.log_level)

# ── UI ──────────────────────────────────────────────────────────────────────
st.title("pinmap – zoom-adaptive pin clustering")

with st.sidebar:
    st.header("**⚙️ Controls**")
    with st.expander("**Pins**", expanded=True):
        up_file = st.file_uploader("CSV / XLSX", ["csv", "xlsx"])
        coord_fmt = st.selectbox("Coord format", list(FORMATS), index=1)
    with st.expander("**Viewport**", expanded=True):
        zoom = st.slider("Zoom", 0.0, 20.0, 12.0, 0.25)
        limit_on = st.checkbox(f"Cap at {cfg.map.max_visible_pins} visible pins", True)
    with st.expander("**Display**", expanded=False):
        show_counts = st.checkbox("Show cluster counts", True)
        marker_scale = st.slider("Marker scale", 0.2, 1.5, 0.5, 0.05)
        land_col = st.color_picker("Land color", "#f0e8d8")
        ocean_col = st.color_picker("Water color", "#cce6ff")

if not up_file:
    st.info("Upload a table with latitude/longitude columns to start."); st.stop()

try:
    df0 = read_pin_table(up_file)
except PinLoadError as e:
    st.error(f"❌ {e}"); st.stop()

lat_col = _find_col(df0.columns, ["lat", "latitude", "lat_dd", "y"])
lon_col = _find_col(df0.columns, ["lon", "lng", "long", "longitude", "lon_dd", "x"])
if not lat_col or not lon_col:
    st.error("❌ Couldn’t detect latitude/longitude columns."); st.stop()
id_col = _find_col(df0.columns, ["id", "place_id", "name"])
visited_col = _find_col(df0.columns, ["visited", "is_visited", "exists_in_db"])

try:
    pins = pins_from_frame(df0, lat_col, lon_col, id_col=id_col, visited_col=visited_col, fmt=coord_fmt)
except PinLoadError as e:
    st.error(f"❌ {e}"); st.stop()
if not pins:
    st.error("❌ No rows with usable coordinates."); st.stop()

with st.sidebar:
    with st.expander("**Center**", expanded=True):
        c_lat = st.number_input("Center lat", -90.0, 90.0, sum(p.coordinate.lat for p in pins) / len(pins), format="%.5f")
        c_lon = st.number_input("Center lon", -180.0, 180.0, sum(p.coordinate.lon for p in pins) / len(pins), format="%.5f")

span = min(span_for_zoom(zoom), cfg.map.max_span_deg)
viewport = Viewport(c_lat, c_lon, span, span)
shown = visible_pins(pins, viewport, cfg.map.max_visible_pins if limit_on else None)
items = cluster(shown, viewport, cfg.cluster)

# Figure
fig = plt.figure(figsize=(10, 7))
ax = fig.add_subplot(111, projection=ccrs.PlateCarree())
bounds = _safe_extent(viewport)
ax.set_extent(bounds, crs=ccrs.PlateCarree())
ax.add_feature(cfeature.LAND.with_scale("50m"), fc=land_col)
ax.add_feature(cfeature.OCEAN.with_scale("50m"), fc=ocean_col)
ax.add_feature(cfeature.COASTLINE)
gl = ax.gridlines(draw_labels=True, color="#999999", ls=":", lw=0.5)
gl.top_labels = gl.right_labels = False
gl.xformatter = mticker.FuncFormatter(dd_fmt_lon)
gl.yformatter = mticker.FuncFormatter(dd_fmt_lat)

draw_cluster_items(ax, items, transform=ccrs.PlateCarree(), show_counts=show_counts, scale=marker_scale)
st.pyplot(fig)

n_clusters = sum(1 for i in items if i.is_cluster)
st.caption(
    f"zoom {zoom_level(viewport):.2f} · {len(shown)} of {len(pins)} pins in view · "
    f"{len(items)} markers ({n_clusters} clusters)"
)
st.dataframe(items_to_frame(items), use_container_width=True)
