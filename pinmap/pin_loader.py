# pinmap/pin_loader.py
# Build Pin objects from uploaded tables (CSV / XLSX)
# - Decimal degrees with comma or dot decimal separators
# - DMS strings with N/S/E/W ("20° 30' 15\" N")
# - Rows with unusable coordinates are dropped and logged

from __future__ import annotations

import os
import re
from typing import List, Optional

import numpy as np
import pandas as pd

from .errors import PinLoadError
from .logging_utils import get_logger
from .models import Coordinate, Pin

log = get_logger(__name__)

DMS = "DMS"
DECIMAL = "Decimal Degrees"
FORMATS = (DMS, DECIMAL)

_TRUTHY = {"1", "true", "yes", "y", "t", "visited"}


def dms_to_dd(dms):
    """
    Parse a DMS string with a cardinal letter into decimal degrees.
    Examples: "20° 30' 15\" N", "72 30 15 W"
    Returns float, or None when no direction or number is found.
    """
    dms_clean = re.sub(r"[^\d\.NSEWnsew]+", " ", str(dms)).strip()
    parts = dms_clean.split()
    direction = next((p.upper() for p in parts if p.upper() in ("N", "S", "E", "W")), None)
    nums = [float(p) for p in parts if re.match(r"^\d+(\.\d+)?$", p)]
    if not direction or not nums:
        return None
    deg = nums[0]
    minute = nums[1] if len(nums) > 1 else 0.0
    second = nums[2] if len(nums) > 2 else 0.0
    dd = deg + minute / 60.0 + second / 3600.0
    return -dd if direction in ("S", "W") else dd


def _to_float_series(s: pd.Series) -> pd.Series:
    """Numeric coercion accepting comma decimals; NaN for anything else."""
    return pd.to_numeric(
        s.astype(str).str.strip().str.replace(",", ".", regex=False),
        errors="coerce",
    )


def _to_bool(val) -> bool:
    if isinstance(val, (bool, np.bool_)):
        return bool(val)
    if val is None or (isinstance(val, float) and np.isnan(val)):
        return False
    return str(val).strip().lower() in _TRUTHY


def read_pin_table(source, name: Optional[str] = None) -> pd.DataFrame:
    """Read a CSV or XLSX table from a path or an uploaded file object."""
    name = (name or getattr(source, "name", None) or str(source)).lower()
    ext = os.path.splitext(name)[1]
    try:
        if ext == ".csv":
            return pd.read_csv(source)
        if ext == ".xlsx":
            return pd.read_excel(source)
    except (OSError, ValueError) as exc:
        raise PinLoadError(f"cannot read {name}: {exc}") from exc
    raise PinLoadError(f"unsupported pin table format: {ext or name!r}")


def pins_from_frame(
    df: pd.DataFrame,
    lat_col: str,
    lon_col: str,
    id_col: Optional[str] = None,
    visited_col: Optional[str] = None,
    fmt: str = DECIMAL,
) -> List[Pin]:
    """Convert table rows into pins, keeping row order.

    ids default to the row index; ``is_visited`` defaults to False.
    """
    if fmt not in FORMATS:
        raise PinLoadError(f"unknown coordinate format {fmt!r}")
    missing = [c for c in (lat_col, lon_col, id_col, visited_col) if c and c not in df.columns]
    if missing:
        raise PinLoadError(f"missing columns: {', '.join(missing)}")

    if fmt == DMS:
        lat = pd.to_numeric(df[lat_col].astype(str).apply(dms_to_dd), errors="coerce")
        lon = pd.to_numeric(df[lon_col].astype(str).apply(dms_to_dd), errors="coerce")
    else:
        lat = _to_float_series(df[lat_col])
        lon = _to_float_series(df[lon_col])

    ok = lat.notna() & lon.notna()
    dropped = int((~ok).sum())
    if dropped:
        log.warning("dropped %d of %d rows without usable coordinates", dropped, len(df))

    lat = lat[ok].clip(-90, 90)
    lon = lon[ok].clip(-180, 180)
    ids = df.loc[ok, id_col].astype(str) if id_col else df.index[ok.to_numpy()].astype(str)
    visited = df.loc[ok, visited_col].map(_to_bool) if visited_col else [False] * int(ok.sum())

    return [
        Pin(id=str(pid), coordinate=Coordinate(float(la), float(lo)), is_visited=bool(v))
        for pid, la, lo, v in zip(ids, lat, lon, visited)
    ]
