from pathlib import Path

import pandas as pd
import pytest

from pinmap.errors import PinLoadError
from pinmap.pin_loader import DMS, dms_to_dd, pins_from_frame, read_pin_table


def test_dms_to_dd() -> None:
    assert dms_to_dd("20° 30' 0\" N") == pytest.approx(20.5)
    assert dms_to_dd("72 30 36 W") == pytest.approx(-72.51)
    assert dms_to_dd("10 S") == pytest.approx(-10.0)
    assert dms_to_dd("20 30 15") is None
    assert dms_to_dd("N") is None


def test_decimal_pins_keep_order_and_ids() -> None:
    df = pd.DataFrame(
        {
            "id": ["x", "y", "z"],
            "lat": ["48,8566", "51.5074", 40.7128],
            "lon": ["2,3522", "-0.1278", -74.006],
            "visited": ["yes", "no", True],
        }
    )
    pins = pins_from_frame(df, "lat", "lon", id_col="id", visited_col="visited")
    assert [p.id for p in pins] == ["x", "y", "z"]
    assert pins[0].coordinate.lat == pytest.approx(48.8566)
    assert pins[0].coordinate.lon == pytest.approx(2.3522)
    assert [p.is_visited for p in pins] == [True, False, True]


def test_defaults_for_missing_id_and_visited() -> None:
    df = pd.DataFrame({"lat": [1.0, 2.0], "lon": [3.0, 4.0]}, index=[10, 11])
    pins = pins_from_frame(df, "lat", "lon")
    assert [p.id for p in pins] == ["10", "11"]
    assert not any(p.is_visited for p in pins)


def test_bad_rows_dropped_and_logged(caplog: pytest.LogCaptureFixture) -> None:
    df = pd.DataFrame({"lat": ["1.0", "oops", None, "95"], "lon": ["1.0", "2.0", "3.0", "200"]})
    with caplog.at_level("WARNING", logger="pinmap"):
        pins = pins_from_frame(df, "lat", "lon")
    assert [p.id for p in pins] == ["0", "3"]
    assert pins[1].coordinate == (90.0, 180.0)
    assert "dropped 2 of 4 rows" in caplog.text


def test_dms_format() -> None:
    df = pd.DataFrame({"lat": ["20 30 0 N", "bad"], "lon": ["72 30 0 W", "10 E"]})
    pins = pins_from_frame(df, "lat", "lon", fmt=DMS)
    assert len(pins) == 1
    assert pins[0].coordinate.lat == pytest.approx(20.5)
    assert pins[0].coordinate.lon == pytest.approx(-72.5)


def test_missing_columns() -> None:
    df = pd.DataFrame({"lat": [1.0]})
    with pytest.raises(PinLoadError, match="lon"):
        pins_from_frame(df, "lat", "lon")


def test_unknown_format() -> None:
    df = pd.DataFrame({"lat": [1.0], "lon": [1.0]})
    with pytest.raises(PinLoadError):
        pins_from_frame(df, "lat", "lon", fmt="UTM")


def test_read_csv(tmp_path: Path) -> None:
    path = tmp_path / "pins.csv"
    path.write_text("id,lat,lon\na,1.0,2.0\nb,3.0,4.0\n")
    df = read_pin_table(path)
    assert df["id"].tolist() == ["a", "b"]


def test_read_unsupported(tmp_path: Path) -> None:
    path = tmp_path / "pins.json"
    path.write_text("[]")
    with pytest.raises(PinLoadError, match="unsupported"):
        read_pin_table(path)


def test_read_missing_file(tmp_path: Path) -> None:
    with pytest.raises(PinLoadError):
        read_pin_table(tmp_path / "nope.csv")
