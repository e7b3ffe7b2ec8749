from __future__ import annotations

from datetime import datetime

import pandas as pd
import pytest
from dateutil import tz

from simple_fast.timeline import (
    TIMELINE_COLUMNS,
    _format_value,
    display_frame,
    presets_frame,
    simulate_session,
    timeline_frame,
)


def test_simulate_session_runs_to_completion() -> None:
    snaps = simulate_session(12, datetime(2024, 11, 23, 9, 0), step_seconds=3 * 3600)
    assert [snap.elapsed_fraction for snap in snaps] == pytest.approx(
        [0.0, 0.25, 0.5, 0.75, 1.0]
    )
    assert snaps[0].is_active
    assert not snaps[-1].is_active
    assert snaps[-1].start_angle == 135.0
    assert snaps[-1].current_time == datetime(2024, 11, 23, 21, 0)


def test_simulate_session_rejects_bad_step() -> None:
    with pytest.raises(ValueError):
        simulate_session(12, datetime(2024, 11, 23, 9, 0), step_seconds=0)


def test_timeline_frame_columns_and_values() -> None:
    snaps = simulate_session(16, datetime(2024, 11, 23, 23, 30), step_seconds=8 * 3600)
    df = timeline_frame(snaps)
    assert list(df.columns) == TIMELINE_COLUMNS
    assert len(df) == 3
    assert df.loc[0, "hour_angle"] == 352.5
    assert df.loc[1, "elapsed_pct"] == 50.0
    assert df.loc[0, "remaining"] == "16:00:00"
    assert df.loc[2, "remaining"] == "00:00:00"


def test_timeline_frame_empty() -> None:
    df = timeline_frame([])
    assert df.empty
    assert list(df.columns) == TIMELINE_COLUMNS


def test_presets_frame_one_row_per_preset() -> None:
    df = presets_frame(datetime(2024, 11, 23, 23, 30))
    assert list(df["preset"]) == ["12:12", "16:8", "18:6", "20:4"]
    assert set(df["start_angle"]) == {352.5}
    ends = [pd.Timestamp(value) for value in df["end"]]
    assert ends[1] == pd.Timestamp("2024-11-24 15:30")


def test_display_frame_formats_values() -> None:
    df = pd.DataFrame(
        {
            "time": [pd.Timestamp("2024-11-23 09:00:00")],
            "angle": [135.0],
            "pct": [33.3333],
            "active": [True],
            "hours": [16],
            "missing": [None],
        }
    )
    out = display_frame(df)
    assert out.loc[0, "time"] == "23/11/2024 09:00:00"
    assert out.loc[0, "angle"] == "135"
    assert out.loc[0, "pct"] == "33.3333"
    assert out.loc[0, "active"] == "yes"
    assert out.loc[0, "hours"] == "16"
    assert out.loc[0, "missing"] == ""


def test_format_value_plain_string() -> None:
    assert _format_value("16:8") == "16:8"


def test_format_value_cells() -> None:
    assert _format_value(None) == ""
    assert _format_value(float("nan")) == ""
    assert _format_value(0.0) == "0"
    assert _format_value(112.5) == "112.5"
    assert _format_value(False) == "no"
    assert (
        _format_value(datetime(2024, 11, 24, 15, 30, tzinfo=tz.UTC))
        == "24/11/2024 15:30:00"
    )
