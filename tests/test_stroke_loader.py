import pandas as pd
import pytest

from rowing_foundation.io.stroke_loader import (
    find_stroke_table,
    frame_to_strokes,
    load_session,
    load_stroke_table,
    read_session_id,
)

EXPORT_HEADER = """Session Information:,,,,
Name:,Morning row,,,
Start Time:,03/14/2024 07:05:33,,,
Type:,Just Row,,,

Session Summary:,,,,
Interval,Total Distance (GPS),Elapsed Time,Avg Split (GPS),
(Interval),(Meters),(HH:MM:SS.tenths),(MM:SS.tenths),
1,2500,00:10:12.3,02:02.4,

Per-Stroke Data:,,,,
Interval,Distance (GPS),Elapsed Time,Stroke Rate,Heart Rate,Speed (GPS),Distance/Stroke (GPS),Power
(Interval),(Meters),(HH:MM:SS.tenths),(SPM),(BPM),(M/S),(Meters),(Watts)
"""


def _write_export(tmp_path, rows, name="session.csv", header=EXPORT_HEADER):
    path = tmp_path / name
    body = "\n".join(",".join(str(c) for c in row) for row in rows)
    path.write_text(header + body + "\n")
    return path


def test_find_stroke_table_skips_summary_and_units():
    lines = EXPORT_HEADER.splitlines() + ["1,10.5,00:00:02.1,22.0,140,4.1,9.8,210"]
    header_idx, data_start = find_stroke_table(lines)
    assert lines[header_idx].startswith("Interval,Distance (GPS)")
    assert lines[data_start].startswith("1,10.5")


def test_find_stroke_table_without_units_row():
    lines = ["Elapsed Time,Heart Rate,Stroke Rate,Distance", "00:01.0,140,22,10"]
    assert find_stroke_table(lines) == (0, 1)


def test_find_stroke_table_missing():
    assert find_stroke_table(["a,b,c", "1,2,3"]) is None


def test_load_stroke_table_stops_at_blank_row(tmp_path):
    rows = [
        (1, 10.5, "00:00:02.1", 22.0, 140, 4.1, 9.8, 210),
        (1, 20.4, "00:00:04.8", 22.5, 141, 4.2, 9.9, 215),
    ]
    path = _write_export(tmp_path, rows)
    with open(path, "a") as f:
        f.write("\nFooter:,ignored,,,\n")
    df = load_stroke_table(str(path))
    assert isinstance(df, pd.DataFrame)
    assert len(df) == 2
    assert "Heart Rate" in df.columns


def test_load_session_resolves_fields(tmp_path):
    rows = [
        (1, 10.5, "00:00:02.1", 22.0, 140, 4.1, 9.8, 210),
        (1, 20.4, "00:00:04.8", "---", "---", 4.2, "---", "---"),
        (1, 31.0, "bad-time", 23.0, 142, "---", 10.1, 220),
    ]
    path = _write_export(tmp_path, rows)
    session_id, strokes = load_session(str(path))
    assert session_id == "20240314"
    assert len(strokes) == 3

    first = strokes[0]
    assert first.elapsed_time_s == pytest.approx(2.1)
    assert first.heart_rate == 140
    assert first.stroke_rate == 22.0
    assert first.speed == 4.1
    assert first.cumulative_distance == 10.5
    assert first.distance_per_stroke == 9.8
    assert first.power == 210

    second = strokes[1]
    assert second.heart_rate is None
    assert second.stroke_rate is None
    assert second.distance_per_stroke is None
    assert second.power is None
    assert second.speed == 4.2

    assert strokes[2].elapsed_time_s == 0.0
    assert strokes[2].speed is None


def test_missing_columns_resolve_to_none():
    df = pd.DataFrame({"Elapsed Time": ["01:00.0"], "Heart Rate": ["150"]})
    (stroke,) = frame_to_strokes(df)
    assert stroke.elapsed_time_s == 60.0
    assert stroke.heart_rate == 150
    assert stroke.stroke_rate is None
    assert stroke.cumulative_distance is None


def test_session_id_falls_back_to_file_stem(tmp_path):
    path = tmp_path / "erg_piece.csv"
    path.write_text("Elapsed Time,Heart Rate,Stroke Rate,Distance\n00:01.0,140,22,10\n")
    session_id, strokes = load_session(str(path))
    assert session_id == "erg_piece"
    assert len(strokes) == 1


def test_read_session_id_ignores_stroke_section():
    lines = ["Per-Stroke Data:", "Start Time,Elapsed Time", "x,00:01.0"]
    assert read_session_id(lines, "fallback") == "fallback"


def test_file_without_stroke_table_gives_no_strokes(tmp_path):
    path = tmp_path / "notes.csv"
    path.write_text("Just,some,text\n1,2,3\n")
    session_id, strokes = load_session(str(path))
    assert session_id == "notes"
    assert strokes == []


def test_missing_file_gives_no_strokes(tmp_path):
    session_id, strokes = load_session(str(tmp_path / "missing.csv"))
    assert session_id == "missing"
    assert strokes == []


def _write_rows(tmp_path, rows, name="piece.csv"):
    path = tmp_path / name
    path.write_text("Elapsed Time,Distance (GPS),Stroke Rate,Heart Rate\n" + "\n".join(rows) + "\n")
    return path


def test_over_long_row_keeps_the_session(tmp_path):
    rows = [f"00:00:{i * 3:04.1f},{i * 10},22,150" for i in range(1, 20)]
    rows[5] = rows[5] + ",99,extra"
    session_id, strokes = load_session(str(_write_rows(tmp_path, rows)))
    assert len(strokes) == 19
    assert strokes[5].cumulative_distance == 60.0
    assert strokes[5].heart_rate == 150
    assert strokes[6].elapsed_time_s == pytest.approx(21.0)
    assert strokes[-1].cumulative_distance == 190.0


def test_trailing_comma_does_not_shift_columns(tmp_path):
    rows = [f"00:00:{i:04.1f},{i * 10},22,150," for i in range(1, 4)]
    session_id, strokes = load_session(str(_write_rows(tmp_path, rows)))
    assert len(strokes) == 3
    first = strokes[0]
    assert first.elapsed_time_s == pytest.approx(1.0)
    assert first.cumulative_distance == 10.0
    assert first.stroke_rate == 22.0
    assert first.heart_rate == 150
