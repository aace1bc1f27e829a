import json

import pandas as pd

from rowing_foundation.cli import main


def _write_session(path, session_date, step_m):
    lines = [f"Start Time:,{session_date} 07:00:00", "", "Per-Stroke Data:",
             "Elapsed Time,Distance (GPS),Stroke Rate,Heart Rate,Speed (GPS),Distance/Stroke (GPS)",
             "(HH:MM:SS.tenths),(Meters),(SPM),(BPM),(M/S),(Meters)"]
    t = 0.0
    for _ in range(10):
        lines.append(f"00:00:{t:04.1f},0,12,100,---,---")
        t += 3.0
    for i in range(1, 31):
        lines.append(f"00:{int(t // 60):02d}:{t % 60:04.1f},{i * step_m},22,150,4.2,{step_m}")
        t += 3.0
    path.write_text("\n".join(lines) + "\n")


def test_cli_writes_session_and_history(tmp_path):
    in_dir = tmp_path / "sessions"
    in_dir.mkdir()
    _write_session(in_dir / "a.csv", "2024-03-14", 20)
    _write_session(in_dir / "b.csv", "2024-03-15", 10)
    out_dir = tmp_path / "out"

    code = main(["--input", str(in_dir), "--output", str(out_dir)])
    assert code == 0

    blocks = pd.read_csv(out_dir / "20240314_a_block_summaries.csv")
    assert blocks["Strokes"].tolist() == [30]
    assert blocks["Dist_m"].tolist() == [580.0]
    # Second session's block only covers 290 m
    assert not (out_dir / "20240315_b_block_summaries.csv").exists()
    assert (out_dir / "block_summaries_history.csv").exists()


def test_cli_overrides_min_block_dist(tmp_path):
    session = tmp_path / "b.csv"
    _write_session(session, "2024-03-15", 10)
    out_dir = tmp_path / "out"
    code = main(["--input", str(session), "--output", str(out_dir), "--min-block-dist", "250", "--no-history"])
    assert code == 0
    assert (out_dir / "20240315_b_block_summaries.csv").exists()
    assert not (out_dir / "block_summaries_history.csv").exists()


def test_cli_rejects_invalid_config(tmp_path):
    profile = tmp_path / "bad.json"
    profile.write_text(json.dumps({"target_min_hr": 190}))
    code = main(["--input", str(tmp_path), "--output", str(tmp_path / "out"), "--config", str(profile)])
    assert code == 2


def test_cli_without_sessions(tmp_path):
    code = main(["--input", str(tmp_path), "--output", str(tmp_path / "out")])
    assert code == 1


def test_cli_reports_wrongly_typed_profile_value(tmp_path):
    profile = tmp_path / "typed.json"
    profile.write_text(json.dumps({"target_min_hr": "fast"}))
    code = main(["--input", str(tmp_path), "--output", str(tmp_path / "out"), "--config", str(profile)])
    assert code == 2
