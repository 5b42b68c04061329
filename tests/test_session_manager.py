import json
from pathlib import Path

import pandas as pd
import pytest

from hotspot_engine.session_manager import SESSION_SUBDIRS, SessionManager


def test_sessions_are_numbered_sequentially(tmp_path: Path) -> None:
    manager = SessionManager(tmp_path / "outputs")

    first_name, first_dir = manager.create_new_session(label="tophub-trends")
    second_name, second_dir = manager.create_new_session()

    assert first_name == "session_001"
    assert second_name == "session_002"
    for subdir in SESSION_SUBDIRS:
        assert (first_dir / subdir).is_dir()
    assert manager.get_latest_session() == (second_name, second_dir)
    assert manager.list_sessions()[first_name]["label"] == "tophub-trends"
    assert manager.get_latest_session(label="tophub-trends") == (first_name, first_dir)
    assert manager.get_latest_session(label="football-hotspot") is None


def test_state_survives_new_manager(tmp_path: Path) -> None:
    SessionManager(tmp_path).create_new_session()
    name, _ = SessionManager(tmp_path).create_new_session()
    assert name == "session_002"


def test_corrupt_state_starts_over(tmp_path: Path) -> None:
    manager = SessionManager(tmp_path)
    manager.state_file.write_text("{not json", encoding="utf-8")
    assert manager.get_latest_session() is None
    name, _ = manager.create_new_session()
    assert name == "session_001"


def test_cleanup_keeps_most_recent(tmp_path: Path) -> None:
    manager = SessionManager(tmp_path)
    dirs = [manager.create_new_session()[1] for _ in range(4)]

    removed = manager.cleanup_old_sessions(keep_count=2)

    assert removed == 2
    assert not dirs[0].exists() and not dirs[1].exists()
    assert dirs[2].exists() and dirs[3].exists()
    assert sorted(manager.list_sessions()) == ["session_003", "session_004"]
    assert manager.cleanup_old_sessions(keep_count=2) == 0


def test_artifact_writers(tmp_path: Path) -> None:
    manager = SessionManager(tmp_path)
    _, session_dir = manager.create_new_session()

    text_path = manager.save_text(session_dir, "reports", "report.md", "# 标题")
    json_path = manager.save_json(session_dir, "raw_data", "data.json", {"标题": "梅西", "rank": 1})
    frame_path = manager.save_frame(session_dir, "analysis", "top.csv", pd.DataFrame([{"title": "梅西", "score": 80}]))

    assert text_path.read_text(encoding="utf-8") == "# 标题"
    assert json.loads(json_path.read_text(encoding="utf-8")) == {"标题": "梅西", "rank": 1}
    assert "梅西" in json_path.read_text(encoding="utf-8")
    frame = pd.read_csv(frame_path, encoding="utf-8-sig")
    assert frame.to_dict("records") == [{"title": "梅西", "score": 80}]


def test_record_artifacts(tmp_path: Path) -> None:
    manager = SessionManager(tmp_path)
    name, session_dir = manager.create_new_session(label="football-hotspot")
    path = manager.save_text(session_dir, "reports", "notes.md", "笔记")

    manager.record_artifacts(name, [path])

    assert manager.list_sessions()[name]["artifacts"] == [str(path)]
    with pytest.raises(KeyError):
        manager.record_artifacts("session_999", [path])


def test_cleanup_with_zero_keep_removes_everything(tmp_path: Path) -> None:
    manager = SessionManager(tmp_path)
    manager.create_new_session()
    assert manager.cleanup_old_sessions(keep_count=0) == 1
    assert manager.list_sessions() == {}
    assert manager.create_new_session()[0] == "session_002"
