"""
Session Manager - numbered output sessions for pipeline artifacts.

Every pipeline run writes into ``<base_dir>/session_NNN/{raw_data,analysis,reports}``.
``session_state.json`` holds the next session number and, per session, the
pipeline label and the artifacts written into it.
"""

import json
import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

logger = logging.getLogger(__name__)

STATE_FILENAME = "session_state.json"
SESSION_SUBDIRS = ("raw_data", "analysis", "reports")


def _empty_state() -> Dict:
    return {
        'next_session_number': 1,
        'sessions': {},
        'created_at': datetime.now().isoformat(timespec='seconds'),
    }


class SessionManager:
    """Session numbering, folder layout and artifact writers under *base_dir*."""

    def __init__(self, base_dir: Path = Path("outputs")):
        self.base_dir = Path(base_dir)
        self.state_file = self.base_dir / STATE_FILENAME
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def load_session_state(self) -> Dict:
        """Read the state file; a missing or unreadable file starts a fresh state."""
        if not self.state_file.exists():
            return _empty_state()
        try:
            return json.loads(self.state_file.read_text(encoding='utf-8'))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"⚠️ Unreadable session state {self.state_file}, starting fresh: {e}")
            return _empty_state()

    def save_session_state(self, state: Dict) -> None:
        content = json.dumps(state, indent=2, ensure_ascii=False, default=str)
        self.state_file.write_text(content, encoding='utf-8')

    def create_new_session(self, label: str = "") -> Tuple[str, Path]:
        """Allocate the next ``session_NNN`` folder for a run of *label*."""
        state = self.load_session_state()
        number = state['next_session_number']
        session_name = f"session_{number:03d}"
        session_dir = self.base_dir / session_name

        for subdir in SESSION_SUBDIRS:
            (session_dir / subdir).mkdir(parents=True, exist_ok=True)

        state['sessions'][session_name] = {
            'session_number': number,
            'label': label,
            'created_at': datetime.now().isoformat(timespec='seconds'),
            'session_dir': str(session_dir),
            'artifacts': [],
        }
        state['next_session_number'] = number + 1
        self.save_session_state(state)

        logger.info(f"📂 Created {session_name} ({label or 'unlabelled'})")
        return session_name, session_dir

    def record_artifacts(self, session_name: str, paths: Iterable[Path]) -> None:
        """Append written file paths to the session's metadata."""
        state = self.load_session_state()
        session = state['sessions'].get(session_name)
        if session is None:
            raise KeyError(f"Unknown session: {session_name}")
        session.setdefault('artifacts', []).extend(str(path) for path in paths)
        self.save_session_state(state)

    @staticmethod
    def _by_number(state: Dict) -> List[Tuple[str, Dict]]:
        return sorted(state['sessions'].items(), key=lambda item: item[1]['session_number'])

    def get_latest_session(self, label: Optional[str] = None) -> Optional[Tuple[str, Path]]:
        """Most recent session, optionally restricted to one pipeline *label*."""
        sessions = [
            (name, info) for name, info in self._by_number(self.load_session_state())
            if label is None or info.get('label') == label
        ]
        if not sessions:
            return None
        name, info = sessions[-1]
        return name, Path(info['session_dir'])

    def list_sessions(self) -> Dict[str, Dict]:
        return self.load_session_state()['sessions']

    def cleanup_old_sessions(self, keep_count: int = 20) -> int:
        """Delete all but the *keep_count* newest sessions; returns folders removed."""
        state = self.load_session_state()
        ordered = self._by_number(state)
        stale = ordered[:max(len(ordered) - keep_count, 0)]
        if not stale:
            return 0

        removed = 0
        for session_name, info in stale:
            session_dir = Path(info['session_dir'])
            if session_dir.exists():
                shutil.rmtree(session_dir)
                removed += 1
            del state['sessions'][session_name]
        self.save_session_state(state)

        logger.info(f"🧹 Removed {removed} old sessions, kept {len(state['sessions'])}")
        return removed

    # ------------------------------------------------------------------
    # Artifact writers
    # ------------------------------------------------------------------

    @staticmethod
    def save_text(session_dir: Path, subdir: str, filename: str, content: str) -> Path:
        """Write *content* as UTF-8 text and return the file path."""
        path = Path(session_dir) / subdir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
        logger.info(f"💾 Saved {path}")
        return path

    @classmethod
    def save_json(cls, session_dir: Path, subdir: str, filename: str, payload: Any) -> Path:
        """Write *payload* as pretty-printed JSON."""
        content = json.dumps(payload, ensure_ascii=False, indent=2, default=str)
        return cls.save_text(session_dir, subdir, filename, content)

    @staticmethod
    def save_frame(session_dir: Path, subdir: str, filename: str, frame: pd.DataFrame) -> Path:
        """Write *frame* as CSV (UTF-8 with BOM so spreadsheets show Chinese)."""
        path = Path(session_dir) / subdir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(path, index=False, encoding='utf-8-sig')
        logger.info(f"💾 Saved {path}")
        return path
