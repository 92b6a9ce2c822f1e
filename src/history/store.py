"""History recorders that receive finished-round snapshots."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Protocol

from .snapshot import GameResultSnapshot

logger = logging.getLogger(__name__)


class HistoryRecorder(Protocol):
    """Anything that can persist a result snapshot."""

    def record(self, snapshot: GameResultSnapshot) -> None:
        ...


def get_history_dir() -> Path:
    """Get history directory from env or default."""
    env_dir = os.environ.get("HISTORY_DATA_DIR")
    if env_dir:
        return Path(env_dir)
    return Path("game_history")


class JsonHistoryStore:
    """Writes one JSON file per finished round."""

    def __init__(self, directory: Path | str | None = None):
        self.directory = Path(directory) if directory is not None else get_history_dir()

    def record(self, snapshot: GameResultSnapshot) -> None:
        self.save(snapshot)

    def save(self, snapshot: GameResultSnapshot) -> Path:
        """Save snapshot to a JSON file and return its path."""
        self.directory.mkdir(parents=True, exist_ok=True)
        filepath = self.directory / snapshot.to_filename()

        with open(filepath, "w") as f:
            json.dump(snapshot.model_dump(mode="json"), f, indent=2)

        logger.info(f"Saved result of session {snapshot.session_id} to {filepath}")
        return filepath

    def list_files(self) -> list[Path]:
        if not self.directory.exists():
            return []
        return sorted(self.directory.glob("game_*.json"))

    def load(self, filepath: Path | str) -> GameResultSnapshot:
        """Load snapshot from JSON file."""
        with open(filepath, "r") as f:
            data = json.load(f)
        return GameResultSnapshot.model_validate(data)


class MemoryHistoryStore:
    """Keeps snapshots in a list. Useful for tests and dry runs."""

    def __init__(self):
        self.snapshots: list[GameResultSnapshot] = []

    def record(self, snapshot: GameResultSnapshot) -> None:
        self.snapshots.append(snapshot)
