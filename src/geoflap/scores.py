# src/geoflap/scores.py
from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Optional, Union
from .config import SCORES_KEY, SCORES_FILE_DEFAULT, SCORES_FILE_ENV

logger = logging.getLogger(__name__)


def _as_score(value) -> Optional[int]:
    """Non-negative int from an int, an integral float (12.0) or a numeric string ("12")."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if not isinstance(value, int) or value < 0:
        return None
    return value


def default_scores_path() -> Path:
    return Path(os.environ.get(SCORES_FILE_ENV, SCORES_FILE_DEFAULT)).expanduser()


class BestScoreStore:
    """
    Best score kept under a fixed key in a small JSON object file.
    Other keys in the file are preserved on write.
    """
    def __init__(self, path: Optional[Union[str, Path]] = None, key: str = SCORES_KEY):
        self.path = Path(path).expanduser() if path is not None else default_scores_path()
        self.key = key

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:  # ValueError covers JSON and UTF-8 decode errors
            logger.warning("Ignoring unreadable scores file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring scores file %s: expected a JSON object", self.path)
            return {}
        return data

    def load(self) -> int:
        raw = self._read().get(self.key, 0)
        value = _as_score(raw)
        if value is None:
            logger.warning("Ignoring invalid best score %r in %s", raw, self.path)
            return 0
        return value

    def submit(self, score: int) -> bool:
        """Store `score` only if it beats the current best. Returns True if written."""
        best = self.load()
        if score <= best:
            return False
        data = self._read()
        data[self.key] = int(score)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data), encoding="utf-8")
        except OSError as e:
            logger.error("Could not save best score to %s: %s", self.path, e)
            return False
        logger.info("New best score %d (was %d)", score, best)
        return True
