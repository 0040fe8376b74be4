"""JSON file persistence for run analytics.

The whole store is read, modified and written back on each run. Writes go
to a temporary file in the same directory which then replaces the target,
so a crash mid-write never leaves a truncated store behind. A store that
cannot be parsed is moved aside to ``<name>.corrupt`` before an append
replaces it.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from github_activity_orchestrator.logging import get_logger
from github_activity_orchestrator.schemas.analytics import AnalyticsStore, RunRecord

logger = get_logger(__name__)


class AnalyticsRepository:
    """Loads and saves the analytics store at a fixed path.

    Usage:
        repository = AnalyticsRepository("data/analytics.json")
        store = repository.load()
        repository.append(record)
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def corrupt_path(self) -> Path:
        return self._path.with_name(f"{self._path.name}.corrupt")

    def load(self) -> AnalyticsStore:
        """Read the store from disk.

        A missing file is an empty store. An unreadable or invalid file is
        logged and also treated as empty.
        """
        return self._read()[0]

    def _read(self) -> tuple[AnalyticsStore, bool]:
        """Return the store and whether the file on disk was invalid."""
        if not self._path.exists():
            return AnalyticsStore.empty(), False

        try:
            raw = self._path.read_text(encoding="utf-8")
            return AnalyticsStore.model_validate_json(raw), False
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("Analytics store {} is unreadable, starting fresh: {}", self._path, e)
            return AnalyticsStore.empty(), True

    def save(self, store: AnalyticsStore) -> None:
        """Atomically replace the store on disk."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = store.model_dump_json(indent=2)

        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.write("\n")
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Saved {} run(s) to {}", len(store.runs), self._path)

    def append(self, record: RunRecord) -> AnalyticsStore:
        """Append one run and persist the result."""
        store, invalid = self._read()
        if invalid:
            os.replace(self._path, self.corrupt_path)
            logger.warning("Moved unreadable analytics store to {}", self.corrupt_path)
        store.runs.append(record)
        self.save(store)
        return store
