"""Achievement repository - the journal's public read/write API.

Reads go straight to the blob store. Every mutation is a full
read-modify-write of the collection, run on the repository's own
SerialQueue so concurrent callers can never lose each other's changes.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Callable

from .core.achievements import (
    Achievement,
    CorruptCollection,
    decode_collection,
    encode_collection,
    format_date,
    format_timestamp,
    new_id,
    parse_date,
    validate_task,
)
from .ports.blob_store import BlobStore, StorageError
from .serial_queue import SerialQueue

logger = logging.getLogger(__name__)

STORAGE_KEY = "@work_journal_achievements"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AchievementRepository:
    """
    Persisted journal of achievements.

    Mutations (save, update, delete) are atomic with respect to each other.
    list() is not serialized against them and relies on the store's
    single-key reads being atomic.
    """

    def __init__(
        self,
        store: BlobStore,
        key: str = STORAGE_KEY,
        queue: SerialQueue | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.store = store
        self.key = key
        self.queue = queue or SerialQueue(name=key)
        self.clock = clock or _utc_now

    def _load(self) -> list[Achievement]:
        """Read the collection. Corrupt or missing data reads as empty; I/O errors raise."""
        raw = self.store.read(self.key)
        if not raw:
            return []
        try:
            return decode_collection(raw)
        except CorruptCollection as e:
            logger.warning(f"Ignoring unreadable journal under {self.key}: {e}")
            return []

    def _store(self, achievements: list[Achievement]) -> None:
        self.store.write(self.key, encode_collection(achievements))

    # ============== Reads ==============

    def list(self) -> list[Achievement]:
        """All achievements, newest first. Never raises for bad or missing data."""
        try:
            return self._load()
        except StorageError as e:
            logger.warning(f"Failed to read journal under {self.key}: {e}")
            return []

    def list_for_date(self, day: date | str) -> list[Achievement]:
        """Achievements recorded for one calendar date."""
        target = parse_date(day)
        return [a for a in self.list() if a.date == target]

    def get(self, achievement_id: str) -> Achievement | None:
        """Find one achievement by id."""
        for achievement in self.list():
            if achievement.id == achievement_id:
                return achievement
        return None

    # ============== Mutations ==============

    def save(
        self,
        task: str,
        metric: str = "",
        impact: str = "",
        date: date | str | None = None,
        now: datetime | None = None,
    ) -> Achievement:
        """Record a new achievement at the front of the journal and return it."""
        task = validate_task(task)
        moment = now or self.clock()
        day = parse_date(date) if date is not None else format_date(moment.astimezone())

        def _save() -> Achievement:
            achievements = self._load()
            taken = {a.id for a in achievements}
            achievement_id = new_id(moment)
            while achievement_id in taken:
                achievement_id = new_id(moment)

            achievement = Achievement(
                id=achievement_id,
                date=day,
                task=task,
                metric=(metric or "").strip(),
                impact=(impact or "").strip(),
                created_at=format_timestamp(moment),
            )
            self._store([achievement, *achievements])
            return achievement

        achievement = self.queue.submit(_save)
        logger.info(f"Saved achievement {achievement.id} for {achievement.date}")
        return achievement

    def update(self, achievement: Achievement) -> None:
        """Replace the stored record with the same id. Unknown ids are ignored."""

        def _update() -> bool:
            achievements = self._load()
            for i, existing in enumerate(achievements):
                if existing.id == achievement.id:
                    task = validate_task(achievement.task)
                    day = parse_date(achievement.date)
                    achievements[i] = replace(
                        existing,
                        date=day,
                        task=task,
                        metric=(achievement.metric or "").strip(),
                        impact=(achievement.impact or "").strip(),
                    )
                    self._store(achievements)
                    return True
            return False

        if self.queue.submit(_update):
            logger.info(f"Updated achievement {achievement.id}")
        else:
            logger.info(f"No achievement {achievement.id} to update")

    def delete(self, achievement_id: str) -> None:
        """Remove the record with this id, if present."""

        def _delete() -> bool:
            achievements = self._load()
            remaining = [a for a in achievements if a.id != achievement_id]
            if len(remaining) == len(achievements):
                return False
            self._store(remaining)
            return True

        if self.queue.submit(_delete):
            logger.info(f"Deleted achievement {achievement_id}")
        else:
            logger.info(f"No achievement {achievement_id} to delete")

    def close(self) -> None:
        """Finish pending mutations and stop the queue worker."""
        self.queue.close()

    def __enter__(self) -> AchievementRepository:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
