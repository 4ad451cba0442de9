from __future__ import annotations

import logging
from typing import Optional

from .repository import NoteRepository

logger = logging.getLogger(__name__)


class NoteService:
    """Sticky per (person, period) annotations, independent of date."""

    def __init__(self, notes: NoteRepository):
        self._notes = notes

    def all(self) -> dict[tuple[str, str], str]:
        return dict(self._notes.get_all())

    def get(self, *, person_id: str, period_id: str) -> Optional[str]:
        return self._notes.get_all().get((person_id, period_id))

    def save(self, *, person_id: str, period_id: str, note: Optional[str]) -> None:
        text = (note or "").strip()
        if not text:
            self._notes.delete(person_id=person_id, period_id=period_id)
            logger.info("Cleared note for %s/%s", person_id, period_id)
            return
        self._notes.upsert(person_id=person_id, period_id=period_id, note=text)
        logger.info("Saved note for %s/%s", person_id, period_id)
