from __future__ import annotations

from typing import Mapping, Protocol


class NoteRepository(Protocol):
    def get_all(self) -> Mapping[tuple[str, str], str]:
        """(person_id, period_id) -> note text."""

        raise NotImplementedError

    def upsert(self, *, person_id: str, period_id: str, note: str) -> None:
        raise NotImplementedError

    def delete(self, *, person_id: str, period_id: str) -> bool:
        raise NotImplementedError
