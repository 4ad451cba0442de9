from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AbsenceDraft, AbsenceRange


class AbsenceRepository(Protocol):
    def list_all(self) -> Sequence[AbsenceRange]:
        raise NotImplementedError

    def list_for_group(self, *, group_id: str) -> Sequence[AbsenceRange]:
        raise NotImplementedError

    def create(self, *, person_id: str, draft: AbsenceDraft, group_id: Optional[str] = None) -> str:
        """Returns absence_id."""

        raise NotImplementedError

    def update(self, *, absence_id: str, draft: AbsenceDraft) -> bool:
        raise NotImplementedError

    def delete(self, *, absence_id: str) -> bool:
        raise NotImplementedError

    def replace_group(self, *, group_id: str, records: Sequence[AbsenceRange]) -> int:
        """Atomically delete every record of ``group_id`` and insert ``records``.

        Either all statements apply or none do. Returns the number of
        records removed.
        """

        raise NotImplementedError

    def delete_group(self, *, group_id: str) -> int:
        """Atomically delete every record of ``group_id``; returns how many."""

        raise NotImplementedError
