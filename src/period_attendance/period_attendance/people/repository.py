from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PersonRole
from .model import Person


class PersonRepository(Protocol):
    def list_all(self) -> Sequence[Person]:
        raise NotImplementedError

    def get_by_id(self, person_id: str) -> Optional[Person]:
        raise NotImplementedError

    def create(self, *, first_name: str, last_name: str, role: PersonRole, email: Optional[str] = None) -> str:
        raise NotImplementedError

    def update(
        self,
        *,
        person_id: str,
        first_name: str,
        last_name: str,
        role: PersonRole,
        email: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def delete(self, *, person_id: str) -> bool:
        raise NotImplementedError
