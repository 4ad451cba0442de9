from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import PersonRole


@dataclass(frozen=True)
class Person:
    """Domain entity: someone whose attendance is tracked.

    Plain data only; the roster store owns it.
    """

    person_id: str
    first_name: str
    last_name: str
    role: PersonRole
    email: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
