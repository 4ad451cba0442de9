from __future__ import annotations

import uuid


def generate_id() -> str:
    """Opaque identifier for new people, periods, absences and groups."""
    return uuid.uuid4().hex[:12]
