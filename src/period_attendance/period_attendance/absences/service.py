from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from ..common.ids import generate_id
from ..core.exceptions import ValidationError
from ..periods.repository import PeriodRepository
from ..periods.schedule import order_periods, period_index
from .model import AbsenceDraft, AbsenceGroup, AbsenceRange
from .repository import AbsenceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupListing:
    upcoming: list[AbsenceGroup]
    past: list[AbsenceGroup]


def group_absences(records: Iterable[AbsenceRange]) -> list[AbsenceGroup]:
    """Fold sibling records into one entry per group_id, in first-seen order.

    Records without a group_id are standalone absences and are skipped.
    """
    groups: dict[str, AbsenceGroup] = {}
    for r in records:
        if not r.group_id:
            continue
        g = groups.get(r.group_id)
        if not g:
            g = AbsenceGroup(
                group_id=r.group_id,
                start_date=r.start_date,
                end_date=r.end_date,
                start_period_id=r.start_period_id,
                end_period_id=r.end_period_id,
                note=r.note,
            )
            groups[r.group_id] = g
        g.person_ids.append(r.person_id)
    return list(groups.values())


class AbsenceService:
    """Use case: single-person absence ranges."""

    def __init__(self, absences: AbsenceRepository, periods: PeriodRepository):
        self._absences = absences
        self._periods = periods

    def validate(self, draft: AbsenceDraft) -> AbsenceDraft:
        if draft.start_date is None or draft.end_date is None:
            raise ValidationError("Start and end dates are required")
        if draft.end_date < draft.start_date:
            raise ValidationError("End date cannot be before start date.")

        ordered = order_periods(self._periods.list_all())
        start_index = period_index(ordered, draft.start_period_id)
        end_index = period_index(ordered, draft.end_period_id)
        if start_index < 0 or end_index < 0:
            raise ValidationError("Unknown class period")
        if draft.start_date == draft.end_date and end_index < start_index:
            raise ValidationError("End period cannot be before start period.")

        return AbsenceDraft(
            start_date=draft.start_date,
            end_date=draft.end_date,
            start_period_id=draft.start_period_id,
            end_period_id=draft.end_period_id,
            note=(draft.note or "").strip(),
        )

    def all(self) -> list[AbsenceRange]:
        return list(self._absences.list_all())

    def for_person(self, person_id: str) -> list[AbsenceRange]:
        items = [r for r in self._absences.list_all() if r.person_id == person_id]
        items.sort(key=lambda r: r.start_date, reverse=True)
        return items

    def create(self, *, person_id: str, draft: AbsenceDraft) -> str:
        if not person_id:
            raise ValidationError("Person is required")
        draft = self.validate(draft)
        absence_id = self._absences.create(person_id=person_id, draft=draft)
        logger.info("Person %s out %s..%s (absence %s)", person_id, draft.start_date, draft.end_date, absence_id)
        return absence_id

    def update(self, *, absence_id: str, draft: AbsenceDraft) -> None:
        draft = self.validate(draft)
        if not self._absences.update(absence_id=absence_id, draft=draft):
            raise ValidationError("Absence not found")
        logger.info("Updated absence %s", absence_id)

    def remove(self, *, absence_id: str) -> None:
        if not self._absences.delete(absence_id=absence_id):
            logger.debug("Absence %s already gone", absence_id)


class AbsenceGroupCoordinator:
    """Use case: one logical group absence expanded into per-person records.

    Group writes go through ``replace_group``/``delete_group`` so the store
    applies them as a single transaction.
    """

    def __init__(self, absences: AbsenceRepository, single: AbsenceService):
        self._absences = absences
        self._single = single

    def _build(self, *, group_id: str, person_ids: Sequence[str], draft: AbsenceDraft) -> list[AbsenceRange]:
        return [
            AbsenceRange(
                absence_id=generate_id(),
                person_id=person_id,
                start_date=draft.start_date,
                end_date=draft.end_date,
                start_period_id=draft.start_period_id,
                end_period_id=draft.end_period_id,
                note=draft.note,
                group_id=group_id,
            )
            for person_id in person_ids
        ]

    def _check(self, person_ids: Sequence[str], draft: AbsenceDraft) -> tuple[list[str], AbsenceDraft]:
        unique = list(dict.fromkeys(p for p in person_ids if p))
        if not unique:
            raise ValidationError("Please select at least one person.")
        return unique, self._single.validate(draft)

    def create_group(self, *, person_ids: Sequence[str], draft: AbsenceDraft) -> str:
        people, draft = self._check(person_ids, draft)
        group_id = generate_id()
        self._absences.replace_group(group_id=group_id, records=self._build(group_id=group_id, person_ids=people, draft=draft))
        logger.info("Created group absence %s for %d people", group_id, len(people))
        return group_id

    def edit_group(self, *, group_id: str, person_ids: Sequence[str], draft: AbsenceDraft) -> None:
        people, draft = self._check(person_ids, draft)
        removed = self._absences.replace_group(
            group_id=group_id,
            records=self._build(group_id=group_id, person_ids=people, draft=draft),
        )
        logger.info("Replaced group absence %s: %d old, %d new records", group_id, removed, len(people))

    def delete_group(self, *, group_id: str) -> int:
        removed = self._absences.delete_group(group_id=group_id)
        if removed:
            logger.info("Deleted group absence %s (%d records)", group_id, removed)
        else:
            logger.debug("Group absence %s has no records", group_id)
        return removed

    def groups(self) -> list[AbsenceGroup]:
        return group_absences(self._absences.list_all())

    def listing(self, *, today: date) -> GroupListing:
        groups = self.groups()
        return GroupListing(
            upcoming=[g for g in groups if g.end_date >= today],
            past=[g for g in groups if g.end_date < today],
        )
