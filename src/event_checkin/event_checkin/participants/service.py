from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import format_clock, now_local
from ..common.identifiers import normalize_identifier
from ..common.validators import coerce_text
from ..core.enums import DuplicatePolicy, ParticipantStatus
from ..core.exceptions import ValidationError
from .model import Participant, ParticipantEntry
from .repository import ParticipantRepository

logger = logging.getLogger(__name__)


def _canonical_identifier(value) -> str:
    return normalize_identifier(coerce_text(value, "เบอร์โทรศัพท์") or "")


def _canonical_secondary(value) -> Optional[str]:
    return (coerce_text(value, "รหัสนักศึกษา") or "").strip() or None


class ParticipantRegistry:
    """Authoritative set of participants for one event session.

    All writes go through this object. It owns the lock that the scan path
    uses as its critical section, and it remembers the highest id it ever
    issued so ids are not handed out twice within a session, even after
    `clear_all`.
    """

    def __init__(
        self,
        repository: ParticipantRepository,
        *,
        duplicate_policy: DuplicatePolicy = DuplicatePolicy.ALLOW,
        clock: Callable[[], datetime] = now_local,
    ):
        self._repo = repository
        self._duplicate_policy = DuplicatePolicy(duplicate_policy)
        self._clock = clock
        self._issued_max_id = 0
        self.lock = threading.RLock()

    @property
    def duplicate_policy(self) -> DuplicatePolicy:
        return self._duplicate_policy

    # ---------- reads ----------

    def snapshot(self) -> tuple[Participant, ...]:
        return tuple(self._repo.list_all())

    def get(self, participant_id: int) -> Optional[Participant]:
        return self._repo.get_by_id(participant_id)

    def find_first_by_key(self, value: str) -> Optional[Participant]:
        """First participant whose identifier or secondary identifier equals `value`."""
        if not value:
            return None
        for p in self._repo.list_all():
            if value in p.scan_keys():
                return p
        return None

    def search(
        self,
        term: str = "",
        *,
        status: Optional[ParticipantStatus] = None,
        limit: Optional[int] = None,
    ) -> list[Participant]:
        needle = (term or "").strip().lower()
        out: list[Participant] = []
        for p in self._repo.list_all():
            if status is not None and p.status != status:
                continue
            if needle:
                haystack = (p.display_name.lower(), p.identifier, p.secondary_identifier or "")
                if not any(needle in h for h in haystack):
                    continue
            out.append(p)
            if limit is not None and len(out) >= limit:
                break
        return out

    # ---------- writes ----------

    def _next_id(self) -> int:
        return max(self._repo.max_id(), self._issued_max_id) + 1

    def _existing_identifiers(self) -> set[str]:
        return {p.identifier for p in self._repo.list_all() if p.identifier}

    def _build(self, participant_id: int, entry: ParticipantEntry) -> Participant:
        return Participant(
            participant_id=participant_id,
            display_name=entry.display_name,
            identifier=_canonical_identifier(entry.identifier),
            secondary_identifier=_canonical_secondary(entry.secondary_identifier),
            faculty=entry.faculty,
            major=entry.major,
            event_id=entry.event_id,
        )

    def add(
        self,
        display_name: str,
        identifier: str,
        *,
        secondary_identifier: Optional[str] = None,
        faculty: Optional[str] = None,
        major: Optional[str] = None,
        event_id: Optional[str] = None,
    ) -> Participant:
        entry = ParticipantEntry(
            display_name=display_name,
            identifier=identifier,
            secondary_identifier=secondary_identifier,
            faculty=faculty,
            major=major,
            event_id=event_id,
        )
        with self.lock:
            participant = self._build(self._next_id(), entry)
            if (
                self._duplicate_policy == DuplicatePolicy.REJECT
                and participant.identifier
                and participant.identifier in self._existing_identifiers()
            ):
                raise ValidationError(f"เบอร์โทรศัพท์ '{participant.identifier}' มีอยู่ในระบบแล้ว")
            self._repo.insert_many([participant])
            self._issued_max_id = participant.participant_id

        logger.info("participant %s added", participant.participant_id)
        return participant

    def bulk_import(self, entries: Iterable[ParticipantEntry]) -> list[Participant]:
        """Create one participant per entry with a contiguous block of ids.

        Under the `reject` duplicate policy, entries whose identifier is
        already registered (or repeated earlier in the same batch) are left
        out; they do not consume an id.
        """
        with self.lock:
            seen = self._existing_identifiers() if self._duplicate_policy == DuplicatePolicy.REJECT else set()
            next_id = self._next_id()
            created: list[Participant] = []
            skipped = 0
            for entry in entries:
                participant = self._build(next_id, entry)
                if self._duplicate_policy == DuplicatePolicy.REJECT and participant.identifier:
                    if participant.identifier in seen:
                        skipped += 1
                        continue
                    seen.add(participant.identifier)
                created.append(participant)
                next_id += 1

            self._repo.insert_many(created)
            if created:
                self._issued_max_id = created[-1].participant_id

        logger.info("bulk import created %d participants (%d duplicates skipped)", len(created), skipped)
        return created

    def update(self, participant: Participant) -> Optional[Participant]:
        """Admin edit: replace the record with the same id wholesale.

        The forward-only rule is not enforced on this path, but timestamps
        are re-derived from the new status so the stamp/status invariant
        holds. Returns None when no record has that id.
        """
        with self.lock:
            reconciled = self._reconcile_timestamps(
                replace(
                    participant,
                    identifier=_canonical_identifier(participant.identifier),
                    secondary_identifier=_canonical_secondary(participant.secondary_identifier),
                )
            )
            if not self._repo.replace(reconciled):
                return None
        logger.info("participant %s edited (status=%s)", reconciled.participant_id, reconciled.status.value)
        return reconciled

    def commit_transition(self, participant: Participant) -> None:
        """Persist a state-machine transition. Caller holds `lock`."""
        self._repo.replace(participant)

    def reset_session(self) -> int:
        with self.lock:
            participants = self._repo.list_all()
            for p in participants:
                self._repo.replace(
                    replace(
                        p,
                        status=ParticipantStatus.PENDING,
                        check_in_at=None,
                        check_out_at=None,
                        check_in_epoch=None,
                        check_out_epoch=None,
                    )
                )
        logger.info("session reset: %d participants back to pending", len(participants))
        return len(participants)

    def clear_all(self) -> int:
        with self.lock:
            self._issued_max_id = max(self._issued_max_id, self._repo.max_id())
            removed = self._repo.delete_all()
        logger.warning("registry cleared: %d participants removed", removed)
        return removed

    def _reconcile_timestamps(self, p: Participant) -> Participant:
        if p.status == ParticipantStatus.PENDING:
            return replace(p, check_in_at=None, check_out_at=None, check_in_epoch=None, check_out_epoch=None)

        now = self._clock()
        stamp, epoch = format_clock(now), now.timestamp()

        check_in_at = p.check_in_at or stamp
        check_in_epoch = p.check_in_epoch if p.check_in_epoch is not None else epoch

        if p.status == ParticipantStatus.CHECKED_IN:
            return replace(
                p,
                check_in_at=check_in_at,
                check_in_epoch=check_in_epoch,
                check_out_at=None,
                check_out_epoch=None,
            )

        return replace(
            p,
            check_in_at=check_in_at,
            check_in_epoch=check_in_epoch,
            check_out_at=p.check_out_at or stamp,
            check_out_epoch=p.check_out_epoch if p.check_out_epoch is not None else epoch,
        )


def seed_registry(registry: ParticipantRegistry, rows: Sequence[dict]) -> list[Participant]:
    """Load the start-up seed list (dicts with name/phone/student_id...)."""
    entries = [
        ParticipantEntry(
            display_name=str(r.get("name", "")).strip(),
            identifier=str(r.get("phone", "")),
            secondary_identifier=r.get("student_id"),
            faculty=r.get("faculty"),
            major=r.get("major"),
            event_id=r.get("event_id"),
        )
        for r in rows
    ]
    return registry.bulk_import(entries)
