from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.identifiers import normalize_identifier
from ..core.constants import MAX_DEVICE_LENGTH, MAX_LOCATION_LENGTH
from ..core.enums import ScanResult
from ..participants.service import ParticipantRegistry
from .model import ScanOutcome
from .transitions import TransitionFactory

logger = logging.getLogger(__name__)


def _clip(value, max_length: int) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text[:max_length] or None


class AttendanceService:
    """Scan toggle: pending -> checked-in -> checked-out -> rejected.

    Match and transition run under the registry lock, so two stations
    scanning the same identifier at once cannot both check it in.
    """

    def __init__(
        self,
        registry: ParticipantRegistry,
        *,
        transition_factory: TransitionFactory | None = None,
        clock: Callable[[], datetime] = now_local,
        normalize_scans: bool = False,
    ):
        self._registry = registry
        self._factory = transition_factory or TransitionFactory()
        self._clock = clock
        self._normalize_scans = bool(normalize_scans)

    def _match(self, value: str):
        participant = self._registry.find_first_by_key(value)
        if participant is None and self._normalize_scans:
            folded = normalize_identifier(value)
            if folded != value:
                participant = self._registry.find_first_by_key(folded)
        return participant

    def scan(
        self,
        raw_value: str,
        *,
        now: Optional[datetime] = None,
        location: Optional[str] = None,
        device: Optional[str] = None,
    ) -> ScanOutcome:
        value = str(raw_value or "").strip()

        with self._registry.lock:
            participant = self._match(value)
            if participant is None:
                logger.warning("scan %r matched no participant", value)
                return ScanOutcome(result=ScanResult.NOT_FOUND, scanned_value=value)

            transition = self._factory.for_status(participant.status)
            decision = transition.apply(
                participant,
                now=now or self._clock(),
                location=_clip(location, MAX_LOCATION_LENGTH),
                device=_clip(device, MAX_DEVICE_LENGTH),
            )
            if decision.changed:
                self._registry.commit_transition(decision.participant)

        if decision.result == ScanResult.ALREADY_CHECKED_OUT:
            logger.warning("participant %s already checked out", participant.participant_id)
        else:
            logger.info("participant %s %s", participant.participant_id, decision.result.value)

        return ScanOutcome(result=decision.result, scanned_value=value, participant=decision.participant)
