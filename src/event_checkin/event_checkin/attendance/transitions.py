from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_clock
from ..core.enums import ParticipantStatus, ScanResult
from ..participants.model import Participant


@dataclass(frozen=True)
class TransitionDecision:
    result: ScanResult
    participant: Participant
    changed: bool


class ScanTransition(ABC):
    """Strategy Pattern: what one scan does to a participant in a given status."""

    @abstractmethod
    def apply(self, participant: Participant, *, now: datetime, location: Optional[str], device: Optional[str]) -> TransitionDecision:
        raise NotImplementedError


def _with_metadata(p: Participant, location: Optional[str], device: Optional[str]) -> Participant:
    return replace(p, location=location or p.location, device=device or p.device)


class CheckInTransition(ScanTransition):
    """pending -> checked-in."""

    def apply(self, participant, *, now, location, device) -> TransitionDecision:
        updated = replace(
            _with_metadata(participant, location, device),
            status=ParticipantStatus.CHECKED_IN,
            check_in_at=format_clock(now),
            check_in_epoch=now.timestamp(),
        )
        return TransitionDecision(result=ScanResult.CHECKED_IN, participant=updated, changed=True)


class CheckOutTransition(ScanTransition):
    """checked-in -> checked-out; the check-in stamp is kept."""

    def apply(self, participant, *, now, location, device) -> TransitionDecision:
        updated = replace(
            _with_metadata(participant, location, device),
            status=ParticipantStatus.CHECKED_OUT,
            check_out_at=format_clock(now),
            check_out_epoch=now.timestamp(),
        )
        return TransitionDecision(result=ScanResult.CHECKED_OUT, participant=updated, changed=True)


class RejectTransition(ScanTransition):
    """checked-out is terminal: report and leave the record untouched."""

    def apply(self, participant, *, now, location, device) -> TransitionDecision:
        return TransitionDecision(result=ScanResult.ALREADY_CHECKED_OUT, participant=participant, changed=False)


@dataclass
class TransitionFactory:
    """Factory Pattern: choose the transition for the participant's current status."""

    def for_status(self, status: ParticipantStatus) -> ScanTransition:
        if status == ParticipantStatus.PENDING:
            return CheckInTransition()
        if status == ParticipantStatus.CHECKED_IN:
            return CheckOutTransition()
        return RejectTransition()
