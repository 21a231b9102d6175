from __future__ import annotations

from typing import Optional, Sequence

from .model import Participant
from .repository import ParticipantRepository


class InMemoryParticipantRepository(ParticipantRepository):
    """Process-local store; dict insertion order is the registry order."""

    def __init__(self, participants: Sequence[Participant] = ()):
        self._by_id: dict[int, Participant] = {}
        self.insert_many(participants)

    def list_all(self) -> Sequence[Participant]:
        return list(self._by_id.values())

    def get_by_id(self, participant_id: int) -> Optional[Participant]:
        return self._by_id.get(int(participant_id))

    def insert_many(self, participants: Sequence[Participant]) -> None:
        for p in participants:
            self._by_id[p.participant_id] = p

    def replace(self, participant: Participant) -> bool:
        if participant.participant_id not in self._by_id:
            return False
        self._by_id[participant.participant_id] = participant
        return True

    def delete_all(self) -> int:
        count = len(self._by_id)
        self._by_id.clear()
        return count

    def max_id(self) -> int:
        return max(self._by_id, default=0)
