from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Participant


class ParticipantRepository(Protocol):
    """Storage interface for participants.

    Lưu ý (DIP): the registry depends on this interface, never on a concrete
    backend. Implementations must return participants in registry order
    (ascending id).
    """

    def list_all(self) -> Sequence[Participant]:
        raise NotImplementedError

    def get_by_id(self, participant_id: int) -> Optional[Participant]:
        raise NotImplementedError

    def insert_many(self, participants: Sequence[Participant]) -> None:
        raise NotImplementedError

    def replace(self, participant: Participant) -> bool:
        raise NotImplementedError

    def delete_all(self) -> int:
        raise NotImplementedError

    def max_id(self) -> int:
        raise NotImplementedError
