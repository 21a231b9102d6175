from src.event_checkin.event_checkin.core.enums import ParticipantStatus
from src.event_checkin.event_checkin.participants.model import Participant
from src.event_checkin.event_checkin.stats.service import compute_stats


def _people(*statuses):
    return [Participant(participant_id=i, display_name=f"P{i}", identifier=str(i), status=s) for i, s in enumerate(statuses, 1)]


def test_empty_registry():
    stats = compute_stats([])

    assert (stats.total, stats.present, stats.returned, stats.checked_in, stats.pending) == (0, 0, 0, 0, 0)
    assert stats.percentage == 0.0


def test_counts_and_percentage():
    stats = compute_stats(
        _people(
            ParticipantStatus.PENDING,
            ParticipantStatus.CHECKED_IN,
            ParticipantStatus.CHECKED_IN,
            ParticipantStatus.CHECKED_OUT,
        )
    )

    assert stats.total == 4
    assert stats.present == 2
    assert stats.returned == 1
    assert stats.checked_in == 3
    assert stats.pending == 1
    assert stats.percentage == 75.0
    assert stats.present + stats.returned + stats.pending == stats.total


def test_as_dict_keys():
    assert compute_stats(_people(ParticipantStatus.CHECKED_OUT)).as_dict() == {
        "total": 1,
        "present": 0,
        "returned": 1,
        "checkedIn": 1,
        "pending": 0,
        "percentage": 100.0,
    }
