from __future__ import annotations

import threading
from collections import Counter
from datetime import datetime

from src.event_checkin.event_checkin.attendance.service import AttendanceService
from src.event_checkin.event_checkin.core.enums import ParticipantStatus, ScanResult
from src.event_checkin.event_checkin.participants.memory_participant_repository import InMemoryParticipantRepository
from src.event_checkin.event_checkin.participants.service import ParticipantRegistry


class StepClock:
    """Returns 09:00:00, 09:00:01, ... on successive calls."""

    def __init__(self):
        self._n = 0

    def __call__(self) -> datetime:
        value = datetime(2025, 1, 1, 9, 0, self._n)
        self._n += 1
        return value


def _setup(**kwargs):
    registry = ParticipantRegistry(InMemoryParticipantRepository())
    service = AttendanceService(registry, clock=StepClock(), **kwargs)
    return registry, service


def test_scan_walks_the_full_state_machine():
    registry, service = _setup()
    p = registry.add("Alice", "0811111111")

    first = service.scan("0811111111")
    assert first.result == ScanResult.CHECKED_IN
    assert first.participant.check_in_at == "09:00:00"

    second = service.scan("0811111111")
    assert second.result == ScanResult.CHECKED_OUT
    assert second.participant.check_in_at == "09:00:00"
    assert second.participant.check_out_at == "09:00:01"
    assert second.participant.check_out_epoch > second.participant.check_in_epoch

    third = service.scan("0811111111")
    assert third.result == ScanResult.ALREADY_CHECKED_OUT
    assert not third.changed
    assert registry.get(p.participant_id) == second.participant


def test_unknown_value_changes_nothing():
    registry, service = _setup()
    registry.add("Alice", "0811111111")
    before = registry.snapshot()

    outcome = service.scan("0899999999")

    assert outcome.result == ScanResult.NOT_FOUND
    assert outcome.participant is None
    assert registry.snapshot() == before


def test_scan_value_is_trimmed_and_empty_matches_nothing():
    registry, service = _setup()
    registry.add("Alice", "0811111111")

    assert service.scan("  0811111111\n").result == ScanResult.CHECKED_IN
    assert service.scan("   ").result == ScanResult.NOT_FOUND
    assert service.scan("").result == ScanResult.NOT_FOUND


def test_student_id_is_a_scan_key():
    registry, service = _setup()
    registry.add("Alice", "0811111111", secondary_identifier="64123456")

    outcome = service.scan("64123456")

    assert outcome.result == ScanResult.CHECKED_IN
    assert outcome.participant.display_name == "Alice"


def test_shared_identifier_only_toggles_first_match():
    registry, service = _setup()
    first = registry.add("Parent", "0811111111")
    second = registry.add("Child", "0811111111")

    service.scan("0811111111")
    service.scan("0811111111")
    outcome = service.scan("0811111111")

    assert outcome.result == ScanResult.ALREADY_CHECKED_OUT
    assert registry.get(first.participant_id).status == ParticipantStatus.CHECKED_OUT
    assert registry.get(second.participant_id).status == ParticipantStatus.PENDING


def test_formatted_scan_matches_only_when_normalization_enabled():
    registry, strict = _setup()
    registry.add("Alice", "0811111111")
    assert strict.scan("081-111-1111").result == ScanResult.NOT_FOUND

    lenient = AttendanceService(registry, clock=StepClock(), normalize_scans=True)
    assert lenient.scan("081-111-1111").result == ScanResult.CHECKED_IN


def test_location_and_device_are_recorded():
    registry, service = _setup()
    registry.add("Alice", "0811111111")

    outcome = service.scan("0811111111", location="13.7563,100.5018", device="iPad gate A")

    assert outcome.participant.location == "13.7563,100.5018"
    assert outcome.participant.device == "iPad gate A"


def test_concurrent_scans_apply_one_transition_each():
    registry = ParticipantRegistry(InMemoryParticipantRepository())
    registry.add("Alice", "0811111111")
    service = AttendanceService(registry)

    results = []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        results.append(service.scan("0811111111").result)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    counts = Counter(results)
    assert counts[ScanResult.CHECKED_IN] == 1
    assert counts[ScanResult.CHECKED_OUT] == 1
    assert counts[ScanResult.ALREADY_CHECKED_OUT] == 6


def test_scan_metadata_is_clipped_to_column_widths():
    registry, service = _setup()
    registry.add("Alice", "0811111111")

    outcome = service.scan("0811111111", location="1" * 300, device="d" * 900)

    assert outcome.result == ScanResult.CHECKED_IN
    assert len(outcome.participant.location) == 128
    assert len(outcome.participant.device) == 512
