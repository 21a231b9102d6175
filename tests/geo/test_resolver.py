import pytest

from src.event_checkin.event_checkin.core.enums import ParticipantStatus
from src.event_checkin.event_checkin.geo.resolver import (
    Coordinate,
    compute_bounds,
    locate_participants,
    map_view,
    parse_location,
)
from src.event_checkin.event_checkin.participants.model import Participant


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("13.7563,100.5018", Coordinate(13.7563, 100.5018)),
        (" 13.7563 , 100.5018 ", Coordinate(13.7563, 100.5018)),
        ("13.7563 100.5018", Coordinate(13.7563, 100.5018)),
        ("13.7563,,100.5018", Coordinate(13.7563, 100.5018)),
        ("-90,180", Coordinate(-90.0, 180.0)),
    ],
)
def test_parse_location_accepts_comma_or_space(raw, expected):
    assert parse_location(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "13.75", "abc,def", "91,0", "0,181", "nan,1", "inf,1", "13.7;100.5"])
def test_parse_location_rejects_unusable_values(raw):
    assert parse_location(raw) is None


def test_bounds_of_a_single_point_are_padded():
    box = compute_bounds([Coordinate(13.0, 100.0)])

    assert (box.south_west.lat, box.south_west.lng) == (pytest.approx(12.99), pytest.approx(99.99))
    assert (box.north_east.lat, box.north_east.lng) == (pytest.approx(13.01), pytest.approx(100.01))


def test_bounds_contain_every_point():
    points = [Coordinate(13.0, 100.0), Coordinate(14.5, 99.0), Coordinate(12.0, 101.0)]
    box = compute_bounds(points)

    assert box.south_west == Coordinate(12.0, 99.0)
    assert box.north_east == Coordinate(14.5, 101.0)
    assert all(box.contains(c) for c in points)


def test_bounds_of_nothing_is_none():
    assert compute_bounds([]) is None


def _p(pid, status, location):
    return Participant(participant_id=pid, display_name=f"P{pid}", identifier=str(pid), status=status, location=location)


def test_locate_skips_bad_locations_and_optionally_pending():
    people = [
        _p(1, ParticipantStatus.CHECKED_IN, "13.7,100.5"),
        _p(2, ParticipantStatus.PENDING, "13.8,100.6"),
        _p(3, ParticipantStatus.CHECKED_OUT, "garbage"),
        _p(4, ParticipantStatus.CHECKED_OUT, None),
    ]

    assert [p.participant_id for p, _ in locate_participants(people)] == [1, 2]
    assert [p.participant_id for p, _ in locate_participants(people, include_pending=False)] == [1]


def test_map_view_without_markers_uses_default_center():
    view = map_view([_p(1, ParticipantStatus.PENDING, None)])

    assert view["markers"] == []
    assert view["bounds"] is None
    assert view["center"] == [13.7563, 100.5018]


def test_map_view_frames_markers():
    view = map_view([_p(1, ParticipantStatus.CHECKED_IN, "13.7,100.5")])

    assert view["center"] is None
    assert len(view["markers"]) == 1
    assert view["markers"][0]["status"] == "checked-in"
    assert view["bounds"] == [[pytest.approx(13.69), pytest.approx(100.49)], [pytest.approx(13.71), pytest.approx(100.51)]]
