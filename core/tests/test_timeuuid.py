import uuid
from datetime import datetime, timezone

import pytest

from core.exceptions import MalformedIdentifier
from core.storage.timeuuid import (
    TimeUUID,
    TimeUUIDGenerator,
    new_timeuuid,
    parse_timeuuid,
    sort_key,
    timestamp_of,
    to_external,
)


def test_new_timeuuid_is_version_one():
    value = new_timeuuid()
    assert isinstance(value, TimeUUID)
    assert value.version == 1


def test_generated_ids_are_unique_and_increasing():
    ids = [new_timeuuid() for _ in range(1000)]
    assert len(set(ids)) == len(ids)
    assert ids == sorted(ids)


def test_frozen_clock_still_increases():
    generator = TimeUUIDGenerator(node=1, clock_seq=0, clock=lambda: 1_700_000_000_000_000_000)
    first, second, third = generator.now(), generator.now(), generator.now()
    assert first < second < third
    assert second.time == first.time + 1


def test_clock_going_backwards_still_increases():
    ticks = iter([2_000_000_000, 1_000_000_000])
    generator = TimeUUIDGenerator(node=1, clock_seq=0, clock=lambda: next(ticks))
    assert generator.now() < generator.now()


def test_ordering_follows_time_not_integer_value():
    # time_low sits in the high bits of the integer, so integer order disagrees here
    early = TimeUUID(fields=(0xFFFFFFFF, 0, 0, 0, 0, 1), version=1)
    late = TimeUUID(fields=(0, 1, 0, 0, 0, 1), version=1)
    assert early.int > late.int
    assert early < late
    assert sorted([late, early]) == [early, late]


def test_generator_node_has_multicast_bit():
    assert TimeUUIDGenerator().node & 0x010000000000


def test_datetime_is_aware_utc():
    moment = datetime(2024, 5, 17, 12, 30, tzinfo=timezone.utc)
    generator = TimeUUIDGenerator(clock=lambda: int(moment.timestamp()) * 1_000_000_000)
    assert generator.now().datetime == moment


def test_timestamp_of_string():
    value = new_timeuuid()
    assert timestamp_of(str(value)) == value.datetime


def test_parse_round_trip():
    value = new_timeuuid()
    parsed = parse_timeuuid(str(value))
    assert parsed == value
    assert isinstance(parsed, TimeUUID)
    assert parse_timeuuid(uuid.UUID(str(value))) == value


@pytest.mark.parametrize("value", ["", "abc", "1234", str(uuid.uuid4()), None, 42])
def test_parse_rejects_non_time_identifiers(value):
    with pytest.raises(MalformedIdentifier) as excinfo:
        parse_timeuuid(value, field="id_comment")
    assert excinfo.value.status_code == 400
    assert "id_comment" in excinfo.value.public_message


def test_to_external():
    value = new_timeuuid()
    assert to_external(value) == str(value)
    assert to_external("plain") == "plain"
    assert to_external(True) is True


def test_sort_key_leaves_other_values():
    assert sort_key("user-1") == "user-1"
    value = new_timeuuid()
    assert sort_key(value) == (value.time, value.clock_seq, value.node)
