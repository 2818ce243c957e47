"""
Time-ordered identifiers (version 1 UUIDs).

The identifiers double as "when" and "what" for comments, replies,
conversations and messages: Cassandra sorts ``timeuuid`` clustering columns
by their embedded timestamp, and :class:`TimeUUID` compares the same way in
Python so that values can be ordered without a round trip to the store.
"""

import random
import threading
import time
import uuid
from datetime import timezone

from cassandra.util import datetime_from_uuid1

from core.exceptions import MalformedIdentifier

# 100-ns intervals between the UUID epoch (1582-10-15) and the Unix epoch
GREGORIAN_OFFSET = 0x01B21DD213814000


class TimeUUID(uuid.UUID):
    """A version 1 UUID ordered by timestamp instead of by raw integer value."""

    def _order_key(self):
        return (self.time, self.clock_seq, self.node)

    def _other_key(self, other):
        if isinstance(other, uuid.UUID):
            return (other.time, other.clock_seq, other.node)
        return NotImplemented

    def __lt__(self, other):
        key = self._other_key(other)
        return NotImplemented if key is NotImplemented else self._order_key() < key

    def __le__(self, other):
        key = self._other_key(other)
        return NotImplemented if key is NotImplemented else self._order_key() <= key

    def __gt__(self, other):
        key = self._other_key(other)
        return NotImplemented if key is NotImplemented else self._order_key() > key

    def __ge__(self, other):
        key = self._other_key(other)
        return NotImplemented if key is NotImplemented else self._order_key() >= key

    def __eq__(self, other):
        return super().__eq__(other)

    def __hash__(self):
        return super().__hash__()

    @property
    def datetime(self):
        """Creation time as an aware UTC datetime."""
        return datetime_from_uuid1(self).replace(tzinfo=timezone.utc)


class TimeUUIDGenerator:
    """
    Produces unique, strictly increasing time UUIDs for this process.

    The node is random (with the multicast bit set, as RFC 4122 asks for
    non-MAC nodes) so two processes do not collide. When the clock has not
    advanced since the previous call the timestamp is bumped by one tick.
    """

    def __init__(self, node=None, clock_seq=None, clock=time.time_ns):
        self.node = node if node is not None else random.getrandbits(48) | 0x010000000000
        self.clock_seq = clock_seq if clock_seq is not None else random.getrandbits(14)
        self._clock = clock
        self._last_timestamp = 0
        self._lock = threading.Lock()

    def _next_timestamp(self):
        timestamp = self._clock() // 100 + GREGORIAN_OFFSET
        with self._lock:
            if timestamp <= self._last_timestamp:
                timestamp = self._last_timestamp + 1
            self._last_timestamp = timestamp
        return timestamp

    def now(self) -> TimeUUID:
        timestamp = self._next_timestamp()
        fields = (
            timestamp & 0xFFFFFFFF,
            (timestamp >> 32) & 0xFFFF,
            (timestamp >> 48) & 0x0FFF,
            (self.clock_seq >> 8) & 0x3F,
            self.clock_seq & 0xFF,
            self.node,
        )
        return TimeUUID(fields=fields, version=1)


_generator = TimeUUIDGenerator()


def new_timeuuid() -> TimeUUID:
    return _generator.now()


def parse_timeuuid(value, field=None) -> TimeUUID:
    """
    Turn an external representation (string or UUID) into a :class:`TimeUUID`.
    Anything that is not a version 1 UUID raises :class:`MalformedIdentifier`.
    """
    if isinstance(value, uuid.UUID):
        parsed = value
    else:
        if not isinstance(value, str):
            raise MalformedIdentifier(value, field)
        try:
            parsed = uuid.UUID(value.strip())
        except ValueError:
            raise MalformedIdentifier(value, field) from None

    if parsed.version != 1:
        raise MalformedIdentifier(value, field)
    return TimeUUID(int=parsed.int)


def timestamp_of(value):
    return parse_timeuuid(value).datetime


def to_external(value):
    """Store-native identifier to the string clients see."""
    return str(value) if isinstance(value, uuid.UUID) else value


def sort_key(value):
    """Cassandra ordering for a clustering value (timeuuid by time)."""
    if isinstance(value, uuid.UUID) and value.version == 1:
        return (value.time, value.clock_seq, value.node)
    return value
