"""Time-ordered unique identifiers used as JWT ``jti`` claims."""

from __future__ import annotations

import secrets
import threading
import uuid
from typing import Optional, Protocol


class IdGenerator(Protocol):
    """Anything callable that returns a fresh unique string id."""

    def __call__(self) -> str: ...


class TimeOrderedIdGenerator:
    """
    UUIDv1 generator with a random node id.

    The node id is random with the multicast bit set, so it can never clash
    with a real MAC address. Calls are serialized so the clock sequence
    handling inside ``uuid.uuid1`` stays unique across threads.
    """

    def __init__(self, node: Optional[int] = None) -> None:
        if node is None:
            node = secrets.randbits(48) | (1 << 40)
        self._node = node
        self._lock = threading.Lock()

    @property
    def node(self) -> int:
        return self._node

    def __call__(self) -> str:
        with self._lock:
            return str(uuid.uuid1(node=self._node))


_default_generator: Optional[TimeOrderedIdGenerator] = None
_default_lock = threading.Lock()


def default_id_generator() -> TimeOrderedIdGenerator:
    """Return the process-wide generator, creating it on first use."""
    global _default_generator
    with _default_lock:
        if _default_generator is None:
            _default_generator = TimeOrderedIdGenerator()
        return _default_generator
