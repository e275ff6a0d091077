"""
Identifier generators for blog posts.

A generator is any zero-argument callable returning a new string id. Stores
receive one at construction time so id allocation can be swapped out in
tests without touching the storage backend.
"""

import itertools
import os
import struct
import threading
import time
from typing import Callable

IdGenerator = Callable[[], str]

_COUNTER_MASK = 0xFFFFFF


class ObjectIdGenerator:
    """
    Generates 24 character hex ids in the document-store ObjectId layout.

    Each id packs a 4 byte unix timestamp, a 5 byte value that is random per
    generator and a 3 byte counter starting at a random offset. Ids sort
    roughly by creation time and never collide within a process.
    """

    def __init__(self) -> None:
        self._process_id = os.urandom(5)
        self._counter = itertools.count(int.from_bytes(os.urandom(3), "big"))
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            counter = next(self._counter) & _COUNTER_MASK
        timestamp = struct.pack(">I", int(time.time()) & 0xFFFFFFFF)
        return (timestamp + self._process_id + counter.to_bytes(3, "big")).hex()


class SequentialIdGenerator:
    """Deterministic ids (``prefix-1``, ``prefix-2``, ...) for fixtures and demos."""

    def __init__(self, prefix: str = "post") -> None:
        self.prefix = prefix
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            return f"{self.prefix}-{next(self._counter)}"
