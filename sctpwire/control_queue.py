"""A queue of control packets waiting to be sent."""

from __future__ import annotations

from collections.abc import Iterable

from .packet import Packet


class ControlQueue:
    """First-in, first-out queue of control packets drained all at once."""

    def __init__(self) -> None:
        self._queue: list[Packet] = []

    def push(self, packet: Packet) -> None:
        """Append one packet."""
        self._queue.append(packet)

    def push_all(self, packets: Iterable[Packet]) -> None:
        """Append several packets in order."""
        self._queue.extend(packets)

    def pop_all(self) -> list[Packet]:
        """Remove and return every queued packet, oldest first."""
        packets, self._queue = self._queue, []
        return packets

    def __len__(self) -> int:
        return len(self._queue)