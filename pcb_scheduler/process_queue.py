from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, List, Optional

from .errors import InvalidArgumentError
from .models import ProcessControlBlock


class ProcessQueue:
    """
    Owned, resizable sequence of process control blocks.

    The loader fills it with ``push_front``; FCFS, round robin and SRT drain
    it with ``pop_back`` (see ``drain_back``); SJF and Priority sort it in
    place and drain it with ``pop_front``.
    """

    def __init__(self, pcbs: Optional[Iterable[ProcessControlBlock]] = None):
        self._items: List[ProcessControlBlock] = list(pcbs) if pcbs is not None else []

    def push_front(self, pcb: ProcessControlBlock) -> None:
        self._items.insert(0, pcb)

    def push_back(self, pcb: ProcessControlBlock) -> None:
        self._items.append(pcb)

    def pop_front(self) -> ProcessControlBlock:
        if not self._items:
            raise IndexError("pop_front from an empty ProcessQueue")
        return self._items.pop(0)

    def pop_back(self) -> ProcessControlBlock:
        if not self._items:
            raise IndexError("pop_back from an empty ProcessQueue")
        return self._items.pop()

    def extract(self, index: int) -> ProcessControlBlock:
        """Remove and return the PCB at ``index``."""
        try:
            return self._items.pop(index)
        except IndexError:
            raise IndexError(f"index {index} out of range for ProcessQueue of size {len(self)}") from None

    def sort(self, key: Callable[[ProcessControlBlock], Any]) -> None:
        """Stable in-place sort, front to back ascending by ``key``."""
        self._items.sort(key=key)

    def drain_back(self) -> List[ProcessControlBlock]:
        """Empty the queue from the back and return the PCBs in extraction order."""
        drained: List[ProcessControlBlock] = []
        while self._items:
            drained.append(self.pop_back())
        return drained

    def is_empty(self) -> bool:
        return len(self._items) == 0

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ProcessControlBlock]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> ProcessControlBlock:
        return self._items[index]

    def __repr__(self) -> str:
        return f"ProcessQueue({self._items!r})"


def require_queue(queue: Optional[ProcessQueue]) -> ProcessQueue:
    """Reject a missing, foreign or empty queue before a policy touches it."""
    if queue is None:
        raise InvalidArgumentError("ready queue is required")
    if not isinstance(queue, ProcessQueue):
        raise InvalidArgumentError(f"expected a ProcessQueue, got {type(queue).__name__}")
    if queue.is_empty():
        raise InvalidArgumentError("ready queue is empty")
    for pcb in queue:
        if pcb.remaining_burst is None or pcb.remaining_burst <= 0:
            raise InvalidArgumentError(f"PCB has no burst left to run: {pcb!r}")
    return queue
