from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ProcessControlBlock:
    """
    One process to be scheduled.

    ``remaining_burst`` counts down from ``total_burst`` as the virtual CPU
    runs the process. ``load_index`` is the record's position in its source
    file and is only used to break scheduling ties.
    """

    arrival: int
    total_burst: int
    priority: int = 0
    remaining_burst: int | None = None
    started: bool = False
    load_index: int = 0

    def __post_init__(self) -> None:
        if self.remaining_burst is None:
            self.remaining_burst = self.total_burst

    @property
    def finished(self) -> bool:
        return self.remaining_burst == 0


@dataclass(frozen=True)
class ScheduleResult:
    average_waiting_time: float
    average_turnaround_time: float
    total_run_time: int
