from __future__ import annotations

from dataclasses import dataclass

from .models import ProcessControlBlock, ScheduleResult


@dataclass
class RunTotals:
    """
    Running sums for one policy call.

    Every policy feeds waiting and turnaround times in as processes are
    dispatched and completed, then calls ``finish`` with the final clock.
    """

    process_count: int
    total_waiting_time: int = 0
    total_turnaround_time: int = 0

    def record_wait(self, pcb: ProcessControlBlock, clock: int) -> None:
        self.total_waiting_time += clock - pcb.arrival

    def record_completion(self, pcb: ProcessControlBlock, clock: int) -> None:
        self.total_turnaround_time += clock - pcb.arrival

    def finish(self, clock: int) -> ScheduleResult:
        n = self.process_count
        return ScheduleResult(
            average_waiting_time=self.total_waiting_time / n,
            average_turnaround_time=self.total_turnaround_time / n,
            total_run_time=clock,
        )


def format_result(result: ScheduleResult) -> dict:
    """
    Return the three result fields as display strings.
    """
    return {
        "avg_waiting": f"{result.average_waiting_time:.2f}",
        "avg_turnaround": f"{result.average_turnaround_time:.2f}",
        "total_run_time": str(result.total_run_time),
    }
