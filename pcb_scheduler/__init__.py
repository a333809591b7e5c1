"""
PCB scheduler package.

Simulates CPU scheduling policies over process control blocks loaded from a
binary file and reports average waiting time, average turnaround time and
total run time.
"""

from .algorithms import (
    first_come_first_serve,
    priority,
    round_robin,
    run_algorithm,
    shortest_job_first,
    shortest_remaining_time_first,
    virtual_cpu,
)
from .models import ProcessControlBlock, ScheduleResult
from .pcb_io import load_process_control_blocks
from .process_queue import ProcessQueue

__all__ = [
    "ProcessControlBlock",
    "ProcessQueue",
    "ScheduleResult",
    "first_come_first_serve",
    "load_process_control_blocks",
    "priority",
    "round_robin",
    "run_algorithm",
    "shortest_job_first",
    "shortest_remaining_time_first",
    "virtual_cpu",
]
