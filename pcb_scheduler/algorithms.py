from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional

from .errors import InvalidArgumentError
from .metrics import RunTotals
from .models import ProcessControlBlock, ScheduleResult
from .process_queue import ProcessQueue, require_queue

logger = logging.getLogger(__name__)


def virtual_cpu(pcb: ProcessControlBlock) -> None:
    """
    Run ``pcb`` for one time unit.

    Every policy advances its clock by one per call, so this is the only
    place simulated execution happens.
    """
    if pcb.remaining_burst <= 0:
        raise InvalidArgumentError(f"PCB already finished: {pcb!r}")
    pcb.remaining_burst -= 1


def _run_to_completion(order: Iterable[ProcessControlBlock], totals: RunTotals) -> int:
    """Non-preemptive loop shared by FCFS, SJF and Priority. Returns the final clock."""
    clock = 0
    for pcb in order:
        if clock < pcb.arrival:
            clock = pcb.arrival

        pcb.started = True
        totals.record_wait(pcb, clock)

        while not pcb.finished:
            virtual_cpu(pcb)
            clock += 1

        totals.record_completion(pcb, clock)
    return clock


def first_come_first_serve(ready_queue: ProcessQueue) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive).

    Processes run in the order they are extracted from the back of the
    queue; a stable sort on arrival keeps that order for equal arrivals.
    """
    require_queue(ready_queue)

    order = sorted(ready_queue.drain_back(), key=lambda p: p.arrival)
    totals = RunTotals(process_count=len(order))
    clock = _run_to_completion(order, totals)

    logger.debug("FCFS ran %d processes, finished at t=%d", len(order), clock)
    return totals.finish(clock)


def _sorted_run(ready_queue: ProcessQueue, key: Callable[[ProcessControlBlock], tuple], name: str) -> ScheduleResult:
    require_queue(ready_queue)

    # equal keys keep extraction order
    scratch = ProcessQueue(ready_queue.drain_back())
    scratch.sort(key=key)
    order: List[ProcessControlBlock] = []
    while not scratch.is_empty():
        order.append(scratch.pop_front())

    totals = RunTotals(process_count=len(order))
    clock = _run_to_completion(order, totals)

    logger.debug("%s ran %d processes, finished at t=%d", name, len(order), clock)
    return totals.finish(clock)


def shortest_job_first(ready_queue: ProcessQueue) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    The whole queue is ordered by burst before the simulation starts; ties
    go to the earlier arrival, then to the earlier record in the file, then
    to the one extracted from the back of the queue first.
    """
    return _sorted_run(ready_queue, key=lambda p: (p.total_burst, p.arrival, p.load_index), name="SJF")


def priority(ready_queue: ProcessQueue) -> ScheduleResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value runs earlier; ties go to the earlier
    arrival, then to the earlier record in the file, then to the one
    extracted from the back of the queue first.
    """
    return _sorted_run(ready_queue, key=lambda p: (p.priority, p.arrival, p.load_index), name="Priority")


def _earliest_pending_arrival(pcbs: List[ProcessControlBlock]) -> int:
    return min(p.arrival for p in pcbs if not p.finished)


def round_robin(ready_queue: ProcessQueue, quantum: int) -> ScheduleResult:
    """
    Round Robin with a fixed time quantum.

    Each sweep visits the working set in arrival order and gives every
    arrived, unfinished process up to ``quantum`` ticks. A process that is
    preempted keeps its slot and is revisited on the next sweep. Waiting
    time is counted once, from arrival to first dispatch.
    """
    if isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0:
        raise InvalidArgumentError(f"Round Robin requires a positive integer quantum, got {quantum!r}")
    require_queue(ready_queue)

    working = ready_queue.drain_back()
    totals = RunTotals(process_count=len(working))
    remaining = len(working)
    clock = 0
    sweeps = 0

    while remaining > 0:
        dispatched = False
        sweeps += 1

        for pcb in working:
            if pcb.finished or pcb.arrival > clock:
                continue

            dispatched = True
            if not pcb.started:
                pcb.started = True
                totals.record_wait(pcb, clock)

            ticks = 0
            while ticks < quantum and not pcb.finished:
                virtual_cpu(pcb)
                clock += 1
                ticks += 1

            if pcb.finished:
                totals.record_completion(pcb, clock)
                remaining -= 1

        if not dispatched:
            # CPU idle until the next arrival
            clock = _earliest_pending_arrival(working)

    logger.debug("RR(q=%d) ran %d processes in %d sweeps, finished at t=%d", quantum, len(working), sweeps, clock)
    return totals.finish(clock)


def shortest_remaining_time_first(ready_queue: ProcessQueue) -> ScheduleResult:
    """
    Shortest Remaining Time First (preemptive SJF).

    The shortest arrived job is re-selected before every tick, so a newly
    arrived shorter job preempts the running one. Ties go to the earlier
    arrival, then to the earlier record in the file, then to the earlier
    slot in the working set.
    """
    require_queue(ready_queue)

    working = ready_queue.drain_back()
    for pcb in working:
        pcb.started = False

    totals = RunTotals(process_count=len(working))
    remaining = len(working)
    clock = 0
    preemptions = 0
    previous: Optional[ProcessControlBlock] = None

    while remaining > 0:
        ready = [p for p in working if p.arrival <= clock and not p.finished]
        if not ready:
            clock = _earliest_pending_arrival(working)
            previous = None
            continue

        current = min(ready, key=lambda p: (p.remaining_burst, p.arrival, p.load_index))
        if previous is not None and previous is not current and not previous.finished:
            preemptions += 1

        if not current.started:
            current.started = True
            totals.record_wait(current, clock)

        virtual_cpu(current)
        clock += 1

        if current.finished:
            totals.record_completion(current, clock)
            remaining -= 1
        previous = current

    logger.debug("SRT ran %d processes with %d preemptions, finished at t=%d", len(working), preemptions, clock)
    return totals.finish(clock)


def _round_robin_entry(ready_queue: ProcessQueue, quantum: Optional[int] = None) -> ScheduleResult:
    if quantum is None:
        raise InvalidArgumentError("Round Robin requires a quantum")
    return round_robin(ready_queue, quantum)


ALGORITHMS: Dict[str, Callable[..., ScheduleResult]] = {
    "fcfs": lambda queue, quantum=None: first_come_first_serve(queue),
    "sjf": lambda queue, quantum=None: shortest_job_first(queue),
    "p": lambda queue, quantum=None: priority(queue),
    "rr": _round_robin_entry,
    "srt": lambda queue, quantum=None: shortest_remaining_time_first(queue),
}

ALIASES = {
    "priority": "p",
    "srtf": "srt",
}

ALGORITHM_LABELS = {
    "fcfs": "FCFS",
    "sjf": "SJF (non-preemptive)",
    "p": "Priority (non-preemptive)",
    "rr": "Round Robin",
    "srt": "SRT (preemptive)",
}


def resolve_algorithm(name: str) -> str:
    """Map a user-supplied algorithm name onto a key of ALGORITHMS."""
    key = name.strip().lower()
    key = ALIASES.get(key, key)
    if key not in ALGORITHMS:
        raise InvalidArgumentError(f"Unknown algorithm '{name}' (valid: FCFS, SJF, P, RR, SRT)")
    return key


def run_algorithm(name: str, ready_queue: ProcessQueue, quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. ``quantum`` is only used by RR.
    """
    func = ALGORITHMS[resolve_algorithm(name)]
    return func(ready_queue, quantum=quantum)
