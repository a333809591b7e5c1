import pytest

from pcb_scheduler.errors import InvalidArgumentError
from pcb_scheduler.models import ProcessControlBlock
from pcb_scheduler.process_queue import ProcessQueue, require_queue


def _pcb(arrival, burst=1):
    return ProcessControlBlock(arrival=arrival, total_burst=burst)


def test_push_and_pop_both_ends():
    queue = ProcessQueue()
    queue.push_back(_pcb(1))
    queue.push_front(_pcb(0))
    queue.push_back(_pcb(2))
    assert len(queue) == 3
    assert queue.pop_front().arrival == 0
    assert queue.pop_back().arrival == 2
    assert queue.pop_back().arrival == 1
    assert queue.is_empty()
    with pytest.raises(IndexError):
        queue.pop_back()
    with pytest.raises(IndexError):
        queue.pop_front()


def test_extract_removes_by_index():
    queue = ProcessQueue([_pcb(0), _pcb(1), _pcb(2)])
    assert queue.extract(1).arrival == 1
    assert [p.arrival for p in queue] == [0, 2]
    with pytest.raises(IndexError):
        queue.extract(5)


def test_sort_is_stable():
    a, b, c = _pcb(0, 3), _pcb(1, 1), _pcb(2, 3)
    queue = ProcessQueue([a, b, c])
    queue.sort(key=lambda p: p.total_burst)
    assert list(queue) == [b, a, c]


def test_drain_back_returns_extraction_order():
    queue = ProcessQueue()
    for arrival in range(3):
        queue.push_front(_pcb(arrival))
    assert [p.arrival for p in queue.drain_back()] == [0, 1, 2]
    assert len(queue) == 0


def test_require_queue():
    with pytest.raises(InvalidArgumentError):
        require_queue(None)
    with pytest.raises(InvalidArgumentError):
        require_queue(ProcessQueue())
    queue = ProcessQueue([_pcb(0)])
    assert require_queue(queue) is queue


def test_pcb_defaults():
    pcb = ProcessControlBlock(arrival=3, total_burst=4, priority=2)
    assert pcb.remaining_burst == 4
    assert pcb.started is False
    assert not pcb.finished


def test_require_queue_rejects_finished_pcb():
    done = _pcb(0, 1)
    done.remaining_burst = 0
    with pytest.raises(InvalidArgumentError):
        require_queue(ProcessQueue([_pcb(0), done]))
