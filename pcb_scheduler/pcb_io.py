from __future__ import annotations

import csv
import json
import logging
import os
import struct
from pathlib import Path
from typing import BinaryIO, Iterable, List

from .errors import InvalidArgumentError, MalformedInputError, PCBFileError
from .models import ProcessControlBlock
from .process_queue import ProcessQueue

logger = logging.getLogger(__name__)

# Native byte order, standard 4-byte unsigned ints, no padding.
_COUNT = struct.Struct("=I")
_RECORD = struct.Struct("=III")  # burst, priority, arrival
_U32_MAX = 0xFFFFFFFF

_BAD_PATH_BYTES = frozenset(b"\n\t\r\v\f")
_PATH_CHECK_LEN = 32


def _check_path(path: str | Path | None) -> Path:
    if path is None:
        raise InvalidArgumentError("PCB file path is required")
    text = str(path)
    if not text:
        raise InvalidArgumentError("PCB file path is empty")
    if "\0" in text:
        raise InvalidArgumentError(f"PCB file path contains a NUL byte: {text!r}")
    if any(b in _BAD_PATH_BYTES for b in os.fsencode(text)[:_PATH_CHECK_LEN]):
        raise InvalidArgumentError(f"PCB file path contains control characters: {text!r}")
    return Path(text)


def _read_exact(f: BinaryIO, size: int, what: str) -> bytes:
    try:
        data = f.read(size)
    except OSError as exc:
        raise PCBFileError(f"Failed reading {what}: {exc}") from exc
    if len(data) != size:
        raise MalformedInputError(f"Unexpected end of file while reading {what}")
    return data


def load_process_control_blocks(path: str | Path) -> ProcessQueue:
    """
    Load PCBs from a binary file into a ProcessQueue.

    Layout: ``[u32 count]`` followed by ``count`` records of
    ``[u32 burst][u32 priority][u32 arrival]``. Every record is pushed to the
    front of the queue, so the first record in the file sits at the back and
    is the first one a policy extracts.
    """
    path = _check_path(path)

    try:
        f = path.open("rb")
    except OSError as exc:
        raise PCBFileError(f"Cannot open PCB file {path}: {exc}") from exc

    with f:
        (count,) = _COUNT.unpack(_read_exact(f, _COUNT.size, "record count"))
        if count == 0:
            raise MalformedInputError(f"PCB file {path} declares zero records")

        pcbs: List[ProcessControlBlock] = []
        for index in range(count):
            raw = _read_exact(f, _RECORD.size, f"record {index} of {count}")
            burst, prio, arrival = _RECORD.unpack(raw)
            if burst == 0:
                raise MalformedInputError(f"Record {index} in {path} has a zero burst time")
            pcbs.append(
                ProcessControlBlock(
                    arrival=arrival,
                    total_burst=burst,
                    priority=prio,
                    load_index=index,
                )
            )

        if f.read(1):
            logger.debug("Ignoring trailing bytes after %d records in %s", count, path)

    queue = ProcessQueue()
    for pcb in pcbs:
        queue.push_front(pcb)

    logger.debug("Loaded %d PCBs from %s", count, path)
    return queue


def write_process_control_blocks(path: str | Path, pcbs: Iterable[ProcessControlBlock]) -> int:
    """
    Write PCBs, in the given order, in the binary format read by
    ``load_process_control_blocks``. Returns the number of records written.
    """
    path = _check_path(path)
    pcbs = list(pcbs)
    if not pcbs:
        raise InvalidArgumentError("Refusing to write a PCB file with zero records")

    chunks = [_COUNT.pack(len(pcbs))]
    for pcb in pcbs:
        values = (pcb.total_burst, pcb.priority, pcb.arrival)
        if any(v < 0 or v > _U32_MAX for v in values):
            raise MalformedInputError(f"PCB fields do not fit in u32: {pcb!r}")
        chunks.append(_RECORD.pack(*values))

    try:
        with path.open("wb") as f:
            f.write(b"".join(chunks))
    except OSError as exc:
        raise PCBFileError(f"Cannot write PCB file {path}: {exc}") from exc

    logger.debug("Wrote %d PCBs to %s", len(pcbs), path)
    return len(pcbs)


def load_workload(path: str | Path) -> List[ProcessControlBlock]:
    """
    Load a JSON or CSV workload into a list of PCBs in file order.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    try:
        if suffix == ".json":
            return _load_json(path)
        if suffix == ".csv":
            return _load_csv(path)
    except UnicodeDecodeError as exc:
        raise MalformedInputError(f"Workload {path} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise PCBFileError(f"Cannot read workload {path}: {exc}") from exc

    raise MalformedInputError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[ProcessControlBlock]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise MalformedInputError(f"Invalid JSON workload {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise MalformedInputError("JSON workload must be a list of process objects")

    return [_pcb_from_mapping(entry, index) for index, entry in enumerate(raw)]


def _load_csv(path: Path) -> List[ProcessControlBlock]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        return [_pcb_from_mapping(row, index) for index, row in enumerate(reader)]


def _pcb_from_mapping(mapping, index: int) -> ProcessControlBlock:
    try:
        arrival_time = int(mapping["arrival_time"])
        burst_time = int(mapping["burst_time"])
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedInputError(f"Invalid process entry: {mapping!r}") from exc

    priority_val = mapping.get("priority")
    try:
        prio = int(priority_val) if priority_val not in (None, "") else 0
    except (TypeError, ValueError) as exc:
        raise MalformedInputError(f"Invalid priority in process entry: {mapping!r}") from exc

    if arrival_time < 0 or burst_time <= 0:
        raise MalformedInputError(f"Process entry needs arrival >= 0 and burst > 0: {mapping!r}")

    return ProcessControlBlock(
        arrival=arrival_time,
        total_burst=burst_time,
        priority=prio,
        load_index=index,
    )
