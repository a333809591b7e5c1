from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by pcb_scheduler."""


class InvalidArgumentError(SchedulerError, ValueError):
    """Missing or empty input, a bad path, or an unusable quantum."""


class PCBFileError(SchedulerError, OSError):
    """The PCB file could not be opened or read."""


class MalformedInputError(SchedulerError, ValueError):
    """The input declares no records or ends before all records are read."""
