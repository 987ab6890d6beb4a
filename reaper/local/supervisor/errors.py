"""
Exceptions raised while stopping a managed process.

A process that no longer exists is never reported through these types; the
supervisor treats its absence as a successful stop.
"""
from typing import Optional

__all__ = [
    "SupervisorError",
    "ObservationFailure",
    "SignalDeliveryFailure",
    "TerminationTimeout",
]


class SupervisorError(Exception):
    """Base class for termination failures. Always carries the target PID."""

    def __init__(self, pid: int, message: str) -> None:
        self.pid = pid
        super().__init__(message)


class ObservationFailure(SupervisorError):
    """
    The liveness of a process could not be determined.

    :param pid: The PID that was being inspected.
    :param operation: What the caller was doing, e.g. "checking if process running".
    :param reason: Text of the underlying platform failure.
    """

    def __init__(self, pid: int, operation: Optional[str] = None, reason: str = "") -> None:
        self.operation = operation
        self.reason = reason
        detail = reason or f"cannot inspect PID {pid}"
        message = f"{operation}: {detail}" if operation else detail
        super().__init__(pid, message)


class SignalDeliveryFailure(SupervisorError):
    """A stop signal could not be delivered to a process that still exists."""

    def __init__(self, pid: int, signal_name: str, reason: str = "") -> None:
        self.signal_name = signal_name
        self.reason = reason
        message = f"sending {signal_name} to PID {pid}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(pid, message)


class TerminationTimeout(SupervisorError):
    """The process was still running after the whole poll budget was used."""

    def __init__(self, pid: int) -> None:
        super().__init__(pid, f"process {pid} has not ended")
