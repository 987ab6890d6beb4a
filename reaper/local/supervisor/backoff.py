import time
import logging
from typing import TYPE_CHECKING, Callable, List

from .errors import ObservationFailure, TerminationTimeout
from .process_utils import Liveness

if TYPE_CHECKING:
    import psutil
    from .process_utils import ProcessControl

log = logging.getLogger(__name__)


def backoff_schedule(loop_count: int, initial_interval: float) -> List[float]:
    """
    Returns the waits used between liveness polls: I, 2I, 4I, ... 2^(N-1)*I.

    :param loop_count: Number of polls (N), at least 1.
    :param initial_interval: First wait in seconds (I), greater than zero.
    """
    if loop_count < 1:
        raise ValueError(f"loop_count must be at least 1, got {loop_count}")
    if initial_interval <= 0:
        raise ValueError(f"initial_interval must be positive, got {initial_interval}")
    return [initial_interval * (2 ** i) for i in range(loop_count)]

def worst_case_wait(loop_count: int, initial_interval: float) -> float:
    """Upper bound on the time spent sleeping before giving up: I*(2^N - 1)."""
    return sum(backoff_schedule(loop_count, initial_interval))

def await_exit(
    control: "ProcessControl",
    proc: "psutil.Process",
    loop_count: int,
    initial_interval: float,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """
    Polls a process until it is gone, doubling the wait after every poll.

    Returns as soon as a poll sees the process absent; no sleep follows that
    poll. An observation failure stops the loop at once. It is re-raised with
    the polling context added, and the original failure stays reachable as
    `__cause__`.

    :param control: Platform capability used to probe the process.
    :param proc: Handle on the process being waited on, from `control.lookup`.
    :param loop_count: Number of polls before giving up.
    :param initial_interval: First wait in seconds.
    :param sleep: Blocking sleep function, injectable for tests.
    :raises TerminationTimeout: If all polls saw the process running.
    :raises ObservationFailure: If a poll could not be completed.
    """
    pid = proc.pid
    for attempt, interval in enumerate(backoff_schedule(loop_count, initial_interval), start=1):
        try:
            state = control.probe(proc)
        except ObservationFailure as e:
            raise ObservationFailure(pid, "checking if process running", e.reason or str(e)) from e

        if state is Liveness.ABSENT:
            log.debug(f"PID {pid} ended after {attempt} poll(s)")
            return

        sleep(interval)

    raise TerminationTimeout(pid)
