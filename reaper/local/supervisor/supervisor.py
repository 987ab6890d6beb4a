import time
import logging
from typing import Callable, Optional

from reaper.local import effective_settings as config
from .backoff import await_exit, backoff_schedule
from .errors import ObservationFailure
from .process_utils import Liveness, ProcessControl, get_process_control

log = logging.getLogger(__name__)


class TerminationSupervisor:
    """
    Stops a process that some other component started.

    Each call to `terminate` sends one stop signal and then polls the process
    with exponential backoff until it is gone or the poll budget runs out.
    A process that is already gone, or disappears before the signal lands,
    counts as stopped.
    """

    def __init__(
        self,
        control: Optional[ProcessControl] = None,
        logger: Optional[logging.Logger] = None,
        loop_count: Optional[int] = None,
        initial_interval: Optional[float] = None,
        label: Optional[str] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        :param control: Liveness/signal capability. Defaults to the current platform's.
        :param logger: Where progress messages go. Defaults to this module's logger.
        :param loop_count: Number of polls after the signal (STOP_LOOP_COUNT).
        :param initial_interval: First wait between polls in seconds (STOP_INITIAL_INTERVAL).
        :param label: Name used in log lines (PROCESS_LABEL).
        :param sleep: Blocking sleep function, injectable for tests.
        :raises ValueError: If loop_count is below 1 or initial_interval is not positive.
        """
        self.control = control or get_process_control()
        self.log = logger or log
        self.loop_count = loop_count if loop_count is not None else config.STOP_LOOP_COUNT
        self.initial_interval = initial_interval if initial_interval is not None else config.STOP_INITIAL_INTERVAL
        self.label = label or config.PROCESS_LABEL
        self.sleep = sleep
        # reject a bad budget here, before any process has been signalled
        backoff_schedule(self.loop_count, self.initial_interval)

    def is_running(self, pid: int) -> bool:
        """Returns True if the process exists and has not terminated."""
        return self.control.is_running(pid)

    def terminate(self, pid: int, force: bool = False) -> None:
        """
        Brings the process to a stopped state.

        The process is looked up once; the signal and every poll go through that
        handle, so a PID reused by another process is never signalled and reads
        as stopped. Observation failures carry the original as `__cause__`.

        :param pid: The process to stop.
        :param force: Send a kill instead of a graceful termination request.
        :raises ObservationFailure: If liveness could not be determined.
        :raises SignalDeliveryFailure: If the signal failed while the process still existed.
        :raises TerminationTimeout: If the process outlived the poll budget.
        """
        if isinstance(pid, bool) or not isinstance(pid, int) or pid <= 0:
            raise ValueError(f"PID must be a positive integer, got {pid!r}")

        self.log.info(f"Going to stop {self.label} (PID {pid})")

        try:
            proc = self.control.lookup(pid)
            state = Liveness.ABSENT if proc is None else self.control.probe(proc)
        except ObservationFailure as e:
            raise ObservationFailure(pid, f"checking if {self.label} is running", e.reason or str(e)) from e

        if state is Liveness.ABSENT:
            self.log.debug(f"{self.label.capitalize()} (PID {pid}) is not running, nothing to stop")
            return

        if not self.control.request_stop(proc, force=force):
            self.log.debug(f"{self.label.capitalize()} already dead, exiting cleanly")
            return

        await_exit(self.control, proc, self.loop_count, self.initial_interval, sleep=self.sleep)
        self.log.debug(f"{self.label.capitalize()} (PID {pid}) stopped")
