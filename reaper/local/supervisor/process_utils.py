import sys
import enum
import signal
import psutil
import logging
from abc import ABC, abstractmethod
from typing import Optional

from .errors import ObservationFailure, SignalDeliveryFailure

log = logging.getLogger(__name__)


class Liveness(enum.Enum):
    """Result of a liveness probe. A failed probe raises ObservationFailure instead."""
    ABSENT = "absent"
    RUNNING = "running"


#* --- Process Status & Monitoring ---
def get_process_from_pid(pid: int) -> psutil.Process:
    """A wrapper for psutil.Process for easy testing/mocking if needed."""
    return psutil.Process(pid)

def lookup_process(pid: int) -> Optional[psutil.Process]:
    """
    Returns a handle on the process currently holding `pid`.

    The handle remembers the process creation time, so later checks through it
    notice when the PID has been handed to a different process.

    :return: The process handle, or None if no such process exists.
    :raises ObservationFailure: If the lookup fails for any other reason.
    """
    try:
        return get_process_from_pid(pid)
    except psutil.NoSuchProcess:
        return None
    except (psutil.Error, OSError) as e:
        raise ObservationFailure(pid, reason=str(e) or type(e).__name__) from e

def probe_process(proc: psutil.Process) -> Liveness:
    """
    Reports whether the process behind a handle still exists and has not terminated.

    `is_running()` compares creation times, so a reused PID reads as absent.
    A zombie has already exited and only waits to be reaped, so it counts as absent.

    :param proc: Handle obtained from lookup_process.
    :return Liveness: RUNNING or ABSENT.
    :raises ObservationFailure: If the platform query fails for any other reason.
    """
    try:
        if not proc.is_running() or proc.status() == psutil.STATUS_ZOMBIE:
            return Liveness.ABSENT
        return Liveness.RUNNING
    except psutil.NoSuchProcess:
        return Liveness.ABSENT
    except (psutil.Error, OSError) as e:
        raise ObservationFailure(proc.pid, reason=str(e) or type(e).__name__) from e


#* --- Platform Capabilities ---
class ProcessControl(ABC):
    """
    Liveness query and signal delivery for one platform.

    All operations after `lookup` go through the same process handle. Liveness
    comes from psutil everywhere; subclasses only differ in how the stop
    request reaches the process.
    """

    def lookup(self, pid: int) -> Optional[psutil.Process]:
        return lookup_process(pid)

    def probe(self, proc: psutil.Process) -> Liveness:
        return probe_process(proc)

    def is_running(self, pid: int) -> bool:
        """True if the process exists and is not terminated. Absence is not an error."""
        proc = self.lookup(pid)
        return proc is not None and self.probe(proc) is Liveness.RUNNING

    @abstractmethod
    def request_stop(self, proc: psutil.Process, force: bool = False) -> bool:
        """
        Delivers a graceful termination request, or a kill when `force` is set.

        :return bool: True if delivered, False if the process no longer exists
                      (including when its PID now belongs to another process).
        :raises SignalDeliveryFailure: If delivery failed for any other reason.
        """


class PosixProcessControl(ProcessControl):
    """Stops processes with SIGTERM / SIGKILL."""

    def request_stop(self, proc: psutil.Process, force: bool = False) -> bool:
        sig = signal.SIGKILL if force else signal.SIGTERM
        try:
            # psutil refuses to signal a PID that was reused since the handle was made
            proc.send_signal(sig)
        except psutil.NoSuchProcess:
            return False
        except (psutil.Error, OSError) as e:
            raise SignalDeliveryFailure(proc.pid, sig.name, str(e) or type(e).__name__) from e
        log.debug(f"Sent {sig.name} to PID {proc.pid}")
        return True


class PsutilProcessControl(ProcessControl):
    """Stops processes through psutil, for platforms without POSIX signals."""

    def request_stop(self, proc: psutil.Process, force: bool = False) -> bool:
        action = "kill" if force else "terminate"
        try:
            if force:
                proc.kill()
            else:
                proc.terminate()
        except psutil.NoSuchProcess:
            return False
        except (psutil.Error, OSError) as e:
            raise SignalDeliveryFailure(proc.pid, action, str(e) or type(e).__name__) from e
        log.debug(f"Requested {action} of PID {proc.pid}")
        return True


def get_process_control() -> ProcessControl:
    """Returns the process control capability for the current platform."""
    if sys.platform == "win32":
        return PsutilProcessControl()
    return PosixProcessControl()
