import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .supervisor import TerminationSupervisor

log = logging.getLogger(__name__)


def read_pid_file(pid_path: Path) -> Optional[int]:
    """
    Reads a PID file written by the launcher.

    A malformed file is removed so it cannot point at a reused PID later.

    :param pid_path: Path to the PID file.
    :return: The PID if the file exists and is valid, else None.
    """
    if not pid_path.exists():
        return None
    try:
        pid = int(pid_path.read_text().strip())
    except (ValueError, IOError) as e:
        log.warning(f"Ignoring unreadable PID file '{pid_path}': {e}")
        pid_path.unlink(missing_ok=True)
        return None
    if pid <= 0:
        log.warning(f"Ignoring PID file '{pid_path}' with invalid PID {pid}")
        pid_path.unlink(missing_ok=True)
        return None
    return pid

def remove_pid_file(pid_path: Path) -> None:
    """Removes the PID file if present."""
    pid_path.unlink(missing_ok=True)
    log.debug(f"Removed PID file '{pid_path}'.")

def stop_from_pid_file(supervisor: "TerminationSupervisor", pid_path: Path, force: bool = False) -> bool:
    """
    Stops the process recorded in a PID file and removes the file afterwards.

    The file is kept when stopping fails, so a later attempt can retry.

    :return bool: True if a recorded process was handled, False if there was no PID file.
    """
    pid = read_pid_file(pid_path)
    if pid is None:
        log.info(f"No PID recorded in '{pid_path}', nothing to stop.")
        return False

    supervisor.terminate(pid, force=force)
    remove_pid_file(pid_path)
    return True
