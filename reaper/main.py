import sys
import logging
from pathlib import Path
from typing import List, Optional

import setproctitle

from reaper.local import effective_settings as config
from reaper.log.setup import setup_logging
from reaper.local.supervisor import SupervisorError, TerminationSupervisor
from reaper.local.supervisor.persistence import stop_from_pid_file

log = logging.getLogger("reaper")

USAGE = """Usage:
  reaper stop [PID] [--pid-file PATH] [--force] [--verbose]
  reaper status PID [--verbose]
  reaper help"""

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


class UsageError(Exception):
    """Raised for malformed command lines."""


def _parse_pid(value: str) -> int:
    try:
        pid = int(value)
    except ValueError:
        raise UsageError(f"Invalid PID '{value}'.")
    if pid <= 0:
        raise UsageError(f"Invalid PID '{value}'.")
    return pid

def _pop_option(args: List[str], name: str) -> Optional[str]:
    """Removes `name VALUE` from args and returns VALUE, or None if absent."""
    if name not in args:
        return None
    index = args.index(name)
    if index + 1 >= len(args):
        raise UsageError(f"Option {name} requires a value.")
    value = args[index + 1]
    del args[index:index + 2]
    return value

def _pop_flag(args: List[str], name: str) -> bool:
    if name in args:
        args.remove(name)
        return True
    return False


def handle_stop(supervisor: TerminationSupervisor, args: List[str]) -> int:
    """Stops a PID given on the command line, or the one in the PID file."""
    force = _pop_flag(args, "--force")
    pid_file = _pop_option(args, "--pid-file")
    if len(args) > 1:
        raise UsageError(f"Unexpected arguments: {' '.join(args[1:])}")

    if args:
        if pid_file is not None:
            raise UsageError("Give either a PID or --pid-file, not both.")
        supervisor.terminate(_parse_pid(args[0]), force=force)
    else:
        path = Path(pid_file) if pid_file is not None else Path(config.PID_FILE_PATH)
        if not stop_from_pid_file(supervisor, path, force=force):
            return EXIT_OK

    log.info(f"{supervisor.label.capitalize()} stopped.")
    return EXIT_OK

def handle_status(supervisor: TerminationSupervisor, args: List[str]) -> int:
    """Prints whether a PID is running."""
    if len(args) != 1:
        raise UsageError("status takes exactly one PID.")
    pid = _parse_pid(args[0])
    print("running" if supervisor.is_running(pid) else "stopped")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """The main entry point for the console application."""
    args = list(sys.argv[1:] if argv is None else argv)
    verbose = _pop_flag(args, "--verbose")

    setproctitle.setproctitle(config.PROCESS_TITLE)
    setup_logging(logging.DEBUG if verbose else getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO))

    if not args or args[0].lower() in ("help", "-h", "--help"):
        print(USAGE)
        return EXIT_OK if args else EXIT_USAGE

    command, args = args[0].lower(), args[1:]
    command_map = {
        "stop": handle_stop,
        "status": handle_status,
    }
    if command not in command_map:
        print(f"Unknown command: '{command}'.\n{USAGE}", file=sys.stderr)
        return EXIT_USAGE

    try:
        supervisor = TerminationSupervisor(logger=log)
    except ValueError as e:
        log.error(f"Invalid stop budget in configuration: {e}")
        return EXIT_FAILURE

    try:
        return command_map[command](supervisor, args)
    except UsageError as e:
        print(f"{e}\n{USAGE}", file=sys.stderr)
        return EXIT_USAGE
    except SupervisorError as e:
        log.error(f"{command} failed: {e}")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
