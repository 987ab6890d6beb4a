"""
This module contains the configuration settings for machine-reaper.
It defines paths, the termination backoff budget, and logging configuration.
Values can be overridden through environment variables or a `.env` file.
"""

import os
import logging
import pathlib
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv(override=True)

log = logging.getLogger(__name__)


def _env_number(name, default, cast):
    """Reads a numeric environment variable, falling back to `default` if it does not parse."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        log.warning(f"Ignoring {name}={raw!r}: not a valid {cast.__name__}. Using {default}.")
        return default


#* --- Core Paths ---
BASE_DIR = pathlib.Path(__file__).resolve().parent.parent  # Project Root
RUN_DIR = pathlib.Path(os.getenv("REAPER_RUN_DIR", str(BASE_DIR / "run")))
LOGS_DIR = BASE_DIR / "logs"

#* --- Runtime File Paths ---
PID_FILE_PATH = pathlib.Path(os.getenv("REAPER_PID_FILE", str(RUN_DIR / "gvproxy.pid")))
OVERRIDES_JSON_PATH = RUN_DIR / "overrides.json"

#* --- Termination Settings ---
# Human readable name of the helper being stopped, used in log lines.
PROCESS_LABEL = os.getenv("REAPER_PROCESS_LABEL", "gvproxy")
# Number of liveness polls after the stop signal before giving up.
STOP_LOOP_COUNT = _env_number("REAPER_STOP_LOOP_COUNT", 8, int)
# First wait between polls in seconds; doubles after every poll.
STOP_INITIAL_INTERVAL = _env_number("REAPER_STOP_INITIAL_INTERVAL", 0.001, float)

#* --- Logging Settings ---
LOG_LEVEL = os.getenv("REAPER_LOG_LEVEL", "INFO").upper()
LOG_BUFFER_FLUSH_INTERVAL = 5  # seconds
LOKI_ENABLED = os.getenv("LOKI_ENABLED", "false").lower() in ("true", "1", "t", "yes", "y")
LOKI_URL = os.getenv("LOKI_URL", "http://127.0.0.1:3100")
LOKI_ORG_ID = os.getenv("LOKI_ORG_ID")

#* --- Process Title ---
PROCESS_TITLE = "machine-reaper"

# Settings that may be changed at runtime through overrides.json
MODIFIABLE_SETTINGS = {
    "PROCESS_LABEL",
    "STOP_LOOP_COUNT",
    "STOP_INITIAL_INTERVAL",
    "PID_FILE_PATH",
    "LOG_LEVEL",
    "LOKI_ENABLED",
    "LOKI_URL",
    "LOKI_ORG_ID",
}
