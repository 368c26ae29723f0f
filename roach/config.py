# Runtime defaults. Every value can be overridden from the environment and,
# for a single run, from the command line.

import logging
import os

from roach import __version__

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    if not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not a number, using {default}")
        return default


# ---------------------------------
# Endpoints
# ---------------------------------
API_BASE = os.getenv("ROACH_API_BASE", "https://irrexplorer.nlnog.net/api/prefixes").rstrip("/")
USER_AGENT = f"roach/{__version__}"

# ---------------------------------
# Timing (seconds)
# ---------------------------------
REQUEST_TIMEOUT = _env_float("ROACH_TIMEOUT", 10.0)
BATCH_DELAY = _env_float("ROACH_BATCH_DELAY", 0.1)
SLOW_QUERY_HINT = _env_float("ROACH_SLOW_HINT", 5.0)

# Log a progress line every N processed subnets (and always on the last one).
PROGRESS_INTERVAL = 10

# https://no-color.org
NO_COLOR = bool(os.getenv("NO_COLOR"))
