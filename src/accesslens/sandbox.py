"""Best-effort process restriction after the input is open.

Once the log and any geolocation tables are open the analyzer has no
reason to create another file descriptor. restrict_process() lowers
the soft RLIMIT_NOFILE to the lowest free descriptor number, so any
later open(), socket() or pipe() fails with EMFILE. Descriptors that
are already open keep working.

On platforms without the `resource` module this is a no-op that
returns False. It never raises.
"""
from __future__ import annotations

import logging
import os

try:
    import resource
except ImportError:  # not available on Windows
    resource = None

log = logging.getLogger(__name__)


def lowest_free_fd() -> int:
    """The descriptor number the next open() would return."""
    probe = os.open(os.devnull, os.O_RDONLY)
    os.close(probe)
    return probe


def restrict_process() -> bool:
    """Forbid new file descriptors. Returns True if the limit was applied."""
    if resource is None:
        log.debug("No resource module; skipping process restriction")
        return False
    try:
        limit = lowest_free_fd()
        _soft, hard = resource.getrlimit(resource.RLIMIT_NOFILE)
        resource.setrlimit(resource.RLIMIT_NOFILE, (limit, hard))
    except (OSError, ValueError) as exc:
        log.debug("Could not restrict RLIMIT_NOFILE: %s", exc)
        return False
    log.debug("Restricted RLIMIT_NOFILE soft limit to %d", limit)
    return True
