"""Debounced file watching for the ``watch`` command.

A change is acted upon only once the file has stayed unchanged for the
debounce interval, so a burst of saves triggers a single reconversion.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
from pathlib import Path
import time


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Debouncer:
    """Track the last change time and tell when the quiet period has elapsed."""

    delay: float
    pending_since: float | None = None

    def touch(self, now: float) -> None:
        self.pending_since = now

    def ready(self, now: float) -> bool:
        return self.pending_since is not None and now - self.pending_since >= self.delay

    def reset(self) -> None:
        self.pending_since = None


def _signature(path: Path) -> tuple[int, int] | None:
    try:
        stat = path.stat()
    except OSError:
        return None
    return stat.st_mtime_ns, stat.st_size


def watch_file(
    path: Path,
    on_change: Callable[[Path], None],
    *,
    debounce: float,
    poll_interval: float,
    max_runs: int | None = None,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Call ``on_change`` for the initial content and after each settled change.

    Returns the number of runs performed; loops until interrupted unless
    ``max_runs`` is given.
    """
    runs = 0
    on_change(path)
    runs += 1
    last_seen = _signature(path)
    debouncer = Debouncer(delay=debounce)

    while max_runs is None or runs < max_runs:
        sleep(poll_interval)
        now = clock()
        current = _signature(path)
        if current != last_seen:
            last_seen = current
            debouncer.touch(now)
            logger.debug("change detected in %s", path)
            continue
        if debouncer.ready(now):
            debouncer.reset()
            on_change(path)
            runs += 1

    return runs


__all__ = ["Debouncer", "watch_file"]
