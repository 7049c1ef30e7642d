from __future__ import annotations

import time


def now_epoch_seconds() -> float:
    """Current wall-clock time as unix seconds.

    Note: Wrapped so tests can inject a fixed clock instead.
    """
    return time.time()


def monotonic_seconds() -> float:
    return time.monotonic()
