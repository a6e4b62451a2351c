from __future__ import annotations

import time

_last_ms: int = 0


def now_ms() -> int:
    """
    Current epoch time in milliseconds, never lower than a previous call.

    Two calls within the same millisecond get consecutive values so the
    result doubles as a unique identifier.
    """
    global _last_ms
    current = int(time.time() * 1000)
    if current <= _last_ms:
        current = _last_ms + 1
    _last_ms = current
    return current


def next_id() -> str:
    return str(now_ms())
