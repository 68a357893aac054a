"""Time utilities (UTC now, elapsed milliseconds)."""
from __future__ import annotations
import time
from datetime import datetime, timezone

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

def elapsed_ms(start: float) -> float:
    """Milliseconds since ``start`` (a ``time.perf_counter()`` reading)."""
    return round((time.perf_counter() - start) * 1000, 2)

__all__ = ["utc_now", "elapsed_ms"]
