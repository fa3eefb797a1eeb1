"""Millisecond tick source for the state machine timers."""

import time

TIMER_MASK = 0xFFFF
_UINT32_MASK = 0xFFFFFFFF


def get_ms() -> int:
    """Return milliseconds from a monotonic clock as an unsigned 32-bit count."""
    return (time.monotonic_ns() // 1_000_000) & _UINT32_MASK


def ticks16(value: int) -> int:
    """Reduce a tick count to the 16-bit width the timers store."""
    return value & TIMER_MASK