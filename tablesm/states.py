"""Table driven state machines for run-to-completion main loops.

A table is a sequence of entries.  Most entries are state functions that
take the machine and return how far to advance: 0 to be called again,
1 to go to the next entry, more to skip entries, or a negative value to
abort the machine.  The built-in states below read the entry that follows
them as data (a delay in ticks, or a table to jump to).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from .clock import get_ms, ticks16

TICK_RATE = 1000

RETURN_SKIP_TWO_JUMPS = 5
RETURN_SKIP_JUMP = 3
RETURN_SKIP_JUMP_SIZE = 2
RETURN_SKIP_NEXT = 2
RETURN_REPEAT = 0
RETURN_DONE = 1
RETURN_ERROR = -1
NULL_STATE_PTR_ERROR = -257

StateFunc = Callable[["StateMachine"], int]
Table = Sequence[Any]


def ms_to_ticks(ms: int) -> int:
    """Convert milliseconds to timer ticks."""
    return ms * TICK_RATE // 1000


class StateMachine:
    """One state machine walking a table of state functions."""

    def __init__(
        self,
        table: Table | None = None,
        clock: Callable[[], int] = get_ms,
    ) -> None:
        self.table: Table | None = table
        self.index = 0
        self.clock = clock
        self.timer_start = 0
        self.delay = 0

    @property
    def active(self) -> bool:
        """True while the machine has a table to run."""
        return self.table is not None

    def set_table(self, table: Table | None) -> None:
        """Start running ``table`` from its first entry, or stop with None."""
        self.table = table
        self.index = 0

    def start_timer(self, delay: int) -> None:
        """Arm the timer to expire ``delay`` ticks from now."""
        self.timer_start = ticks16(self.clock())
        self.delay = ticks16(delay)

    def timer_done(self) -> bool:
        """True once the armed delay has elapsed, allowing for wrap-around."""
        elapsed = ticks16(ticks16(self.clock()) - self.timer_start)
        return elapsed >= self.delay

    def run_state(self) -> int:
        """Run the current state once and advance by what it returns.

        Returns the state's result.  A negative result aborts the machine,
        clearing its table.  With no table, or past its end, nothing runs
        and RETURN_ERROR is returned.
        """
        table = self.table
        if table is None or not 0 <= self.index < len(table):
            return RETURN_ERROR
        func = table[self.index]
        if func is None:
            return RETURN_ERROR
        result = func(self)
        if result >= 0:
            if self.table is not None:
                self.index += result
        else:
            self.table = None
            self.index = 0
        return result

    def run_until_pause(self) -> int:
        """Run states until one repeats, jumps, fails or the machine stops."""
        while True:
            result = self.run_state()
            if result <= 0 or self.table is None:
                return result


def delay_ticks_state(sm: StateMachine) -> int:
    """Start the timer with the delay stored in the next table entry."""
    if sm.table is None:
        return RETURN_REPEAT
    sm.index += 1
    sm.start_timer(sm.table[sm.index])
    return RETURN_DONE


def wait_ticks_state(sm: StateMachine) -> int:
    """Hold the machine until its timer has expired."""
    return RETURN_DONE if sm.timer_done() else RETURN_REPEAT


def jump_table_state(sm: StateMachine) -> int:
    """Switch to the table stored in the next table entry."""
    assert sm.table is not None
    sm.set_table(sm.table[sm.index + 1])
    return RETURN_REPEAT


def set_timer_ms(ms: int) -> tuple[StateFunc, int]:
    """Table entries that arm the timer without waiting for it."""
    return (delay_ticks_state, ms_to_ticks(ms))


def delay_ms(ms: int) -> tuple[StateFunc, int, StateFunc]:
    """Table entries that arm the timer and wait for it to expire."""
    return (delay_ticks_state, ms_to_ticks(ms), wait_ticks_state)


def jump(dest: Table) -> tuple[StateFunc, Table]:
    """Table entries that continue running from the start of ``dest``."""
    return (jump_table_state, dest)