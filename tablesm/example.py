"""Two cooperating state machines that echo keystrokes.

One machine collects keys into a ring buffer, giving up and restarting when
no key arrives in time.  The other drains the buffer to the output, nagging
the user when nothing has been typed for a while.  Both run to completion
from a single main loop.
"""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Callable
from typing import Any

from .clock import get_ms
from .states import (
    RETURN_DONE,
    RETURN_REPEAT,
    RETURN_SKIP_JUMP,
    StateMachine,
    jump,
    set_timer_ms,
)

BUFFER_SIZE = 512
INPUT_TIMEOUT_MS = 3000
OUTPUT_TIMEOUT_MS = 6000
NAG_MESSAGE = "hey give me keys\n"


class KeyEcho:
    """Reads keys with one state machine and echoes them with another."""

    def __init__(
        self,
        key_ready: Callable[[], bool],
        read_key: Callable[[], Any],
        write: Callable[[Any], Any],
        clock: Callable[[], int] = get_ms,
    ) -> None:
        self.key_ready = key_ready
        self.read_key = read_key
        self.write = write
        self.buffer: list[Any] = [None] * BUFFER_SIZE
        self.head = 0
        self.tail = 0

        self.get_key_table: list[Any] = []
        self.get_key_table.extend(
            [
                *set_timer_ms(INPUT_TIMEOUT_MS),
                self.input_available_state,
                *jump(self.get_key_table),  # timed out: start over
                self.read_key_state,
                *jump(self.get_key_table),  # buffer full
                *jump(self.get_key_table),  # key stored, get more
            ]
        )
        self.display_key_table: list[Any] = []
        self.display_key_table.extend(
            [
                *set_timer_ms(OUTPUT_TIMEOUT_MS),
                self.print_key_state,
                *jump(self.display_key_table),
            ]
        )

        self.input = StateMachine(None, clock)
        self.output = StateMachine(None, clock)

    def input_available_state(self, sm: StateMachine) -> int:
        """Wait for a key, or report a timeout."""
        if sm.timer_done():
            return RETURN_DONE
        if self.key_ready():
            return RETURN_SKIP_JUMP
        return RETURN_REPEAT

    def read_key_state(self, sm: StateMachine) -> int:
        """Read one key and push it into the ring buffer.

        The key is dropped when the buffer is full.
        """
        key = self.read_key()
        following = (self.head + 1) % BUFFER_SIZE
        if following == self.tail:
            return RETURN_DONE
        self.buffer[self.head] = key
        self.head = following
        return RETURN_SKIP_JUMP

    def print_key_state(self, sm: StateMachine) -> int:
        """Write one buffered key, or nag once the timer has run out."""
        if sm.timer_done():
            self.write(NAG_MESSAGE)
            return RETURN_DONE
        if self.head == self.tail:
            return RETURN_REPEAT
        key = self.buffer[self.tail]
        self.tail = (self.tail + 1) % BUFFER_SIZE
        self.write(key)
        return RETURN_DONE

    def step(self) -> None:
        """Give each machine one turn, restarting any that has stopped."""
        for machine, table in (
            (self.input, self.get_key_table),
            (self.output, self.display_key_table),
        ):
            if not machine.active:
                machine.set_table(table)
            machine.run_until_pause()


def main(argv: list[str] | None = None) -> int:
    """Echo keys typed on the terminal until interrupted."""
    import select

    fd = sys.stdin.fileno()
    saved = None
    if os.isatty(fd):
        import termios

        saved = termios.tcgetattr(fd)
        attrs = termios.tcgetattr(fd)
        attrs[3] &= ~(termios.ECHO | termios.ICANON)
        termios.tcsetattr(fd, termios.TCSANOW, attrs)

    def key_ready() -> bool:
        ready, _, _ = select.select([fd], [], [], 0.0001)
        return bool(ready)

    def read_key() -> str:
        return os.read(fd, 1).decode("latin-1")

    def write(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    echo = KeyEcho(key_ready, read_key, write)
    write("type keys!\n")
    try:
        while True:
            echo.step()
            time.sleep(0.001)
    except KeyboardInterrupt:
        return 0
    finally:
        if saved is not None:
            import termios

            termios.tcsetattr(fd, termios.TCSANOW, saved)


if __name__ == "__main__":
    sys.exit(main())