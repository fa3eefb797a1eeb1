# tablesm

Table-driven state machines for run-to-completion programs that never block.

## State machines

`tablesm.states.StateMachine` walks a table of state functions. Each call to
`run_state()` runs exactly one state and returns what that state returned.
The return value moves the table position:

- `0` (`RETURN_REPEAT`) runs the same state again on the next call.
- `1` (`RETURN_DONE`) moves on to the next entry.
- Larger values skip ahead. `RETURN_SKIP_NEXT` is 2, `RETURN_SKIP_JUMP` is 3
  and `RETURN_SKIP_TWO_JUMPS` is 5.
- A negative value aborts the machine and clears its table.

If the machine has no table, or its position has run past the end of the
table, `run_state()` runs nothing and returns `RETURN_ERROR`.
`run_until_pause()` keeps running states until one of them returns zero or
less, or until the machine stops. It then returns that last result.
`set_table(table)` starts a table from its first entry, and
`set_table(None)` stops the machine. The `active` property tells you whether
the machine still has a table.

Three helpers build common table entries:

- `set_timer_ms(ms)` starts the machine's 16-bit tick timer.
- `delay_ms(ms)` starts the timer and then waits until it has run out.
- `jump(dest)` carries on from the start of another table, or loops back to
  the start of the same one.

A state can call `sm.timer_done()` to see whether the timer has expired.
Timers use the clock passed to `StateMachine`. By default that is
`tablesm.clock.get_ms`. You can pass a different clock, for example a fake
clock in tests.

```python
from tablesm.states import StateMachine, delay_ms, jump

def say_hello(sm):
    print("hello")
    return 1

table = [say_hello, *delay_ms(500)]
table += jump(table)

sm = StateMachine(table)
while True:
    sm.run_until_pause()
```

## Clock

`tablesm.clock.get_ms()` reads a monotonic clock in milliseconds and returns
it as an unsigned 32-bit count. `ticks16(value)` wraps a value to 16 bits.
The timers wrap their values the same way when they compare elapsed time.

## Linked list

`tablesm.cdll.Node` is a circular doubly linked list with a sentinel head.
It can serve as a FIFO, a LIFO or a ring:

- `insert_tail(head)` queues a node before the head.
- `insert_head(head)` pushes a node after the head.
- `unlink()` removes a node from its list.
- `swap(newfirst)` moves `newfirst` so that it sits just before the node you
  call it on.
- `is_empty()` tells you whether the list has no nodes.

Each node carries an `owner`. You can iterate over a head forwards with
`iter(head)` or backwards with `reversed(head)`. Unlinking the node just
yielded is safe during either walk. `head.owners()` yields the owners from
front to back.

## Example program

```
tablesm-example
```

The example runs two cooperating machines, and `tablesm.example.KeyEcho`
wires them together. One machine reads keys from standard input into a
512-entry ring buffer. The other echoes the keys back. If no key arrives
within 3 seconds, the input machine starts over. If nothing is echoed within
6 seconds, the program prints `hey give me keys`. When standard input is a
terminal, echo and line buffering are turned off while the program runs.
Press Ctrl-C to stop it. The program needs a POSIX system.

`KeyEcho` takes the functions it uses to test for a key, read a key and write
output, plus an optional clock. You can therefore drive it without a
terminal by calling `step()` yourself.

## Tests

```
pip install .[test]
pytest
```