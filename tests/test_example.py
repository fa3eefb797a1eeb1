from collections import deque

import pytest

from tablesm.example import BUFFER_SIZE, NAG_MESSAGE, KeyEcho
from tablesm.states import (
    RETURN_DONE,
    RETURN_REPEAT,
    RETURN_SKIP_JUMP,
    StateMachine,
)


class Env:
    """Fake terminal and clock for driving KeyEcho."""

    def __init__(self, keys=""):
        self.now = 0
        self.keys = deque(keys)
        self.out = []

    def key_ready(self):
        return bool(self.keys)

    def read_key(self):
        return self.keys.popleft()

    def clock(self):
        return self.now


def make_echo(env):
    return KeyEcho(
        key_ready=env.key_ready,
        read_key=env.read_key,
        write=env.out.append,
        clock=env.clock,
    )


@pytest.fixture
def env():
    return Env()


def test_single_key_is_echoed_in_one_step():
    env = Env("a")
    echo = KeyEcho(env.key_ready, env.read_key, env.out.append, env.clock)
    echo.step()
    assert env.out == ["a"]
    assert not env.keys


def test_keys_are_echoed_in_order():
    env = Env("abc")
    echo = KeyEcho(env.key_ready, env.read_key, env.out.append, env.clock)
    for _ in range(5):
        echo.step()
    assert "".join(env.out) == "abc"


def test_no_nag_before_output_timeout(env):
    echo = KeyEcho(env.key_ready, env.read_key, env.out.append, env.clock)
    echo.step()
    env.now = 5999
    echo.step()
    assert env.out == []


def test_nag_after_output_timeout(env):
    echo = KeyEcho(env.key_ready, env.read_key, env.out.append, env.clock)
    echo.step()
    env.now = 6000
    echo.step()
    assert env.out == [NAG_MESSAGE]
    assert NAG_MESSAGE == "hey give me keys\n"


def test_nag_survives_clock_wraparound(env):
    echo = KeyEcho(env.key_ready, env.read_key, env.out.append, env.clock)
    env.now = 65000
    echo.step()
    env.now = 65000 + 6000
    echo.step()
    assert env.out == [NAG_MESSAGE]


def test_input_machine_restarts_after_timeout(env):
    echo = KeyEcho(env.key_ready, env.read_key, env.out.append, env.clock)
    echo.step()
    env.now = 3000
    echo.step()
    assert echo.input.table is echo.get_key_table
    assert echo.input.index == 0


def test_input_available_reports_key(env):
    echo = make_echo(env)
    sm = StateMachine(echo.get_key_table, env.clock)
    sm.start_timer(100)
    assert echo.input_available_state(sm) == RETURN_REPEAT
    env.keys.append("x")
    assert echo.input_available_state(sm) == RETURN_SKIP_JUMP
    env.now = 100
    assert echo.input_available_state(sm) == RETURN_DONE


def test_print_key_repeats_when_buffer_empty(env):
    echo = make_echo(env)
    sm = StateMachine(echo.display_key_table, env.clock)
    sm.start_timer(10)
    assert echo.print_key_state(sm) == RETURN_REPEAT
    assert env.out == []


def test_read_then_print_round_trip(env):
    echo = make_echo(env)
    sm = StateMachine(None, env.clock)
    sm.start_timer(10)
    env.keys.extend("hi")
    assert echo.read_key_state(sm) == RETURN_SKIP_JUMP
    assert echo.read_key_state(sm) == RETURN_SKIP_JUMP
    assert echo.print_key_state(sm) == RETURN_DONE
    assert echo.print_key_state(sm) == RETURN_DONE
    assert env.out == ["h", "i"]
    assert echo.head == echo.tail


def test_full_buffer_drops_key(env):
    echo = make_echo(env)
    sm = StateMachine(None, env.clock)
    env.keys.extend(str(i % 10) for i in range(BUFFER_SIZE))
    results = [echo.read_key_state(sm) for _ in range(BUFFER_SIZE)]
    assert results[:-1] == [RETURN_SKIP_JUMP] * (BUFFER_SIZE - 1)
    assert results[-1] == RETURN_DONE
    assert not env.keys
    assert (echo.head + 1) % BUFFER_SIZE == echo.tail


def test_ring_buffer_wraps(env):
    echo = make_echo(env)
    sm = StateMachine(None, env.clock)
    sm.start_timer(10)
    for i in range(BUFFER_SIZE + 5):
        env.keys.append(i)
        assert echo.read_key_state(sm) == RETURN_SKIP_JUMP
        assert echo.print_key_state(sm) == RETURN_DONE
    assert env.out == list(range(BUFFER_SIZE + 5))
    assert echo.head == echo.tail


def test_tables_are_self_referential(env):
    echo = KeyEcho(env.key_ready, env.read_key, env.out.append, env.clock)
    assert echo.get_key_table[4] is echo.get_key_table
    assert echo.display_key_table[1] == 6000
    assert echo.get_key_table[1] == 3000