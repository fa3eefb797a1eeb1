"""Table-driven run-to-completion state machines, a millisecond tick clock,
a circular doubly linked list, and a key-echo example program."""

__version__ = "1.0.0"
__all__ = ["cdll", "clock", "states", "example"]