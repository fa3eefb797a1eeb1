"""Circular doubly linked list built from intrusive nodes.

Every list has a head node that carries no owner and is not itself an
element.  Elements are nodes whose ``owner`` is the object they belong to.
The list can serve as a FIFO queue, a LIFO stack or a ring buffer.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


class Node:
    """A link in a circular doubly linked list, or the head of one."""

    __slots__ = ("owner", "next", "prev")

    def __init__(self, owner: Any = None) -> None:
        self.owner = owner
        self.next: Node = self
        self.prev: Node = self

    def reset(self) -> None:
        """Make this node a list of its own, linked only to itself."""
        self.next = self
        self.prev = self

    def is_empty(self) -> bool:
        """True when no other node is linked to this one."""
        return self.next is self

    def _link_between(self, prev: Node, following: Node) -> None:
        following.prev = self
        self.next = following
        self.prev = prev
        prev.next = self

    def insert_head(self, head: Node) -> None:
        """Insert this node right after ``head``; suits LIFO stacks."""
        self._link_between(head, head.next)

    def insert_tail(self, head: Node) -> None:
        """Insert this node right before ``head``; suits FIFO queues."""
        self._link_between(head.prev, head)

    def unlink(self) -> None:
        """Remove this node from its list and leave it linked to itself."""
        self.prev.next = self.next
        self.next.prev = self.prev
        self.reset()

    def swap(self, newfirst: Node) -> None:
        """Move ``newfirst`` so that it sits immediately before this node."""
        if self is not newfirst:
            newfirst.unlink()
            newfirst.insert_tail(self)

    def __iter__(self) -> Iterator[Node]:
        """Yield the nodes after this head, front to back.

        The node just yielded may be unlinked without disturbing the walk.
        """
        node = self.next
        while node is not self:
            following = node.next
            yield node
            node = following

    def __reversed__(self) -> Iterator[Node]:
        """Yield the nodes before this head, back to front.

        The node just yielded may be unlinked without disturbing the walk.
        """
        node = self.prev
        while node is not self:
            preceding = node.prev
            yield node
            node = preceding

    def owners(self) -> Iterator[Any]:
        """Yield the owners of the nodes in the list, front to back."""
        for node in self:
            yield node.owner