"""
Argosy positional queue: the ordered leftovers of classification.

Every token that is not recognized as a flag is pushed here in the order it
appeared on the command line. Retrieval only ever shrinks the queue, either from
the front or at an arbitrary index; the relative order of the remaining tokens
is always preserved.

Indices are 0-based and never wrap around: negative indices are out of range.
"""
from collections import deque

from .faults import EmptyListError, ListIndexOutOfBoundsError


class PositionalQueue:
    """
    queue of raw positional tokens backed by a deque.
    """
    __slots__ = ("_items",)

    def __init__(self, items=(), /):
        self._items = deque()
        for item in items:
            self.push_back(item)

    def _check(self, index):
        if not isinstance(index, int):
            raise TypeError("positional queue indices must be integers")
        if not 0 <= index < len(self._items):
            raise ListIndexOutOfBoundsError(
                "index %d is out of bounds for a queue of size %d" % (index, len(self._items)),
                index=index,
                size=len(self._items),
            )

    def size(self):
        return len(self._items)

    def peek_at(self, index, /):
        self._check(index)
        return self._items[index]

    def pop_front(self):
        if not self._items:
            raise EmptyListError("cannot pop from an empty queue", size=0)
        return self._items.popleft()

    def pop_at(self, index, /):
        self._check(index)
        item = self._items[index]
        del self._items[index]
        return item

    def push_back(self, item, /):
        if not isinstance(item, str):
            raise TypeError("positional queue items must be strings")
        self._items.append(item)

    def __len__(self):
        return len(self._items)

    def __bool__(self):
        return bool(self._items)

    def __iter__(self):
        return iter(tuple(self._items))

    def __repr__(self):
        return f"positional-queue({list(self._items)!r})"

    def __rich_repr__(self):
        yield list(self._items)


__all__ = (
    "PositionalQueue",
)
