"""
Positionals module behavioral tests (the queue of leftover arguments).

Scope
- Validate ordering, front/index pops and size bookkeeping.
- Validate container faults (empty queue, out-of-bounds index).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argosy import PositionalQueue, EmptyListError, ListIndexOutOfBoundsError, FaultCode


class TestPositionalQueue(TestCase):
    """Behavioral tests for PositionalQueue."""

    def setUp(self):
        self.queue = PositionalQueue(["a", "b", "c"])

    def testSizeAndOrder(self):
        self.assertEqual(self.queue.size(), 3)
        self.assertEqual(len(self.queue), 3)
        self.assertEqual(list(self.queue), ["a", "b", "c"])

    def testPopFront(self):
        self.assertEqual(self.queue.pop_front(), "a")
        self.assertEqual(list(self.queue), ["b", "c"])

    def testPopAtKeepsRelativeOrder(self):
        self.assertEqual(self.queue.pop_at(1), "b")
        self.assertEqual(list(self.queue), ["a", "c"])

    def testPeekDoesNotRemove(self):
        self.assertEqual(self.queue.peek_at(2), "c")
        self.assertEqual(self.queue.size(), 3)

    def testPushBackAppends(self):
        self.queue.push_back("d")
        self.assertEqual(self.queue.peek_at(3), "d")

    def testPushBackRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            self.queue.push_back(1)

    def testEmptyPopRaises(self):
        queue = PositionalQueue()
        self.assertFalse(queue)
        with self.assertRaises(EmptyListError) as context:
            queue.pop_front()
        self.assertEqual(context.exception.code, FaultCode.EMPTY_LIST)

    def testOutOfBoundsRaises(self):
        for index in (3, -1):
            with self.subTest(index=index):
                with self.assertRaises(ListIndexOutOfBoundsError) as context:
                    self.queue.pop_at(index)
                self.assertEqual(context.exception.index, index)
                self.assertEqual(context.exception.size, 3)
        with self.assertRaises(ListIndexOutOfBoundsError):
            self.queue.peek_at(5)
        self.assertEqual(self.queue.size(), 3)

    def testIterationIsASnapshot(self):
        for item in self.queue:
            self.queue.pop_front()
        self.assertEqual(self.queue.size(), 0)

    def testRepr(self):
        self.assertEqual(repr(self.queue), "positional-queue(['a', 'b', 'c'])")


if __name__ == "__main__":
    unittest.main()
