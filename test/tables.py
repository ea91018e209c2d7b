"""
Multiplication-table program tests (argosy.__main__).

Scope
- Validate run(): rows for the default and explicit ranges, help handling.
- Validate main(): exit statuses and where output goes.

Conventions
- Test method names follow CamelCase per project convention.
- stdout/stderr are captured with contextlib redirections.
"""

from __future__ import annotations

import io
import unittest
from contextlib import redirect_stdout, redirect_stderr
from unittest import TestCase

from argosy import ParseExit, NoArgumentOfRequiredTypeError
from argosy.__main__ import run, main


class TestRun(TestCase):
    """Behavioral tests for run()."""

    def testDefaultRange(self):
        self.assertEqual(run(["4"]), [str(4 * i) for i in range(1, 11)])

    def testShowTable(self):
        self.assertEqual(
            run(["-t", "-s=3", "-e=5", "7"]),
            ["7 X 3 = 21", "7 X 4 = 28", "7 X 5 = 35"],
        )

    def testLongForms(self):
        self.assertEqual(run(["--end-at=2", "-t", "3"]), ["3 X 1 = 3", "3 X 2 = 6"])

    def testHelp(self):
        self.assertIsNone(run(["--help", "5"]))

    def testEmptyRange(self):
        self.assertEqual(run(["-s=5", "-e=4", "2"]), [])

    def testBadValue(self):
        with self.assertRaises(ParseExit):
            run(["-s=one", "2"])

    def testNoNumber(self):
        with self.assertRaises(NoArgumentOfRequiredTypeError):
            run(["two"])


class TestMain(TestCase):
    """Behavioral tests for main()."""

    def call(self, *arguments):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            status = main(list(arguments))
        return status, stdout.getvalue(), stderr.getvalue()

    def testTable(self):
        status, stdout, stderr = self.call("-t", "-e=2", "9")
        self.assertEqual(status, 0)
        self.assertEqual(stdout.splitlines(), ["9 X 1 = 9", "9 X 2 = 18"])
        self.assertEqual(stderr, "")

    def testHelp(self):
        status, stdout, stderr = self.call("--help")
        self.assertEqual(status, 0)
        self.assertIn("--show-table", stdout)
        self.assertEqual(stderr, "")

    def testMissingNumber(self):
        status, stdout, stderr = self.call()
        self.assertEqual(status, 1)
        self.assertIn("multiplication table", stderr)
        self.assertIn("--show-table", stderr)
        self.assertEqual(stdout, "")

    def testUnknownFlag(self):
        status, stdout, stderr = self.call("-x", "3")
        self.assertEqual(status, 1)
        self.assertIn("20201", stderr)
        self.assertEqual(stdout, "")


if __name__ == "__main__":
    unittest.main()
