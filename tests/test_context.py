from __future__ import annotations

import unittest

from ghmustache import ObjectValue, ScopeStack, ScopeStackError, StringValue, TRUE, Value


class ScopeStackTests(unittest.TestCase):
    def test_resolves_innermost_first(self) -> None:
        outer = Value.from_python({"n": "outer", "only_outer": "o"})
        inner = Value.from_python({"n": "inner"})
        stack = ScopeStack(outer)
        stack.push(inner)
        self.assertEqual(stack.resolve("n"), StringValue("inner"))
        self.assertEqual(stack.resolve("only_outer"), StringValue("o"))
        self.assertIsNone(stack.resolve("missing"))

    def test_non_object_frames_are_skipped(self) -> None:
        stack = ScopeStack(Value.from_python({"n": "root"}))
        stack.push(StringValue("n"))
        stack.push(TRUE)
        self.assertEqual(stack.resolve("n"), StringValue("root"))

    def test_frames_are_borrowed_not_copied(self) -> None:
        frame = ObjectValue()
        stack = ScopeStack(frame)
        frame.set("late", StringValue("x"))
        self.assertEqual(stack.resolve("late"), StringValue("x"))

    def test_pushed_pops_on_error(self) -> None:
        stack = ScopeStack(ObjectValue())
        with self.assertRaises(RuntimeError):
            with stack.pushed(Value.from_python({"a": "1"})):
                self.assertEqual(stack.depth, 2)
                raise RuntimeError("boom")
        self.assertEqual(stack.depth, 1)
        self.assertIsNone(stack.resolve("a"))

    def test_pop_empty_raises(self) -> None:
        stack = ScopeStack()
        self.assertEqual(stack.depth, 0)
        with self.assertRaises(ScopeStackError):
            stack.pop()


if __name__ == "__main__":
    unittest.main()
