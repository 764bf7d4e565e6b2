from __future__ import annotations

import unittest
from collections import OrderedDict

from ghmustache import (
    FALSE,
    TRUE,
    BoolValue,
    ListValue,
    ObjectValue,
    StringValue,
    Value,
    ValueConversionError,
    ValueType,
    is_truthy,
)


class ValueTypeTests(unittest.TestCase):
    def test_each_variant_reports_its_type(self) -> None:
        self.assertIs(ObjectValue().type, ValueType.OBJECT)
        self.assertIs(StringValue("x").type, ValueType.STRING)
        self.assertIs(ListValue().type, ValueType.LIST)
        self.assertIs(TRUE.type, ValueType.TRUE)
        self.assertIs(FALSE.type, ValueType.FALSE)

    def test_predicates(self) -> None:
        self.assertTrue(ObjectValue().is_object())
        self.assertTrue(StringValue("").is_string())
        self.assertTrue(ListValue().is_list())
        self.assertTrue(ListValue().is_empty_list())
        self.assertFalse(ListValue().is_non_empty_list())
        self.assertTrue(ListValue([TRUE]).is_non_empty_list())
        self.assertTrue(TRUE.is_bool() and TRUE.is_true())
        self.assertTrue(FALSE.is_bool() and FALSE.is_false())
        self.assertFalse(StringValue("x").is_empty_list())

    def test_get_only_answers_for_objects(self) -> None:
        obj = ObjectValue({"n": StringValue("Ann")})
        self.assertEqual(obj.get("n"), StringValue("Ann"))
        self.assertIsNone(obj.get("missing"))
        self.assertIsNone(StringValue("n").get("n"))
        self.assertIsNone(ListValue([obj]).get("n"))
        self.assertIsNone(TRUE.get("n"))


class ObjectValueTests(unittest.TestCase):
    def test_first_insertion_wins(self) -> None:
        obj = ObjectValue()
        obj.set("k", StringValue("first"))
        obj.set("k", StringValue("second"))
        self.assertEqual(obj.get("k"), StringValue("first"))
        self.assertEqual(len(obj), 1)
        self.assertIn("k", obj)

    def test_copy_is_deep(self) -> None:
        inner = ListValue([StringValue("a")])
        obj = ObjectValue({"items": inner})
        dup = obj.copy()
        self.assertEqual(dup, obj)
        inner.append(StringValue("b"))
        self.assertEqual(len(dup.get("items")), 1)
        self.assertIsNot(dup.get("items"), inner)


class ListValueTests(unittest.TestCase):
    def test_sequence_access(self) -> None:
        lst = ListValue()
        lst.append(StringValue("a"))
        lst.append(TRUE)
        self.assertEqual(len(lst), 2)
        self.assertEqual(lst[0], StringValue("a"))
        self.assertIs(lst[-1], TRUE)
        self.assertEqual(list(lst), [StringValue("a"), TRUE])
        with self.assertRaises(IndexError):
            lst[2]


class ConversionTests(unittest.TestCase):
    def test_from_python_maps_types(self) -> None:
        val = Value.from_python(
            {"s": "x", "t": True, "f": False, "n": None, "i": 3, "x": 1.5, "l": ["a", {"b": "c"}]}
        )
        self.assertIsInstance(val, ObjectValue)
        self.assertEqual(val.get("s"), StringValue("x"))
        self.assertIs(val.get("t"), TRUE)
        self.assertIs(val.get("f"), FALSE)
        self.assertIs(val.get("n"), FALSE)
        self.assertEqual(val.get("i"), StringValue("3"))
        self.assertEqual(val.get("x"), StringValue("1.5"))
        lst = val.get("l")
        self.assertIsInstance(lst, ListValue)
        self.assertEqual(lst[0], StringValue("a"))
        self.assertEqual(lst[1].get("b"), StringValue("c"))

    def test_tuples_and_generators_become_lists(self) -> None:
        self.assertEqual(Value.from_python(("a", "b")).to_python(), ["a", "b"])
        self.assertEqual(Value.from_python(s for s in "xy").to_python(), ["x", "y"])

    def test_values_pass_through(self) -> None:
        obj = ObjectValue()
        self.assertIs(Value.from_python(obj), obj)

    def test_to_python_round_trips_plain_data(self) -> None:
        data = {"a": ["x", True, {"b": False}]}
        self.assertEqual(Value.from_python(data).to_python(), data)

    def test_mapping_order_is_kept(self) -> None:
        val = Value.from_python(OrderedDict([("z", "1"), ("a", "2")]))
        self.assertEqual(list(val.fields), ["z", "a"])

    def test_unsupported_objects_raise(self) -> None:
        with self.assertRaises(ValueConversionError) as cm:
            Value.from_python({"blob": b"raw"})
        self.assertIn("$.blob", str(cm.exception))
        with self.assertRaises(ValueConversionError):
            Value.from_python(object())


class TruthinessTests(unittest.TestCase):
    def test_truthy_values(self) -> None:
        self.assertTrue(is_truthy(ObjectValue()))
        self.assertTrue(is_truthy(ListValue([FALSE])))
        self.assertTrue(is_truthy(TRUE))
        self.assertTrue(is_truthy(StringValue("")))

    def test_falsy_values(self) -> None:
        self.assertFalse(is_truthy(None))
        self.assertFalse(is_truthy(FALSE))
        self.assertFalse(is_truthy(BoolValue(False)))
        self.assertFalse(is_truthy(ListValue()))


if __name__ == "__main__":
    unittest.main()
