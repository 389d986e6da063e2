import unittest

from downtime_detector.checks.json_path import is_truthy, lookup, resolve_path, stringify


class ResolvePathTests(unittest.TestCase):
    def setUp(self) -> None:
        self.doc = {
            "status": {"isOperational": True, "indicator": "none", "count": 0},
            "components": [{"name": "api", "state": "operational"}],
            "maintenance": None,
        }

    def test_nested_keys(self) -> None:
        self.assertIs(resolve_path(self.doc, "status.isOperational"), True)
        self.assertEqual(resolve_path(self.doc, "status.indicator"), "none")

    def test_empty_path_returns_root(self) -> None:
        self.assertIs(resolve_path(self.doc, ""), self.doc)
        self.assertIs(resolve_path(self.doc, None), self.doc)

    def test_missing_key_degrades_to_empty_object(self) -> None:
        self.assertEqual(resolve_path(self.doc, "status.missingField"), {})
        self.assertEqual(resolve_path(self.doc, "nope.deeper.still"), {})

    def test_stepping_into_scalar_degrades(self) -> None:
        self.assertEqual(resolve_path(self.doc, "status.indicator.length"), {})

    def test_array_index_segments(self) -> None:
        self.assertEqual(resolve_path(self.doc, "components.0.state"), "operational")
        self.assertEqual(resolve_path(self.doc, "components.5.state"), {})
        self.assertEqual(resolve_path(self.doc, "components.first"), {})

    def test_present_falsy_values_are_kept(self) -> None:
        self.assertEqual(resolve_path(self.doc, "status.count"), 0)
        self.assertIsNone(resolve_path(self.doc, "maintenance"))

    def test_lookup_is_total(self) -> None:
        self.assertIsNone(lookup("text", "x"))
        self.assertIsNone(lookup(3, "0"))
        self.assertEqual(lookup([1, 2], "1"), 2)


class StringifyTests(unittest.TestCase):
    def test_scalars(self) -> None:
        cases = [
            (True, "true"),
            (False, "false"),
            (None, "null"),
            (42, "42"),
            (1.0, "1"),
            (2.5, "2.5"),
            ("Operational", "Operational"),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertEqual(stringify(value), expected)

    def test_containers_are_compact_json(self) -> None:
        self.assertEqual(stringify({}), "{}")
        self.assertEqual(stringify({"a": [1, 2]}), '{"a":[1,2]}')


class TruthinessTests(unittest.TestCase):
    def test_truthiness(self) -> None:
        for value in (True, 1, "up", {"a": 1}, [0]):
            with self.subTest(value=value):
                self.assertTrue(is_truthy(value))
        for value in (False, 0, 0.0, "", None, {}, []):
            with self.subTest(value=value):
                self.assertFalse(is_truthy(value))


if __name__ == "__main__":
    unittest.main()
