from __future__ import annotations

import unittest
from decimal import Decimal

from mini_dbal.core.errors import InvalidDataType, InvalidNamedParameter, ParameterKeyCollision
from mini_dbal.core.params import (
    BindKind,
    BoundParam,
    bind_params,
    driver_params,
    infer_kind,
    merge_params,
    normalize_key,
    normalize_params,
)


class KeyNormalizationTests(unittest.TestCase):
    def test_leading_markers_are_stripped(self) -> None:
        self.assertEqual(normalize_key("id"), "id")
        self.assertEqual(normalize_key(":id"), "id")
        self.assertEqual(normalize_key("::id"), "id")

    def test_non_string_or_empty_key_is_rejected(self) -> None:
        for key in (0, None, ":", ""):
            with self.subTest(key=key):
                with self.assertRaises(InvalidNamedParameter):
                    normalize_key(key)

    def test_same_name_twice_in_one_mapping_collides(self) -> None:
        with self.assertRaises(ParameterKeyCollision) as ctx:
            normalize_params({"id": 1, ":id": 2})
        self.assertEqual(ctx.exception.key, "id")

    def test_positional_parameters_are_rejected(self) -> None:
        with self.assertRaises(InvalidNamedParameter) as ctx:
            normalize_params([1])  # type: ignore[arg-type]
        self.assertIn("Given data must have named parameters", str(ctx.exception))

    def test_none_means_no_parameters(self) -> None:
        self.assertEqual(normalize_params(None), {})
        self.assertEqual(bind_params(None), [])


class BindKindInferenceTests(unittest.TestCase):
    def test_supported_types(self) -> None:
        self.assertIs(infer_kind("a", 1), BindKind.INTEGER)
        self.assertIs(infer_kind("a", True), BindKind.BOOLEAN)
        self.assertIs(infer_kind("a", False), BindKind.BOOLEAN)
        self.assertIs(infer_kind("a", None), BindKind.NULL)
        self.assertIs(infer_kind("a", "text"), BindKind.STRING)
        self.assertIs(infer_kind("a", ""), BindKind.STRING)

    def test_unsupported_types_name_key_and_type(self) -> None:
        cases = [
            (1.5, "float"),
            (b"x", "bytes"),
            ([1], "list"),
            ({"a": 1}, "dict"),
            (Decimal("1.0"), "Decimal"),
        ]
        for value, type_name in cases:
            with self.subTest(value=value):
                with self.assertRaises(InvalidDataType) as ctx:
                    infer_kind("price", value)
                self.assertEqual(ctx.exception.key, "price")
                self.assertEqual(ctx.exception.type_name, type_name)
                self.assertIn("'price'", str(ctx.exception))

    def test_invalid_data_type_is_a_type_error(self) -> None:
        with self.assertRaises(TypeError):
            BoundParam.of("x", 0.1)

    def test_bound_param_normalizes_and_tags(self) -> None:
        param = BoundParam.of(":title", "Hello")
        self.assertEqual(param.name, "title")
        self.assertEqual(param.value, "Hello")
        self.assertIs(param.kind, BindKind.STRING)
        self.assertEqual(param.placeholder, ":title")

    def test_bind_params_and_driver_params(self) -> None:
        bound = bind_params({":id": 1, "flag": True, "note": None, "name": "a"})
        self.assertEqual(
            [(p.name, p.kind) for p in bound],
            [
                ("id", BindKind.INTEGER),
                ("flag", BindKind.BOOLEAN),
                ("note", BindKind.NULL),
                ("name", BindKind.STRING),
            ],
        )
        self.assertEqual(
            driver_params(bound), {"id": 1, "flag": True, "note": None, "name": "a"}
        )

    def test_bind_params_reports_offending_key(self) -> None:
        with self.assertRaises(InvalidDataType) as ctx:
            bind_params({"id": 1, ":ratio": 0.5})
        self.assertEqual(ctx.exception.key, "ratio")


class MergeParamsTests(unittest.TestCase):
    def test_disjoint_sets_are_merged(self) -> None:
        self.assertEqual(
            merge_params({"title": "X"}, {":id": 2}),
            {"title": "X", "id": 2},
        )

    def test_collision_is_detected_for_every_marker_form(self) -> None:
        for data_key, param_key in (
            ("id", "id"),
            ("id", ":id"),
            (":id", "id"),
            (":id", ":id"),
        ):
            with self.subTest(data_key=data_key, param_key=param_key):
                with self.assertRaises(ParameterKeyCollision) as ctx:
                    merge_params({data_key: 1, "title": "X"}, {param_key: 2})
                self.assertEqual(ctx.exception.key, "id")

    def test_collision_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            merge_params({"a": 1}, {"a": 2})


if __name__ == "__main__":
    unittest.main()
