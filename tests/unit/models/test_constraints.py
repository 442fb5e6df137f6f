# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for ConstraintsBuilder and constraint wire encoding."""

import dataclasses
import unittest

from bubble_data.models.constraints import (
    ConstraintType,
    ConstraintsBuilder,
    FieldConstraint,
    SortConstraint,
    to_wire,
)


class TestConstraintsBuilder(unittest.TestCase):
    """Test cases for the ConstraintsBuilder class."""

    def test_empty_build(self):
        self.assertEqual(ConstraintsBuilder().build(), ())

    def test_add_constraint_returns_self(self):
        builder = ConstraintsBuilder()
        self.assertIs(builder.add_constraint("title", "equals", "A"), builder)
        self.assertIs(builder.add_sort_constraint("title"), builder)

    def test_preserves_call_order_and_values(self):
        """Mixed field and sort constraints come back in call order, values unchanged."""
        value = {"nested": [1, 2, 3]}
        constraints = (
            ConstraintsBuilder()
            .add_constraint("unitname", "equals", "Unit A")
            .add_sort_constraint("Created Date", descending=True)
            .add_constraint("unitnumber", "greater than", 3)
            .add_constraint("tags", "contains", value)
            .build()
        )
        self.assertEqual(
            constraints,
            (
                FieldConstraint("unitname", "equals", "Unit A"),
                SortConstraint("Created Date", True),
                FieldConstraint("unitnumber", "greater than", 3),
                FieldConstraint("tags", "contains", value),
            ),
        )
        self.assertIs(constraints[3].value, value)

    def test_duplicate_keys_allowed(self):
        constraints = (
            ConstraintsBuilder()
            .add_constraint("title", "equals", "A")
            .add_constraint("title", "equals", "B")
            .build()
        )
        self.assertEqual([c.value for c in constraints], ["A", "B"])

    def test_constraint_type_enum_stored_as_string(self):
        (c,) = ConstraintsBuilder().add_constraint("n", ConstraintType.GREATER_THAN, 3).build()
        self.assertEqual(c.constraint_type, "greater than")
        self.assertEqual(c.to_dict()["constraint_type"], "greater than")

    def test_unknown_constraint_type_not_validated(self):
        (c,) = ConstraintsBuilder().add_constraint("n", "made up", 1).build()
        self.assertEqual(c.constraint_type, "made up")

    def test_build_does_not_reset(self):
        builder = ConstraintsBuilder().add_constraint("a", "equals", 1)
        self.assertEqual(builder.build(), builder.build())
        self.assertEqual(len(builder), 1)

    def test_build_snapshot_isolated_from_later_adds(self):
        builder = ConstraintsBuilder().add_constraint("a", "equals", 1)
        snapshot = builder.build()
        builder.add_constraint("b", "equals", 2)
        self.assertEqual(len(snapshot), 1)
        self.assertEqual(len(builder.build()), 2)

    def test_constraints_are_frozen(self):
        (c,) = ConstraintsBuilder().add_constraint("a", "equals", 1).build()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            c.key = "b"


class TestWireEncoding(unittest.TestCase):
    """Test cases for constraint wire mappings."""

    def test_field_constraint_wire_names(self):
        self.assertEqual(
            FieldConstraint("_id", "equals", "1695x1").to_dict(),
            {"key": "_id", "constraint_type": "equals", "value": "1695x1"},
        )

    def test_sort_descending_is_string(self):
        self.assertEqual(SortConstraint("title", True).to_dict(), {"sort_field": "title", "descending": "true"})
        self.assertEqual(SortConstraint("title").to_dict(), {"sort_field": "title", "descending": "false"})

    def test_sort_descending_truthy_normalized(self):
        (c,) = ConstraintsBuilder().add_sort_constraint("title", 1).build()
        self.assertIs(c.descending, True)

    def test_to_wire_mixed_with_raw_dicts(self):
        raw = {"key": "title", "constraint_type": "is_not_empty"}
        wire = to_wire([SortConstraint("title"), raw])
        self.assertEqual(wire, [{"sort_field": "title", "descending": "false"}, raw])
        self.assertIsNot(wire[1], raw)

    def test_to_wire_empty(self):
        self.assertEqual(to_wire(()), [])
        self.assertEqual(to_wire(None), [])

    def test_to_wire_rejects_other_types(self):
        with self.assertRaises(TypeError):
            to_wire(["title equals A"])


if __name__ == "__main__":
    unittest.main()
