# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Fluent builder for Data API search constraints.

Constraints are sent to the list endpoint as a JSON array in the
``constraints`` query parameter. Each element is either a field filter
(:class:`FieldConstraint`) or a sort directive (:class:`SortConstraint`);
order is preserved and significant.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union


class ConstraintType(str, Enum):
    """Constraint names documented for the Data API.

    Provided for discoverability only: :class:`ConstraintsBuilder` accepts any
    string, and the server decides which names are legal.
    """

    EQUALS = "equals"
    NOT_EQUAL = "not equal"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"
    TEXT_CONTAINS = "text contains"
    NOT_TEXT_CONTAINS = "not text contains"
    GREATER_THAN = "greater than"
    LESS_THAN = "less than"
    IN = "in"
    NOT_IN = "not in"
    CONTAINS = "contains"
    NOT_CONTAINS = "not contains"
    EMPTY = "empty"
    NOT_EMPTY = "not empty"
    GEOGRAPHIC_SEARCH = "geographic_search"


@dataclass(frozen=True)
class FieldConstraint:
    """
    Filter on a single field.

    :param key: Field name the constraint applies to (``_id`` for the record id).
    :type key: str
    :param constraint_type: Constraint name, e.g. ``"equals"`` or ``"greater than"``.
    :type constraint_type: str
    :param value: Value compared against the field. Must be JSON-serializable.
    """

    key: str
    constraint_type: str
    value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "constraint_type": self.constraint_type,
            "value": self.value,
        }


@dataclass(frozen=True)
class SortConstraint:
    """
    Sort directive.

    The wire form encodes ``descending`` as the string ``"true"`` or ``"false"``.

    :param sort_field: Field to sort by.
    :type sort_field: str
    :param descending: Sort in descending order.
    :type descending: bool
    """

    sort_field: str
    descending: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sort_field": self.sort_field,
            "descending": "true" if self.descending else "false",
        }


Constraint = Union[FieldConstraint, SortConstraint]


def to_wire(constraints: Iterable[Union[Constraint, Mapping[str, Any]]]) -> List[Dict[str, Any]]:
    """
    Convert constraints to their JSON wire mappings, preserving order.

    Raw mappings are passed through unchanged.

    :raises TypeError: If an element is neither a constraint nor a mapping.
    """
    out: List[Dict[str, Any]] = []
    for c in constraints or ():
        if isinstance(c, (FieldConstraint, SortConstraint)):
            out.append(c.to_dict())
        elif isinstance(c, Mapping):
            out.append(dict(c))
        else:
            raise TypeError(f"constraints must contain FieldConstraint, SortConstraint or dict, got {type(c).__name__}")
    return out


class ConstraintsBuilder:
    """
    Fluent interface for building a constraint list.

    Example:
        Filter and sort articles::

            constraints = (ConstraintsBuilder()
                           .add_constraint("unitname", "equals", "Unit A")
                           .add_constraint("unitnumber", ConstraintType.GREATER_THAN, 3)
                           .add_sort_constraint("Created Date", descending=True)
                           .build())
            page = client.list_things("rentalunit", constraints)
    """

    def __init__(self) -> None:
        self._constraints: List[Constraint] = []

    def add_constraint(
        self,
        key: str,
        constraint_type: Union[str, ConstraintType],
        value: Any = None,
    ) -> "ConstraintsBuilder":
        """
        Append a field constraint.

        ``constraint_type`` is not validated against :class:`ConstraintType`.

        :param key: Field name on which the constraint is applied.
        :type key: str
        :param constraint_type: Constraint name (e.g. ``"equals"``, ``"greater than"``).
        :type constraint_type: str or ConstraintType
        :param value: Value to compare against the field's value.
        :return: Self for method chaining.
        :rtype: ConstraintsBuilder
        """
        if isinstance(constraint_type, ConstraintType):
            constraint_type = constraint_type.value
        self._constraints.append(FieldConstraint(key, constraint_type, value))
        return self

    def add_sort_constraint(self, sort_field: str, descending: bool = False) -> "ConstraintsBuilder":
        """
        Append a sort directive.

        :param sort_field: Field to sort by.
        :type sort_field: str
        :param descending: Sort in descending order.
        :type descending: bool
        :return: Self for method chaining.
        :rtype: ConstraintsBuilder
        """
        self._constraints.append(SortConstraint(sort_field, bool(descending)))
        return self

    def build(self) -> Tuple[Constraint, ...]:
        """
        Return the accumulated constraints in call order.

        The builder is not reset; the returned tuple is a snapshot and is not
        affected by later ``add_*`` calls.

        :rtype: tuple
        """
        return tuple(self._constraints)

    def __len__(self) -> int:
        return len(self._constraints)


__all__ = [
    "Constraint",
    "ConstraintType",
    "ConstraintsBuilder",
    "FieldConstraint",
    "SortConstraint",
    "to_wire",
]
