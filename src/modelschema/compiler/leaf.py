# Copyright 2026 ModelSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Classification of field types into attribute value types.

Scalars, string-keyed maps of scalars and lists of scalars are leaves and
become attributes. Records and lists of records are not leaves; the walker
descends into them to build blocks.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, get_args, get_origin

from modelschema.compiler.errors import SchemaDefinitionError
from modelschema.model.schema import Attribute
from modelschema.model.types import ListType, MapType, ScalarKind, ScalarType, SetType
from modelschema.parser.tags import tag_value
from modelschema.vocabulary import COLLECTION_SET, TAG_COLLECTION

# ###############
# Public Interface
# ###############


def scalar_kind(annotation: Any) -> ScalarKind | None:
    """Return the scalar kind of a Python type, or None if it is not a scalar."""
    if not isinstance(annotation, type):
        return None
    return _SCALAR_KINDS.get(annotation)


def resolve_leaf(annotation: Any, tags: str, path: str = "") -> Attribute | None:
    """Return an attribute carrying only the value type of a leaf field.

    Args:
        annotation: The field's type with any ``Annotated`` wrapper removed.
        tags: The field's tag string; ``collection:"set"`` turns a list into a set.
        path: Dotted field path used in error messages.

    Returns:
        An :class:`Attribute` with ``value_type`` set, or None if the type is
        not a leaf (a record, a list of records, or an unsupported type the
        walker reports).

    Raises:
        SchemaDefinitionError: For maps with a non-``str`` key or a non-scalar value.
    """
    kind = scalar_kind(annotation)
    if kind is not None:
        return Attribute(value_type=ScalarType(scalar=kind))

    origin = get_origin(annotation)

    if origin is dict:
        args = get_args(annotation)
        if len(args) != 2 or args[0] is not str:
            raise SchemaDefinitionError(f"only maps with string keys are supported, got {annotation!r}", path)
        element = scalar_kind(args[1])
        if element is None:
            raise SchemaDefinitionError(f"map values must be scalars, got {args[1]!r}", path)
        return Attribute(value_type=MapType(element=element))

    if origin is list:
        args = get_args(annotation)
        element = scalar_kind(args[0]) if args else None
        if element is None:
            return None
        if tag_value(TAG_COLLECTION, tags) == COLLECTION_SET:
            return Attribute(value_type=SetType(element=element))
        return Attribute(value_type=ListType(element=element))

    return None


# ################
# Implementation
# ################

# Keyed by exact type: bool must not be taken for int.
_SCALAR_KINDS: dict[type, ScalarKind] = {
    bool: ScalarKind.BOOL,
    float: ScalarKind.FLOAT64,
    int: ScalarKind.INT64,
    Decimal: ScalarKind.NUMBER,
    str: ScalarKind.STRING,
}
