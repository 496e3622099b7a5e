# Copyright 2026 ModelSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema tree model: attributes, blocks, value types, validators and plan modifiers."""

from modelschema.model.modifiers import DefaultValue, PlanModifier, RequiresReplace, UseStateForUnknown
from modelschema.model.schema import Attribute, Block, Schema
from modelschema.model.types import (
    CollectionKind,
    ListType,
    MapType,
    NestingMode,
    ScalarKind,
    ScalarType,
    ScalarValue,
    SetType,
    ValueType,
    collection_kind,
)
from modelschema.model.validators import (
    LengthBetween,
    NoneOf,
    NumericBetween,
    OneOf,
    SizeAtLeast,
    SizeBetween,
    Validator,
)

__all__ = [
    # Value types
    "ScalarKind",
    "CollectionKind",
    "NestingMode",
    "ScalarValue",
    "ScalarType",
    "MapType",
    "ListType",
    "SetType",
    "ValueType",
    "collection_kind",
    # Validators
    "SizeBetween",
    "SizeAtLeast",
    "LengthBetween",
    "NumericBetween",
    "OneOf",
    "NoneOf",
    "Validator",
    # Plan modifiers
    "RequiresReplace",
    "UseStateForUnknown",
    "DefaultValue",
    "PlanModifier",
    # Schema tree
    "Attribute",
    "Block",
    "Schema",
]
