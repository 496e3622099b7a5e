# Copyright 2026 ModelSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Value types of schema attributes."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class ScalarKind(Enum):
    """Scalar value kinds an attribute or collection element may hold."""

    BOOL = "Bool"
    FLOAT64 = "Float64"
    INT64 = "Int64"
    NUMBER = "Number"
    STRING = "String"


class CollectionKind(Enum):
    """Container kind of a collection attribute or of a size validator."""

    LIST = "list"
    SET = "set"


class NestingMode(Enum):
    """How the occurrences of a block are nested."""

    LIST = "list"
    SET = "set"


# Python type of a parsed literal, per scalar kind.
ScalarValue = bool | int | float | Decimal | str


class ScalarType(BaseModel):
    """A single scalar value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["scalar"] = "scalar"
    scalar: ScalarKind


class MapType(BaseModel):
    """A mapping of string keys to scalar values."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["map"] = "map"
    element: ScalarKind


class ListType(BaseModel):
    """An ordered sequence of scalar values."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["list"] = "list"
    element: ScalarKind


class SetType(BaseModel):
    """An unordered, deduplicated collection of scalar values."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["set"] = "set"
    element: ScalarKind


ValueType = Annotated[
    ScalarType | MapType | ListType | SetType,
    _Field(discriminator="kind"),
]


def collection_kind(value_type: ValueType) -> CollectionKind | None:
    """Return the collection kind of *value_type*, or None for scalars and maps."""
    if isinstance(value_type, ListType):
        return CollectionKind.LIST
    if isinstance(value_type, SetType):
        return CollectionKind.SET
    return None
