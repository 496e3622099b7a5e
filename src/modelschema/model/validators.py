# Copyright 2026 ModelSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Validator descriptors attached to attributes and blocks.

The compiler only constructs these descriptors; applying them to
configuration values is left to the consuming framework.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from modelschema.model.types import CollectionKind, ScalarKind

# ###############
# Public Interface
# ###############

Numeric = int | float | Decimal


class SizeBetween(BaseModel):
    """The collection or block must hold between *minimum* and *maximum* elements."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["size_between"] = "size_between"
    collection: CollectionKind
    minimum: int
    maximum: int

    def description(self) -> str:
        return f"{self.collection.value} must contain at least {self.minimum} elements and at most {self.maximum} elements"

    def markdown_description(self) -> str:
        return self.description()


class SizeAtLeast(BaseModel):
    """The collection or block must hold at least *minimum* elements."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["size_at_least"] = "size_at_least"
    collection: CollectionKind
    minimum: int

    def description(self) -> str:
        return f"{self.collection.value} must contain at least {self.minimum} elements"

    def markdown_description(self) -> str:
        return self.description()


class LengthBetween(BaseModel):
    """The string length must be between *minimum* and *maximum*."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["length_between"] = "length_between"
    minimum: int
    maximum: int

    def description(self) -> str:
        return f"string length must be between {self.minimum} and {self.maximum}"

    def markdown_description(self) -> str:
        return self.description()


class NumericBetween(BaseModel):
    """The number must lie in the closed range [*minimum*, *maximum*]."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["numeric_between"] = "numeric_between"
    scalar: ScalarKind
    minimum: Numeric
    maximum: Numeric

    def description(self) -> str:
        return f"value must be between {self.minimum} and {self.maximum}"

    def markdown_description(self) -> str:
        return f"value must be between `{self.minimum}` and `{self.maximum}`"


class OneOf(BaseModel):
    """The value must equal one of *values*."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["one_of"] = "one_of"
    scalar: ScalarKind
    values: tuple[Numeric | str, ...]

    def description(self) -> str:
        return f"value must be one of: {_quoted(self.values)}"

    def markdown_description(self) -> str:
        return self.description()


class NoneOf(BaseModel):
    """The value must not equal any of *values*."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["none_of"] = "none_of"
    scalar: ScalarKind
    values: tuple[Numeric | str, ...]

    def description(self) -> str:
        return f"value must be none of: {_quoted(self.values)}"

    def markdown_description(self) -> str:
        return self.description()


Validator = Annotated[
    SizeBetween | SizeAtLeast | LengthBetween | NumericBetween | OneOf | NoneOf,
    _Field(discriminator="kind"),
]


# ################
# Implementation
# ################


def _quoted(values: tuple[Numeric | str, ...]) -> str:
    return "[" + " ".join(f'"{v}"' for v in values) + "]"
