# Copyright 2026 ModelSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""The schema tree produced by the compiler."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from modelschema.model.modifiers import PlanModifier
from modelschema.model.types import NestingMode, ValueType
from modelschema.model.validators import Validator

# ###############
# Public Interface
# ###############


class Attribute(BaseModel):
    """A schema leaf holding a scalar, map, or collection value.

    ``computed`` is independent of ``required`` and ``optional`` and may be
    combined with either.
    """

    model_config = ConfigDict(frozen=True)

    value_type: ValueType
    required: bool = False
    optional: bool = False
    computed: bool = False
    sensitive: bool = False
    description: str | None = None
    markdown_description: str | None = None
    deprecation_message: str | None = None
    validators: tuple[Validator, ...] = ()
    plan_modifiers: tuple[PlanModifier, ...] = ()


class Block(BaseModel):
    """A nested sub-structure holding attributes and further blocks.

    Empty attribute or block mappings are represented as None. Non-empty
    ones are read-only views.
    """

    model_config = ConfigDict(frozen=True)

    nesting_mode: NestingMode = NestingMode.LIST
    attributes: Mapping[str, Attribute] | None = None
    blocks: Mapping[str, Block] | None = None
    validators: tuple[Validator, ...] = ()
    plan_modifiers: tuple[PlanModifier, ...] = ()
    description: str | None = None
    markdown_description: str | None = None
    deprecation_message: str | None = None

    @field_validator("attributes", "blocks")
    @classmethod
    def freeze_members(cls, value: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
        return _read_only(value)


class Schema(BaseModel):
    """Root of a compiled schema tree.

    A wire name appears in at most one of ``attributes`` and ``blocks``.
    Empty mappings are represented as None. Non-empty ones are read-only
    views.
    """

    model_config = ConfigDict(frozen=True)

    description: str | None = None
    markdown_description: str | None = None
    version: int = 0
    deprecation_message: str | None = None
    attributes: Mapping[str, Attribute] | None = None
    blocks: Mapping[str, Block] | None = None

    @field_validator("attributes", "blocks")
    @classmethod
    def freeze_members(cls, value: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
        return _read_only(value)


# Resolve forward references in self-referential models.
Block.model_rebuild()


# ################
# Implementation
# ################


def _read_only(value: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    """Return a read-only copy of *value*, keeping insertion order."""
    if value is None:
        return None
    return MappingProxyType(dict(value))
