# Copyright 2026 ModelSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Derivation of flags, validators and plan modifiers from field tags.

Attributes receive requiredness flags, texts, plan modifiers and validators.
Blocks receive their nesting mode, texts, plan modifiers and validators,
including the size limits implied by ``required`` when no explicit
``between`` is given::

    from list  set  required   validator
    no         no   no         list size between 0 and 1
    no         no   yes        list size between 1 and 1
    no         yes  no         set size between 0 and 1
    no         yes  yes        set size between 1 and 1
    yes        no   no         none
    yes        no   yes        list size at least 1
    yes        yes  no         none
    yes        yes  yes        set size at least 1

``required`` wins over ``optional`` when both are given.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any

from modelschema.compiler.errors import SchemaDefinitionError
from modelschema.model.modifiers import DefaultValue, PlanModifier, RequiresReplace, UseStateForUnknown
from modelschema.model.schema import Attribute, Block
from modelschema.model.types import (
    CollectionKind,
    NestingMode,
    ScalarKind,
    ScalarType,
    ScalarValue,
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
from modelschema.parser.tags import has_tag_arg, split_tag_values, tag_args, tag_value
from modelschema.vocabulary import (
    COLLECTION_SET,
    FALSE,
    PLAN_MODIFIER_DEFAULT,
    PLAN_MODIFIER_REPLACE,
    PLAN_MODIFIER_USFU,
    TAG_COLLECTION,
    TAG_COMPUTED,
    TAG_DEPRECATION,
    TAG_DESCRIPTION,
    TAG_MARKDOWN_DESCRIPTION,
    TAG_OPTIONAL,
    TAG_PLAN_MODIFIERS,
    TAG_REQUIRED,
    TAG_SENSITIVE,
    TAG_VALIDATORS,
    TAG_VERSION,
    TRUE,
    VALIDATOR_BETWEEN,
    VALIDATOR_NONE_OF,
    VALIDATOR_ONE_OF,
)

# ###############
# Public Interface
# ###############


def decorate_attribute(attribute: Attribute, tags: str, path: str = "") -> Attribute:
    """Return *attribute* with flags, texts, plan modifiers and validators from *tags*.

    ``computed``, ``optional`` and ``required`` are set independently when
    tagged ``"true"``. If none of the three keys is present the attribute
    defaults to optional.

    Raises:
        SchemaDefinitionError: If a tag literal cannot be parsed for the value type.
    """
    computed = tag_value(TAG_COMPUTED, tags)
    optional = tag_value(TAG_OPTIONAL, tags)
    required = tag_value(TAG_REQUIRED, tags)

    return Attribute(
        value_type=attribute.value_type,
        computed=computed == TRUE,
        optional=optional == TRUE or (computed == "" and optional == "" and required == ""),
        required=required == TRUE,
        sensitive=tag_value(TAG_SENSITIVE, tags) == TRUE,
        **_texts(tags),
        plan_modifiers=plan_modifiers(tag_value(TAG_PLAN_MODIFIERS, tags), attribute.value_type, path),
        validators=validators(tag_value(TAG_VALIDATORS, tags), attribute.value_type, tags, path=path),
    )


def decorate_block(
    attributes: dict[str, Attribute],
    blocks: dict[str, Block],
    tags: str,
    *,
    from_slice: bool,
    path: str = "",
) -> Block:
    """Package child attributes and blocks into a block configured by *tags*.

    Empty child mappings are omitted. Validators are derived even without a
    ``valid`` tag, since block size limits are implied by ``required``.

    Args:
        attributes: Child attributes by wire name.
        blocks: Child blocks by wire name.
        tags: The tag string of the field holding the block.
        from_slice: True if the field is a list of records.
        path: Dotted field path used in error messages.
    """
    return Block(
        nesting_mode=NestingMode.SET if _is_set(tags) else NestingMode.LIST,
        attributes=attributes or None,
        blocks=blocks or None,
        **_texts(tags),
        plan_modifiers=plan_modifiers(tag_value(TAG_PLAN_MODIFIERS, tags), None, path),
        validators=validators(tag_value(TAG_VALIDATORS, tags), None, tags, from_slice=from_slice, path=path),
    )


def schema_options(tags: str, path: str = "") -> dict[str, Any]:
    """Return the schema-level settings held by the schema marker's *tags*.

    Only ``md``, ``desc``, ``version`` and ``deprecation`` are read. The
    result holds keyword arguments for :class:`~modelschema.model.schema.Schema`.

    Raises:
        SchemaDefinitionError: If ``version`` is not a base 10 integer.
    """
    options: dict[str, Any] = dict(_texts(tags))
    if (version := tag_value(TAG_VERSION, tags)) != "":
        try:
            _reject_digit_separators(version)
            options["version"] = int(version, 10)
        except ValueError as exc:
            raise SchemaDefinitionError(f"version must be an int, not {version}: {exc}", path) from exc
    return options


def plan_modifiers(value: str, value_type: ValueType | None, path: str = "") -> tuple[PlanModifier, ...]:
    """Build plan modifiers from the terms of a ``pmods`` tag value.

    One modifier is produced per recognized term, in the order the terms
    are written. Unrecognized terms are ignored, as is ``default`` on
    anything other than a scalar attribute.

    Args:
        value: The ``pmods`` tag value, e.g. ``"replace,default(12)"``.
        value_type: The attribute value type, or None for a block.
        path: Dotted field path used in error messages.

    Raises:
        SchemaDefinitionError: If a default literal cannot be parsed for the value type.
    """
    mods: list[PlanModifier] = []
    for term in split_tag_values(value):
        if has_tag_arg(PLAN_MODIFIER_REPLACE, term):
            mods.append(RequiresReplace())
        elif has_tag_arg(PLAN_MODIFIER_USFU, term):
            mods.append(UseStateForUnknown())
        elif has_tag_arg(PLAN_MODIFIER_DEFAULT, term) and isinstance(value_type, ScalarType):
            literal = tag_args(PLAN_MODIFIER_DEFAULT, term)
            mods.append(DefaultValue(scalar=value_type.scalar, value=_parse_default(literal, value_type.scalar, path)))
    return tuple(mods)


def validators(
    value: str,
    value_type: ValueType | None,
    tags: str,
    *,
    from_slice: bool = False,
    path: str = "",
) -> tuple[Validator, ...]:
    """Build validators from the terms of a ``valid`` tag value.

    Contributions are concatenated in a fixed order: ``between``, the
    implied block size limit (blocks without ``between`` only), ``oneof``
    and ``noneof``.

    Args:
        value: The ``valid`` tag value, e.g. ``"between(3,32),oneof(a,b)"``.
        value_type: The attribute value type, or None for a block.
        tags: The full tag string of the field, read for ``required`` and ``collection``.
        from_slice: True if the block comes from a list of records.
        path: Dotted field path used in error messages.

    Raises:
        SchemaDefinitionError: On a wrong ``between`` arity or a literal that
            cannot be parsed for the value type.
    """
    vals: list[Validator] = []

    has_between = has_tag_arg(VALIDATOR_BETWEEN, value)
    if has_between:
        between = _between_validator(tag_args(VALIDATOR_BETWEEN, value), value_type, tags, path)
        if between is not None:
            vals.append(between)

    if not has_between and value_type is None:
        vals.extend(_implied_block_size(tags, from_slice))

    for name, validator_class in ((VALIDATOR_ONE_OF, OneOf), (VALIDATOR_NONE_OF, NoneOf)):
        if not has_tag_arg(name, value) or not isinstance(value_type, ScalarType):
            continue
        members = _parse_members(name, tag_args(name, value), value_type.scalar, path)
        if members is not None:
            vals.append(validator_class(scalar=value_type.scalar, values=members))

    return tuple(vals)


# ################
# Implementation
# ################


def _texts(tags: str) -> dict[str, str]:
    """Return the description texts present in *tags* as model keyword arguments."""
    texts: dict[str, str] = {}
    if (v := tag_value(TAG_DEPRECATION, tags)) != "":
        texts["deprecation_message"] = v
    if (v := tag_value(TAG_DESCRIPTION, tags)) != "":
        texts["description"] = v
    if (v := tag_value(TAG_MARKDOWN_DESCRIPTION, tags)) != "":
        texts["markdown_description"] = v
    return texts


def _is_set(tags: str) -> bool:
    return tag_value(TAG_COLLECTION, tags) == COLLECTION_SET


def _implied_block_size(tags: str, from_slice: bool) -> list[Validator]:
    """Return the size limit implied by ``required`` for a block without ``between``."""
    minimum = 1 if tag_value(TAG_REQUIRED, tags) == TRUE else 0
    collection = CollectionKind.SET if _is_set(tags) else CollectionKind.LIST

    if not from_slice:
        # A single record nests at most once, even as a set.
        return [SizeBetween(collection=collection, minimum=minimum, maximum=1)]
    if minimum > 0:
        return [SizeAtLeast(collection=collection, minimum=minimum)]
    return []


def _between_validator(args: str, value_type: ValueType | None, tags: str, path: str) -> Validator | None:
    """Build the validator for ``between(min,max)`` matching the target type.

    Blocks and collections get a size range, strings a length range and
    numbers a numeric range. Booleans and maps get no validator.
    """
    parts = args.split(",")
    if len(parts) != 2:
        raise SchemaDefinitionError(f"{VALIDATOR_BETWEEN} requires 2 numeric args, got {len(parts)}", path)
    low, high = (_parse_bound(part, path) for part in parts)

    if value_type is None:
        collection = CollectionKind.SET if _is_set(tags) else CollectionKind.LIST
        return SizeBetween(collection=collection, minimum=int(low), maximum=int(high))

    kind = collection_kind(value_type)
    if kind is not None:
        return SizeBetween(collection=kind, minimum=int(low), maximum=int(high))

    if not isinstance(value_type, ScalarType):
        return None

    scalar = value_type.scalar
    if scalar is ScalarKind.STRING:
        return LengthBetween(minimum=int(low), maximum=int(high))
    if scalar is ScalarKind.INT64:
        return NumericBetween(scalar=scalar, minimum=int(low), maximum=int(high))
    if scalar is ScalarKind.FLOAT64:
        return NumericBetween(scalar=scalar, minimum=float(low), maximum=float(high))
    if scalar is ScalarKind.NUMBER:
        return NumericBetween(scalar=scalar, minimum=low, maximum=high)
    return None


def _parse_bound(text: str, path: str) -> Decimal:
    try:
        _reject_digit_separators(text)
        bound = Decimal(text.strip())
    except (ValueError, InvalidOperation) as exc:
        raise SchemaDefinitionError(f"{VALIDATOR_BETWEEN} requires 2 numeric args, got {text!r}", path) from exc
    if not bound.is_finite():
        raise SchemaDefinitionError(f"{VALIDATOR_BETWEEN} requires 2 finite args, got {text!r}", path)
    return bound


def _parse_default(literal: str, scalar: ScalarKind, path: str) -> ScalarValue:
    """Parse a ``default(...)`` literal as the Python type of *scalar*."""
    if scalar is ScalarKind.STRING:
        return literal
    if scalar is ScalarKind.BOOL:
        if literal == TRUE:
            return True
        if literal == FALSE:
            return False
        raise SchemaDefinitionError(f"default value ({literal}) is not a bool", path)
    try:
        return _parse_number(literal, scalar)
    except (ValueError, InvalidOperation) as exc:
        raise SchemaDefinitionError(f"default value ({literal}) is not a number: {exc}", path) from exc


def _parse_members(name: str, args: str, scalar: ScalarKind, path: str) -> tuple[ScalarValue, ...] | None:
    """Parse the arguments of ``oneof``/``noneof`` for *scalar*.

    Strings are taken verbatim. Returns None for booleans, which take no
    membership validator.
    """
    parts = args.split(",")
    if scalar is ScalarKind.STRING:
        return tuple(parts)
    if scalar is ScalarKind.BOOL:
        return None
    try:
        return tuple(_parse_number(part, scalar) for part in parts)
    except (ValueError, InvalidOperation) as exc:
        raise SchemaDefinitionError(f"{name} requires numeric args: {exc}", path) from exc


def _parse_number(text: str, scalar: ScalarKind) -> int | float | Decimal:
    """Parse a finite number for *scalar*. Raises ValueError or InvalidOperation otherwise."""
    text = text.strip()
    _reject_digit_separators(text)
    if scalar is ScalarKind.INT64:
        return int(text, 10)
    if scalar is ScalarKind.FLOAT64:
        number = float(text)
        if not math.isfinite(number):
            raise ValueError(f"not a finite number: {text!r}")
        return number
    decimal = Decimal(text)
    if not decimal.is_finite():
        raise ValueError(f"not a finite number: {text!r}")
    return decimal


def _reject_digit_separators(text: str) -> None:
    # int(), float() and Decimal() all accept "1_000".
    if "_" in text:
        raise ValueError(f"digit separators are not allowed: {text!r}")
