# Copyright 2026 ModelSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the derivation of flags, validators and plan modifiers from tags."""

from decimal import Decimal

import pytest

from modelschema.compiler.errors import SchemaDefinitionError
from modelschema.compiler.rules import decorate_attribute, decorate_block, plan_modifiers, schema_options, validators
from modelschema.model import (
    Attribute,
    Block,
    CollectionKind,
    DefaultValue,
    LengthBetween,
    ListType,
    MapType,
    NestingMode,
    NoneOf,
    NumericBetween,
    OneOf,
    RequiresReplace,
    ScalarKind,
    ScalarType,
    SetType,
    SizeAtLeast,
    SizeBetween,
    UseStateForUnknown,
)

# ###############
# Helpers
# ###############

STRING = ScalarType(scalar=ScalarKind.STRING)
BOOL = ScalarType(scalar=ScalarKind.BOOL)
FLOAT64 = ScalarType(scalar=ScalarKind.FLOAT64)
INT64 = ScalarType(scalar=ScalarKind.INT64)
NUMBER = ScalarType(scalar=ScalarKind.NUMBER)


def _decorate(tags: str, value_type: ScalarType | ListType | SetType | MapType = STRING) -> Attribute:
    return decorate_attribute(Attribute(value_type=value_type), tags)


# ###############
# Attribute flags
# ###############


class TestRequiredness:
    @pytest.mark.parametrize("value_type", [STRING, BOOL, FLOAT64, INT64, NUMBER])
    def test_untagged_defaults_to_optional(self, value_type: ScalarType) -> None:
        attribute = _decorate("", value_type)
        assert attribute.optional is True
        assert attribute.required is False
        assert attribute.computed is False

    def test_required(self) -> None:
        attribute = _decorate('required:"true"')
        assert attribute.required is True
        assert attribute.optional is False

    def test_computed_alone_is_not_optional(self) -> None:
        attribute = _decorate('computed:"true"')
        assert attribute.computed is True
        assert attribute.optional is False

    def test_optional_and_computed(self) -> None:
        attribute = _decorate('optional:"true" computed:"true"')
        assert attribute.optional is True
        assert attribute.computed is True
        assert attribute.required is False

    def test_required_and_optional_pass_through(self) -> None:
        attribute = _decorate('required:"true" optional:"true"')
        assert attribute.required is True
        assert attribute.optional is True

    def test_explicit_false_suppresses_default(self) -> None:
        attribute = _decorate('required:"false"')
        assert attribute.required is False
        assert attribute.optional is False

    def test_sensitive(self) -> None:
        assert _decorate('sensitive:"true"').sensitive is True
        assert _decorate("").sensitive is False


class TestTexts:
    def test_texts_are_copied(self) -> None:
        attribute = _decorate('md:"Markdown\'s description" desc:"Plain, with a comma" deprecation:"Going away"')
        assert attribute.markdown_description == "Markdown's description"
        assert attribute.description == "Plain, with a comma"
        assert attribute.deprecation_message == "Going away"

    def test_missing_texts_are_none(self) -> None:
        attribute = _decorate('required:"true"')
        assert attribute.description is None
        assert attribute.markdown_description is None
        assert attribute.deprecation_message is None


# ###############
# Plan modifiers
# ###############


class TestPlanModifiers:
    def test_replace(self) -> None:
        assert plan_modifiers("replace", STRING) == (RequiresReplace(),)

    def test_use_state_for_unknown(self) -> None:
        assert plan_modifiers("usfu", STRING) == (UseStateForUnknown(),)

    def test_document_order_is_kept(self) -> None:
        assert plan_modifiers("usfu,replace", NUMBER) == (UseStateForUnknown(), RequiresReplace())
        assert plan_modifiers("replace,usfu", NUMBER) == (RequiresReplace(), UseStateForUnknown())

    def test_replace_and_default(self) -> None:
        assert plan_modifiers("replace,default(game)", STRING) == (
            RequiresReplace(),
            DefaultValue(scalar=ScalarKind.STRING, value="game"),
        )

    def test_unrecognized_terms_are_ignored(self) -> None:
        assert plan_modifiers("frobnicate,replace,other(1,2)", STRING) == (RequiresReplace(),)

    def test_empty_value(self) -> None:
        assert plan_modifiers("", STRING) == ()

    @pytest.mark.parametrize(
        ("value_type", "literal", "expected"),
        [
            (BOOL, "false", False),
            (BOOL, "true", True),
            (FLOAT64, "0.0", 0.0),
            (FLOAT64, "2.5", 2.5),
            (INT64, "12", 12),
            (INT64, "-3", -3),
            (NUMBER, "1", Decimal("1")),
            (NUMBER, "0.1", Decimal("0.1")),
            (STRING, "game", "game"),
            (STRING, "two words", "two words"),
        ],
    )
    def test_default_is_parsed_for_value_type(self, value_type: ScalarType, literal: str, expected: object) -> None:
        (modifier,) = plan_modifiers(f"default({literal})", value_type)
        assert isinstance(modifier, DefaultValue)
        assert modifier.scalar == value_type.scalar
        assert modifier.value == expected
        assert type(modifier.value) is type(expected)

    def test_string_default_is_verbatim(self) -> None:
        (modifier,) = plan_modifiers("default( padded )", STRING)
        assert isinstance(modifier, DefaultValue)
        assert modifier.value == " padded "

    @pytest.mark.parametrize(
        ("value_type", "literal"),
        [
            (BOOL, "yes"),
            (BOOL, "1"),
            (FLOAT64, "zero"),
            (INT64, "1.5"),
            (NUMBER, "lots"),
        ],
    )
    def test_malformed_default_is_a_defect(self, value_type: ScalarType, literal: str) -> None:
        with pytest.raises(SchemaDefinitionError, match="default value"):
            plan_modifiers(f"default({literal})", value_type, "field")

    @pytest.mark.parametrize(
        ("value_type", "literal"),
        [
            (FLOAT64, "nan"),
            (FLOAT64, "inf"),
            (FLOAT64, "-Infinity"),
            (NUMBER, "NaN"),
            (NUMBER, "sNaN"),
            (NUMBER, "Infinity"),
        ],
    )
    def test_non_finite_default_is_a_defect(self, value_type: ScalarType, literal: str) -> None:
        with pytest.raises(SchemaDefinitionError, match="not a finite number"):
            plan_modifiers(f"default({literal})", value_type, "ratio")

    @pytest.mark.parametrize(
        ("value_type", "literal"),
        [(INT64, "1_000"), (FLOAT64, "1_000.5"), (NUMBER, "1_0")],
    )
    def test_digit_separators_in_default_are_a_defect(self, value_type: ScalarType, literal: str) -> None:
        with pytest.raises(SchemaDefinitionError, match="digit separators are not allowed"):
            plan_modifiers(f"default({literal})", value_type, "count")

    def test_digit_separators_in_string_default_are_kept(self) -> None:
        (modifier,) = plan_modifiers("default(snake_case)", STRING)
        assert isinstance(modifier, DefaultValue)
        assert modifier.value == "snake_case"

    def test_default_ignored_for_collections_and_blocks(self) -> None:
        assert plan_modifiers("default(1)", ListType(element=ScalarKind.INT64)) == ()
        assert plan_modifiers("replace,default(1)", None) == (RequiresReplace(),)


# ###############
# Validators: between
# ###############


class TestBetween:
    def test_string_length(self) -> None:
        assert validators("between(3,32)", STRING, 'required:"true"') == (LengthBetween(minimum=3, maximum=32),)

    def test_string_length_wins_regardless_of_requiredness(self) -> None:
        for tags in ("", 'required:"true"', 'optional:"true"', 'required:"true" optional:"true"'):
            assert validators("between(0,255)", STRING, tags) == (LengthBetween(minimum=0, maximum=255),)

    def test_whitespace_in_arguments(self) -> None:
        assert validators("between( 3, 32 )", STRING, "") == (LengthBetween(minimum=3, maximum=32),)

    def test_int_range(self) -> None:
        (validator,) = validators("between(1,100)", INT64, "")
        assert validator == NumericBetween(scalar=ScalarKind.INT64, minimum=1, maximum=100)
        assert isinstance(validator, NumericBetween)
        assert type(validator.minimum) is int

    def test_float_range(self) -> None:
        (validator,) = validators("between(4,5)", FLOAT64, "")
        assert isinstance(validator, NumericBetween)
        assert validator.minimum == 4.0
        assert type(validator.maximum) is float

    def test_number_range(self) -> None:
        (validator,) = validators("between(0,90.5)", NUMBER, "")
        assert validator == NumericBetween(scalar=ScalarKind.NUMBER, minimum=Decimal("0"), maximum=Decimal("90.5"))

    def test_list_size(self) -> None:
        assert validators("between(0,10)", ListType(element=ScalarKind.STRING), "") == (
            SizeBetween(collection=CollectionKind.LIST, minimum=0, maximum=10),
        )

    def test_set_size(self) -> None:
        assert validators("between(0,3)", SetType(element=ScalarKind.STRING), 'collection:"set"') == (
            SizeBetween(collection=CollectionKind.SET, minimum=0, maximum=3),
        )

    def test_block_size(self) -> None:
        assert validators("between(0,10)", None, 'collection:"set"', from_slice=True) == (
            SizeBetween(collection=CollectionKind.SET, minimum=0, maximum=10),
        )

    def test_bool_and_map_get_no_validator(self) -> None:
        assert validators("between(0,1)", BOOL, "") == ()
        assert validators("between(0,1)", MapType(element=ScalarKind.STRING), "") == ()

    @pytest.mark.parametrize("value", ["between(3)", "between(1,2,3)", "between()"])
    def test_wrong_arity_is_a_defect(self, value: str) -> None:
        with pytest.raises(SchemaDefinitionError, match="requires 2 numeric args"):
            validators(value, STRING, "")

    @pytest.mark.parametrize("value", ["between(a,3)", "between(1,inf)"])
    def test_non_numeric_bound_is_a_defect(self, value: str) -> None:
        with pytest.raises(SchemaDefinitionError, match="between"):
            validators(value, INT64, "")

    def test_digit_separators_in_bound_are_a_defect(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="between requires 2 numeric args"):
            validators("between(1,1_000)", INT64, "", path="port")


# ###############
# Validators: implied block sizes
# ###############


class TestImpliedBlockSize:
    @pytest.mark.parametrize(
        ("tags", "from_slice", "expected"),
        [
            ("", False, (SizeBetween(collection=CollectionKind.LIST, minimum=0, maximum=1),)),
            ('optional:"true"', False, (SizeBetween(collection=CollectionKind.LIST, minimum=0, maximum=1),)),
            ('required:"true"', False, (SizeBetween(collection=CollectionKind.LIST, minimum=1, maximum=1),)),
            (
                'required:"true" optional:"true"',
                False,
                (SizeBetween(collection=CollectionKind.LIST, minimum=1, maximum=1),),
            ),
            ('collection:"set"', False, (SizeBetween(collection=CollectionKind.SET, minimum=0, maximum=1),)),
            (
                'collection:"set" optional:"true"',
                False,
                (SizeBetween(collection=CollectionKind.SET, minimum=0, maximum=1),),
            ),
            (
                'collection:"set" required:"true"',
                False,
                (SizeBetween(collection=CollectionKind.SET, minimum=1, maximum=1),),
            ),
            ("", True, ()),
            ('optional:"true"', True, ()),
            ('required:"true"', True, (SizeAtLeast(collection=CollectionKind.LIST, minimum=1),)),
            ('required:"true" optional:"true"', True, (SizeAtLeast(collection=CollectionKind.LIST, minimum=1),)),
            ('collection:"set"', True, ()),
            ('collection:"set" required:"true"', True, (SizeAtLeast(collection=CollectionKind.SET, minimum=1),)),
        ],
    )
    def test_block_size_table(self, tags: str, from_slice: bool, expected: tuple) -> None:
        assert validators("", None, tags, from_slice=from_slice) == expected

    def test_explicit_between_replaces_implied_size(self) -> None:
        assert validators("between(2,4)", None, 'required:"true"', from_slice=False) == (
            SizeBetween(collection=CollectionKind.LIST, minimum=2, maximum=4),
        )

    def test_attributes_get_no_implied_size(self) -> None:
        assert validators("", ListType(element=ScalarKind.STRING), 'required:"true"') == ()


# ###############
# Validators: membership
# ###############


class TestMembership:
    def test_string_one_of(self) -> None:
        assert validators("oneof(sultan,shepard,ben,böhmer)", STRING, "") == (
            OneOf(scalar=ScalarKind.STRING, values=("sultan", "shepard", "ben", "böhmer")),
        )

    def test_string_values_are_verbatim(self) -> None:
        assert validators("oneof(a, b)", STRING, "") == (OneOf(scalar=ScalarKind.STRING, values=("a", " b")),)

    def test_number_none_of(self) -> None:
        assert validators("noneof(0,8,24,64)", NUMBER, "") == (
            NoneOf(scalar=ScalarKind.NUMBER, values=(Decimal(0), Decimal(8), Decimal(24), Decimal(64))),
        )

    def test_float_one_of(self) -> None:
        assert validators("oneof(2.1,84.5,240.1,649.123)", FLOAT64, "") == (
            OneOf(scalar=ScalarKind.FLOAT64, values=(2.1, 84.5, 240.1, 649.123)),
        )

    def test_int_none_of_trims_whitespace(self) -> None:
        assert validators("noneof(1, 2, 5, 13)", INT64, "") == (
            NoneOf(scalar=ScalarKind.INT64, values=(1, 2, 5, 13)),
        )

    def test_non_numeric_member_is_a_defect(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="oneof requires numeric args"):
            validators("oneof(1,two)", INT64, "", path="mode")

    @pytest.mark.parametrize(
        ("value_type", "value"),
        [(FLOAT64, "oneof(1.5,nan)"), (NUMBER, "noneof(0,NaN)"), (FLOAT64, "noneof(inf)")],
    )
    def test_non_finite_member_is_a_defect(self, value_type: ScalarType, value: str) -> None:
        with pytest.raises(SchemaDefinitionError, match="not a finite number"):
            validators(value, value_type, "", path="ratio")

    def test_digit_separators_in_member_are_a_defect(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="oneof requires numeric args"):
            validators("oneof(1_0,2)", INT64, "", path="mode")

    def test_string_members_keep_underscores(self) -> None:
        assert validators("oneof(a_b,c)", STRING, "") == (OneOf(scalar=ScalarKind.STRING, values=("a_b", "c")),)

    def test_bool_collections_and_blocks_get_no_membership(self) -> None:
        assert validators("oneof(true)", BOOL, "") == ()
        assert validators("oneof(a,b)", ListType(element=ScalarKind.STRING), "") == ()
        assert validators("oneof(a,b)", None, "", from_slice=True) == ()

    def test_rules_are_concatenated_in_order(self) -> None:
        assert validators("noneof(x),oneof(ab,cd),between(2,2)", STRING, "") == (
            LengthBetween(minimum=2, maximum=2),
            OneOf(scalar=ScalarKind.STRING, values=("ab", "cd")),
            NoneOf(scalar=ScalarKind.STRING, values=("x",)),
        )


# ###############
# Blocks and schema options
# ###############


class TestDecorateBlock:
    def test_defaults(self) -> None:
        block = decorate_block({}, {}, "", from_slice=False)
        assert block == Block(
            nesting_mode=NestingMode.LIST,
            validators=(SizeBetween(collection=CollectionKind.LIST, minimum=0, maximum=1),),
        )
        assert block.attributes is None
        assert block.blocks is None

    def test_set_from_slice_with_texts_and_modifiers(self) -> None:
        child = Attribute(value_type=STRING, optional=True)
        block = decorate_block(
            {"field": child},
            {},
            'collection:"set" desc:"Criteria" md:"*Criteria*" deprecation:"Old" pmods:"replace"',
            from_slice=True,
        )
        assert block.nesting_mode == NestingMode.SET
        assert block.attributes == {"field": child}
        assert block.validators == ()
        assert block.plan_modifiers == (RequiresReplace(),)
        assert block.description == "Criteria"
        assert block.markdown_description == "*Criteria*"
        assert block.deprecation_message == "Old"


class TestSchemaOptions:
    def test_all_options(self) -> None:
        options = schema_options('md:"Markdown" version:1 desc:"Plain text" deprecation:"Prepare"')
        assert options == {
            "markdown_description": "Markdown",
            "version": 1,
            "description": "Plain text",
            "deprecation_message": "Prepare",
        }

    def test_empty(self) -> None:
        assert schema_options("") == {}

    def test_field_level_tags_are_ignored(self) -> None:
        assert schema_options('required:"true" pmods:"replace"') == {}

    def test_bad_version_is_a_defect(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="version must be an int"):
            schema_options('version:"one"', "_")

    def test_digit_separators_in_version_are_a_defect(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="version must be an int"):
            schema_options('version:"1_0"', "_")
