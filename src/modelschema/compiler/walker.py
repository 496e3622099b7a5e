# Copyright 2026 ModelSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compilation of a dataclass model into a schema tree.

The walker descends the model's fields depth first. Scalar, map and list
of scalar fields become attributes; dataclass fields and lists of
dataclasses become nested blocks. Field tags are taken from the first
string in the field's ``Annotated`` metadata::

    @dataclass
    class Endpoint:
        _: Annotated[None, 'md:"An endpoint" version:"1"'] = None
        name: Annotated[str, 'required:"true" valid:"between(3,32)"'] = ""
        ports: Annotated[list[int], 'collection:"set"'] = field(default_factory=list)

The root-level field named ``_`` holds schema-level settings rather than an
attribute.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Annotated, Any, get_args, get_origin, get_type_hints

from modelschema.compiler.errors import SchemaDefinitionError
from modelschema.compiler.leaf import resolve_leaf
from modelschema.compiler.naming import snake_case
from modelschema.compiler.rules import decorate_attribute, decorate_block, schema_options
from modelschema.model.schema import Attribute, Block, Schema
from modelschema.vocabulary import SCHEMA_MARKER_FIELD

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def compile_schema(model: Any) -> Schema:
    """Compile a dataclass model into a :class:`~modelschema.model.schema.Schema`.

    Only the type shape and the field tags are inspected, so either the
    dataclass itself or an instance of it may be passed. Compiling the same
    model twice yields equal schemas.

    Args:
        model: A dataclass type or instance.

    Returns:
        The root of the schema tree.

    Raises:
        SchemaDefinitionError: If the model is not a dataclass, a field has an
            unsupported type, or a tag literal is malformed.
    """
    record = model if isinstance(model, type) else type(model)
    if not _is_record(record):
        raise SchemaDefinitionError(f"expected a dataclass model, got {record!r}")

    schema = _compile(record, "", from_slice=False, level=0, path="", ancestors=())
    assert isinstance(schema, Schema)
    logger.debug(
        "Compiled schema for %s: %d attributes, %d blocks",
        record.__qualname__,
        len(schema.attributes or {}),
        len(schema.blocks or {}),
    )
    return schema


# ################
# Implementation
# ################


@dataclass(frozen=True)
class _FieldDescriptor:
    """A visited field of a record.

    Attributes:
        identifier: The field name as declared.
        annotation: The field type with any ``Annotated`` wrapper removed.
        tags: The field's tag string, ``""`` if it has none.
    """

    identifier: str
    annotation: Any
    tags: str


def _is_record(annotation: Any) -> bool:
    return isinstance(annotation, type) and dataclasses.is_dataclass(annotation)


def _compile(
    annotation: Any,
    tags: str,
    *,
    from_slice: bool,
    level: int,
    path: str,
    ancestors: tuple[type, ...],
) -> Attribute | Block | Schema:
    """Compile one field type.

    Returns an attribute for a leaf, a block for a nested record or list of
    records, and the schema for the root record at *level* 0. *ancestors*
    holds the records currently being compiled, to reject recursive models.
    """
    leaf = resolve_leaf(annotation, tags, path)
    if leaf is not None:
        attribute = decorate_attribute(leaf, tags, path)
        logger.debug("Field '%s': attribute of type %s", path, attribute.value_type)
        return attribute

    if get_origin(annotation) is list:
        args = get_args(annotation)
        element = args[0] if args else None
        if not _is_record(element):
            raise SchemaDefinitionError(f"unrecognized list element type: {element!r}", path)
        return _compile(element, tags, from_slice=True, level=level + 1, path=path, ancestors=ancestors)

    if not _is_record(annotation):
        raise SchemaDefinitionError(f"got unrecognized type: {annotation!r}", path)
    if annotation in ancestors:
        raise SchemaDefinitionError(f"recursive record type: {annotation.__qualname__}", path)

    attributes: dict[str, Attribute] = {}
    blocks: dict[str, Block] = {}
    for descriptor in _record_fields(annotation, path):
        if descriptor.identifier.startswith("_"):
            continue
        wire_name = snake_case(descriptor.identifier, descriptor.tags)
        child_path = f"{path}.{wire_name}" if path else wire_name
        child = _compile(
            descriptor.annotation,
            descriptor.tags,
            from_slice=False,
            level=level + 1,
            path=child_path,
            ancestors=(*ancestors, annotation),
        )
        if isinstance(child, Attribute):
            attributes[wire_name] = child
        elif isinstance(child, Block):
            blocks[wire_name] = child

    if level == 0:
        return Schema(
            attributes=attributes or None,
            blocks=blocks or None,
            **schema_options(_marker_tags(annotation), SCHEMA_MARKER_FIELD),
        )

    block = decorate_block(attributes, blocks, tags, from_slice=from_slice, path=path)
    logger.debug("Field '%s': %s block", path, block.nesting_mode.value)
    return block


def _record_fields(record: type, path: str = "") -> list[_FieldDescriptor]:
    """Return the fields of a dataclass in declaration order, including private ones.

    Raises:
        SchemaDefinitionError: If a field annotation names a type that cannot be
            resolved from the record's module, e.g. a record defined locally.
    """
    try:
        hints = get_type_hints(record, include_extras=True)
    except NameError as exc:
        raise SchemaDefinitionError(f"cannot resolve field types of {record.__qualname__}: {exc}", path) from exc
    descriptors: list[_FieldDescriptor] = []
    for f in dataclasses.fields(record):
        annotation = hints.get(f.name, f.type)
        tags = f.metadata.get("tags", "")
        if get_origin(annotation) is Annotated:
            annotation, *extras = get_args(annotation)
            tags = next((extra for extra in extras if isinstance(extra, str)), tags)
        descriptors.append(_FieldDescriptor(f.name, annotation, tags))
    return descriptors


def _marker_tags(record: type) -> str:
    """Return the tag string of the record's schema marker field, if any."""
    for descriptor in _record_fields(record):
        if descriptor.identifier == SCHEMA_MARKER_FIELD:
            return descriptor.tags
    return ""
