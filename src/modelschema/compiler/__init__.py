# Copyright 2026 ModelSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler from tagged dataclass models to schema trees."""

from modelschema.compiler.errors import SchemaDefinitionError
from modelschema.compiler.leaf import resolve_leaf
from modelschema.compiler.naming import snake_case
from modelschema.compiler.walker import compile_schema

__all__ = [
    "compile_schema",
    "SchemaDefinitionError",
    "snake_case",
    "resolve_leaf",
]
