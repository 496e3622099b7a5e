# Copyright 2026 ModelSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error raised for defects in a model definition."""

# ###############
# Public Interface
# ###############


class SchemaDefinitionError(Exception):
    """Raised when a model cannot be compiled into a schema.

    Covers unsupported field types, malformed tag literals and wrong
    validator arity. These are defects in the model definition, so no
    partial schema is produced.

    Attributes:
        path: Dotted wire-name path of the offending field, ``""`` for the root.
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(f"Field '{path}': {message}" if path else message)
        self.path = path
