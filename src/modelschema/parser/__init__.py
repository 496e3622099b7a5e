# Copyright 2026 ModelSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser for per-field tag strings."""

from modelschema.parser.tags import has_tag_arg, split_tag_values, split_tags, tag_args, tag_value

__all__ = [
    "split_tags",
    "tag_value",
    "split_tag_values",
    "has_tag_arg",
    "tag_args",
]
