# Copyright 2026 ModelSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recognized tag keys and tag value terms.

Model authors annotate fields with tag strings such as
``required:"true" valid:"between(3,32)" pmods:"replace,default(x)"``.
The names below are the complete vocabulary understood by the compiler.
"""

# ###############
# Public Interface
# ###############

# Tag keys
TAG_COMPUTED = "computed"
TAG_OPTIONAL = "optional"
TAG_REQUIRED = "required"
TAG_SENSITIVE = "sensitive"
TAG_DEPRECATION = "deprecation"
TAG_DESCRIPTION = "desc"
TAG_MARKDOWN_DESCRIPTION = "md"
TAG_PLAN_MODIFIERS = "pmods"
TAG_SNAKE_NAME = "snake"
TAG_VALIDATORS = "valid"
TAG_VERSION = "version"
TAG_COLLECTION = "collection"

# Tag values
COLLECTION_LIST = "list"
COLLECTION_SET = "set"
TRUE = "true"
FALSE = "false"

# Terms inside ``pmods``
PLAN_MODIFIER_REPLACE = "replace"
PLAN_MODIFIER_DEFAULT = "default"
PLAN_MODIFIER_USFU = "usfu"

# Terms inside ``valid``
VALIDATOR_BETWEEN = "between"
VALIDATOR_ONE_OF = "oneof"
VALIDATOR_NONE_OF = "noneof"

# Name of the root-level field carrying schema-level tags.
SCHEMA_MARKER_FIELD = "_"
