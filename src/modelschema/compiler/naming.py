# Copyright 2026 ModelSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversion of field identifiers to wire names."""

import re

from modelschema.parser.tags import tag_value
from modelschema.vocabulary import TAG_SNAKE_NAME

# ###############
# Public Interface
# ###############


def snake_case(identifier: str, tags: str = "") -> str:
    """Return the wire name of a field.

    An explicit ``snake`` tag is returned verbatim. Otherwise the identifier
    is converted to snake case, keeping acronyms together::

        SuperSimpleCase -> super_simple_case
        LittleVPCName   -> little_vpc_name
        VPCEndpointIDs  -> vpc_endpoint_ids

    Identifiers already in snake case are returned unchanged.
    """
    override = tag_value(TAG_SNAKE_NAME, tags)
    if override != "":
        return override

    name = identifier.replace("IDs", "Ids")
    name = _ACRONYM_AFTER_LOWER.sub(r"\1_\2", name)
    name = _WORD_START.sub(r"_\1", name)
    return name.lower().removeprefix("_")


# ################
# Implementation
# ################

_ACRONYM_AFTER_LOWER = re.compile(r"([a-z])([A-Z]{2,})")
_WORD_START = re.compile(r"([A-Z][a-z])")
