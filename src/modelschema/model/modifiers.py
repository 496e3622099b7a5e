# Copyright 2026 ModelSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Plan modifier descriptors attached to attributes and blocks."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from modelschema.model.types import ScalarKind

# ###############
# Public Interface
# ###############


class RequiresReplace(BaseModel):
    """A change to the value forces the resource to be destroyed and recreated."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["requires_replace"] = "requires_replace"

    def description(self) -> str:
        return "If the value of this attribute changes, the resource will be destroyed and recreated."

    def markdown_description(self) -> str:
        return self.description()


class UseStateForUnknown(BaseModel):
    """An unknown planned value is replaced with the previously stored value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["use_state_for_unknown"] = "use_state_for_unknown"

    def description(self) -> str:
        return "Once set, the value of this attribute in state will not change."

    def markdown_description(self) -> str:
        return self.description()


class DefaultValue(BaseModel):
    """Supplies *value* when the attribute is absent from the configuration.

    Attributes:
        scalar: The scalar kind *value* was parsed for.
        value: The default, as the Python type matching *scalar*.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["default_value"] = "default_value"
    scalar: ScalarKind
    value: bool | int | float | Decimal | str

    def description(self) -> str:
        return self.markdown_description()

    def markdown_description(self) -> str:
        return f'Sets the default value "{self.value}" ({self.scalar.value}) if the attribute is not set'

    def modify(self, config_value: Any, plan_value: Any, *, plan_unknown: bool = False) -> Any:
        """Return the planned value after applying the default.

        A configured value always wins. A planned value that is already known
        and not null was set by an earlier modifier and is kept. Otherwise the
        default is planned. Null is represented as ``None``.

        Args:
            config_value: The value from the configuration, or None if unset.
            plan_value: The currently planned value, or None.
            plan_unknown: Whether the planned value is unknown at plan time.
        """
        if config_value is not None:
            return plan_value
        if not plan_unknown and plan_value is not None:
            return plan_value
        return self.value


PlanModifier = Annotated[
    RequiresReplace | UseStateForUnknown | DefaultValue,
    _Field(discriminator="kind"),
]
