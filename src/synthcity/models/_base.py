"""Base model for synthcity wire payloads and generator options.

Every inbound model inherits from :class:`SynthBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase wire keys (``centerLat``,
  ``dataType``) map automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``None``, empty strings
  and NaN so the field default is used instead.
* ``extra="ignore"``: unknown keys from the browser are tolerated.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class SynthBaseModel(BaseModel):
    """Base for camelCase wire models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _drop_empty_values(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return SynthBaseModel._clean_dict(values)

    def to_wire(self) -> dict[str, Any]:
        """Dump using camelCase keys, omitting unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
