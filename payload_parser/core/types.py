from __future__ import annotations
from typing import Any, Dict, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field


class ScalarValue(BaseModel):
    """A plain value, emitted as-is under the key name."""
    value: Any = None


class AnnotatedValue(BaseModel):
    """
    A rich value descriptor, e.g. {"value": 24.5, "unit": "°C", "metadata": {"color": "green"}}.
    Only the fields the descriptor actually carries end up in `model_fields_set`.
    Attribute values are passed through unchanged, whatever their type.
    """
    model_config = ConfigDict(extra="ignore")

    value: Any = None
    unit: Any = None
    metadata: Any = None
    location: Any = None
    variable: Any = None
    serie: Any = None
    group: Any = None


ValueDescriptor = Union[ScalarValue, AnnotatedValue]


def describe(raw: Any) -> ValueDescriptor:
    if isinstance(raw, AnnotatedValue):
        return raw

    if isinstance(raw, Mapping):
        return AnnotatedValue.model_validate(dict(raw))

    return ScalarValue(value=raw)


class OutputRecord(BaseModel):
    variable: str = Field(min_length=1)
    value: Any = None
    serie: Any = None
    group: Any = None
    unit: Any = None
    metadata: Any = None
    location: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)
