from __future__ import annotations
from typing import Any, Dict, List, Optional

from ..decoder import PayloadDecoder
from ..exceptions import LayoutError
from ..registry import CodecRegistry, get_registry


class LayoutBuilder:
    """
    Fluent builder for byte-layout tables.

    Offsets advance automatically with each field's codec size unless given explicitly.

    Example:
        >>> layout = (
        ...     LayoutBuilder()
        ...     .field("protocol_version", "int8")
        ...     .field("temperature", "int16be", divisor=100, unit="°C")
        ...     .field("humidity", "uint16be", divisor=100, unit="%")
        ...     .build()
        ... )
    """
    __slots__ = ("_fields", "_cursor", "_registry")

    def __init__(self, registry: Optional[CodecRegistry] = None) -> None:
        self._fields: List[Dict[str, Any]] = []
        self._cursor: int = 0
        self._registry: CodecRegistry = registry or get_registry()

    def field(
        self,
        name: str,
        codec: str,
        *,
        offset: Optional[int] = None,
        divisor: Optional[float] = None,
        unit: Optional[str] = None,
    ) -> "LayoutBuilder":
        if not name or not isinstance(name, str):
            raise ValueError("field(name=...) requires a non-empty string.")

        found = self._registry.get(codec)
        if found is None:
            raise ValueError(f"field(codec=...) unknown codec '{codec}'.")

        start = self._cursor if offset is None else offset
        if not isinstance(start, int) or start < 0:
            raise ValueError("field(offset=...) must be a non-negative integer.")

        spec: Dict[str, Any] = {"name": name, "codec": codec, "offset": start}
        if divisor is not None:
            spec["divisor"] = divisor
        if unit is not None:
            spec["unit"] = unit

        self._fields.append(spec)
        self._cursor = start + found.size
        return self

    def skip(self, n: int) -> "LayoutBuilder":
        if not isinstance(n, int) or n < 0:
            raise ValueError("skip(n=...) must be a non-negative integer.")
        self._cursor += n
        return self

    def build(self) -> Dict[str, Any]:
        if not self._fields:
            raise LayoutError("Cannot build layout: no fields defined.")
        layout = {"fields": [dict(f) for f in self._fields]}
        PayloadDecoder._validate_layout(layout, self._registry)
        return layout

    def to_decoder(self, *, encoding: str = "hex") -> PayloadDecoder:
        return PayloadDecoder(self.build(), encoding=encoding, registry=self._registry)

    def from_dict(self, layout: Dict[str, Any]) -> "LayoutBuilder":
        PayloadDecoder._validate_layout(layout, self._registry)
        self._fields = [dict(f) for f in layout["fields"]]
        self._cursor = max(f["offset"] + self._registry.get(f["codec"]).size for f in self._fields)
        return self
