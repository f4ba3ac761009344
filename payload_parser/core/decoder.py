from __future__ import annotations
from typing import Any, Dict, List, Optional

from .exceptions import DecodeError, LayoutError
from .registry import CodecRegistry, get_registry
from .utils import SUPPORTED_ENCODINGS, payload_to_bytes

# 0     - Protocol Version
# 1, 2  - Temperature
# 3, 4  - Humidity
DEFAULT_LAYOUT: Dict[str, Any] = {
    "fields": [
        {"name": "protocol_version", "codec": "int8", "offset": 0},
        {"name": "temperature", "codec": "int16be", "offset": 1, "divisor": 100, "unit": "°C"},
        {"name": "humidity", "codec": "uint16be", "offset": 3, "divisor": 100, "unit": "%"},
    ]
}


class PayloadDecoder:
    """
    Decodes a device payload into a sensor reading by reading fixed byte ranges.

    The byte layout is data, not code: swap the layout table (or register new codecs)
    to support a different device firmware.

    Example:
        >>> PayloadDecoder().decode("0109611395")
        {'protocol_version': 1, 'temperature': {'value': 24.01, 'unit': '°C'}, 'humidity': {'value': 50.13, 'unit': '%'}}
    """
    def __init__(
        self,
        layout: Optional[Dict[str, Any]] = None,
        *,
        encoding: str = "hex",
        registry: Optional[CodecRegistry] = None,
    ) -> None:
        self.layout: Dict[str, Any] = layout if layout is not None else DEFAULT_LAYOUT
        self._registry: CodecRegistry = registry or get_registry()

        if encoding not in SUPPORTED_ENCODINGS:
            raise LayoutError(f"Unsupported payload encoding '{encoding}' (allowed: {list(SUPPORTED_ENCODINGS)}).")
        self.encoding = encoding

        self._validate_layout(self.layout, self._registry)
        self._fields: List[Dict[str, Any]] = list(self.layout["fields"])
        self.min_length: int = max(
            (f["offset"] + self._registry.get(f["codec"]).size for f in self._fields),
            default=0,
        )

    def decode(self, raw: Any) -> Dict[str, Any]:
        return self.decode_bytes(payload_to_bytes(raw, self.encoding))

    def decode_bytes(self, buf: bytes) -> Dict[str, Any]:
        if len(buf) < self.min_length:
            raise DecodeError(f"Payload too short: expected at least {self.min_length} bytes, got {len(buf)}.")

        data: Dict[str, Any] = {}
        for spec in self._fields:
            codec = self._registry.get(spec["codec"])
            start = spec["offset"]
            try:
                value = codec.reader(buf[start:start + codec.size])
            except Exception as e:
                raise DecodeError(f"Cannot decode field '{spec['name']}' with codec '{codec.name}': {e}") from e

            if spec.get("divisor"):
                value = value / spec["divisor"]

            if "unit" in spec:
                data[spec["name"]] = {"value": value, "unit": spec["unit"]}
            else:
                data[spec["name"]] = value

        return data

    @staticmethod
    def _validate_layout(layout: Dict[str, Any], registry: CodecRegistry) -> None:
        if not isinstance(layout, dict):
            raise LayoutError("Layout must be an object (dict).")

        fields = layout.get("fields")
        if not isinstance(fields, list) or not fields:
            raise LayoutError("Layout must contain a non-empty 'fields' list.")

        seen = set()
        for i, spec in enumerate(fields):
            if not isinstance(spec, dict):
                raise LayoutError(f"fields[{i}] must be an object.")

            name = spec.get("name")
            if not isinstance(name, str) or not name:
                raise LayoutError(f"fields[{i}].name must be a non-empty string.")

            if name in seen:
                raise LayoutError(f"Duplicate field name '{name}'.")
            seen.add(name)

            if spec.get("codec") not in registry:
                raise LayoutError(f"Unknown codec '{spec.get('codec')}' for field '{name}'.")

            offset = spec.get("offset")
            if not isinstance(offset, int) or isinstance(offset, bool) or offset < 0:
                raise LayoutError(f"Field '{name}' needs a non-negative integer 'offset'.")

            if "divisor" in spec and (not isinstance(spec["divisor"], (int, float)) or spec["divisor"] == 0):
                raise LayoutError(f"Field '{name}' has an invalid 'divisor' (must be a non-zero number).")

            if "unit" in spec and not isinstance(spec["unit"], str):
                raise LayoutError(f"Field '{name}' has a non-string 'unit'.")
