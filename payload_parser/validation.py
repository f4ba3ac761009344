from __future__ import annotations

from typing import Any, Dict, List, Optional, Set, Tuple

from payload_parser.core.exceptions import LayoutError
from payload_parser.core.registry import CodecRegistry, get_registry
from payload_parser.core.utils import SUPPORTED_ENCODINGS

KNOWN_FIELD_KEYS: Set[str] = {"name", "codec", "offset", "divisor", "unit"}


def validate_layout(
    layout: Dict[str, Any],
    *,
    encoding: Optional[str] = None,
    registry: Optional[CodecRegistry] = None,
    raise_on_error: bool = False,
) -> Tuple[bool, List[str]]:
    """
    Check a byte-layout table and report every problem instead of stopping at the first one.
    Overlapping byte ranges are reported as well.
    """
    errors: List[str] = []
    reg = registry or get_registry()

    def err(msg: str, path: str = "$") -> None:
        errors.append(f"{path}: {msg}")

    if encoding is not None and encoding not in SUPPORTED_ENCODINGS:
        err(f"Unsupported encoding '{encoding}' (allowed: {list(SUPPORTED_ENCODINGS)}).", "$.encoding")

    if not isinstance(layout, dict):
        err("Layout must be an object (dict).")
        return _finish(errors, raise_on_error)

    fields = layout.get("fields")
    if not isinstance(fields, list) or not fields:
        err("'fields' must be a non-empty list.", "$.fields")
        return _finish(errors, raise_on_error)

    names: Set[str] = set()
    ranges: List[Tuple[int, int, str]] = []
    for i, spec in enumerate(fields):
        path = f"$.fields[{i}]"
        if not isinstance(spec, dict):
            err("Field must be an object.", path)
            continue

        name = spec.get("name")
        if not isinstance(name, str) or not name.strip():
            err("'name' must be a non-empty string.", f"{path}.name")
        elif name in names:
            err(f"Duplicate field name '{name}'.", f"{path}.name")
        else:
            names.add(name)

        codec = reg.get(spec.get("codec")) if isinstance(spec.get("codec"), str) else None
        if codec is None:
            err(f"Unknown codec {spec.get('codec')!r} (known: {sorted(reg.names)}).", f"{path}.codec")

        offset = spec.get("offset")
        if not isinstance(offset, int) or isinstance(offset, bool) or offset < 0:
            err("'offset' must be a non-negative integer.", f"{path}.offset")
            offset = None

        if "divisor" in spec:
            d = spec["divisor"]
            if isinstance(d, bool) or not isinstance(d, (int, float)) or d == 0:
                err("'divisor' must be a non-zero number.", f"{path}.divisor")

        if "unit" in spec and not isinstance(spec["unit"], str):
            err("'unit' must be a string.", f"{path}.unit")

        unknown = set(spec.keys()) - KNOWN_FIELD_KEYS
        if unknown:
            err(f"Unknown keys in field: {sorted(unknown)}", path)

        if codec is not None and offset is not None:
            ranges.append((offset, offset + codec.size, str(name)))

    ranges.sort()
    end, owner = 0, ""
    for start, stop, name in ranges:
        if start < end:
            err(f"Fields '{owner}' and '{name}' overlap at byte {start}.", "$.fields")
        if stop > end:
            end, owner = stop, name

    return _finish(errors, raise_on_error)


def _finish(errors: List[str], raise_on_error: bool) -> Tuple[bool, List[str]]:
    if errors and raise_on_error:
        raise LayoutError("Invalid layout:\n- " + "\n- ".join(errors))
    return (len(errors) == 0, errors)
