from __future__ import annotations
import re
from typing import Any, Iterable, Mapping, Optional


class PathSyntaxError(ValueError):
    pass


class PathResolver:
    """
    Resolve dotted paths into nested dict/list structures.

    Supported selectors per segment:
      - key                  e.g. params
      - [N]                  index

    Examples:
      params.payload
      params.solutions[0].lat

    Missing keys, out-of-range indexes and non-container intermediates resolve to None.
    """

    _token_head = re.compile(r"([^. \[\]]+)(.*)$")  # name then rest
    _bracket = re.compile(r"^\[(\d+)\](.*)$")

    @classmethod
    def get(cls, obj: Any, path: Optional[str]) -> Any:
        if path is None:
            return None
        cur = obj
        for seg in path.split("."):
            if cur is None:
                return None
            cur = cls._apply_segment(cur, seg)

        return cur

    @classmethod
    def first_of(cls, obj: Any, paths: Iterable[str]) -> Any:
        """Return the first value that is neither None nor an empty string."""
        for path in paths:
            val = cls.get(obj, path)
            if val is not None and val != "":
                return val

        return None

    @classmethod
    def _apply_segment(cls, base: Any, segment: str) -> Any:
        m = cls._token_head.match(segment)
        if not m:
            raise PathSyntaxError(f"Malformed path segment '{segment}'")
        key, rest = m.group(1), m.group(2)

        if not isinstance(base, Mapping):
            return None
        cur = base.get(key)

        while rest:
            bm = cls._bracket.match(rest)
            if not bm:
                raise PathSyntaxError(f"Malformed path at '{rest}'")
            idx, rest = int(bm.group(1)), bm.group(2)
            if not isinstance(cur, list) or idx >= len(cur):
                return None
            cur = cur[idx]

        return cur
