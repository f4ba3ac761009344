from __future__ import annotations
from typing import Callable, Dict, NamedTuple, Optional, Set

# Codec reader signature:
# reader(chunk: bytes) -> int | float     # chunk is exactly `size` bytes long

CodecReader = Callable[[bytes], float]


class Codec(NamedTuple):
    name: str
    size: int
    reader: CodecReader


class CodecRegistry:
    """
    Registry mapping codec names (e.g., 'int8', 'uint16be', custom codecs) to fixed-size field readers.
    Layout tables refer to codecs by name, so device firmwares with new field types only need a new codec.
    """
    def __init__(self) -> None:
        self._codecs: Dict[str, Codec] = {}

    def register(self, name: str, size: int, reader: CodecReader) -> None:
        if not name or not isinstance(name, str):
            raise ValueError("Codec name must be a non-empty string.")

        if not isinstance(size, int) or size <= 0:
            raise ValueError(f"Codec '{name}' must have a positive integer size.")

        if not callable(reader):
            raise ValueError(f"Codec '{name}' requires a callable reader.")

        self._codecs[name] = Codec(name, size, reader)

    def get(self, name: str) -> Optional[Codec]:
        return self._codecs.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._codecs

    @property
    def names(self) -> Set[str]:
        return set(self._codecs.keys())


_global_registry: Optional[CodecRegistry] = None


def get_registry() -> CodecRegistry:
    global _global_registry
    if _global_registry is None:
        _global_registry = CodecRegistry()
        # Built-ins are registered on import
        from .codecs import builtin  # noqa: F401

    return _global_registry


def register_codec(name: str, size: int, reader: CodecReader) -> None:
    get_registry().register(name, size, reader)
