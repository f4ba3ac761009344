from __future__ import annotations

import struct
from typing import Callable

from ..registry import register_codec


def _struct_reader(fmt: str) -> Callable[[bytes], float]:
    unpacker = struct.Struct(fmt)

    def read(chunk: bytes):
        return unpacker.unpack(chunk)[0]

    return read


def _register_struct(name: str, fmt: str) -> None:
    register_codec(name, struct.calcsize(fmt), _struct_reader(fmt))


_register_struct("int8", ">b")
_register_struct("uint8", ">B")

_register_struct("int16be", ">h")
_register_struct("uint16be", ">H")
_register_struct("int16le", "<h")
_register_struct("uint16le", "<H")

_register_struct("int32be", ">i")
_register_struct("uint32be", ">I")
_register_struct("int32le", "<i")
_register_struct("uint32le", "<I")

_register_struct("float32be", ">f")
_register_struct("float32le", "<f")
