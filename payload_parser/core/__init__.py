from .exceptions import ParserError, ParseError, DecodeError, LayoutError
from .engine import EverynetParser, GenericParser, EngineConfig, DataFrameBackend, PandasBackend
from .flatten import Flattener, DEFAULT_IGNORE_VARS
from .solutions import transform_solutions
from .decoder import PayloadDecoder, DEFAULT_LAYOUT
from .registry import CodecRegistry, register_codec, get_registry
from .types import OutputRecord, ScalarValue, AnnotatedValue, describe
from .builder.layout import LayoutBuilder

__all__ = [
    "ParserError",
    "ParseError",
    "DecodeError",
    "LayoutError",
    "EverynetParser",
    "GenericParser",
    "EngineConfig",
    "DataFrameBackend",
    "PandasBackend",
    "Flattener",
    "DEFAULT_IGNORE_VARS",
    "transform_solutions",
    "PayloadDecoder",
    "DEFAULT_LAYOUT",
    "CodecRegistry",
    "register_codec",
    "get_registry",
    "OutputRecord",
    "ScalarValue",
    "AnnotatedValue",
    "describe",
    "LayoutBuilder",
]
