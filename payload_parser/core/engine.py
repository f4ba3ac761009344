from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import json
import logging

from .backends.pandas import DataFrameBackend, PandasBackend
from .decoder import PayloadDecoder
from .exceptions import DecodeError, ParseError
from .flatten import DEFAULT_IGNORE_VARS, Flattener
from .path import PathResolver
from .solutions import transform_solutions
from .types import OutputRecord
from .utils import Clock, resolve_label


DecodeErrorMode = str  # "record" | "raise"

PARSE_ERROR_VARIABLE = "parse_error"


@dataclass
class EngineConfig:
    ignore_vars: Iterable[str] = DEFAULT_IGNORE_VARS
    envelope_variable: str = "everynet_payload"
    payload_paths: Tuple[str, ...] = ("params.payload", "payload_raw")
    solutions_path: str = "params.solutions"
    meta_path: str = "meta"
    decoder: PayloadDecoder = field(default_factory=PayloadDecoder)
    on_decode_error: DecodeErrorMode = "record"
    backend: DataFrameBackend = field(default_factory=PandasBackend)
    clock: Optional[Clock] = None

    logger: Optional[logging.Logger] = None
    metrics_increment: Optional[Callable[[str, int], None]] = None


class _BaseParser:
    series_key = "serie"

    def __init__(self, config: Optional[EngineConfig] = None, *, backend: Optional[DataFrameBackend] = None) -> None:
        self._config: EngineConfig = config or EngineConfig()
        if backend is not None:
            self._config.backend = backend

        if self._config.on_decode_error not in {"record", "raise"}:
            raise ValueError("on_decode_error must be one of {'record','raise'}.")

        self._logger: logging.Logger = self._config.logger or logging.getLogger(__name__)
        self.flattener = Flattener(self._config.ignore_vars, series_key=self.series_key, logger=self._logger)

    def parse_records(self, payload: List[Dict[str, Any]]) -> Optional[List[OutputRecord]]:
        raise NotImplementedError

    def parse(self, payload: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Return the records replacing `payload`, or `payload` itself when there is nothing to parse."""
        records = self.parse_records(payload)
        if records is None:
            return payload

        return [r.to_dict() for r in records]

    def to_dataframe(self, payload: List[Dict[str, Any]]):
        return self._config.backend.to_dataframe(self.parse(payload))

    def _count(self, name: str, value: int = 1) -> None:
        if self._config.metrics_increment:
            self._config.metrics_increment(name, value)


class EverynetParser(_BaseParser):
    """
    Converts an Everynet uplink envelope into output records.

    The platform payload is a list of envelopes; the one whose `variable` matches
    `EngineConfig.envelope_variable` carries a JSON string such as
    {"params": {"payload": "0109611395", "solutions": [{"lat": 1, "lng": 2}]}, "meta": {...}}.

    Example:
        >>> EverynetParser().parse([{"variable": "everynet_payload", "value": '{"params": {"payload": "0109611395"}}'}])
    """

    def find_envelope(self, payload: Sequence[Any]) -> Optional[Mapping[str, Any]]:
        for item in payload:
            if isinstance(item, Mapping) and item.get("variable") == self._config.envelope_variable:
                return item

        return None

    def parse_records(self, payload: List[Dict[str, Any]]) -> Optional[List[OutputRecord]]:
        result = self._run(payload)
        if result is None:
            return None

        return result[0]

    def trace(self, payload: List[Dict[str, Any]]) -> Dict[str, Any]:
        result = self._run(payload)
        if result is None:
            return {"envelope_found": False, "records_emitted": 0, "stages": {}}

        records, serie, stages = result
        return {"envelope_found": True, "serie": serie, "records_emitted": len(records), "stages": stages}

    def _run(self, payload: List[Dict[str, Any]]) -> Optional[Tuple[List[OutputRecord], Any, Dict[str, int]]]:
        envelope = self.find_envelope(payload)
        if envelope is None:
            return None

        serie = resolve_label(envelope.get("serie"), self._config.clock)
        body = self._load_body(envelope.get("value"))

        records: List[OutputRecord] = []
        stages: Dict[str, int] = {"solutions": 0, "meta": 0, "payload": 0, PARSE_ERROR_VARIABLE: 0}

        solutions = PathResolver.get(body, self._config.solutions_path)
        if isinstance(solutions, list):
            out = transform_solutions(solutions, serie, self.flattener)
            stages["solutions"] = len(out)
            records.extend(out)

        meta = PathResolver.get(body, self._config.meta_path)
        if isinstance(meta, Mapping):
            out = self.flattener.flatten(meta, serie)
            stages["meta"] = len(out)
            records.extend(out)

        payload_raw = PathResolver.first_of(body, self._config.payload_paths)
        if payload_raw is not None:
            try:
                out = self.flattener.flatten(self._config.decoder.decode(payload_raw), serie)
                stages["payload"] = len(out)
                records.extend(out)
            except Exception as exc:
                records.append(self._handle_decode_error(exc))
                stages[PARSE_ERROR_VARIABLE] = 1

        self._count("parser.records_emitted", len(records))
        return records, serie, stages

    @staticmethod
    def _load_body(value: Any) -> Dict[str, Any]:
        if isinstance(value, Mapping):
            return dict(value)

        try:
            body = json.loads(value)
        except (TypeError, ValueError) as e:
            raise ParseError(f"Envelope value is not valid JSON: {e}") from e

        if not isinstance(body, dict):
            raise ParseError(f"Envelope value must be a JSON object, got {type(body).__name__}.")

        return body

    def _handle_decode_error(self, exc: Exception) -> OutputRecord:
        self._count("parser.decode_errors", 1)

        if self._config.on_decode_error == "raise":
            if isinstance(exc, DecodeError):
                raise exc
            raise DecodeError(str(exc)) from exc

        self._logger.warning("Payload decode error: %r", exc)
        return OutputRecord(variable=PARSE_ERROR_VARIABLE, value=str(exc) or repr(exc))


class GenericParser(_BaseParser):
    """
    Flattens a raw object, e.g. [{"temperature": 10}], into output records tagged with a group.
    Payloads already in record shape (first element has a `variable`) are left untouched.
    """
    series_key = "group"

    def parse_records(self, payload: List[Dict[str, Any]]) -> Optional[List[OutputRecord]]:
        if not payload:
            return None

        first = payload[0]
        if not isinstance(first, Mapping) or "variable" in first:
            return None

        group = resolve_label(first.get("group"), self._config.clock)
        obj = {k: v for k, v in first.items() if k != "group"}
        records = self.flattener.flatten(obj, group)
        self._count("parser.records_emitted", len(records))
        return records
