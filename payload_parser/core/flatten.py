from __future__ import annotations
import logging
from typing import Any, FrozenSet, Iterable, List, Mapping, Optional

from .types import AnnotatedValue, OutputRecord, describe

# Variables coming from the network server that are not worth storing.
DEFAULT_IGNORE_VARS: FrozenSet[str] = frozenset({
    "device_addr",
    "port",
    "duplicate",
    "network",
    "packet_hash",
    "application",
    "device",
    "packet_id",
})

SERIES_KEYS = ("serie", "group")


class Flattener:
    """
    Convert a shallow object into output records.

    Can be used in two ways:
      flatten({"myvariable": myvalue, "anothervariable": anothervalue}, serie)
      flatten({"myvariable": {"value": myvalue, "unit": "C", "metadata": {"color": "green"}}}, serie)

    Keys listed in `ignore_vars` are skipped (case-sensitive). `series_key` selects whether records
    are tagged with "serie" or "group".
    """
    __slots__ = ("ignore_vars", "series_key", "_logger")

    def __init__(
        self,
        ignore_vars: Optional[Iterable[str]] = None,
        *,
        series_key: str = "serie",
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if series_key not in SERIES_KEYS:
            raise ValueError(f"series_key must be one of {SERIES_KEYS}.")

        self.ignore_vars: FrozenSet[str] = frozenset(DEFAULT_IGNORE_VARS if ignore_vars is None else ignore_vars)
        self.series_key = series_key
        self._logger = logger or logging.getLogger(__name__)

    def flatten(self, obj: Mapping[str, Any], serie: Any, prefix: str = "") -> List[OutputRecord]:
        records: List[OutputRecord] = []
        for key, raw in obj.items():
            if key in self.ignore_vars:
                continue

            record = self._to_record(f"{prefix}{key}", raw, serie)
            if record is not None:
                records.append(record)

        return records

    def _to_record(self, name: str, raw: Any, serie: Any) -> Optional[OutputRecord]:
        desc = describe(raw)

        if not isinstance(desc, AnnotatedValue):
            if not name:
                self._logger.debug("Skipping value with empty variable name: %r", raw)
                return None
            return OutputRecord(**{"variable": name, "value": desc.value, self.series_key: serie})

        present = desc.model_fields_set
        variable = desc.variable or name
        if not isinstance(variable, str):
            variable = str(variable)
        if not variable:
            self._logger.debug("Skipping descriptor with empty variable name: %r", raw)
            return None

        own_serie = getattr(desc, self.series_key)
        fields = {
            "variable": variable,
            "value": desc.value,
            self.series_key: own_serie if own_serie is not None else serie,
        }
        for attr in ("metadata", "location", "unit"):
            if attr in present:
                fields[attr] = getattr(desc, attr)

        return OutputRecord(**fields)
