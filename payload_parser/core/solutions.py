from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping

from .flatten import Flattener
from .types import OutputRecord


def solution_to_object(solution: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Turn a gateway solution into a flattenable object: lat/lng collapse into one
    `location` descriptor, every other field is kept as-is.
    """
    lat, lng = solution.get("lat"), solution.get("lng")
    residual = {k: v for k, v in solution.items() if k not in ("lat", "lng")}

    obj: Dict[str, Any] = {"location": {"value": f"{lat}, {lng}", "location": {"lat": lat, "lng": lng}}}
    obj.update(residual)
    return obj


def transform_solutions(solutions: Iterable[Any], serie: Any, flattener: Flattener) -> List[OutputRecord]:
    """
    Solutions are where latitude and longitude of the antenna signal usually come from.
    """
    records: List[OutputRecord] = []
    for s in solutions:
        if not isinstance(s, Mapping):
            continue

        records.extend(flattener.flatten(solution_to_object(s), serie))

    return records
