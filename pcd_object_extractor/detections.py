"""Parsing of per-frame detection records."""
import math
from typing import Any

from .common import parse_float
from .constants import DETECTIONS_KEY, ORIENTATION_AXES, POSITION_AXES, SIZE_AXES
from .errors import ParseError
from .models import Detection


def lookup_field(record: Any, dotted: str) -> Any:
    """Follow a dotted key path through nested dicts; None when missing."""
    value = record
    for key in dotted.split("."):
        if not isinstance(value, dict) or key not in value:
            return None
        value = value[key]
    return value


def parse_vector(frame: str, record: dict[str, Any], dotted: str, axes: tuple[str, ...], where: str) -> tuple[float, ...]:
    """Read named numeric components of a nested object."""
    raw = lookup_field(record, dotted)
    if not isinstance(raw, dict):
        raise ParseError(frame, f"{where}.{dotted}", "is missing")
    values: list[float] = []
    for axis in axes:
        value = parse_float(raw.get(axis))
        if value is None or not math.isfinite(value):
            raise ParseError(frame, f"{where}.{dotted}.{axis}", "is missing or not a finite number")
        values.append(value)
    return tuple(values)


def parse_detection(frame: str, record: Any, index: int) -> Detection:
    """Parse one detection record; index is 1-based and used in errors."""
    where = f"detections[{index}]"
    if not isinstance(record, dict):
        raise ParseError(frame, where, "is not an object")
    label = record.get("label")
    if not isinstance(label, str) or not label.strip():
        raise ParseError(frame, f"{where}.label", "is missing or empty")
    position = parse_vector(frame, record, "bbox.position.position", POSITION_AXES, where)
    orientation = parse_vector(frame, record, "bbox.position.orientation", ORIENTATION_AXES, where)
    if not any(orientation):
        raise ParseError(frame, f"{where}.bbox.position.orientation", "has zero norm")
    size = parse_vector(frame, record, "bbox.size", SIZE_AXES, where)
    if any(value < 0 for value in size):
        raise ParseError(frame, f"{where}.bbox.size", "has a negative extent")
    return Detection(label=label, position=position, orientation=orientation, size=size)


def parse_detections(frame: str, document: Any) -> list[Detection]:
    """Parse every detection of a frame, failing on the first bad record."""
    if not isinstance(document, dict):
        raise ParseError(frame, DETECTIONS_KEY, "document is not an object")
    records = document.get(DETECTIONS_KEY)
    if not isinstance(records, list):
        raise ParseError(frame, DETECTIONS_KEY, "is missing or not a list")
    return [parse_detection(frame, record, index) for index, record in enumerate(records, start=1)]
