"""Common helpers shared across modules."""
import os
import re
from typing import Any

from .constants import DETECTIONS_EXT, PCD_EXT


def ensure_dirs(*paths: str) -> None:
    """Create directories if they do not exist."""
    for path in paths:
        if path:
            os.makedirs(path, exist_ok=True)


def frame_stem(file_name: str) -> str:
    """Return a frame identifier: the file name without its extension."""
    return os.path.splitext(os.path.basename(file_name))[0]


def detections_name_for(pcd_name: str, detections_ext: str = DETECTIONS_EXT) -> str:
    """Return the detections file name expected for a point-cloud file."""
    return f"{frame_stem(pcd_name)}{detections_ext}"


def file_token(value: str) -> str:
    """Return value with path separators and control characters replaced."""
    return re.sub(r"[\\/\x00-\x1f\x7f]", "_", value.strip())


def object_file_name(label: str, pcd_name: str, index: int, ext: str = PCD_EXT) -> str:
    """Build the output name '{label}-{frame}-{index}{ext}' for one object."""
    return f"{file_token(label)}-{frame_stem(pcd_name)}-{index}{ext}"


def parse_float(value: Any) -> float | None:
    """Parse a float from a value, returning None on failure."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def same_dir(first: str, second: str) -> bool:
    """Return True when two paths name the same directory."""
    return os.path.normcase(os.path.abspath(first)) == os.path.normcase(os.path.abspath(second))
