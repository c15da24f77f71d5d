"""Shared constants for the object extractor."""
import os
import sys

PCD_EXT = ".pcd"
DETECTIONS_EXT = ".json"


def default_output_root() -> str:
    """Return default output directory (exe folder when frozen)."""
    if getattr(sys, "frozen", False):
        base = os.path.dirname(sys.executable)
    else:
        base = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
    return os.path.join(base, "extracted_objects")


# Default output root (repo root or exe folder).
OUT_PARENT = default_output_root()

DETECTIONS_KEY = "detections"

POSITION_AXES = ("x", "y", "z")
ORIENTATION_AXES = ("w", "x", "y", "z")
SIZE_AXES = ("x", "y", "z")

# Below this |cos(pitch)| the XYZ decomposition is treated as gimbal locked.
GIMBAL_LOCK_EPS = 1e-6
