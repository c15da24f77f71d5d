"""Filesystem IO helpers."""
import json
import os
import sys
from typing import Any

import open3d as o3d

from .common import detections_name_for, ensure_dirs
from .constants import DETECTIONS_EXT
from .errors import ConfigurationError, ParseError, WriteError
from .models import FramePair, PairingResult


def list_visible_files(directory: str) -> list[str]:
    """Return sorted names of non-hidden regular files in a directory."""
    try:
        entries = os.listdir(directory)
    except OSError as exc:
        raise ConfigurationError(f"Cannot open folder {directory}: {exc.strerror or exc}") from exc
    names: list[str] = []
    for entry in entries:
        if entry.startswith("."):
            continue
        path = os.path.join(directory, entry)
        if os.path.isdir(path) or not os.path.exists(path):
            continue
        names.append(entry)
    names.sort()
    return names


def pair_frames(pcd_dir: str, detections_dir: str, detections_ext: str = DETECTIONS_EXT) -> PairingResult:
    """Match point-cloud files with detection files of the same stem."""
    pcd_names = list_visible_files(pcd_dir)
    detection_names = set(list_visible_files(detections_dir))
    pairs: list[FramePair] = []
    unmatched: list[str] = []
    for pcd_name in pcd_names:
        detections_name = detections_name_for(pcd_name, detections_ext)
        if detections_name not in detection_names:
            print(f"Detections for {pcd_name} not found!", file=sys.stderr)
            unmatched.append(pcd_name)
            continue
        pairs.append(
            {
                "name": pcd_name,
                "pcd_path": os.path.join(pcd_dir, pcd_name),
                "detections_path": os.path.join(detections_dir, detections_name),
            }
        )
    print(f"Number of common files: {len(pairs)}")
    return {"pairs": pairs, "unmatched": unmatched}


def load_point_cloud(path: str) -> o3d.geometry.PointCloud:
    """Read a point cloud; raise ParseError when nothing could be read."""
    cloud = o3d.io.read_point_cloud(path)
    if not cloud.has_points():
        raise ParseError(os.path.basename(path), "points", "could not be read or the cloud is empty")
    return cloud


def save_point_cloud(cloud: o3d.geometry.PointCloud, path: str, write_ascii: bool = True) -> None:
    """Write a point cloud to disk, raising WriteError when open3d refuses."""
    try:
        written = o3d.io.write_point_cloud(path, cloud, write_ascii=write_ascii)
    except RuntimeError as exc:
        raise WriteError(path, str(exc)) from exc
    if not written:
        reason = "empty point cloud" if not cloud.has_points() else "open3d could not write the file"
        raise WriteError(path, reason)


def load_detections_json(path: str) -> Any:
    """Load a detections JSON document."""
    frame = os.path.basename(path)
    try:
        with open(path, "r", encoding="utf-8") as handle:
            return json.load(handle)
    except OSError as exc:
        raise ParseError(frame, "file", f"cannot be read ({exc.strerror or exc})") from exc
    except ValueError as exc:
        raise ParseError(frame, "file", f"is not valid JSON ({exc})") from exc


def write_json(path: str, payload: dict[str, Any]) -> None:
    """Write JSON payload with UTF-8 encoding and pretty formatting."""
    ensure_dirs(os.path.dirname(path))
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(payload, handle, ensure_ascii=False, indent=2)
